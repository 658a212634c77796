import unittest
import uuid

from app.models.category import Category
from app.schemas.query import FilterCondition
from app.services.collections import ARTWORKS
from app.services.query_builder import (
    build_and_execute,
    build_query_plan,
    paginate,
    parse_query_params,
    parse_sort,
)
from app.services.record_store import RecordStore
from tests.base import DatabaseTestCase


class ParseQueryParamsTests(unittest.TestCase):
    def test_bracket_keys_become_operator_mappings(self):
        parsed = parse_query_params([("year[gte]", "2020"), ("year[lt]", "2024"), ("medium", "oil")])
        self.assertEqual(parsed, {"year": {"gte": "2020", "lt": "2024"}, "medium": "oil"})

    def test_repeated_keys_collect_into_list(self):
        parsed = parse_query_params([("medium", "oil"), ("medium", "acrylic"), ("tags[in]", "a"), ("tags[in]", "b")])
        self.assertEqual(parsed["medium"], ["oil", "acrylic"])
        self.assertEqual(parsed["tags"], {"in": ["a", "b"]})

    def test_sort_tokens_keep_priority_and_direction(self):
        keys = parse_sort("-year,title", ())
        self.assertEqual([(k.field, k.dir) for k in keys], [("year", "desc"), ("title", "asc")])

    def test_missing_sort_uses_default(self):
        keys = parse_sort(None, (("created_at", "desc"),))
        self.assertEqual([(k.field, k.dir) for k in keys], [("created_at", "desc")])


class PaginateTests(unittest.TestCase):
    def test_first_page_has_only_next(self):
        pagination = paginate(1, 10, 25).as_dict()
        self.assertEqual(pagination, {"next": {"page": 2, "limit": 10}})

    def test_last_partial_page_has_only_prev(self):
        pagination = paginate(3, 10, 25).as_dict()
        self.assertEqual(pagination, {"prev": {"page": 2, "limit": 10}})

    def test_page_past_the_end_points_back(self):
        pagination = paginate(4, 10, 25).as_dict()
        self.assertEqual(pagination, {"prev": {"page": 3, "limit": 10}})

    def test_single_page_has_neither(self):
        self.assertEqual(paginate(1, 12, 12).as_dict(), {})


class QueryPlanTests(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.db = self.SessionLocal()
        self.store = RecordStore(self.db, ARTWORKS)

    def tearDown(self):
        self.db.close()

    def test_reserved_keys_never_become_filters(self):
        plan = build_query_plan(
            {"select": "title", "sort": "-year", "page": "2", "limit": "5", "search": "sea"},
            True,
            self.store,
        )
        self.assertEqual(plan.filters, ())
        self.assertEqual(plan.select, ("title",))
        self.assertEqual((plan.page, plan.limit, plan.skip), (2, 5, 5))
        self.assertEqual(plan.search, "sea")

    def test_anonymous_visibility_overrides_caller_value(self):
        plan = build_query_plan({"status": "draft"}, False, self.store)
        self.assertEqual(plan.filters, (FilterCondition(field="status", op="eq", value="published"),))

    def test_anonymous_visibility_overrides_operator_mapping(self):
        plan = build_query_plan({"status": {"in": "draft,published"}}, False, self.store)
        self.assertEqual(plan.filters, (FilterCondition(field="status", op="eq", value="published"),))

    def test_authenticated_caller_keeps_own_visibility_filter(self):
        plan = build_query_plan({"status": "draft"}, True, self.store)
        self.assertEqual(plan.filters, (FilterCondition(field="status", op="eq", value="draft"),))

    def test_operator_mapping_is_coerced_to_column_type(self):
        plan = build_query_plan({"year": {"gte": "2020"}}, True, self.store)
        self.assertEqual(plan.filters, (FilterCondition(field="year", op="gte", value=2020),))

    def test_plain_string_containing_operator_words_stays_equality(self):
        plan = build_query_plan({"medium": "legacy-in-gte"}, True, self.store)
        self.assertEqual(plan.filters, (FilterCondition(field="medium", op="eq", value="legacy-in-gte"),))

    def test_bad_pagination_falls_back_to_defaults(self):
        for page, limit in (("abc", "0"), ("-3", "-1"), (None, "x")):
            plan = build_query_plan({"page": page, "limit": limit}, True, self.store)
            self.assertEqual((plan.page, plan.limit), (1, 12))

    def test_empty_search_is_absent(self):
        plan = build_query_plan({"search": "   "}, True, self.store)
        self.assertIsNone(plan.search)

    def test_unknown_field_and_operator_make_plan_unsatisfiable(self):
        self.assertTrue(build_query_plan({"nope": "x"}, True, self.store).unsatisfiable)
        self.assertTrue(build_query_plan({"year": {"$where": "1"}}, True, self.store).unsatisfiable)
        self.assertTrue(build_query_plan({"year": "not-a-year"}, True, self.store).unsatisfiable)
        self.assertFalse(build_query_plan({"year": "2020"}, True, self.store).unsatisfiable)

    def test_plan_is_immutable(self):
        plan = build_query_plan({}, True, self.store)
        with self.assertRaises(Exception):
            plan.page = 5


class BuildAndExecuteTests(DatabaseTestCase):
    def setUp(self):
        super().setUp()
        self.db = self.SessionLocal()
        self.store = RecordStore(self.db, ARTWORKS)

    def tearDown(self):
        self.db.close()

    def _run(self, request, authenticated=True):
        self.db.expire_all()
        return build_and_execute(request, authenticated, self.store)

    def test_default_pagination_returns_newest_twelve(self):
        self._add(*[self._artwork(f"Work {i}", minutes=i) for i in range(15)])
        result = self._run({})
        self.assertEqual(result.total, 15)
        self.assertEqual(result.count, 12)
        self.assertEqual(result.data[0]["title"], "Work 14")
        self.assertEqual(result.data[-1]["title"], "Work 3")
        self.assertEqual(result.pagination.as_dict(), {"next": {"page": 2, "limit": 12}})

    def test_default_pagination_without_next_when_small(self):
        self._add(*[self._artwork(f"Work {i}", minutes=i) for i in range(3)])
        result = self._run({})
        self.assertEqual(result.pagination.as_dict(), {})

    def test_pagination_boundaries(self):
        self._add(*[self._artwork(f"Work {i:02d}", minutes=i) for i in range(25)])

        first = self._run({"page": "1", "limit": "10"})
        self.assertEqual(first.count, 10)
        self.assertEqual(first.pagination.as_dict(), {"next": {"page": 2, "limit": 10}})

        third = self._run({"page": "3", "limit": "10"})
        self.assertEqual(third.count, 5)
        self.assertEqual(third.pagination.as_dict(), {"prev": {"page": 2, "limit": 10}})

        fourth = self._run({"page": "4", "limit": "10"})
        self.assertEqual(fourth.count, 0)
        self.assertEqual(fourth.total, 25)
        self.assertEqual(fourth.pagination.as_dict(), {"prev": {"page": 3, "limit": 10}})

    def test_anonymous_never_sees_drafts(self):
        self._add(
            self._artwork("Public", minutes=1, status="published"),
            self._artwork("Hidden", minutes=2, status="draft"),
        )
        for request in ({}, {"status": "draft"}, {"status": {"in": ["draft"]}}, {"search": "Hidden"}):
            result = self._run(request, authenticated=False)
            self.assertNotIn("Hidden", [row["title"] for row in result.data], request)

        admin = self._run({"status": "draft"})
        self.assertEqual([row["title"] for row in admin.data], ["Hidden"])

    def test_gte_operator_filters_numerically(self):
        self._add(
            self._artwork("Old", minutes=1, year=2019),
            self._artwork("Edge", minutes=2, year=2020),
            self._artwork("New", minutes=3, year=2023),
            self._artwork("Undated", minutes=4),
        )
        result = self._run({"year": {"gte": "2020"}, "sort": "year"})
        self.assertEqual([row["title"] for row in result.data], ["Edge", "New"])

    def test_in_operator_accepts_comma_separated_values(self):
        self._add(
            self._artwork("Oil", minutes=1, medium="oil"),
            self._artwork("Pencil", minutes=2, medium="pencil"),
            self._artwork("Pastel", minutes=3, medium="pastel"),
        )
        result = self._run({"medium": {"in": "oil,pastel"}, "sort": "title"})
        self.assertEqual([row["title"] for row in result.data], ["Oil", "Pastel"])

    def test_tag_named_like_operator_is_matched_literally(self):
        self._add(
            self._artwork("Login screen", minutes=1, tags=["login", "digital"]),
            self._artwork("Interior", minutes=2, tags=["in", "room"]),
        )
        result = self._run({"tags": "login"})
        self.assertEqual([row["title"] for row in result.data], ["Login screen"])
        result = self._run({"tags": "in"})
        self.assertEqual([row["title"] for row in result.data], ["Interior"])

    def test_search_is_anded_with_filter(self):
        self._add(
            self._artwork("Sunset over sea", minutes=1, medium="oil"),
            self._artwork("Sunset sketch", minutes=2, medium="pencil"),
            self._artwork("Harbour", minutes=3, medium="oil"),
        )
        result = self._run({"search": "sunset", "medium": "oil"})
        self.assertEqual([row["title"] for row in result.data], ["Sunset over sea"])
        self.assertEqual(result.total, 1)

    def test_search_covers_description_and_tags(self):
        self._add(
            self._artwork("Untitled", minutes=1, description="A quiet harbour at dusk"),
            self._artwork("Study", minutes=2, tags=["harbour"]),
            self._artwork("Portrait", minutes=3),
        )
        result = self._run({"search": "HARBOUR", "sort": "title"})
        self.assertEqual([row["title"] for row in result.data], ["Study", "Untitled"])

    def test_empty_search_matches_everything(self):
        self._add(self._artwork("One", minutes=1), self._artwork("Two", minutes=2))
        self.assertEqual(self._run({"search": ""}).total, 2)

    def test_empty_select_returns_full_records(self):
        self._add(self._artwork("Whole", minutes=1, year=2021))
        for select in ("", " , "):
            row = self._run({"select": select}).data[0]
            self.assertEqual((row["title"], row["year"]), ("Whole", 2021))
        self.assertIsNone(build_query_plan({"select": ""}, True, self.store).select)

    def test_non_ascii_tags_match_by_filter_and_search(self):
        self._add(
            self._artwork("Terrace", minutes=1, tags=["café", "évening"]),
            self._artwork("Harbour", minutes=2, tags=["sea"]),
        )
        self.assertEqual([row["title"] for row in self._run({"tags": "café"}).data], ["Terrace"])
        self.assertEqual([row["title"] for row in self._run({"tags": {"in": "sea,évening"}, "sort": "title"}).data], ["Harbour", "Terrace"])
        self.assertEqual([row["title"] for row in self._run({"search": "café"}).data], ["Terrace"])

    def test_search_does_not_match_json_punctuation(self):
        self._add(
            self._artwork("Tagged", minutes=1, tags=["a", "b"], dimensions={"width": 10, "height": 20, "unit": "cm"}),
        )
        for term in (",", "[", '"', "width"):
            self.assertEqual(self._run({"search": term}).total, 0, term)

    def test_structured_json_fields_are_not_filterable(self):
        self._add(self._artwork("Sized", minutes=1, dimensions={"width": 10, "height": 20, "unit": "cm"}))
        self.assertTrue(build_query_plan({"dimensions": "cm"}, True, self.store).unsatisfiable)
        self.assertEqual(self._run({"media": "x"}).total, 0)

    def test_select_projects_fields_plus_id(self):
        self._add(self._artwork("Only", minutes=1, year=2021))
        result = self._run({"select": "title,year,bogus"})
        self.assertEqual(set(result.data[0].keys()), {"id", "title", "year"})

    def test_multi_key_sort(self):
        self._add(
            self._artwork("B", minutes=1, year=2020),
            self._artwork("A", minutes=2, year=2020),
            self._artwork("C", minutes=3, year=2022),
        )
        result = self._run({"sort": "-year,title"})
        self.assertEqual([row["title"] for row in result.data], ["C", "A", "B"])

    def test_unknown_sort_field_is_ignored(self):
        self._add(self._artwork("A", minutes=1), self._artwork("B", minutes=2))
        result = self._run({"sort": "nonexistent"})
        self.assertEqual(result.total, 2)

    def test_unknown_filter_field_matches_nothing(self):
        self._add(self._artwork("A", minutes=1))
        result = self._run({"colour": "blue"})
        self.assertEqual((result.total, result.count), (0, 0))

    def test_category_alias_filters_by_category_id(self):
        (category_id,) = self._add(Category(name="Landscapes", slug="landscapes"))
        self._add(
            self._artwork("Hills", minutes=1, category_id=uuid.UUID(category_id)),
            self._artwork("Face", minutes=2),
        )
        result = self._run({"category": category_id})
        self.assertEqual([row["title"] for row in result.data], ["Hills"])
        self.assertEqual(result.data[0]["category"]["slug"], "landscapes")

    def test_envelope_shape(self):
        self._add(self._artwork("A", minutes=1))
        envelope = self._run({}).envelope()
        self.assertEqual(set(envelope.keys()), {"success", "count", "total", "pagination", "data"})
        self.assertTrue(envelope["success"])


if __name__ == "__main__":
    unittest.main()
