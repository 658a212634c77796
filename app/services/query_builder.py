from __future__ import annotations

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Any, Iterable, Mapping

from app.core.config import settings
from app.schemas.query import FilterCondition, PageRef, Pagination, QueryPlan, QueryResult, SortKey
from app.services.record_store import RecordStore
from app.services.serialization import project

logger = logging.getLogger(__name__)

RESERVED_PARAMS = ("select", "sort", "page", "limit", "search")
FILTER_OPERATORS = ("gt", "gte", "lt", "lte", "in")


class _Unsatisfiable(ValueError):
    pass


def parse_query_params(items: Iterable[tuple[str, str]]) -> dict[str, Any]:
    """Fold flat query-string pairs into a nested request mapping.

    ``year[gte]=2020`` becomes ``{"year": {"gte": "2020"}}``; a key given more
    than once collects its values into a list.
    """
    request: dict[str, Any] = {}
    for raw_key, value in items:
        key = str(raw_key)
        if key.endswith("]") and "[" in key:
            field, _, op = key[:-1].partition("[")
            target = request.get(field)
            if not isinstance(target, dict):
                target = {}
                request[field] = target
            _collect(target, op, value)
        else:
            _collect(request, key, value)
    return request


def _collect(target: dict[str, Any], key: str, value: Any) -> None:
    if key not in target:
        target[key] = value
    elif isinstance(target[key], list):
        target[key].append(value)
    else:
        target[key] = [target[key], value]


def positive_int(raw: Any, default: int) -> int:
    if isinstance(raw, list):
        raw = raw[-1] if raw else None
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


def _text_param(raw: Any) -> str:
    if isinstance(raw, list):
        raw = raw[-1] if raw else ""
    if isinstance(raw, dict):
        return ""
    return str(raw or "").strip()


def _split_csv(raw: Any) -> list[str]:
    return [part.strip() for part in _text_param(raw).split(",") if part.strip()]


def parse_sort(raw: Any, default: Iterable[tuple[str, str]]) -> tuple[SortKey, ...]:
    tokens = _split_csv(raw)
    if not tokens:
        return tuple(SortKey(field=field, dir=direction) for field, direction in default)
    keys = []
    for token in tokens:
        if token.startswith("-"):
            keys.append(SortKey(field=token[1:], dir="desc"))
        else:
            keys.append(SortKey(field=token.lstrip("+"), dir="asc"))
    return tuple(key for key in keys if key.field)


def parse_select(raw: Any) -> tuple[str, ...] | None:
    # An empty projection means "all fields", like an empty search.
    return tuple(_split_csv(raw)) or None


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value or "").strip().lower()
    if text in {"1", "true", "yes", "y"}:
        return True
    if text in {"0", "false", "no", "n"}:
        return False
    raise _Unsatisfiable(f"not a boolean: {value!r}")


def _coerce_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value or "").strip()
        if "T" not in text and " " not in text and len(text) == 10:
            parsed = datetime.combine(date.fromisoformat(text), datetime.min.time())
        else:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def coerce_filter_value(python_type: type | None, value: Any) -> Any:
    """Convert a query-string literal to the column's Python type.

    Raises ValueError when the literal cannot represent a value of that type.
    """
    if isinstance(value, (dict, list)):
        raise _Unsatisfiable("nested value where a literal is expected")
    if python_type is None or python_type is str:
        return str(value)
    if python_type is bool:
        return _coerce_bool(value)
    if python_type is uuid.UUID:
        return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value).strip())
    if python_type in {int, float}:
        text = str(value).strip().replace(",", ".")
        if python_type is int:
            number = float(text)
            if not number.is_integer():
                raise _Unsatisfiable(f"not an integer: {value!r}")
            return int(number)
        return float(text)
    if python_type is datetime:
        return _coerce_datetime(value)
    if python_type is date:
        return date.fromisoformat(str(value).strip()[:10])
    return value


def _conditions_for_field(store: RecordStore, field: str, raw: Any) -> list[FilterCondition]:
    if not store.has_field(field):
        raise _Unsatisfiable(f"unknown field {field!r}")
    if store.is_json_field(field) and not store.is_list_field(field):
        raise _Unsatisfiable(f"structured field {field!r} is not filterable")
    python_type = None if store.is_list_field(field) else store.field_python_type(field)

    if isinstance(raw, Mapping):
        conditions = []
        for op, operand in raw.items():
            if op not in FILTER_OPERATORS:
                raise _Unsatisfiable(f"unknown operator {op!r} on {field!r}")
            if op == "in":
                items = operand if isinstance(operand, list) else _split_csv(operand)
                value: Any = tuple(coerce_filter_value(python_type, item) for item in items)
            else:
                value = coerce_filter_value(python_type, operand)
            conditions.append(FilterCondition(field=field, op=op, value=value))
        return conditions

    if isinstance(raw, list):
        values = tuple(coerce_filter_value(python_type, item) for item in raw)
        return [FilterCondition(field=field, op="in", value=values)]

    return [FilterCondition(field=field, op="eq", value=coerce_filter_value(python_type, raw))]


def build_query_plan(request: Mapping[str, Any], authenticated: bool, store: RecordStore) -> QueryPlan:
    collection = store.collection
    raw_filters = {key: value for key, value in request.items() if key not in RESERVED_PARAMS}

    visibility_field = collection.visibility_field
    if not authenticated and visibility_field:
        for key in list(raw_filters):
            if collection.field_aliases.get(key, key) == visibility_field:
                raw_filters.pop(key)
        raw_filters[visibility_field] = collection.public_value

    conditions: list[FilterCondition] = []
    unsatisfiable = False
    for key, raw in raw_filters.items():
        field = collection.field_aliases.get(key, key)
        try:
            conditions.extend(_conditions_for_field(store, field, raw))
        except (ValueError, TypeError) as exc:
            logger.debug("filter %s=%r on %s matches nothing: %s", key, raw, collection.name, exc)
            unsatisfiable = True

    search = _text_param(request.get("search")) or None

    return QueryPlan(
        filters=tuple(conditions),
        unsatisfiable=unsatisfiable,
        search=search,
        select=parse_select(request.get("select")),
        sort=parse_sort(request.get("sort"), collection.default_sort),
        page=positive_int(request.get("page"), 1),
        limit=positive_int(request.get("limit"), settings.DEFAULT_PAGE_LIMIT),
    )


def paginate(page: int, limit: int, total: int) -> Pagination:
    skip = (page - 1) * limit
    pagination = Pagination()
    if skip + limit < total:
        pagination.next = PageRef(page=page + 1, limit=limit)
    if skip > 0:
        pagination.prev = PageRef(page=page - 1, limit=limit)
    return pagination


def execute_query_plan(store: RecordStore, plan: QueryPlan) -> QueryResult:
    # Count and page are separate reads; a concurrent write between them can skew `total`.
    total = store.count(plan)
    rows = store.find_sorted(plan, plan.sort, skip=plan.skip, limit=plan.limit)
    serializer = store.collection.serializer
    return QueryResult(
        data=[project(serializer(row), plan.select) for row in rows],
        total=total,
        pagination=paginate(plan.page, plan.limit, total),
    )


def build_and_execute(request: Mapping[str, Any], authenticated: bool, store: RecordStore) -> QueryResult:
    plan = build_query_plan(request, authenticated, store)
    return execute_query_plan(store, plan)
