from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Iterable, Sequence

from sqlalchemy import JSON, String, and_, asc, cast, desc, false, func, or_, select
from sqlalchemy import column as sql_column
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.inspection import inspect as sa_inspect
from sqlalchemy.orm import Session
from sqlalchemy.sql import operators

from app.core.errors import StorageError
from app.schemas.query import FilterCondition, QueryPlan, SortKey
from app.services.collections import Collection

logger = logging.getLogger(__name__)

COMPARISON_OPERATORS = {
    "eq": operators.eq,
    "gt": operators.gt,
    "gte": operators.ge,
    "lt": operators.lt,
    "lte": operators.le,
    "in": lambda column, values: column.in_(list(values)),
}


def _uuid_or_none(raw: Any) -> uuid.UUID | None:
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw or "").strip())
    except ValueError:
        return None


class RecordStore:
    """SQLAlchemy-backed access to the records of one collection.

    Plan conditions are translated to SQL expressions here; every driver or ORM
    failure leaves this class as a StorageError.
    """

    def __init__(self, db: Session, collection: Collection):
        self.db = db
        self.collection = collection
        self.model = collection.model
        self._columns = {column.key: column for column in sa_inspect(self.model).columns}

    @contextmanager
    def _storage_errors(self, action: str):
        try:
            yield
        except SQLAlchemyError as exc:
            logger.error("%s failed for %s: %s", action, self.collection.name, exc)
            try:
                self.db.rollback()
            except SQLAlchemyError:
                logger.warning("rollback failed for %s", self.collection.name)
            raise StorageError(f"{action} failed for {self.collection.name}") from exc

    # Field introspection

    def has_field(self, name: str) -> bool:
        return name in self._columns

    def is_json_field(self, name: str) -> bool:
        column = self._columns.get(name)
        return column is not None and isinstance(column.type, JSON)

    def is_list_field(self, name: str) -> bool:
        return name in self.collection.list_fields and self.is_json_field(name)

    def field_python_type(self, name: str) -> type | None:
        column = self._columns.get(name)
        if column is None:
            return None
        try:
            return column.type.python_type
        except NotImplementedError:
            return None

    # Expressions

    @property
    def dialect_name(self) -> str:
        return self.db.get_bind().dialect.name

    def _array_elements(self, column):
        """Table-valued expansion of a JSON string array, one row per element."""
        if self.dialect_name == "postgresql":
            return func.jsonb_array_elements_text(column).table_valued(sql_column("value", String)).render_derived()
        return func.json_each(column).table_valued(sql_column("value", String))

    def _any_element(self, column, predicate):
        elements = self._array_elements(column)
        return select(elements.c.value).where(predicate(elements.c.value)).exists()

    def _membership_clause(self, column, values: Sequence[Any]):
        values = [str(value) for value in values]
        if not values:
            return false()
        if self.dialect_name == "postgresql":
            # JSONB containment (@>) can use a GIN index.
            return or_(*[cast(column, JSONB).contains([value]) for value in values])
        return self._any_element(column, lambda element: element.in_(values))

    def _condition_clause(self, condition: FilterCondition):
        column = getattr(self.model, condition.field)
        if self.is_list_field(condition.field):
            # Equality and `in` on a list mean "contains one of these elements".
            if condition.op not in {"eq", "in"}:
                return false()
            values = condition.value if condition.op == "in" else (condition.value,)
            return self._membership_clause(column, values)
        return COMPARISON_OPERATORS[condition.op](column, condition.value)

    def text_search(self, query: str):
        terms = [term for term in str(query or "").split() if term]
        clauses = []
        for name in self.collection.search_fields:
            if not self.has_field(name):
                continue
            column = getattr(self.model, name)
            if self.is_list_field(name):
                clauses.extend(
                    self._any_element(column, lambda element, term=term: element.icontains(term, autoescape=True))
                    for term in terms
                )
            elif not self.is_json_field(name):
                clauses.extend(column.icontains(term, autoescape=True) for term in terms)
        return or_(false(), *clauses)

    def filter_clause(self, plan: QueryPlan):
        if plan.unsatisfiable:
            return false()
        clauses = [self._condition_clause(condition) for condition in plan.filters]
        if plan.search:
            clauses.append(self.text_search(plan.search))
        return and_(*clauses) if clauses else None

    def _order_by(self, sort: Iterable[SortKey]) -> list:
        clauses = []
        for key in sort:
            if not self.has_field(key.field):
                continue
            column = getattr(self.model, key.field)
            clauses.append(asc(column) if key.dir == "asc" else desc(column))
        clauses.append(asc(self.model.id))
        return clauses

    def _select(self, plan: QueryPlan | None):
        q = self.db.query(self.model)
        if plan is not None:
            clause = self.filter_clause(plan)
            if clause is not None:
                q = q.filter(clause)
        return q

    # Reads

    def find(self, plan: QueryPlan | None = None) -> list:
        with self._storage_errors("find"):
            return self._select(plan).all()

    def count(self, plan: QueryPlan | None = None) -> int:
        with self._storage_errors("count"):
            return int(self._select(plan).order_by(None).count())

    def find_sorted(self, plan: QueryPlan | None, sort: Sequence[SortKey], skip: int = 0, limit: int | None = None) -> list:
        with self._storage_errors("find_sorted"):
            q = self._select(plan).order_by(*self._order_by(sort))
            if skip:
                q = q.offset(skip)
            if limit is not None:
                q = q.limit(limit)
            return q.all()

    def get(self, record_id: Any):
        uid = _uuid_or_none(record_id)
        if uid is None:
            return None
        with self._storage_errors("get"):
            return self.db.get(self.model, uid)

    def find_one_by(self, **values: Any):
        with self._storage_errors("find_one_by"):
            return self.db.query(self.model).filter_by(**values).first()

    def max_value(self, field: str) -> Any:
        column = getattr(self.model, field)
        with self._storage_errors("max_value"):
            return self.db.query(func.max(column)).scalar()

    # Writes

    def create(self, values: dict[str, Any]):
        with self._storage_errors("create"):
            row = self.model(**values)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            return row

    def save(self, row):
        with self._storage_errors("save"):
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            return row

    def update_by_id(self, record_id: Any, patch: dict[str, Any]):
        uid = _uuid_or_none(record_id)
        if uid is None:
            return None
        with self._storage_errors("update_by_id"):
            row = self.db.get(self.model, uid)
            if row is None:
                return None
            for key, value in patch.items():
                setattr(row, key, value)
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
            return row

    def delete(self, row) -> None:
        with self._storage_errors("delete"):
            self.db.delete(row)
            self.db.commit()
