from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict

Op = Literal["eq", "gt", "gte", "lt", "lte", "in"]
Dir = Literal["asc", "desc"]


class FilterCondition(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    op: Op
    value: Any


class SortKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    dir: Dir


class PageRef(BaseModel):
    page: int
    limit: int


class Pagination(BaseModel):
    next: Optional[PageRef] = None
    prev: Optional[PageRef] = None

    def as_dict(self) -> dict:
        return self.model_dump(exclude_none=True)


class QueryPlan(BaseModel):
    """Fully resolved list query, built once per request and never mutated."""

    model_config = ConfigDict(frozen=True)

    filters: tuple[FilterCondition, ...] = ()
    # Set when a filter can never match (unknown field, uncoercible value, unknown operator).
    unsatisfiable: bool = False
    search: Optional[str] = None
    select: Optional[tuple[str, ...]] = None
    sort: tuple[SortKey, ...] = ()
    page: int = 1
    limit: int = 12

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


class QueryResult(BaseModel):
    data: list[dict[str, Any]]
    total: int
    pagination: Pagination

    @property
    def count(self) -> int:
        return len(self.data)

    def envelope(self) -> dict[str, Any]:
        return {
            "success": True,
            "count": self.count,
            "total": self.total,
            "pagination": self.pagination.as_dict(),
            "data": self.data,
        }
