from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable

from sqlalchemy.inspection import inspect as sa_inspect


def serialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: serialize_value(val) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, Decimal):
        return float(value)
    return value


def row_to_dict(row: Any) -> dict[str, Any]:
    mapper = sa_inspect(type(row))
    return {column.key: serialize_value(getattr(row, column.key)) for column in mapper.columns}


def artwork_to_dict(row: Any) -> dict[str, Any]:
    data = row_to_dict(row)
    category = row.category
    data["category"] = (
        {"id": str(category.id), "name": category.name, "slug": category.slug} if category is not None else None
    )
    return data


def project(data: dict[str, Any], fields: Iterable[str] | None) -> dict[str, Any]:
    if fields is None:
        return data
    keep = ["id", *fields]
    return {key: data[key] for key in keep if key in data}
