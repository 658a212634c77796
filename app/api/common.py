from __future__ import annotations

from typing import Any, Mapping

from fastapi import HTTPException, Request

from app.services.query_builder import build_query_plan, parse_query_params
from app.services.record_store import RecordStore


def ok(data: Any, **extra: Any) -> dict[str, Any]:
    return {"success": True, **extra, "data": data}


def ok_list(store: RecordStore, rows: list) -> dict[str, Any]:
    serializer = store.collection.serializer
    return {"success": True, "count": len(rows), "data": [serializer(row) for row in rows]}


def request_params(request: Request) -> dict[str, Any]:
    return parse_query_params(request.query_params.multi_items())


def load_or_404(store: RecordStore, record_id: str):
    row = store.get(record_id)
    if row is None:
        raise HTTPException(status_code=404, detail=f"{store.collection.label} not found")
    return row


def visible_or_404(store: RecordStore, record_id: str, authenticated: bool):
    row = load_or_404(store, record_id)
    ensure_visible_or_404(store, row, authenticated)
    return row


def ensure_visible_or_404(store: RecordStore, row, authenticated: bool) -> None:
    collection = store.collection
    if authenticated or not collection.visibility_field:
        return
    if getattr(row, collection.visibility_field) != collection.public_value:
        raise HTTPException(status_code=404, detail=f"{collection.label} not found")


def list_visible(store: RecordStore, authenticated: bool, filters: Mapping[str, Any] | None = None) -> list:
    """Unpaginated listing in the collection's default order, visibility applied."""
    plan = build_query_plan(dict(filters or {}), authenticated, store)
    return store.find_sorted(plan, plan.sort)
