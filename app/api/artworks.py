from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from app.api.common import ensure_visible_or_404, load_or_404, ok, request_params, visible_or_404
from app.core.config import settings
from app.core.deps import get_current_admin, get_optional_admin
from app.db.session import get_db
from app.models.artwork import STATUS_PUBLISHED
from app.models.category import Category
from app.schemas.portfolio import ArtworkCreate, ArtworkUpdate
from app.schemas.query import FilterCondition, QueryPlan, SortKey
from app.services.artwork_stats import artwork_stats
from app.services.collections import ARTWORKS
from app.services.media_storage import MediaStorage, discard_media_quietly, get_media_storage
from app.services.query_builder import build_and_execute, positive_int
from app.services.record_store import RecordStore
from app.services.slugs import unique_slug

router = APIRouter()


def _store(db: Session) -> RecordStore:
    return RecordStore(db, ARTWORKS)


def _category_id_or_400(db: Session, raw: str | None) -> uuid.UUID | None:
    if raw is None or not str(raw).strip():
        return None
    try:
        category_id = uuid.UUID(str(raw).strip())
    except ValueError:
        raise HTTPException(status_code=400, detail=f'Invalid category "{raw}"')
    if db.get(Category, category_id) is None:
        raise HTTPException(status_code=400, detail="Category not found")
    return category_id


def _view(store: RecordStore, row) -> dict:
    row.views = int(row.views or 0) + 1
    return store.collection.serializer(store.save(row))


@router.get("")
def list_artworks(request: Request, db: Session = Depends(get_db), admin: dict | None = Depends(get_optional_admin)):
    result = build_and_execute(request_params(request), admin is not None, _store(db))
    return result.envelope()


@router.get("/featured")
def list_featured_artworks(limit: str | None = Query(None), db: Session = Depends(get_db)):
    plan = QueryPlan(
        filters=(
            FilterCondition(field="featured", op="eq", value=True),
            FilterCondition(field="status", op="eq", value=STATUS_PUBLISHED),
        ),
        sort=(SortKey(field="created_at", dir="desc"),),
        limit=positive_int(limit, settings.FEATURED_LIMIT),
    )
    store = _store(db)
    rows = store.find_sorted(plan, plan.sort, limit=plan.limit)
    return ok([store.collection.serializer(row) for row in rows], count=len(rows))


@router.get("/stats")
def get_artwork_stats(db: Session = Depends(get_db), admin: dict = Depends(get_current_admin)):
    return ok(artwork_stats(db))


@router.get("/slug/{slug}")
def get_artwork_by_slug(slug: str, db: Session = Depends(get_db), admin: dict | None = Depends(get_optional_admin)):
    store = _store(db)
    row = store.find_one_by(slug=slug)
    if row is None:
        raise HTTPException(status_code=404, detail="Artwork not found")
    ensure_visible_or_404(store, row, admin is not None)
    return ok(_view(store, row))


@router.get("/{id}")
def get_artwork(id: str, db: Session = Depends(get_db), admin: dict | None = Depends(get_optional_admin)):
    store = _store(db)
    row = visible_or_404(store, id, admin is not None)
    return ok(_view(store, row))


@router.post("", status_code=201)
def create_artwork(payload: ArtworkCreate, db: Session = Depends(get_db), admin: dict = Depends(get_current_admin)):
    store = _store(db)
    values = payload.model_dump()
    values["category_id"] = _category_id_or_400(db, payload.category_id)
    values["slug"] = unique_slug(payload.title)
    row = store.create(values)
    return ok(store.collection.serializer(row))


@router.put("/{id}")
def update_artwork(
    id: str,
    payload: ArtworkUpdate,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    store = _store(db)
    row = load_or_404(store, id)
    changes = payload.model_dump(exclude_unset=True)
    if "category_id" in changes:
        changes["category_id"] = _category_id_or_400(db, changes["category_id"])
    if changes.get("title") and changes["title"] != row.title:
        changes["slug"] = unique_slug(changes["title"])
    for key, value in changes.items():
        setattr(row, key, value)
    return ok(store.collection.serializer(store.save(row)))


@router.delete("/{id}")
def delete_artwork(
    id: str,
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
    admin: dict = Depends(get_current_admin),
):
    store = _store(db)
    row = load_or_404(store, id)
    for item in list(row.media or []):
        discard_media_quietly(storage, (item or {}).get("public_id"))
    store.delete(row)
    return ok({})
