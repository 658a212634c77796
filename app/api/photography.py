from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.common import list_visible, load_or_404, ok, ok_list, visible_or_404
from app.core.config import settings
from app.core.deps import get_current_admin, get_optional_admin
from app.core.errors import StorageError
from app.db.session import get_db
from app.models.photography import Photography
from app.schemas.portfolio import PhotographyCreate, PhotographyUpdate
from app.services.collections import PHOTOGRAPHY
from app.services.media_storage import MediaStorage, discard_media_quietly, get_media_storage
from app.services.query_builder import build_query_plan, positive_int
from app.services.record_store import RecordStore

router = APIRouter()


def _store(db: Session) -> RecordStore:
    return RecordStore(db, PHOTOGRAPHY)


@router.get("")
def list_photography(
    category: str | None = Query(None),
    active: str | None = Query(None),
    db: Session = Depends(get_db),
    admin: dict | None = Depends(get_optional_admin),
):
    filters: dict = {}
    if category:
        filters["category"] = category
    if active is not None:
        # Only admins get to choose; anonymous callers are pinned to active items.
        filters["is_active"] = active == "true"
    store = _store(db)
    return ok_list(store, list_visible(store, admin is not None, filters))


@router.get("/latest")
def list_latest_photography(limit: str | None = Query(None), db: Session = Depends(get_db)):
    store = _store(db)
    plan = build_query_plan({}, False, store)
    rows = store.find_sorted(plan, plan.sort, limit=positive_int(limit, settings.FEATURED_LIMIT))
    return ok_list(store, rows)


@router.get("/categories")
def list_photography_categories(db: Session = Depends(get_db)):
    try:
        rows = (
            db.query(Photography.category)
            .filter(Photography.is_active.is_(True), Photography.category.is_not(None), Photography.category != "")
            .distinct()
            .order_by(Photography.category.asc())
            .all()
        )
    except SQLAlchemyError as exc:
        raise StorageError("photography categories query failed") from exc
    return ok([category for (category,) in rows if category])


@router.get("/{id}")
def get_photography(id: str, db: Session = Depends(get_db), admin: dict | None = Depends(get_optional_admin)):
    store = _store(db)
    return ok(store.collection.serializer(visible_or_404(store, id, admin is not None)))


@router.post("", status_code=201)
def create_photography(payload: PhotographyCreate, db: Session = Depends(get_db), admin: dict = Depends(get_current_admin)):
    store = _store(db)
    row = store.create(payload.model_dump())
    return ok(store.collection.serializer(row))


@router.put("/{id}")
def update_photography(
    id: str,
    payload: PhotographyUpdate,
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
    admin: dict = Depends(get_current_admin),
):
    store = _store(db)
    row = load_or_404(store, id)
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("image_url") and changes["image_url"] != row.image_url:
        discard_media_quietly(storage, row.image_public_id)
    for key, value in changes.items():
        setattr(row, key, value)
    return ok(store.collection.serializer(store.save(row)))


@router.delete("/{id}")
def delete_photography(
    id: str,
    db: Session = Depends(get_db),
    storage: MediaStorage = Depends(get_media_storage),
    admin: dict = Depends(get_current_admin),
):
    store = _store(db)
    row = load_or_404(store, id)
    discard_media_quietly(storage, row.image_public_id)
    store.delete(row)
    return ok({})
