from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from app.api.common import list_visible, load_or_404, ok, ok_list, visible_or_404
from app.core.deps import get_current_admin, get_optional_admin
from app.db.session import get_db
from app.schemas.portfolio import AwardCreate, AwardUpdate
from app.services.collections import AWARDS
from app.services.media_storage import MediaStorage, discard_media_quietly, get_media_storage
from app.services.ordering import reorder, resolve_create_order
from app.services.record_store import RecordStore

router = APIRouter()


def _store(db: Session) -> RecordStore:
    return RecordStore(db, AWARDS)


@router.get("")
def list_awards(db: Session = Depends(get_db), admin: dict | None = Depends(get_optional_admin)):
    store = _store(db)
    return ok_list(store, list_visible(store, admin is not None))


@router.get("/{id}")
def get_award(id: str, db: Session = Depends(get_db), admin: dict | None = Depends(get_optional_admin)):
    store = _store(db)
    return ok(store.collection.serializer(visible_or_404(store, id, admin is not None)))


@router.post("", status_code=201)
def create_award(payload: AwardCreate, db: Session = Depends(get_db), admin: dict = Depends(get_current_admin)):
    store = _store(db)
    row = store.create(resolve_create_order(store, payload.model_dump()))
    return ok(store.collection.serializer(row))


@router.put("/reorder")
def reorder_awards(
    payload: Optional[dict[str, Any]] = Body(default=None),
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    store = _store(db)
    rows = reorder(store, (payload or {}).get("awards"))
    return ok([store.collection.serializer(row) for row in rows])


@router.put("/{id}")
def update_award(
    id: str,
    payload: AwardUpdate,
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
def delete_award(
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
