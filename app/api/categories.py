from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.common import list_visible, load_or_404, ok, ok_list
from app.core.deps import get_current_admin
from app.db.session import get_db
from app.schemas.portfolio import CategoryCreate, CategoryUpdate
from app.services.collections import CATEGORIES
from app.services.record_store import RecordStore
from app.services.slugs import slugify

router = APIRouter()


def _store(db: Session) -> RecordStore:
    return RecordStore(db, CATEGORIES)


def _ensure_unique_name_or_400(store: RecordStore, name: str, current_id=None) -> None:
    existing = store.find_one_by(name=name)
    if existing is not None and existing.id != current_id:
        raise HTTPException(status_code=400, detail="Duplicate field value entered")


@router.get("")
def list_categories(db: Session = Depends(get_db)):
    store = _store(db)
    return ok_list(store, list_visible(store, True))


@router.get("/slug/{slug}")
def get_category_by_slug(slug: str, db: Session = Depends(get_db)):
    store = _store(db)
    row = store.find_one_by(slug=slug)
    if row is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return ok(store.collection.serializer(row))


@router.get("/{id}")
def get_category(id: str, db: Session = Depends(get_db)):
    store = _store(db)
    return ok(store.collection.serializer(load_or_404(store, id)))


@router.post("", status_code=201)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db), admin: dict = Depends(get_current_admin)):
    store = _store(db)
    name = payload.name.strip()
    _ensure_unique_name_or_400(store, name)
    values = payload.model_dump()
    values.update(name=name, slug=slugify(name))
    return ok(store.collection.serializer(store.create(values)))


@router.put("/{id}")
def update_category(
    id: str,
    payload: CategoryUpdate,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    store = _store(db)
    row = load_or_404(store, id)
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("name"):
        changes["name"] = changes["name"].strip()
        _ensure_unique_name_or_400(store, changes["name"], current_id=row.id)
        changes["slug"] = slugify(changes["name"])
    for key, value in changes.items():
        setattr(row, key, value)
    return ok(store.collection.serializer(store.save(row)))


@router.delete("/{id}")
def delete_category(id: str, db: Session = Depends(get_db), admin: dict = Depends(get_current_admin)):
    store = _store(db)
    store.delete(load_or_404(store, id))
    return ok({})
