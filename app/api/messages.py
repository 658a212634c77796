from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.common import list_visible, load_or_404, ok, ok_list
from app.core.deps import get_current_admin
from app.db.session import get_db
from app.schemas.portfolio import MessageCreate, MessageStatusUpdate
from app.services.collections import MESSAGES
from app.services.record_store import RecordStore

router = APIRouter()


def _store(db: Session) -> RecordStore:
    return RecordStore(db, MESSAGES)


@router.post("", status_code=201)
def send_message(payload: MessageCreate, db: Session = Depends(get_db)):
    store = _store(db)
    return ok(store.collection.serializer(store.create(payload.model_dump())))


@router.get("")
def list_messages(db: Session = Depends(get_db), admin: dict = Depends(get_current_admin)):
    store = _store(db)
    return ok_list(store, list_visible(store, True))


@router.get("/{id}")
def get_message(id: str, db: Session = Depends(get_db), admin: dict = Depends(get_current_admin)):
    store = _store(db)
    return ok(store.collection.serializer(load_or_404(store, id)))


@router.put("/{id}")
def update_message_status(
    id: str,
    payload: MessageStatusUpdate,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    store = _store(db)
    load_or_404(store, id)
    row = store.update_by_id(id, {"is_read": payload.is_read})
    return ok(store.collection.serializer(row))


@router.delete("/{id}")
def delete_message(id: str, db: Session = Depends(get_db), admin: dict = Depends(get_current_admin)):
    store = _store(db)
    store.delete(load_or_404(store, id))
    return ok({})
