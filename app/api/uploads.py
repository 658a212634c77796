from __future__ import annotations

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from app.api.common import ok
from app.core.config import settings
from app.core.deps import get_current_admin
from app.services.media_storage import MEDIA_IMAGE, MEDIA_VIDEO, MediaStorage, get_media_storage, media_kind_for

router = APIRouter()


def _max_file_bytes() -> int:
    return int(settings.MAX_FILE_MB) * 1024 * 1024


def _read_upload_or_400(file: UploadFile) -> bytes:
    if not file.filename:
        raise HTTPException(status_code=400, detail="Please upload a file")
    content = file.file.read(_max_file_bytes() + 1)
    if not content:
        raise HTTPException(status_code=400, detail="Please upload a file")
    if len(content) > _max_file_bytes():
        raise HTTPException(status_code=400, detail=f"File exceeds the {settings.MAX_FILE_MB} MB limit")
    return content


def _upload_or_502(storage: MediaStorage, file: UploadFile, expected_kind: str | None = None) -> dict:
    kind = media_kind_for(file.content_type)
    if expected_kind is not None and kind != expected_kind:
        raise HTTPException(status_code=400, detail=f"Please upload a {expected_kind} file")
    content = _read_upload_or_400(file)
    try:
        return storage.upload(content, file_name=file.filename, mime_type=file.content_type)
    except (ClientError, BotoCoreError) as exc:
        raise HTTPException(status_code=502, detail="Media upload failed") from exc


@router.post("/image")
def upload_image(
    file: UploadFile = File(...),
    storage: MediaStorage = Depends(get_media_storage),
    admin: dict = Depends(get_current_admin),
):
    return ok(_upload_or_502(storage, file, MEDIA_IMAGE))


@router.post("/video")
def upload_video(
    file: UploadFile = File(...),
    storage: MediaStorage = Depends(get_media_storage),
    admin: dict = Depends(get_current_admin),
):
    return ok(_upload_or_502(storage, file, MEDIA_VIDEO))


@router.post("/multiple")
def upload_multiple(
    files: list[UploadFile] = File(...),
    storage: MediaStorage = Depends(get_media_storage),
    admin: dict = Depends(get_current_admin),
):
    results = [_upload_or_502(storage, file) for file in files]
    return ok(results, count=len(results))


@router.delete("")
def delete_file(
    public_id: str | None = Query(None),
    storage: MediaStorage = Depends(get_media_storage),
    admin: dict = Depends(get_current_admin),
):
    if not str(public_id or "").strip():
        raise HTTPException(status_code=400, detail="Public ID is required")
    try:
        storage.delete(public_id)
    except (ClientError, BotoCoreError) as exc:
        raise HTTPException(status_code=400, detail="Failed to delete file") from exc
    return ok({})
