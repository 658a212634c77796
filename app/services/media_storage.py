from __future__ import annotations

import logging
import re
import uuid
from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.core.config import settings

logger = logging.getLogger(__name__)

MEDIA_IMAGE = "image"
MEDIA_VIDEO = "video"
_FOLDERS = {MEDIA_IMAGE: "artworks", MEDIA_VIDEO: "videos"}


def _safe_file_name(file_name: str) -> str:
    raw = str(file_name or "").strip() or "file.bin"
    return re.sub(r"[^A-Za-z0-9._-]+", "_", raw)


def _file_format(file_name: str) -> str | None:
    _, dot, ext = str(file_name or "").rpartition(".")
    return ext.lower() if dot and ext else None


def media_kind_for(mime_type: str | None) -> str:
    return MEDIA_VIDEO if str(mime_type or "").lower().startswith("video/") else MEDIA_IMAGE


def build_object_key(kind: str, file_name: str) -> str:
    folder = f"{settings.MEDIA_ROOT_FOLDER.strip('/')}/{_FOLDERS.get(kind, 'misc')}"
    return f"{folder}/{uuid.uuid4().hex}-{_safe_file_name(file_name)}"


class MediaStorage:
    """Uploads media bytes to the S3-compatible host and hands back public URLs."""

    def __init__(self):
        self.bucket = settings.S3_BUCKET
        self.client = boto3.client(
            "s3",
            endpoint_url=settings.S3_ENDPOINT,
            aws_access_key_id=settings.S3_ACCESS_KEY,
            aws_secret_access_key=settings.S3_SECRET_KEY,
            region_name=settings.S3_REGION,
            use_ssl=settings.S3_USE_SSL,
        )
        self._bucket_checked = False

    def ensure_bucket(self) -> None:
        if self._bucket_checked:
            return
        try:
            self.client.head_bucket(Bucket=self.bucket)
        except ClientError as exc:
            code = str(exc.response.get("Error", {}).get("Code", ""))
            if code not in {"404", "NoSuchBucket", "NotFound"}:
                raise
            kwargs: dict = {"Bucket": self.bucket}
            if settings.S3_REGION and settings.S3_REGION != "us-east-1":
                kwargs["CreateBucketConfiguration"] = {"LocationConstraint": settings.S3_REGION}
            self.client.create_bucket(**kwargs)
        self._bucket_checked = True

    @staticmethod
    def public_url(key: str) -> str:
        return f"{settings.media_public_base_url}/{key}"

    def upload(self, content: bytes, *, file_name: str, mime_type: str | None) -> dict:
        self.ensure_bucket()
        kind = media_kind_for(mime_type)
        key = build_object_key(kind, file_name)
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=content,
            ContentType=mime_type or "application/octet-stream",
        )
        url = self.public_url(key)
        logger.info("uploaded %s bytes to %s", len(content), key)
        return {
            "url": url,
            "public_id": key,
            "type": kind,
            "format": _file_format(file_name),
            "size": len(content),
            "thumbnail_url": url if kind == MEDIA_IMAGE else None,
        }

    def delete(self, public_id: str) -> None:
        self.ensure_bucket()
        self.client.delete_object(Bucket=self.bucket, Key=public_id)


def discard_media_quietly(storage: MediaStorage, public_id: str | None) -> None:
    """Best-effort removal used when a record drops or replaces its media."""
    if not public_id:
        return
    try:
        storage.delete(public_id)
    except (ClientError, BotoCoreError) as exc:
        logger.warning("failed to delete media %s: %s", public_id, exc)


@lru_cache(maxsize=1)
def get_media_storage() -> MediaStorage:
    return MediaStorage()
