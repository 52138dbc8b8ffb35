"""Media library: uploaded files stored under ``UPLOAD_DIR`` and served at ``/uploads``."""

from __future__ import annotations

import logging
import mimetypes
import re
from pathlib import Path
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.core.config import settings
from storefront.models import MediaItem

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads"
MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class InvalidUploadError(Exception):
    """Raised for empty or badly named uploads."""


class UploadTooLargeError(InvalidUploadError):
    """Raised once an upload passes ``MAX_UPLOAD_BYTES``."""


def upload_root() -> Path:
    root = Path(settings.upload_dir)
    root.mkdir(parents=True, exist_ok=True)
    return root


def _safe_name(filename: str) -> str:
    stem = Path(filename).name
    cleaned = re.sub(r"[^A-Za-z0-9._-]+", "_", stem).strip("._")
    if not cleaned or "." not in cleaned:
        raise InvalidUploadError("Filename must include an extension")
    return cleaned


def media_type(filename: str) -> str:
    guessed, _ = mimetypes.guess_type(filename)
    if guessed is None:
        return "file"
    return guessed.split("/", 1)[0]


def save_upload(db: Session, *, filename: str, payload: bytes, alt_text: str | None = None) -> MediaItem:
    if not payload:
        raise InvalidUploadError("Upload is empty")
    if len(payload) > MAX_UPLOAD_BYTES:
        raise UploadTooLargeError("Upload exceeds 10 MB")

    safe_name = _safe_name(filename)
    stored_name = f"{uuid4().hex[:12]}_{safe_name}"
    (upload_root() / stored_name).write_bytes(payload)

    item = MediaItem(
        name=safe_name,
        type=media_type(safe_name),
        url=f"{UPLOAD_URL_PREFIX}/{stored_name}",
        size=len(payload),
        alt_text=alt_text,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info("[MEDIA] Stored %s (%s bytes).", item.url, item.size)
    return item


def list_media(db: Session) -> list[MediaItem]:
    return list(db.scalars(select(MediaItem).order_by(MediaItem.created_at.desc(), MediaItem.id.desc())).all())


def delete_media(db: Session, item: MediaItem) -> None:
    """Remove the row and its file; a file already gone is only logged."""
    stored_name = item.url.removeprefix(f"{UPLOAD_URL_PREFIX}/")
    path = upload_root() / stored_name
    if path.is_file():
        path.unlink()
    else:
        logger.warning("[MEDIA] File for %s missing on disk.", item.url)
    db.delete(item)
    db.commit()
