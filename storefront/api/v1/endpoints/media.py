"""Media library endpoints (admin only)."""

from urllib.parse import parse_qs

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from storefront.auth import require_admin
from storefront.db.session import get_db
from storefront.models import MediaItem
from storefront.schemas.cms import MediaItemResponse
from storefront.services.media_service import (
    MAX_UPLOAD_BYTES,
    InvalidUploadError,
    UploadTooLargeError,
    delete_media,
    list_media,
    save_upload,
)

router: APIRouter = APIRouter(dependencies=[Depends(require_admin)])


async def _read_body(request: Request, limit: int = MAX_UPLOAD_BYTES) -> bytes:
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise UploadTooLargeError("Upload exceeds 10 MB")
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise UploadTooLargeError("Upload exceeds 10 MB")
    return bytes(body)


@router.get("", response_model=list[MediaItemResponse])
def get_media(db: Session = Depends(get_db)) -> list[MediaItem]:
    return list_media(db)


@router.post("", response_model=MediaItemResponse, status_code=status.HTTP_201_CREATED)
async def upload_media(request: Request, db: Session = Depends(get_db)) -> MediaItem:
    """Store the raw request body; ``filename`` (and optional ``alt_text``) come from the query string."""
    query = parse_qs(request.url.query)
    filename = (query.get("filename") or [""])[0]
    alt_text = (query.get("alt_text") or [None])[0]
    try:
        payload = await _read_body(request)
        return await run_in_threadpool(save_upload, db, filename=filename, payload=payload, alt_text=alt_text)
    except UploadTooLargeError as exc:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=str(exc)) from exc
    except InvalidUploadError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.delete("/{media_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_media(media_id: int, db: Session = Depends(get_db)) -> None:
    item = db.get(MediaItem, media_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media not found")
    delete_media(db, item)
