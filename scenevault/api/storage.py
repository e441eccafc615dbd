"""
Storage API endpoints
Receives direct uploads for the local backend and serves stored assets
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, RedirectResponse
import logging

from scenevault.config import settings
from scenevault.core.exceptions import NotFoundError, UploadRejectedError
from scenevault.core.security import verify_upload_token
from scenevault.storage import LocalStorage, StorageBackend, get_storage

router = APIRouter(prefix="/storage", tags=["storage"])
logger = logging.getLogger(__name__)


def _too_large(size: int, max_size: int) -> UploadRejectedError:
    return UploadRejectedError(f"File too large: {size} bytes (max {max_size})", status_code=413)


@router.put("/uploads/{token}")
async def receive_upload(
    token: str,
    request: Request,
    storage: StorageBackend = Depends(get_storage)
):
    """
    Accept the raw file body for an upload target

    The token is the capability: no API key is needed. Each token stores
    one asset and is refused once that asset exists.

    Returns:
        dict: {"storage_id": ...}

    Raises:
        400 if the token is malformed, tampered with, or expired
        409 if the token was already used
        413 if the body exceeds MAX_UPLOAD_SIZE
    """
    storage_id = verify_upload_token(token)
    if storage_id is None:
        raise UploadRejectedError("Invalid or expired upload token")

    if storage.exists(storage_id):
        raise UploadRejectedError("Upload token already used", status_code=409)

    max_size = settings.MAX_UPLOAD_SIZE
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_size:
        raise _too_large(int(declared), max_size)

    # Chunked bodies carry no length; stop reading as soon as the cap is passed
    chunks = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > max_size:
            raise _too_large(received, max_size)
        chunks.append(chunk)

    try:
        storage.save(storage_id, b"".join(chunks), request.headers.get("content-type"), exclusive=True)
    except FileExistsError:
        raise UploadRejectedError("Upload token already used", status_code=409)

    return {"storage_id": storage_id}


@router.get("/files/{storage_id}")
async def get_file(
    storage_id: str,
    storage: StorageBackend = Depends(get_storage)
):
    """
    Serve a stored asset

    Local assets are streamed from disk; other backends redirect to a
    presigned URL.
    """
    if not storage.exists(storage_id):
        raise NotFoundError("File not found")

    if isinstance(storage, LocalStorage):
        return FileResponse(storage.get_local_path(storage_id), filename=storage_id)

    return RedirectResponse(storage.get_url(storage_id, expires_in=settings.ASSET_URL_EXPIRY))
