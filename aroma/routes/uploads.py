"""
Image upload endpoints (admin only).

Uploading is the primary operation here, so a storage failure surfaces
as 502 rather than being swallowed.
"""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from aroma.auth import require_admin
from aroma.schemas import UploadResponse
from aroma.services.storage import (
    ALLOWED_CONTENT_TYPES,
    MAX_UPLOAD_BYTES,
    BaseStorageService,
    get_storage_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/uploads",
    tags=["Uploads"],
    dependencies=[Depends(require_admin)],
)


@router.post("", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_image(
    file: UploadFile = File(...),
    storage: BaseStorageService = Depends(get_storage_service),
) -> UploadResponse:
    if file.content_type not in ALLOWED_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported file type. Allowed: {list(ALLOWED_CONTENT_TYPES)}",
        )

    content = await file.read()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty file")
    if len(content) > MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="Image exceeds the 5MB limit",
        )

    stored = await storage.upload(content, file.filename or "image")
    return UploadResponse(public_id=stored.public_id, url=stored.url)


@router.delete("/{public_id:path}")
async def delete_uploaded_image(
    public_id: str,
    storage: BaseStorageService = Depends(get_storage_service),
) -> dict[str, bool]:
    deleted = await storage.delete(public_id)
    return {"success": True, "deleted": deleted}
