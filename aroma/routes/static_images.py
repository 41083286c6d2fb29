"""
Static image endpoints.

Removing an image, or pointing it at a new URL, deletes the previously
stored object after the response is sent.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from pymongo.database import Database

from aroma.auth import require_admin
from aroma.database import get_db
from aroma.repositories.static_images import StaticImageRepository
from aroma.schemas import (
    ImageCategory,
    StaticImageCreate,
    StaticImageOut,
    StaticImageUpdate,
)
from aroma.services.storage import (
    BaseStorageService,
    discard_stored_image,
    get_storage_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/static-images", tags=["Static Images"])


@router.get("", response_model=list[StaticImageOut])
def list_static_images(
    category: Optional[ImageCategory] = Query(None),
    is_active: Optional[bool] = Query(None, alias="isActive"),
    search: Optional[str] = Query(None),
    db: Database = Depends(get_db),
) -> list[dict[str, Any]]:
    return StaticImageRepository(db).search(
        category=category.value if category else None,
        is_active=is_active,
        search=search.strip() if search else None,
    )


@router.post(
    "",
    response_model=StaticImageOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_static_image(payload: StaticImageCreate, db: Database = Depends(get_db)) -> dict[str, Any]:
    return StaticImageRepository(db).create(payload)


@router.get("/{image_id}", response_model=StaticImageOut)
def get_static_image(image_id: str, db: Database = Depends(get_db)) -> dict[str, Any]:
    return StaticImageRepository(db).get(image_id)


@router.put(
    "/{image_id}",
    response_model=StaticImageOut,
    dependencies=[Depends(require_admin)],
)
def update_static_image(
    image_id: str,
    payload: StaticImageUpdate,
    background_tasks: BackgroundTasks,
    db: Database = Depends(get_db),
    storage: BaseStorageService = Depends(get_storage_service),
) -> dict[str, Any]:
    image, stale_public_id = StaticImageRepository(db).update(image_id, payload)
    if stale_public_id:
        background_tasks.add_task(discard_stored_image, storage, stale_public_id)
    return image


@router.delete("/{image_id}", dependencies=[Depends(require_admin)])
def delete_static_image(
    image_id: str,
    background_tasks: BackgroundTasks,
    db: Database = Depends(get_db),
    storage: BaseStorageService = Depends(get_storage_service),
) -> dict[str, str]:
    public_id = StaticImageRepository(db).delete(image_id)
    if public_id:
        background_tasks.add_task(discard_stored_image, storage, public_id)
    return {"message": "Image deleted successfully"}
