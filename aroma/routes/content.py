"""
Restaurant story and menu intro copy.

Both are single-active collections: the public site shows the active
document and every activating save deactivates the rest first.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from aroma.auth import require_admin
from aroma.database import get_db
from aroma.repositories.active import MenuCardCopyRepository, RestaurantStoryRepository
from aroma.schemas import (
    MenuCardCopyCreate,
    MenuCardCopyOut,
    MenuCardCopyUpdate,
    RestaurantStoryCreate,
    RestaurantStoryOut,
    RestaurantStoryUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Content"])


# =============================================================================
# RESTAURANT STORY
# =============================================================================

@router.get("/restaurant-story", response_model=RestaurantStoryOut)
def get_restaurant_story(db: Database = Depends(get_db)) -> dict[str, Any]:
    return RestaurantStoryRepository(db).get_active()


@router.post(
    "/restaurant-story",
    response_model=RestaurantStoryOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_restaurant_story(
    payload: RestaurantStoryCreate,
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    return RestaurantStoryRepository(db).create(payload)


@router.put(
    "/restaurant-story",
    response_model=RestaurantStoryOut,
    dependencies=[Depends(require_admin)],
)
def update_restaurant_story(
    payload: RestaurantStoryUpdate,
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    return RestaurantStoryRepository(db).update_story(payload)


# =============================================================================
# MENU CARD COPY
# =============================================================================

@router.get("/menu-copy", response_model=MenuCardCopyOut)
def get_menu_copy(db: Database = Depends(get_db)) -> dict[str, Any]:
    return MenuCardCopyRepository(db).get_active()


@router.post(
    "/menu-copy",
    response_model=MenuCardCopyOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_menu_copy(
    payload: MenuCardCopyCreate,
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    return MenuCardCopyRepository(db).create(payload)


@router.put(
    "/menu-copy",
    response_model=MenuCardCopyOut,
    dependencies=[Depends(require_admin)],
)
def update_menu_copy(
    payload: MenuCardCopyUpdate,
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    return MenuCardCopyRepository(db).update_copy(payload)
