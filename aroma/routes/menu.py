"""
Menu section endpoints.

GET /api/menu-sections has three shapes: the full collection (`all=true`),
flattened matching items (`search`), or sections regrouped from a page of
items. See aroma.repositories.menu for the paging rules.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, status
from pymongo.database import Database

from aroma.auth import require_admin
from aroma.database import get_db
from aroma.repositories.menu import MenuRepository
from aroma.schemas import MenuSectionIn, MenuSectionOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/menu-sections", tags=["Menu"])


@router.get("", summary="List / Search Menu")
def list_menu_sections(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    search: Optional[str] = Query(None),
    include_all: bool = Query(False, alias="all"),
    db: Database = Depends(get_db),
) -> Any:
    return MenuRepository(db).list_sections(
        page=page, limit=limit, search=search, include_all=include_all
    )


@router.post(
    "",
    response_model=MenuSectionOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_menu_section(
    payload: MenuSectionIn,
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    return MenuRepository(db).create_section(payload)


@router.get("/{section_id}", response_model=MenuSectionOut)
def get_menu_section(section_id: str, db: Database = Depends(get_db)) -> dict[str, Any]:
    return MenuRepository(db).get_section(section_id)


@router.put(
    "/{section_id}",
    response_model=MenuSectionOut,
    dependencies=[Depends(require_admin)],
)
def update_menu_section(
    section_id: str,
    payload: MenuSectionIn,
    db: Database = Depends(get_db),
) -> dict[str, Any]:
    return MenuRepository(db).update_section(section_id, payload)


@router.delete("/{section_id}", dependencies=[Depends(require_admin)])
def delete_menu_section(section_id: str, db: Database = Depends(get_db)) -> dict[str, bool]:
    MenuRepository(db).delete_section(section_id)
    return {"success": True}


@router.delete("/items/{item_id}", dependencies=[Depends(require_admin)])
def delete_menu_item(item_id: str, db: Database = Depends(get_db)) -> dict[str, Any]:
    """Remove one item; empty subsections and sections are pruned."""
    return MenuRepository(db).delete_item(item_id)
