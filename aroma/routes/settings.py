"""
Site settings (restaurant locations) endpoints.
"""

from typing import Any

from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from aroma.auth import require_admin
from aroma.database import get_db
from aroma.repositories.settings import SettingsRepository
from aroma.schemas import SettingsIn, SettingsOut

router = APIRouter(prefix="/api/settings", tags=["Settings"])


@router.get("", response_model=SettingsOut)
def get_site_settings(db: Database = Depends(get_db)) -> dict[str, Any]:
    return SettingsRepository(db).get_or_create()


@router.post(
    "",
    response_model=SettingsOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_site_settings(payload: SettingsIn, db: Database = Depends(get_db)) -> dict[str, Any]:
    return SettingsRepository(db).create(payload)


@router.put("", response_model=SettingsOut, dependencies=[Depends(require_admin)])
def update_site_settings(payload: SettingsIn, db: Database = Depends(get_db)) -> dict[str, Any]:
    return SettingsRepository(db).upsert(payload)
