"""
Site Settings Repository

A single document holding the restaurant locations.
"""

import logging
from typing import Any

from pymongo import ReturnDocument

from aroma.core.errors import ConflictError
from aroma.database import SETTINGS
from aroma.repositories.base import BaseRepository, serialize, utcnow
from aroma.schemas import SettingsIn

logger = logging.getLogger(__name__)


class SettingsRepository(BaseRepository):
    collection_name = SETTINGS

    def get_or_create(self) -> dict[str, Any]:
        """The settings document; an empty one is created on first access."""
        doc = self.collection.find_one({})
        if doc is None:
            now = utcnow()
            doc = {"locations": [], "createdAt": now, "updatedAt": now}
            self.collection.insert_one(doc)
            logger.info("Created empty settings document")
        return serialize(doc)

    def locations(self) -> list[dict[str, Any]]:
        """Configured locations without creating the document."""
        doc = self.collection.find_one({}, {"locations": 1})
        return (doc or {}).get("locations", [])

    def create(self, payload: SettingsIn) -> dict[str, Any]:
        if self.collection.find_one({}) is not None:
            raise ConflictError("Settings already exist", status_code=409)
        now = utcnow()
        doc = {**payload.model_dump(by_alias=True), "createdAt": now, "updatedAt": now}
        self.collection.insert_one(doc)
        return serialize(doc)

    def upsert(self, payload: SettingsIn) -> dict[str, Any]:
        existing = self.collection.find_one({}, {"_id": 1})
        data = {**payload.model_dump(by_alias=True), "updatedAt": utcnow()}
        if existing is None:
            data["createdAt"] = data["updatedAt"]
            self.collection.insert_one(data)
            logger.info("Settings created via update")
            return serialize(data)

        updated = self.collection.find_one_and_update(
            {"_id": existing["_id"]},
            {"$set": data},
            return_document=ReturnDocument.AFTER,
        )
        logger.info(f"Settings updated ({len(payload.locations)} location(s))")
        return serialize(updated)
