"""
Single-Active Record Repositories

RestaurantStory and MenuCardCopy are singleton-like content: many
versions may be stored but only one is published. Every save that marks
a document active first deactivates all the others and only then writes
the target as active. If the second write fails the collection is left
with no active document, never with two. The `single_active` partial
unique index (see aroma.database.init_db) rejects the remaining race of
two concurrent activations.
"""

import logging
from typing import Any, Optional

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from aroma.core.errors import ConflictError, MissingFieldError, NotFoundError
from aroma.database import MENU_CARD_COPIES, RESTAURANT_STORIES
from aroma.repositories.base import BaseRepository, object_id, serialize, utcnow
from aroma.schemas import (
    MenuCardCopyCreate,
    MenuCardCopyUpdate,
    RestaurantStoryCreate,
    RestaurantStoryUpdate,
)

logger = logging.getLogger(__name__)


class ActiveRecordRepository(BaseRepository):
    """Collection where at most one document has isActive=True."""

    entity_name = "Record"

    def get_active(self) -> dict[str, Any]:
        doc = self.collection.find_one({"isActive": True})
        if not doc:
            raise NotFoundError(f"Active {self.entity_name.lower()}")
        return serialize(doc)

    def count_active(self) -> int:
        return self.collection.count_documents({"isActive": True})

    def _deactivate_others(self, keep_id: ObjectId) -> int:
        result = self.collection.update_many(
            {"_id": {"$ne": keep_id}, "isActive": True},
            {"$set": {"isActive": False, "updatedAt": utcnow()}},
        )
        if result.modified_count:
            logger.info(
                f"{self.entity_name}: deactivated {result.modified_count} "
                f"other record(s) before activating {keep_id}"
            )
        return result.modified_count

    def insert(self, data: dict[str, Any]) -> dict[str, Any]:
        now = utcnow()
        doc = {**data, "_id": ObjectId(), "createdAt": now, "updatedAt": now}
        doc.setdefault("isActive", True)

        if doc["isActive"]:
            self._deactivate_others(doc["_id"])
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError(
                f"Another {self.entity_name.lower()} was activated concurrently",
                status_code=409,
            )
        logger.info(f"{self.entity_name} created: {doc['_id']} (active={doc['isActive']})")
        return serialize(doc)

    def update(self, record_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        oid = object_id(record_id)
        existing = self.collection.find_one({"_id": oid})
        if not existing:
            raise NotFoundError(self.entity_name, record_id)

        becomes_active = changes.get("isActive", existing.get("isActive", False))
        if becomes_active:
            self._deactivate_others(oid)

        try:
            updated = self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": {**changes, "updatedAt": utcnow()}},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            raise ConflictError(
                f"Another {self.entity_name.lower()} was activated concurrently",
                status_code=409,
            )
        if not updated:
            raise NotFoundError(self.entity_name, record_id)
        return serialize(updated)


class RestaurantStoryRepository(ActiveRecordRepository):
    collection_name = RESTAURANT_STORIES
    entity_name = "Story"

    def create(self, payload: RestaurantStoryCreate) -> dict[str, Any]:
        return self.insert(payload.model_dump(by_alias=True))

    def update_story(self, payload: RestaurantStoryUpdate) -> dict[str, Any]:
        changes = payload.model_dump(by_alias=True, exclude={"id"}, exclude_none=True)
        return self.update(payload.id, changes)


class MenuCardCopyRepository(ActiveRecordRepository):
    collection_name = MENU_CARD_COPIES
    entity_name = "Menu copy"

    def create(self, payload: MenuCardCopyCreate) -> dict[str, Any]:
        data = payload.model_dump(by_alias=True)
        data["isActive"] = True
        return self.insert(data)

    def update_copy(self, payload: MenuCardCopyUpdate) -> dict[str, Any]:
        """Replace the paragraphs of a copy and make it the active one."""
        if not payload.id:
            raise MissingFieldError("_id")
        changes = {
            "paragraphs": payload.paragraphs.model_dump(),
            "isActive": True,
        }
        return self.update(payload.id, changes)


def get_active_or_none(repo: ActiveRecordRepository) -> Optional[dict[str, Any]]:
    """Active document for page rendering, None when nothing is published."""
    try:
        return repo.get_active()
    except NotFoundError:
        return None
