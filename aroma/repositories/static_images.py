"""
Static Image Repository

Named images (hero banners, gallery shots, logos) looked up by their
unique `name`. Documents may reference an object in image storage via
`storagePublicId`; the repository reports which stored object became
stale so the caller can delete it.
"""

import logging
from typing import Any, Optional

from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError

from aroma.core.errors import ConflictError, NotFoundError
from aroma.database import STATIC_IMAGES
from aroma.repositories.base import (
    BaseRepository,
    object_id,
    regex_filter,
    serialize,
    utcnow,
)
from aroma.schemas import ImageCategory, StaticImageCreate, StaticImageUpdate

logger = logging.getLogger(__name__)

DUPLICATE_NAME = "Image with this name already exists"


class StaticImageRepository(BaseRepository):
    collection_name = STATIC_IMAGES

    def search(
        self,
        category: Optional[str] = None,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        """
        Filtered listing, newest first.

        An exact, active name match for `search` wins outright and is
        returned alone.
        """
        query: dict[str, Any] = {}
        if category:
            query["category"] = category
        if is_active is not None:
            query["isActive"] = is_active

        if search:
            exact = self.collection.find_one({"name": search, "isActive": True})
            if exact:
                return [serialize(exact)]
            pattern = regex_filter(search)
            query["$or"] = [
                {"name": pattern},
                {"description": pattern},
                {"altText": pattern},
            ]

        cursor = self.collection.find(query).sort("createdAt", DESCENDING)
        return [serialize(doc) for doc in cursor]

    def get(self, image_id: str) -> dict[str, Any]:
        doc = self.collection.find_one({"_id": object_id(image_id)})
        if not doc:
            raise NotFoundError("Image", image_id)
        return serialize(doc)

    def find_by_name(self, name: str) -> Optional[dict[str, Any]]:
        doc = self.collection.find_one({"name": name, "isActive": True})
        return serialize(doc) if doc else None

    def list_by_category(self, category: ImageCategory) -> list[dict[str, Any]]:
        cursor = self.collection.find(
            {"category": category.value, "isActive": True}
        ).sort("createdAt", DESCENDING)
        return [serialize(doc) for doc in cursor]

    def list_active(self) -> list[dict[str, Any]]:
        cursor = self.collection.find({"isActive": True}).sort(
            [("category", ASCENDING), ("createdAt", DESCENDING)]
        )
        return [serialize(doc) for doc in cursor]

    def create(self, payload: StaticImageCreate) -> dict[str, Any]:
        if self.collection.find_one({"name": payload.name}):
            raise ConflictError(DUPLICATE_NAME)

        now = utcnow()
        doc = payload.model_dump(by_alias=True, mode="json", exclude_none=True)
        doc.update({"createdAt": now, "updatedAt": now})
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            raise ConflictError(DUPLICATE_NAME)
        logger.info(f"Static image created: {payload.name} ({doc['_id']})")
        return serialize(doc)

    def update(
        self,
        image_id: str,
        payload: StaticImageUpdate,
    ) -> tuple[dict[str, Any], Optional[str]]:
        """
        Apply changes to an image.

        Returns:
            (updated document, storage public id that is no longer referenced
            or None)
        """
        oid = object_id(image_id)
        existing = self.collection.find_one({"_id": oid})
        if not existing:
            raise NotFoundError("Image", image_id)

        changes = payload.model_dump(
            by_alias=True, mode="json", exclude_unset=True, exclude_none=True
        )

        new_name = changes.get("name")
        if new_name and new_name != existing.get("name"):
            if self.collection.find_one({"name": new_name, "_id": {"$ne": oid}}):
                raise ConflictError(DUPLICATE_NAME)

        stale_public_id = None
        unset: dict[str, str] = {}
        old_public_id = existing.get("storagePublicId")
        new_url = changes.get("imageUrl")
        if new_url and new_url != existing.get("imageUrl") and old_public_id:
            stale_public_id = old_public_id
            if changes.get("storagePublicId", old_public_id) == old_public_id:
                changes.pop("storagePublicId", None)
                unset["storagePublicId"] = ""

        changes["updatedAt"] = utcnow()
        update: dict[str, Any] = {"$set": changes}
        if unset:
            update["$unset"] = unset

        try:
            updated = self.collection.find_one_and_update(
                {"_id": oid}, update, return_document=ReturnDocument.AFTER
            )
        except DuplicateKeyError:
            raise ConflictError(DUPLICATE_NAME)
        return serialize(updated), stale_public_id

    def delete(self, image_id: str) -> Optional[str]:
        """Delete the document; returns its storage public id, if any."""
        oid = object_id(image_id)
        doc = self.collection.find_one_and_delete({"_id": oid})
        if not doc:
            raise NotFoundError("Image", image_id)
        logger.info(f"Static image deleted: {doc.get('name')} ({image_id})")
        return doc.get("storagePublicId")
