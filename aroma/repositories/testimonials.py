"""
Testimonial Repository
"""

import logging
from typing import Any, Optional

from pymongo import DESCENDING, ReturnDocument

from aroma.core.errors import NotFoundError
from aroma.database import TESTIMONIALS
from aroma.repositories.base import (
    BaseRepository,
    object_id,
    page_skip,
    regex_filter,
    serialize,
    total_pages,
    utcnow,
)
from aroma.schemas import TestimonialCreate, TestimonialUpdate

logger = logging.getLogger(__name__)

LIST_FIELDS = {
    "customerName": 1,
    "message": 1,
    "customerImage": 1,
    "isActive": 1,
    "createdAt": 1,
    "updatedAt": 1,
}
ACTIVE_FIELDS = {"customerName": 1, "message": 1, "customerImage": 1}


class TestimonialRepository(BaseRepository):
    collection_name = TESTIMONIALS

    def paginate(self, page: int = 1, limit: int = 10, search: Optional[str] = None) -> dict[str, Any]:
        """Newest first, optionally filtered by customer name or message."""
        query: dict[str, Any] = {}
        if search:
            pattern = regex_filter(search)
            query = {"$or": [{"customerName": pattern}, {"message": pattern}]}

        total = self.collection.count_documents(query)
        cursor = (
            self.collection.find(query, LIST_FIELDS)
            .sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
            .skip(page_skip(page, limit))
            .limit(limit)
        )
        return {
            "testimonials": [serialize(doc) for doc in cursor],
            "total": total,
            "page": page,
            "totalPages": total_pages(total, limit),
        }

    def list_active(self, limit: Optional[int] = None) -> list[dict[str, Any]]:
        cursor = self.collection.find({"isActive": True}, ACTIVE_FIELDS).sort(
            [("createdAt", DESCENDING), ("_id", DESCENDING)]
        )
        if limit:
            cursor = cursor.limit(limit)
        return [serialize(doc) for doc in cursor]

    def get(self, testimonial_id: str) -> dict[str, Any]:
        doc = self.collection.find_one({"_id": object_id(testimonial_id)})
        if not doc:
            raise NotFoundError("Testimonial", testimonial_id)
        return serialize(doc)

    def create(self, payload: TestimonialCreate) -> dict[str, Any]:
        now = utcnow()
        doc = {**payload.model_dump(by_alias=True), "createdAt": now, "updatedAt": now}
        self.collection.insert_one(doc)
        logger.info(f"Testimonial created for {payload.customer_name} ({doc['_id']})")
        return serialize(doc)

    def update(self, testimonial_id: str, payload: TestimonialUpdate) -> dict[str, Any]:
        changes = payload.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
        changes["updatedAt"] = utcnow()
        updated = self.collection.find_one_and_update(
            {"_id": object_id(testimonial_id)},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if not updated:
            raise NotFoundError("Testimonial", testimonial_id)
        return serialize(updated)

    def delete(self, testimonial_id: str) -> None:
        result = self.collection.delete_one({"_id": object_id(testimonial_id)})
        if result.deleted_count == 0:
            raise NotFoundError("Testimonial", testimonial_id)
        logger.info(f"Testimonial deleted: {testimonial_id}")
