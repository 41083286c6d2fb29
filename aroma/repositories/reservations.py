"""
Reservation Repository

Reservations are created `pending` by the public booking form and moved to
`confirmed` or `cancelled` from the admin panel. The booking date is stored
as a UTC-midnight datetime so that date-range queries stay simple.
"""

import logging
import datetime as dt
from datetime import datetime, timezone
from typing import Any, Optional

from pymongo import DESCENDING, ReturnDocument

from aroma.core.errors import NotFoundError
from aroma.database import RESERVATIONS
from aroma.repositories.base import (
    BaseRepository,
    object_id,
    page_skip,
    regex_filter,
    serialize,
    total_pages,
    utcnow,
)
from aroma.schemas import ReservationCreate, ReservationStatus, ReservationUpdate

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("name", "email", "phone")


def as_utc_midnight(value: dt.date) -> datetime:
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


class ReservationRepository(BaseRepository):
    collection_name = RESERVATIONS

    def create(self, payload: ReservationCreate) -> dict[str, Any]:
        doc = payload.model_dump(
            by_alias=True,
            exclude={"guests", "custom_guests", "date"},
            exclude_none=True,
        )
        doc.update({
            "date": as_utc_midnight(payload.date),
            "guests": payload.guest_count,
            "status": ReservationStatus.PENDING.value,
            "createdAt": utcnow(),
        })
        self.collection.insert_one(doc)
        logger.info(
            f"Reservation {doc['_id']} created for {payload.name} "
            f"on {payload.date.isoformat()} {payload.time} ({doc['guests']} guests)"
        )
        return serialize(doc)

    def paginate(
        self,
        page: int = 1,
        limit: int = 10,
        search: Optional[str] = None,
        status: Optional[ReservationStatus] = None,
    ) -> dict[str, Any]:
        """Most recent booking date first; envelope {data, total, page, limit, totalPages}."""
        query: dict[str, Any] = {}
        if search and search.strip():
            pattern = regex_filter(search.strip())
            query["$or"] = [{field: pattern} for field in SEARCH_FIELDS]
        if status:
            query["status"] = ReservationStatus(status).value

        total = self.collection.count_documents(query)
        cursor = (
            self.collection.find(query)
            .sort([("date", DESCENDING), ("time", DESCENDING)])
            .skip(page_skip(page, limit))
            .limit(limit)
        )
        return {
            "data": [serialize(doc) for doc in cursor],
            "total": total,
            "page": page,
            "limit": limit,
            "totalPages": total_pages(total, limit),
        }

    def get(self, reservation_id: str) -> dict[str, Any]:
        doc = self.collection.find_one({"_id": object_id(reservation_id)})
        if not doc:
            raise NotFoundError("Reservation", reservation_id)
        return serialize(doc)

    def update(
        self,
        reservation_id: str,
        payload: ReservationUpdate,
    ) -> dict[str, Any]:
        oid = object_id(reservation_id)
        changes = payload.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
        if not changes:
            return self.get(reservation_id)
        if "date" in changes:
            changes["date"] = as_utc_midnight(changes["date"])
        if "status" in changes:
            changes["status"] = ReservationStatus(changes["status"]).value

        updated = self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if not updated:
            raise NotFoundError("Reservation", reservation_id)

        if "status" in changes:
            logger.info(f"Reservation {reservation_id} marked {changes['status']}")
        return serialize(updated)
