"""
Shared repository helpers: id conversion, document serialization,
timestamps and pagination math.
"""

import math
import re
from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.collection import Collection
from pymongo.database import Database

from aroma.core.errors import InvalidIdError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def object_id(id_str: str, field: str = "id") -> ObjectId:
    try:
        return ObjectId(id_str)
    except (InvalidId, TypeError):
        raise InvalidIdError(field)


def is_object_id(value: Optional[str]) -> bool:
    return bool(value) and ObjectId.is_valid(value)


def serialize(value: Any) -> Any:
    """
    Recursively turn a stored document into JSON-friendly data:
    `_id` becomes a string `id`, nested ObjectIds become strings.
    """
    if isinstance(value, dict):
        out = {}
        for key, item in value.items():
            if key == "_id":
                out["id"] = str(item) if item is not None else None
            else:
                out[key] = serialize(item)
        return out
    if isinstance(value, list):
        return [serialize(v) for v in value]
    if isinstance(value, ObjectId):
        return str(value)
    return value


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def page_skip(page: int, limit: int) -> int:
    return (page - 1) * limit


def regex_filter(term: str) -> dict[str, str]:
    """Case-insensitive match; the term is taken literally."""
    return {"$regex": re.escape(term), "$options": "i"}


class BaseRepository:
    """Wraps a single collection."""

    collection_name: str = ""

    def __init__(self, db: Database):
        self.db = db

    @property
    def collection(self) -> Collection:
        return self.db[self.collection_name]
