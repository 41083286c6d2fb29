"""
Database Connection Module
Handles the MongoDB connection using pymongo.

Collections (one per entity):
    - menu_sections
    - testimonials
    - restaurant_stories
    - menu_card_copies
    - static_images
    - settings
    - reservations
    - admin_sessions
"""

import logging
from typing import Optional

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database

from aroma.core.config import get_settings

logger = logging.getLogger(__name__)

MENU_SECTIONS = "menu_sections"
TESTIMONIALS = "testimonials"
RESTAURANT_STORIES = "restaurant_stories"
MENU_CARD_COPIES = "menu_card_copies"
STATIC_IMAGES = "static_images"
SETTINGS = "settings"
RESERVATIONS = "reservations"
ADMIN_SESSIONS = "admin_sessions"

_client: Optional[MongoClient] = None


def get_client() -> MongoClient:
    global _client
    if _client is None:
        settings = get_settings()
        _client = MongoClient(settings.mongodb_url, tz_aware=True)
    return _client


def get_db() -> Database:
    """
    Dependency injection for FastAPI routes.
    Returns the application database handle (pymongo pools connections itself).
    """
    return get_client()[get_settings().database_name]


def deactivate_extra_actives(db: Database, collection_name: str) -> int:
    """
    Leave only the most recently updated active document active.

    Data written before the single-active index existed can hold several
    active documents, which would make the unique index build fail.

    Returns:
        number of documents deactivated
    """
    collection = db[collection_name]
    active = list(
        collection.find({"isActive": True}, {"_id": 1})
        .sort([("updatedAt", DESCENDING), ("_id", DESCENDING)])
    )
    stale = [doc["_id"] for doc in active[1:]]
    if not stale:
        return 0

    collection.update_many({"_id": {"$in": stale}}, {"$set": {"isActive": False}})
    logger.warning(
        f"⚠️ {collection_name}: {len(stale)} extra active document(s) deactivated, "
        f"keeping {active[0]['_id']}"
    )
    return len(stale)


def init_db(db: Database) -> None:
    """
    Create indexes.
    Called once at application startup.
    """
    db[STATIC_IMAGES].create_index("name", unique=True)
    db[STATIC_IMAGES].create_index([("category", ASCENDING), ("isActive", ASCENDING)])
    db[MENU_SECTIONS].create_index("subsections.items._id")
    db[TESTIMONIALS].create_index([("isActive", ASCENDING), ("createdAt", DESCENDING)])
    db[RESERVATIONS].create_index([("date", DESCENDING), ("time", DESCENDING)])
    db[ADMIN_SESSIONS].create_index("token", unique=True)
    db[ADMIN_SESSIONS].create_index("expiresAt", expireAfterSeconds=0)

    # At most one active document per singleton collection
    for name in (RESTAURANT_STORIES, MENU_CARD_COPIES):
        deactivate_extra_actives(db, name)
        db[name].create_index(
            "isActive",
            unique=True,
            partialFilterExpression={"isActive": True},
            name="single_active",
        )

    logger.info("✅ Database indexes ensured")


def close_db() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None
