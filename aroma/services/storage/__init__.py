"""
Storage Service Factory

Provides a single entry point for obtaining an image storage instance.
Automatically selects Mock or Cloudinary based on ENV_MODE configuration.

Usage:
    from aroma.services.storage import get_storage_service

    storage = get_storage_service()
    stored = await storage.upload(content, "hummus.jpg")
"""

import logging
from functools import lru_cache

from aroma.core.config import get_settings
from aroma.core.errors import UpstreamFailure
from aroma.services.storage.base import (
    ALLOWED_CONTENT_TYPES,
    MAX_UPLOAD_BYTES,
    BaseStorageService,
    StoredImage,
)
from aroma.services.storage.cloudinary import CloudinaryStorageService
from aroma.services.storage.mock import MockStorageService

logger = logging.getLogger(__name__)


@lru_cache()
def get_storage_service() -> BaseStorageService:
    """Get the configured storage service instance."""
    settings = get_settings()

    if settings.is_development:
        logger.info("Storage Service: Using MockStorageService (development mode)")
        return MockStorageService()
    else:
        logger.info(
            f"Storage Service: Using CloudinaryStorageService "
            f"({settings.env_mode.value} mode)"
        )
        return CloudinaryStorageService()


def reset_storage_service() -> None:
    """
    Clear the cached storage service instance.

    Useful for testing or when configuration changes at runtime.
    """
    get_storage_service.cache_clear()
    logger.debug("Storage service cache cleared")


async def discard_stored_image(storage: BaseStorageService, public_id: str) -> None:
    """
    Delete a stored object that is no longer referenced.

    Runs after the owning document was already changed, so a failure is
    logged and dropped.
    """
    try:
        await storage.delete(public_id)
    except UpstreamFailure as e:
        logger.warning(f"Could not delete stored image {public_id}: {e.message}")


__all__ = [
    "get_storage_service",
    "reset_storage_service",
    "discard_stored_image",
    "BaseStorageService",
    "StoredImage",
    "MockStorageService",
    "CloudinaryStorageService",
    "ALLOWED_CONTENT_TYPES",
    "MAX_UPLOAD_BYTES",
]
