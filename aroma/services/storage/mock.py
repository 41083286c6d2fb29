"""
Mock Storage Service

Keeps uploaded images in memory for development and tests.
"""

import logging
import uuid
from pathlib import PurePath
from typing import Optional

from aroma.core.config import get_settings
from aroma.services.storage.base import BaseStorageService, StoredImage

logger = logging.getLogger(__name__)


class MockStorageService(BaseStorageService):
    """In-memory storage; URLs point at a fake CDN host."""

    def __init__(self, base_url: str = "https://mock-cdn.local"):
        self.base_url = base_url.rstrip("/")
        self.objects: dict[str, bytes] = {}
        logger.info("MockStorageService initialized")

    @property
    def provider_name(self) -> str:
        return "mock"

    async def upload(
        self,
        content: bytes,
        filename: str,
        folder: Optional[str] = None,
    ) -> StoredImage:
        folder = folder or get_settings().cloudinary_folder
        stem = PurePath(filename).stem or "image"
        public_id = f"{folder}/{stem}_{uuid.uuid4().hex[:8]}"
        self.objects[public_id] = content
        logger.info(f"Mock upload stored {public_id} ({len(content)} bytes)")
        return StoredImage(public_id=public_id, url=self.url_for(public_id), bytes=len(content))

    async def delete(self, public_id: str) -> bool:
        existed = self.objects.pop(public_id, None) is not None
        logger.info(f"Mock delete {public_id} (existed={existed})")
        return existed

    def url_for(self, public_id: str) -> str:
        return f"{self.base_url}/{public_id}"

    async def health_check(self) -> bool:
        """Mock always returns healthy."""
        return True
