"""
Cloudinary Storage Service

Production implementation of image storage using the Cloudinary SDK.
The SDK is synchronous, so calls are pushed to a worker thread.
"""

import asyncio
import logging
from typing import Optional

import cloudinary
import cloudinary.api
import cloudinary.uploader
import cloudinary.utils
from cloudinary.exceptions import Error as CloudinaryError

from aroma.core.config import get_settings
from aroma.core.errors import UpstreamFailure
from aroma.services.storage.base import BaseStorageService, StoredImage

logger = logging.getLogger(__name__)


class CloudinaryStorageService(BaseStorageService):
    """Image storage backed by Cloudinary."""

    def __init__(self):
        settings = get_settings()
        self.folder = settings.cloudinary_folder
        self.configured = bool(
            settings.cloudinary_cloud_name
            and settings.cloudinary_api_key
            and settings.cloudinary_api_secret
        )
        if self.configured:
            cloudinary.config(
                cloud_name=settings.cloudinary_cloud_name,
                api_key=settings.cloudinary_api_key,
                api_secret=settings.cloudinary_api_secret,
                secure=True,
            )
        else:
            logger.warning("Cloudinary credentials not configured")

        logger.info("CloudinaryStorageService initialized")

    @property
    def provider_name(self) -> str:
        return "cloudinary"

    def _require_config(self) -> None:
        if not self.configured:
            raise UpstreamFailure(self.provider_name, "Cloudinary not configured")

    async def upload(
        self,
        content: bytes,
        filename: str,
        folder: Optional[str] = None,
    ) -> StoredImage:
        self._require_config()
        try:
            result = await asyncio.to_thread(
                cloudinary.uploader.upload,
                content,
                folder=folder or self.folder,
                resource_type="image",
                use_filename=True,
                unique_filename=True,
                filename_override=filename,
            )
        except CloudinaryError as e:
            logger.error(f"Cloudinary upload failed for {filename}: {e}")
            raise UpstreamFailure(self.provider_name, str(e))

        logger.info(f"Uploaded {filename} to Cloudinary as {result['public_id']}")
        return StoredImage(
            public_id=result["public_id"],
            url=result["secure_url"],
            width=result.get("width"),
            height=result.get("height"),
            bytes=result.get("bytes"),
        )

    async def delete(self, public_id: str) -> bool:
        self._require_config()
        try:
            result = await asyncio.to_thread(
                cloudinary.uploader.destroy, public_id, resource_type="image"
            )
        except CloudinaryError as e:
            logger.error(f"Cloudinary delete failed for {public_id}: {e}")
            raise UpstreamFailure(self.provider_name, str(e))

        outcome = result.get("result")
        if outcome not in ("ok", "not found"):
            raise UpstreamFailure(self.provider_name, f"Unexpected destroy result: {outcome}")
        logger.info(f"Cloudinary delete {public_id}: {outcome}")
        return outcome == "ok"

    def url_for(self, public_id: str) -> str:
        url, _ = cloudinary.utils.cloudinary_url(public_id, secure=True)
        return url

    async def health_check(self) -> bool:
        if not self.configured:
            return False
        try:
            await asyncio.to_thread(cloudinary.api.ping)
            return True
        except CloudinaryError as e:
            logger.error(f"Cloudinary health check failed: {e}")
            return False
