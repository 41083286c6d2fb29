"""
Image Storage Service Abstract Base Class

Defines the interface contract for object storage of uploaded images.
Both MockStorageService and CloudinaryStorageService implement it.

Use Cases:
    - Admin image uploads (menu items, gallery, hero banners)
    - Deleting the stored object when a StaticImage is removed or replaced
    - Building public URLs from a stored public id
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

ALLOWED_CONTENT_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")
MAX_UPLOAD_BYTES = 5 * 1024 * 1024


@dataclass
class StoredImage:
    """
    An object held by the storage provider.

    Attributes:
        public_id: Provider id used for later deletion / URL building
        url: Public (https) URL of the image
        width: Pixel width when the provider reports it
        height: Pixel height when the provider reports it
        bytes: Stored size
    """
    public_id: str
    url: str
    width: Optional[int] = None
    height: Optional[int] = None
    bytes: Optional[int] = None


class BaseStorageService(ABC):
    """Abstract base class for image storage."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    async def upload(
        self,
        content: bytes,
        filename: str,
        folder: Optional[str] = None,
    ) -> StoredImage:
        """
        Store an image.

        Raises:
            UpstreamFailure: the provider rejected or failed the upload
        """
        pass

    @abstractmethod
    async def delete(self, public_id: str) -> bool:
        """
        Remove a stored image.

        Returns:
            True when an object was deleted, False when it did not exist

        Raises:
            UpstreamFailure: the provider call failed
        """
        pass

    @abstractmethod
    def url_for(self, public_id: str) -> str:
        """Public URL for a stored public id."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check service connectivity."""
        pass
