"""
Abstract base class for storage backends
Defines the blob store interface used for uploaded assets (local, S3, etc.)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional
from uuid import UUID, uuid4


@dataclass
class UploadTarget:
    """Single-use capability for one direct upload"""
    upload_url: str
    storage_id: str
    expires_in: int
    method: str = "PUT"


class StorageBackend(ABC):
    """Abstract base class for asset storage backends"""

    def new_storage_id(self) -> str:
        """Allocate a fresh opaque asset reference"""
        return uuid4().hex

    @abstractmethod
    def generate_upload_target(self, user_id: UUID, expires_in: int = 3600) -> UploadTarget:
        """
        Issue a capability the client uses to upload one file directly

        Args:
            user_id: Caller requesting the upload (recorded for auditing only)
            expires_in: Capability lifetime in seconds

        Returns:
            UploadTarget: URL, method and the storage id the file will live under
        """
        pass

    @abstractmethod
    def save(
        self,
        storage_id: str,
        content: bytes,
        content_type: Optional[str] = None,
        exclusive: bool = False
    ) -> str:
        """
        Store content under a storage id

        Args:
            storage_id: Asset reference
            content: File bytes
            content_type: Caller-reported MIME type (not verified)
            exclusive: Refuse to replace an existing asset

        Returns:
            str: The storage id

        Raises:
            FileExistsError: exclusive and the asset already exists
        """
        pass

    @abstractmethod
    def get_url(self, storage_id: str, expires_in: int = 3600) -> Optional[str]:
        """
        Resolve an asset reference to a fetchable URL

        Returns:
            Optional[str]: URL, or None when the asset does not exist
        """
        pass

    @abstractmethod
    def exists(self, storage_id: str) -> bool:
        """Check if an asset exists"""
        pass

