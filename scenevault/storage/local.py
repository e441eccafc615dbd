"""
Local file storage
Implements StorageBackend for the local filesystem, with signed upload URLs
served by the API itself
"""

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Optional
from uuid import UUID

from scenevault.config import settings
from scenevault.core.security import create_upload_token
from scenevault.storage.base import StorageBackend, UploadTarget

logger = logging.getLogger(__name__)

# Storage ids are generated as uuid4 hex; anything else could escape base_path
STORAGE_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


class LocalStorage(StorageBackend):
    """Local asset storage under <base_path>/assets"""

    def __init__(self, base_path: str = settings.UPLOAD_DIR, public_base_url: str = settings.PUBLIC_BASE_URL):
        self.base_path = Path(base_path)
        self.assets_path = self.base_path / "assets"
        self.assets_path.mkdir(parents=True, exist_ok=True)
        self.public_base_url = public_base_url.rstrip("/")

    def _get_asset_path(self, storage_id: str) -> Path:
        """Map a storage id to its file, rejecting anything that is not a generated id"""
        if not STORAGE_ID_PATTERN.match(storage_id):
            raise PermissionError(f"Invalid storage id: {storage_id}")
        return self.assets_path / storage_id

    def generate_upload_target(self, user_id: UUID, expires_in: int = 3600) -> UploadTarget:
        """Issue a signed upload URL pointing at PUT /api/v1/storage/uploads/{token}"""
        storage_id = self.new_storage_id()
        token = create_upload_token(storage_id, expires_in)
        logger.info(f"Issued local upload target {storage_id} for user {user_id}")

        return UploadTarget(
            upload_url=f"{self.public_base_url}/api/v1/storage/uploads/{token}",
            storage_id=storage_id,
            expires_in=expires_in,
        )

    def save(
        self,
        storage_id: str,
        content: bytes,
        content_type: Optional[str] = None,
        exclusive: bool = False
    ) -> str:
        """
        Write to a temp file, then move it into place

        Readers never see a partial asset. With exclusive=True the final
        step is a hard link, which fails if the asset already exists.
        """
        file_path = self._get_asset_path(storage_id)
        fd, tmp_path = tempfile.mkstemp(dir=self.assets_path, prefix=".upload-")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)
            if exclusive:
                os.link(tmp_path, file_path)
            else:
                os.replace(tmp_path, file_path)
        finally:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)

        logger.info(f"Stored asset {storage_id} ({len(content)} bytes, {content_type or 'unknown type'})")
        return storage_id

    def get_url(self, storage_id: str, expires_in: int = 3600) -> Optional[str]:
        """
        Get asset URL (served by GET /api/v1/storage/files/{storage_id})
        Note: expires_in is ignored, local URLs do not expire
        """
        if not self.exists(storage_id):
            return None
        return f"{self.public_base_url}/api/v1/storage/files/{storage_id}"

    def exists(self, storage_id: str) -> bool:
        try:
            return self._get_asset_path(storage_id).exists()
        except PermissionError:
            return False

    def get_local_path(self, storage_id: str) -> str:
        """Absolute filesystem path of an existing asset"""
        file_path = self._get_asset_path(storage_id)
        if not file_path.exists():
            raise FileNotFoundError(f"Asset not found: {storage_id}")
        return str(file_path.resolve())
