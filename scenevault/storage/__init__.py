"""
Asset storage system
Supports both local filesystem and S3-compatible storage
"""

from scenevault.storage.base import StorageBackend, UploadTarget
from scenevault.storage.local import LocalStorage
from scenevault.storage.s3 import S3Storage
from scenevault.storage.factory import get_storage_backend, get_storage

__all__ = [
    "StorageBackend",
    "UploadTarget",
    "LocalStorage",
    "S3Storage",
    "get_storage_backend",
    "get_storage"
]
