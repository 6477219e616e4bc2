"""
Local Storage Adapter
=====================

StorageInterface implementation on MEDIA_ROOT, for development and tests.
"""

import logging
from typing import BinaryIO

from django.core.files.storage import FileSystemStorage

from .interface import StorageException, StorageFile, StorageInterface

logger = logging.getLogger(__name__)


class LocalStorageAdapter(StorageInterface):
    def __init__(self, location=None, base_url=None):
        self.storage = FileSystemStorage(location=location, base_url=base_url)

    def upload(self, file: BinaryIO, path: str, content_type: str) -> StorageFile:
        try:
            saved_path = self.storage.save(path, file)
        except OSError as e:
            logger.error(f"Local storage upload failed for {path}: {e}")
            raise StorageException(f"Local upload failed: {e}") from e

        logger.info(f"Local storage: saved {saved_path}")
        return StorageFile(
            key=saved_path,
            url=self.storage.url(saved_path),
            size=self.storage.size(saved_path),
            content_type=content_type,
            bucket=self.bucket_name,
        )

    def delete(self, key: str) -> bool:
        if not self.storage.exists(key):
            return False
        self.storage.delete(key)
        return True

    def get_url(self, key: str) -> str:
        return self.storage.url(key)

    def exists(self, key: str) -> bool:
        return self.storage.exists(key)

    @property
    def bucket_name(self) -> str:
        return "local"
