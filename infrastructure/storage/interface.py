"""
Storage Interface
=================

Where product photos live. Products store only the public URLs, so every
backend must be able to map a URL it produced back to its key.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Optional


class StorageException(Exception):
    """Upload or delete failed in the backend."""


@dataclass(frozen=True)
class StorageFile:
    """Result of an upload: the key inside the backend and its public URL."""

    key: str
    url: str
    size: int
    content_type: str
    bucket: Optional[str] = None


class StorageInterface(ABC):
    """Implemented by S3StorageAdapter (S3 / MinIO) and LocalStorageAdapter (MEDIA_ROOT)."""

    @abstractmethod
    def upload(self, file: BinaryIO, path: str, content_type: str) -> StorageFile:
        """Store ``file`` at ``path``; raises StorageException on failure."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """False when there was nothing to delete."""

    @abstractmethod
    def get_url(self, key: str) -> str:
        ...

    @abstractmethod
    def exists(self, key: str) -> bool:
        ...

    @property
    @abstractmethod
    def bucket_name(self) -> str:
        ...

    def key_from_url(self, url: str) -> Optional[str]:
        """Key for a URL this backend produced, None for anything else."""
        base = self.get_url("")
        if not base or not url or not url.startswith(base):
            return None
        return url[len(base):] or None
