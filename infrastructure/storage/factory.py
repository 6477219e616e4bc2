import logging
from typing import Dict, Optional, Type

from django.conf import settings

from .interface import StorageInterface
from .local_adapter import LocalStorageAdapter
from .s3_adapter import S3StorageAdapter

logger = logging.getLogger(__name__)


class StorageFactory:
    """Builds the storage named by ``INFRASTRUCTURE["STORAGE_BACKEND"]``."""

    backends: Dict[str, Type[StorageInterface]] = {
        "s3": S3StorageAdapter,
        "local": LocalStorageAdapter,
    }

    @classmethod
    def create(cls, backend: Optional[str] = None) -> StorageInterface:
        backend = backend or settings.INFRASTRUCTURE.get("STORAGE_BACKEND", "s3")
        try:
            adapter_class = cls.backends[backend]
        except KeyError:
            raise ValueError(f"Invalid storage backend '{backend}', expected one of {sorted(cls.backends)}") from None
        logger.info(f"Using {adapter_class.__name__} for product images")
        return adapter_class()
