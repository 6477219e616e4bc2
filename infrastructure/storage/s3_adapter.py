"""
S3 Storage Adapter
==================

Product photos in S3 (or MinIO through AWS_S3_ENDPOINT_URL) via django-storages.
Objects are public-read through the bucket policy or AWS_S3_CUSTOM_DOMAIN, so
AWS_DEFAULT_ACL stays unset and URLs are unsigned.
"""

import logging
from typing import BinaryIO

from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings
from storages.backends.s3boto3 import S3Boto3Storage

from .interface import StorageException, StorageFile, StorageInterface

logger = logging.getLogger(__name__)

S3_ERRORS = (BotoCoreError, ClientError)


class S3StorageAdapter(StorageInterface):
    def __init__(self, bucket_name: str = None):
        self._bucket_name = bucket_name or settings.AWS_STORAGE_BUCKET_NAME
        self.storage = S3Boto3Storage(bucket_name=self._bucket_name, file_overwrite=False)

    def upload(self, file: BinaryIO, path: str, content_type: str) -> StorageFile:
        # S3Boto3Storage reads ContentType from the file object
        file.content_type = content_type
        try:
            key = self.storage.save(path, file)
            stored = StorageFile(
                key=key,
                url=self.storage.url(key),
                size=self.storage.size(key),
                content_type=content_type,
                bucket=self._bucket_name,
            )
        except S3_ERRORS as e:
            logger.error(f"S3 upload of {path} to {self._bucket_name} failed: {e}")
            raise StorageException(f"S3 upload failed: {e}") from e

        logger.info(f"S3: stored {key} ({stored.size} bytes)")
        return stored

    def delete(self, key: str) -> bool:
        try:
            if not self.storage.exists(key):
                logger.warning(f"S3: {key} not found, nothing to delete")
                return False
            self.storage.delete(key)
        except S3_ERRORS as e:
            logger.error(f"S3 delete of {key} failed: {e}")
            raise StorageException(f"S3 delete failed: {e}") from e
        logger.info(f"S3: deleted {key}")
        return True

    def get_url(self, key: str) -> str:
        return self.storage.url(key)

    def exists(self, key: str) -> bool:
        try:
            return self.storage.exists(key)
        except S3_ERRORS as e:
            logger.error(f"S3 exists check for {key} failed: {e}")
            return False

    @property
    def bucket_name(self) -> str:
        return self._bucket_name
