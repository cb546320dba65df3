"""
S3 image storage built on boto3.
"""

from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from gdoc_extractor.config import Settings
from gdoc_extractor.storage.base import BlobStore
from gdoc_extractor.utils.errors import MissingConfigurationError, StorageUploadError
from gdoc_extractor.utils.logging import get_logger

logger = get_logger(__name__)


class S3BlobStore(BlobStore):
    """Write images to S3 through a single reusable client."""

    def __init__(self, client: Any) -> None:
        """
        Initialize the store.

        Args:
            client: boto3 S3 client
        """
        self.client = client
        self._closed = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3BlobStore":
        """
        Create a store from explicit AWS credentials.

        Raises:
            MissingConfigurationError: If credentials or bucket are not configured
        """
        if not settings.aws_access_key_id:
            raise MissingConfigurationError("AWS_ACCESS_KEY_ID")
        if not settings.aws_secret_access_key:
            raise MissingConfigurationError("AWS_SECRET_ACCESS_KEY")
        if not settings.s3_bucket_name:
            raise MissingConfigurationError("S3_BUCKET_NAME")

        client = boto3.client(
            "s3",
            region_name=settings.aws_region,
            aws_access_key_id=settings.aws_access_key_id,
            aws_secret_access_key=settings.aws_secret_access_key,
        )
        logger.info(f"S3 client initialized for region {settings.aws_region}")
        return cls(client)

    def put(self, bucket: str, key: str, data: bytes, content_type: str) -> None:
        try:
            self.client.put_object(
                Bucket=bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageUploadError(bucket, key, str(e)) from e

        logger.debug(f"Uploaded s3://{bucket}/{key} ({len(data)} bytes)")

    def close(self) -> None:
        if self._closed:
            return
        self.client.close()
        self._closed = True
        logger.debug("S3 client closed")


def create_blob_store(settings: Settings) -> Optional[S3BlobStore]:
    """Create the S3 store, or return None when uploads are not configured."""
    if not settings.storage_enabled:
        logger.info("AWS credentials not found. S3 upload functionality is disabled.")
        return None
    return S3BlobStore.from_settings(settings)
