"""Object storage for uploaded media (S3 or any S3-compatible bucket)."""

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from src.config import Settings, get_settings
from src.errors import StorageError

logger = logging.getLogger(__name__)


class StorageService:
    """Thin wrapper over a boto3 S3 client bound to one bucket."""

    def __init__(self, settings: Settings | None = None, client=None) -> None:
        self.settings = settings or get_settings()
        self._client = client

    @property
    def bucket(self) -> str:
        return self.settings.aws_bucket_name

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client(
                "s3",
                aws_access_key_id=self.settings.aws_access_key_id,
                aws_secret_access_key=self.settings.aws_secret_access_key,
                region_name=self.settings.aws_region,
            )
        return self._client

    def public_url(self, key: str) -> str:
        """URL under which an uploaded object is served."""
        if self.settings.storage_public_url:
            return f"{self.settings.storage_public_url.rstrip('/')}/{key}"
        return f"https://{self.bucket}.s3.{self.settings.aws_region}.amazonaws.com/{key}"

    def upload(self, key: str, data: bytes, content_type: str) -> str:
        """Store ``data`` under ``key`` with public read access and return its URL."""
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                ACL="public-read",
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Upload of {key} to bucket {self.bucket} failed: {e}")
            raise StorageError("File could not be stored") from e

        logger.info(f"Uploaded {key} ({len(data)} bytes)")
        return self.public_url(key)

    def delete(self, key: str) -> None:
        """Remove an object. Deleting a missing key is not an error in S3."""
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Delete of {key} from bucket {self.bucket} failed: {e}")
            raise StorageError("File could not be removed from storage") from e

        logger.info(f"Deleted {key}")
