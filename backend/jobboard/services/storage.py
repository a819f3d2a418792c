"""Object storage for uploaded profile pictures and logos using an S3-compatible API."""

import logging
import uuid
from functools import lru_cache

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from jobboard.config import get_settings
from jobboard.services.errors import StorageError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

KEY_PREFIX = "pictures"


class UploadStorage:
    """Stores image bytes in a bucket and returns their public URL."""

    def __init__(self, client, bucket: str, public_base_url: str, max_bytes: int):
        self.client = client
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")
        self.max_bytes = max_bytes

    def save_image(self, content: bytes, content_type: str | None) -> str:
        content_type = (content_type or "").lower()
        extension = ALLOWED_IMAGE_TYPES.get(content_type)
        if not extension:
            raise ValidationError("File must be a JPEG, PNG, GIF or WebP image")
        if not content:
            raise ValidationError("File is empty")
        if len(content) > self.max_bytes:
            raise ValidationError(
                f"File too large. Maximum size is {self.max_bytes // 1024}KB."
            )

        key = f"{KEY_PREFIX}/{uuid.uuid4().hex}{extension}"
        try:
            self.client.put_object(
                Bucket=self.bucket, Key=key, Body=content, ContentType=content_type
            )
        except (BotoCoreError, ClientError) as e:
            logger.exception("Failed to store upload %s in bucket %s", key, self.bucket)
            raise StorageError("Unable to store the uploaded file") from e

        logger.info("Stored upload %s (%d bytes)", key, len(content))
        return f"{self.public_base_url}/{key}"


@lru_cache
def get_s3_client():
    """Get S3 client."""
    settings = get_settings()
    return boto3.client(
        "s3",
        endpoint_url=settings.s3_endpoint_url or None,
        aws_access_key_id=settings.s3_access_key or None,
        aws_secret_access_key=settings.s3_secret_key or None,
        region_name=settings.s3_region,
    )


def get_upload_storage() -> UploadStorage:
    settings = get_settings()
    return UploadStorage(
        get_s3_client(),
        bucket=settings.s3_bucket,
        public_base_url=settings.upload_public_base_url,
        max_bytes=settings.max_upload_bytes,
    )
