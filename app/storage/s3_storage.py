import logging
from typing import Any
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from app.errors import StorageError

from .photo_storage import PhotoStorage

logger = logging.getLogger(__name__)


class S3Storage(PhotoStorage):
    """
    Photo storage using Amazon S3 (or any S3-compatible endpoint) via boto3.
    """

    def __init__(
        self,
        bucket: str | None,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        client: Any = None,
        aws_access_key_id: str | None = None,
        aws_secret_access_key: str | None = None,
    ) -> None:
        if not bucket:
            error_message = "AWS_BUCKET_NAME is not set"
            raise ValueError(error_message)
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        self.client = client or boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
            region_name=region,
        )

    def location_for(self, key: str) -> str:
        quoted = quote(key)
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{quoted}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{quoted}"

    def put_object(self, key: str, data: bytes, content_type: str | None) -> str:
        params: dict[str, Any] = {"Bucket": self.bucket, "Key": key, "Body": data}
        if content_type:
            params["ContentType"] = content_type
        try:
            self.client.put_object(**params)
        except (BotoCoreError, ClientError) as exc:
            logger.exception("S3 upload of %s to %s failed", key, self.bucket)
            error_message = "Error uploading to S3"
            raise StorageError(error_message) from exc
        return self.location_for(key)

    def delete_object(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            logger.exception("S3 delete of %s from %s failed", key, self.bucket)
            error_message = "S3 delete failed"
            raise StorageError(error_message) from exc
