"""
S3 client for media bucket operations.

Uploads admin media files and builds their public URLs. The bucket is
created on first use when it does not exist yet.

Dependencies: boto3
System role: Object storage adapter for media uploads
"""

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

_MISSING_BUCKET_CODES = {"404", "NoSuchBucket", "NotFound"}


class S3MediaClient:
    """S3 client for the public media bucket (blocking boto3 calls)."""

    def __init__(
        self,
        bucket: str,
        region: str = "eu-central-1",
        endpoint_url: str | None = None,
        public_base_url: str | None = None,
        cache_control: str = "3600",
    ) -> None:
        """
        Initialize S3 client for the media bucket.

        Args:
            bucket: Bucket name for media storage
            region: AWS region of the bucket
            endpoint_url: Custom S3-compatible endpoint, None for AWS
            public_base_url: Base URL for public links; derived when None
            cache_control: Cache-Control max-age applied to uploads
        """
        self._bucket = bucket
        self._region = region
        self._endpoint_url = endpoint_url
        self._public_base_url = public_base_url
        self._cache_control = cache_control
        self._bucket_ready = False
        self._s3_client = boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def ensure_bucket(self) -> None:
        """
        Create the bucket when it does not exist yet.

        The check runs once per client; later calls are no-ops.

        Raises:
            ClientError: If the bucket cannot be inspected or created
        """
        if self._bucket_ready:
            return
        try:
            self._s3_client.head_bucket(Bucket=self._bucket)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            if code not in _MISSING_BUCKET_CODES:
                raise
            logger.info(
                f"{__name__}:ensure_bucket - Creating missing bucket",
                extra={"bucket": self._bucket},
            )
            create_args: dict = {"Bucket": self._bucket}
            if self._region != "us-east-1" and self._endpoint_url is None:
                create_args["CreateBucketConfiguration"] = {
                    "LocationConstraint": self._region
                }
            self._s3_client.create_bucket(**create_args)
        self._bucket_ready = True

    def upload(self, key: str, content: bytes, content_type: str) -> str:
        """
        Upload bytes under the given key.

        Args:
            key: Object key inside the bucket
            content: File content
            content_type: MIME type

        Returns:
            str: Public URL of the uploaded object

        Raises:
            ClientError / BotoCoreError: If the upload fails
        """
        self.ensure_bucket()
        self._s3_client.put_object(
            Bucket=self._bucket,
            Key=key,
            Body=content,
            ContentType=content_type,
            CacheControl=f"max-age={self._cache_control}",
        )
        return self.public_url(key)

    def public_url(self, key: str) -> str:
        """
        Build the public URL for an object key.

        Args:
            key: Object key inside the bucket

        Returns:
            str: Public URL
        """
        if self._public_base_url:
            return f"{self._public_base_url.rstrip('/')}/{key}"
        if self._endpoint_url:
            return f"{self._endpoint_url.rstrip('/')}/{self._bucket}/{key}"
        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{key}"


# Errors a caller should treat as a failed storage call.
STORAGE_ERRORS = (ClientError, BotoCoreError)
