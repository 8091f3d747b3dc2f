"""
Media service orchestrator.

Uploads admin media to object storage under a unique key and returns its
public URL. boto3 calls run in a worker thread.

Dependencies: coaching_backend.boundary.aws
System role: Media upload use case
"""

import asyncio
import logging
import re
import uuid
from datetime import datetime, timezone

from coaching_backend.boundary.aws import STORAGE_ERRORS, S3MediaClient
from coaching_backend.core.exceptions import StorageError, ValidationError
from coaching_backend.models.common import success_notice
from coaching_backend.models.media import MediaUploadResponse, PublicUrlResponse

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def build_object_key(filename: str, folder: str = "uploads") -> str:
    """
    Build a unique, URL-safe object key for an upload.

    Args:
        filename: Original file name
        folder: Top-level folder in the bucket

    Returns:
        str: e.g. "uploads/2026/10/3f2a...-team-photo.png"
    """
    name = _UNSAFE_CHARS.sub("-", filename.rsplit("/", 1)[-1]).strip("-.") or "file"
    now = datetime.now(timezone.utc)
    return f"{folder}/{now:%Y/%m}/{uuid.uuid4().hex}-{name.lower()}"


class MediaService:
    """Media service orchestrator."""

    def __init__(self, storage: S3MediaClient) -> None:
        """
        Initialize media service.

        Args:
            storage: Media bucket client
        """
        self.storage = storage

    async def upload(
        self,
        filename: str,
        content: bytes,
        content_type: str | None,
    ) -> MediaUploadResponse:
        """
        Upload a file, creating the bucket on first use.

        Args:
            filename: Original file name
            content: File bytes
            content_type: MIME type reported by the client

        Returns:
            MediaUploadResponse with path and public URL

        Raises:
            ValidationError: Empty or oversized file
            StorageError: Storage call failed
        """
        if not content:
            raise ValidationError("File is empty", field="file")
        if len(content) > MAX_UPLOAD_BYTES:
            raise ValidationError(
                f"File exceeds {MAX_UPLOAD_BYTES // (1024 * 1024)} MB limit",
                field="file",
            )
        content_type = content_type or "application/octet-stream"
        key = build_object_key(filename)

        try:
            public_url = await asyncio.to_thread(self.storage.upload, key, content, content_type)
        except STORAGE_ERRORS as e:
            logger.error(
                f"{__name__}:upload - Upload failed",
                extra={"key": key, "bucket": self.storage.bucket, "error": str(e)},
            )
            raise StorageError("File could not be uploaded", operation="upload") from e

        logger.info(
            f"{__name__}:upload - File uploaded",
            extra={"key": key, "size": len(content), "content_type": content_type},
        )
        return MediaUploadResponse(
            path=key,
            public_url=public_url,
            content_type=content_type,
            size=len(content),
            notice=success_notice("File uploaded", f"{filename} has been uploaded."),
        )

    def get_public_url(self, path: str) -> PublicUrlResponse:
        return PublicUrlResponse(path=path, public_url=self.storage.public_url(path))
