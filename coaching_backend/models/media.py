"""
Media upload schemas.

Dependencies: pydantic
System role: Media API contracts
"""

from pydantic import BaseModel

from coaching_backend.models.common import Notice


class MediaUploadResponse(BaseModel):
    """Stored object location."""

    path: str
    public_url: str
    content_type: str
    size: int
    notice: Notice


class PublicUrlResponse(BaseModel):
    path: str
    public_url: str
