"""
Media storage configuration.

Settings for the media bucket used by admin uploads.

Dependencies: pydantic_settings
System role: Object storage configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Settings for media bucket operations."""

    model_config = SettingsConfigDict(
        env_prefix="MEDIA_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(default="media", description="Bucket for uploaded media")
    region: str = Field(default="eu-central-1", description="Bucket region")
    endpoint_url: str | None = Field(
        default=None,
        description="Custom S3-compatible endpoint (leave empty for AWS)",
    )
    public_base_url: str | None = Field(
        default=None,
        description="Base URL for public object links; derived from bucket/region if empty",
    )
    cache_control: str = Field(default="3600", description="Cache-Control max-age for uploads")
