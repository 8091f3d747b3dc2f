"""
Observability configuration settings.

Settings for log output and request tracing headers.

Dependencies: pydantic_settings
System role: Observability configuration for logging
"""

from pydantic_settings import BaseSettings
from pydantic import Field


class ObservabilitySettings(BaseSettings):
    """Logging and request-tracing configuration."""

    correlation_header: str = Field(
        default="X-Correlation-ID",
        description="Header carrying the request correlation id",
    )
    log_requests: bool = Field(
        default=True,
        description="Log every HTTP request and response",
    )

    class Config:
        """Pydantic config for environment variable loading."""

        env_prefix = "LOG_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
