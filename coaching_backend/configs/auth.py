"""
Identity service configuration settings.

Connection details for the hosted identity and edge-function platform.
Both url and anon_key must be present for a live client; when either is
missing the identity layer falls back to a logged-out stub.

Dependencies: pydantic_settings
System role: Identity/notification platform configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """Hosted identity platform settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SUPABASE_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str | None = Field(default=None, description="Platform base URL")
    anon_key: str | None = Field(default=None, description="Public anon API key")
    request_timeout: float = Field(
        default=10.0,
        description="HTTP timeout in seconds for identity and function calls",
    )
    password_reset_path: str = Field(
        default="/reset-password",
        description="Site path embedded in password reset e-mails",
    )

    @property
    def is_configured(self) -> bool:
        """True when both required values are present."""
        return bool(self.url and self.anon_key)
