"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from coaching_backend.configs.auth import AuthSettings
from coaching_backend.configs.base import BaseSettings
from coaching_backend.configs.database import DatabaseSettings
from coaching_backend.configs.observability import ObservabilitySettings
from coaching_backend.configs.registration import RegistrationSettings
from coaching_backend.configs.storage import StorageSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    registration: RegistrationSettings = Field(default_factory=RegistrationSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from coaching_backend.configs import get_settings
        settings = get_settings()
    """
    return Settings()
