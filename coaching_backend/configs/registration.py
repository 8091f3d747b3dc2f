"""
Registration workflow configuration.

Dependencies: pydantic_settings
System role: Registration policy switches
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RegistrationSettings(BaseSettings):
    """Course registration policy settings."""

    model_config = SettingsConfigDict(
        env_prefix="REGISTRATION_",
        case_sensitive=False,
        extra="ignore",
    )

    group_insert_policy: Literal["atomic", "abort_on_first_error"] = Field(
        default="atomic",
        description=(
            "atomic: roll back every participant row if one insert fails; "
            "abort_on_first_error: keep rows inserted before the failure"
        ),
    )
    min_group_participants: int = Field(
        default=2,
        ge=1,
        description="Minimum participants in a group registration",
    )
    enforce_capacity: bool = Field(
        default=False,
        description="Reserve seats atomically and reject registrations over capacity",
    )
