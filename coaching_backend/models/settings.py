"""
Site settings schemas.

Dependencies: pydantic
System role: Site settings API contracts
"""

from typing import Any

from pydantic import BaseModel, Field

from coaching_backend.models.common import Notice


class UpsertSettingRequest(BaseModel):
    """Request schema for creating or replacing one setting."""

    value: Any = Field(..., description="JSON value stored under the key")
    description: str | None = Field(None, max_length=1024)


class SettingsResponse(BaseModel):
    """Materialized settings."""

    settings: dict[str, Any]


class SettingValueResponse(BaseModel):
    """Single setting lookup."""

    key: str
    value: Any = None
    found: bool


class SettingMutationResponse(BaseModel):
    """Response schema for a settings write."""

    key: str
    value: Any = None
    description: str | None = None
    notice: Notice
