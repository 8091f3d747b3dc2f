"""
User and profile schemas.

Dependencies: pydantic
System role: Profile, dashboard and user administration API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from coaching_backend.boundary.db.models.profile_model import UserRole
from coaching_backend.models.common import Notice


class ProfileResponse(BaseModel):
    """Response schema for a profile."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    first_name: str | None = None
    last_name: str | None = None
    avatar_url: str | None = None
    email: str | None = None


class UpdateProfileRequest(BaseModel):
    """Request schema for updating one's own profile."""

    first_name: str | None = Field(None, max_length=255)
    last_name: str | None = Field(None, max_length=255)
    avatar_url: str | None = Field(None, max_length=1024)


class ProfileMutationResponse(BaseModel):
    profile: ProfileResponse
    notice: Notice


class UserSummary(BaseModel):
    """Admin user list row: profile plus highest role."""

    id: uuid.UUID
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    role: UserRole
    roles: list[UserRole] = Field(default_factory=list)
    created_at: datetime | None = None


class SetRolesRequest(BaseModel):
    """Replace a user's role set. An empty list makes the user a student."""

    roles: list[UserRole] = Field(default_factory=list)


class RolesMutationResponse(BaseModel):
    user_id: uuid.UUID
    roles: list[UserRole]
    role: UserRole
    notice: Notice
