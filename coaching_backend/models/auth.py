"""
Authentication domain models and schemas.

Identity-service user/session shapes and the auth API contracts.

Dependencies: pydantic
System role: Auth API contracts and identity value types
"""

import uuid
from enum import Enum

from pydantic import BaseModel, EmailStr, Field

from coaching_backend.models.common import Notice


class AuthEvent(str, Enum):
    """Auth-state-change events emitted by the identity client."""

    INITIAL_SESSION = "INITIAL_SESSION"
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"


class IdentityUser(BaseModel):
    """User record owned by the identity service."""

    id: uuid.UUID
    email: str | None = None
    metadata: dict = Field(default_factory=dict, description="user_metadata (never used for roles)")


class IdentitySession(BaseModel):
    """Access/refresh token pair for a signed-in user."""

    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str = "bearer"
    user: IdentityUser


class SessionState(BaseModel):
    """
    Current-user state exposed by the session provider.

    is_admin implies is_instructor.
    """

    current_user: IdentityUser | None = None
    access_token: str | None = None
    is_loading: bool = True
    is_admin: bool = False
    is_instructor: bool = False


class SignUpRequest(BaseModel):
    """Request schema for account sign-up."""

    email: EmailStr
    password: str = Field(..., min_length=6, description="Account password")
    first_name: str | None = Field(None, max_length=255)
    last_name: str | None = Field(None, max_length=255)


class SignInRequest(BaseModel):
    """Request schema for password sign-in."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshRequest(BaseModel):
    """Request schema for exchanging a refresh token."""

    refresh_token: str = Field(..., min_length=1)


class PasswordResetRequest(BaseModel):
    """Request schema for a password reset e-mail."""

    email: EmailStr


class UpdatePasswordRequest(BaseModel):
    """
    Request schema for setting a new password.

    recovery_url is the full link from the reset e-mail (token in fragment
    or query); without it the caller must hold an active session.
    """

    password: str = Field(..., min_length=8)
    recovery_url: str | None = None
    access_token: str | None = None
    refresh_token: str | None = None


class UpdateUserDataRequest(BaseModel):
    """Request schema for updating identity user metadata."""

    data: dict = Field(default_factory=dict)


class SessionResponse(BaseModel):
    """Response schema for sign-in and session inspection."""

    user: IdentityUser | None
    access_token: str | None = None
    refresh_token: str | None = None
    expires_in: int | None = None
    is_admin: bool = False
    is_instructor: bool = False
    notice: Notice | None = None
