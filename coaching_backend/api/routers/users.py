"""
Profile and user administration endpoints.

Routes:
- GET /me/profile - Own profile
- PUT /me/profile - Update own profile
- GET /me/registrations - Own registrations (dashboard)
- GET /admin/users - Users with their highest role
- PUT /admin/users/{user_id}/roles - Replace a user's roles

Dependencies: coaching_backend.application.services.user_service
System role: Profile and user management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from coaching_backend.api.deps.dependencies import get_user_service, require_admin, require_user
from coaching_backend.application.services.user_service import UserService, highest_role
from coaching_backend.boundary.db.models.profile_model import ROLE_RANK
from coaching_backend.core.session_provider import SessionProvider
from coaching_backend.models.common import success_notice
from coaching_backend.models.registration import RegistrationResponse
from coaching_backend.models.user import (
    ProfileMutationResponse,
    ProfileResponse,
    RolesMutationResponse,
    SetRolesRequest,
    UpdateProfileRequest,
    UserSummary,
)

from .router_utils import handle_service_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/me", tags=["profile"])
admin_router = APIRouter(
    prefix="/admin/users",
    tags=["admin-users"],
    dependencies=[Depends(require_admin)],
)


@router.get("/profile", response_model=ProfileResponse)
@handle_service_errors
async def get_profile(
    provider: SessionProvider = Depends(require_user),
    user_service: UserService = Depends(get_user_service),
) -> ProfileResponse:
    user = provider.current_user
    return await user_service.get_profile(user.id, email=user.email)


@router.put("/profile", response_model=ProfileMutationResponse)
@handle_service_errors
async def update_profile(
    request: UpdateProfileRequest,
    provider: SessionProvider = Depends(require_user),
    user_service: UserService = Depends(get_user_service),
) -> ProfileMutationResponse:
    """Update own profile; omitted fields keep their values."""
    user = provider.current_user
    profile = await user_service.update_profile(
        user.id,
        email=user.email,
        **request.model_dump(exclude_unset=True),
    )
    return ProfileMutationResponse(
        profile=profile,
        notice=success_notice("Profile updated", "Your profile has been updated."),
    )


@router.get("/registrations", response_model=list[RegistrationResponse])
@handle_service_errors
async def get_my_registrations(
    provider: SessionProvider = Depends(require_user),
    user_service: UserService = Depends(get_user_service),
) -> list[RegistrationResponse]:
    return await user_service.get_user_registrations(provider.current_user.id)


@admin_router.get("", response_model=list[UserSummary])
@handle_service_errors
async def list_users(
    user_service: UserService = Depends(get_user_service),
) -> list[UserSummary]:
    return await user_service.list_users()


@admin_router.put("/{user_id}/roles", response_model=RolesMutationResponse)
@handle_service_errors
async def set_roles(
    user_id: UUID,
    request: SetRolesRequest,
    user_service: UserService = Depends(get_user_service),
) -> RolesMutationResponse:
    """Replace a user's roles. An empty list makes the user a student."""
    stored = await user_service.set_roles(user_id, request.roles)
    return RolesMutationResponse(
        user_id=user_id,
        roles=sorted(stored, key=lambda r: -ROLE_RANK[r]),
        role=highest_role(stored),
        notice=success_notice("Roles updated", "The user's roles have been updated."),
    )
