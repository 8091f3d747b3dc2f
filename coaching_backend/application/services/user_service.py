"""
User service orchestrator.

Own profile and dashboard registrations for signed-in users; user
listing and role assignment for admins. Roles are read from the
user_roles table only.

Dependencies: coaching_backend.boundary.db.CRUD
System role: Profile and user administration use cases
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coaching_backend.boundary.db.CRUD.profile_crud import profile_crud, user_role_crud
from coaching_backend.boundary.db.CRUD.registration_crud import registration_crud
from coaching_backend.boundary.db.models.profile_model import ROLE_RANK, UserRole
from coaching_backend.core.exceptions import BackendCallError
from coaching_backend.models.registration import RegistrationResponse
from coaching_backend.models.user import ProfileResponse, UserSummary

logger = logging.getLogger(__name__)


def highest_role(roles: set[UserRole]) -> UserRole:
    """
    Pick the most privileged role (admin > instructor > student).

    Args:
        roles: Stored roles, possibly empty

    Returns:
        UserRole (student when no roles are stored)
    """
    if not roles:
        return UserRole.STUDENT
    return max(roles, key=lambda role: ROLE_RANK[role])


class UserService:
    """User service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize user service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def get_profile(self, user_id: UUID, email: str | None = None) -> ProfileResponse:
        """
        Get a user's profile. A user without a stored profile gets an empty one.

        Args:
            user_id: Identity-service user id
            email: E-mail from the session, preferred over the stored copy

        Returns:
            ProfileResponse
        """
        profile = await profile_crud.get_by_id(self.db, user_id)
        if profile is None:
            return ProfileResponse(id=user_id, email=email)
        response = ProfileResponse.model_validate(profile)
        response.email = email or profile.email
        return response

    async def update_profile(
        self,
        user_id: UUID,
        email: str | None = None,
        **fields,
    ) -> ProfileResponse:
        """
        Create or update the user's profile with the given fields.

        The session e-mail is stored with the profile so admin views can
        show it next to the user's registrations.

        Args:
            user_id: Identity-service user id
            email: E-mail from the session
            **fields: first_name / last_name / avatar_url

        Returns:
            ProfileResponse
        """
        try:
            if email:
                fields["email"] = email
            profile = await profile_crud.upsert(self.db, user_id, **fields)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"{__name__}:update_profile - Save failed",
                extra={"user_id": str(user_id), "error": str(e)},
            )
            raise BackendCallError("Profile could not be saved", operation="upsert") from e
        return ProfileResponse.model_validate(profile)

    async def get_user_registrations(self, user_id: UUID) -> list[RegistrationResponse]:
        """The user's own registrations with course details, newest first."""
        rows = await registration_crud.list_for_user(self.db, user_id)
        return [RegistrationResponse.from_model(row) for row in rows]

    async def get_roles(self, user_id: UUID) -> set[UserRole]:
        return await user_role_crud.roles_for_user(self.db, user_id)

    async def list_users(self) -> list[UserSummary]:
        """
        List known users (profiles and role holders) with their highest role.

        Returns:
            list[UserSummary] sorted by last name, then first name
        """
        profiles = await profile_crud.get_all(self.db)
        assignments = await user_role_crud.list_assignments(self.db)

        roles_by_user: dict[UUID, set[UserRole]] = {}
        for assignment in assignments:
            roles_by_user.setdefault(assignment.user_id, set()).add(assignment.role)

        summaries = {
            profile.id: UserSummary(
                id=profile.id,
                first_name=profile.first_name,
                last_name=profile.last_name,
                email=profile.email,
                role=highest_role(roles_by_user.get(profile.id, set())),
                roles=sorted(roles_by_user.get(profile.id, set()), key=lambda r: -ROLE_RANK[r]),
                created_at=profile.created_at,
            )
            for profile in profiles
        }
        for user_id, roles in roles_by_user.items():
            if user_id not in summaries:
                summaries[user_id] = UserSummary(
                    id=user_id,
                    role=highest_role(roles),
                    roles=sorted(roles, key=lambda r: -ROLE_RANK[r]),
                )

        return sorted(
            summaries.values(),
            key=lambda s: ((s.last_name or "").lower(), (s.first_name or "").lower()),
        )

    async def set_roles(self, user_id: UUID, roles: list[UserRole]) -> set[UserRole]:
        """
        Replace a user's stored roles.

        Args:
            user_id: Target user id
            roles: New role set; empty means student

        Returns:
            set[UserRole]: Stored roles
        """
        try:
            stored = await user_role_crud.replace_roles(self.db, user_id, roles)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"{__name__}:set_roles - Role update failed",
                extra={"user_id": str(user_id), "error": str(e)},
            )
            raise BackendCallError("Roles could not be saved", operation="update") from e
        logger.info(
            f"{__name__}:set_roles - Roles replaced",
            extra={"user_id": str(user_id), "roles": sorted(r.value for r in stored)},
        )
        return stored
