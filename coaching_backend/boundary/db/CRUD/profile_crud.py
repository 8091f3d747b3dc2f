"""
Profile and user-role CRUD operations.

Dependencies: sqlalchemy, coaching_backend.boundary.db.models
System role: Profile and role persistence operations
"""

from typing import Iterable, Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from coaching_backend.boundary.db.models.profile_model import (
    ProfileModel,
    UserRole,
    UserRoleModel,
)
from coaching_backend.boundary.db.CRUD.base_crud import BaseCRUD
from coaching_backend.boundary.db.retry import query_retry


class ProfileCRUD(BaseCRUD[ProfileModel]):
    """CRUD operations for ProfileModel (primary key is the user id)."""

    def __init__(self) -> None:
        super().__init__(ProfileModel)

    @query_retry
    async def get_many(
        self,
        session: AsyncSession,
        ids: Iterable[UUID],
    ) -> dict[UUID, ProfileModel]:
        """
        Fetch profiles for a set of user ids.

        Args:
            session: Async database session
            ids: User ids

        Returns:
            dict mapping user id to ProfileModel (ids without a profile omitted)
        """
        ids = list(ids)
        if not ids:
            return {}
        stmt = select(ProfileModel).where(ProfileModel.id.in_(ids))
        result = await session.execute(stmt)
        return {profile.id: profile for profile in result.scalars().all()}

    async def upsert(self, session: AsyncSession, user_id: UUID, **fields) -> ProfileModel:
        """
        Create the profile if missing, otherwise update the given fields.

        Args:
            session: Async database session
            user_id: Identity-service user id
            **fields: first_name / last_name / avatar_url

        Returns:
            ProfileModel after the write
        """
        profile = await session.get(ProfileModel, user_id)
        if profile is None:
            return await self.create(session, id=user_id, **fields)
        for name, value in fields.items():
            setattr(profile, name, value)
        await session.flush()
        await session.refresh(profile)
        return profile


class UserRoleCRUD(BaseCRUD[UserRoleModel]):
    """CRUD operations for UserRoleModel."""

    def __init__(self) -> None:
        super().__init__(UserRoleModel)

    @query_retry
    async def roles_for_user(self, session: AsyncSession, user_id: UUID) -> set[UserRole]:
        """Return the set of roles assigned to a user (empty means student)."""
        stmt = select(UserRoleModel.role).where(UserRoleModel.user_id == user_id)
        result = await session.execute(stmt)
        return set(result.scalars().all())

    @query_retry
    async def list_assignments(self, session: AsyncSession) -> Sequence[UserRoleModel]:
        """All role assignments, used to build the admin user list."""
        stmt = select(UserRoleModel).order_by(UserRoleModel.created_at)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def replace_roles(
        self,
        session: AsyncSession,
        user_id: UUID,
        roles: Iterable[UserRole],
    ) -> set[UserRole]:
        """
        Replace a user's role assignments.

        Args:
            session: Async database session
            user_id: Target user id
            roles: New role set (student is implicit and not stored)

        Returns:
            set[UserRole]: Stored roles after the write
        """
        stored = {UserRole(role) for role in roles} - {UserRole.STUDENT}
        await session.execute(delete(UserRoleModel).where(UserRoleModel.user_id == user_id))
        for role in stored:
            session.add(UserRoleModel(user_id=user_id, role=role))
        await session.flush()
        return stored


profile_crud = ProfileCRUD()
user_role_crud = UserRoleCRUD()
