"""
Course registration CRUD operations.

Dependencies: sqlalchemy, coaching_backend.boundary.db.models
System role: Registration persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import String, cast, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from coaching_backend.boundary.db.models.course_model import CourseModel
from coaching_backend.boundary.db.models.registration_model import (
    CourseRegistrationModel,
    RegistrationStatus,
)
from coaching_backend.boundary.db.CRUD.base_crud import BaseCRUD
from coaching_backend.boundary.db.retry import query_retry


class RegistrationCRUD(BaseCRUD[CourseRegistrationModel]):
    """
    CRUD operations for CourseRegistrationModel.

    Listing queries eagerly load the owning course so admin views can
    show course title and slug without lazy loads on an async session.
    """

    def __init__(self) -> None:
        super().__init__(CourseRegistrationModel)

    @query_retry
    async def get_with_course(
        self,
        session: AsyncSession,
        id: UUID,
    ) -> CourseRegistrationModel | None:
        """Retrieve a registration with its course loaded."""
        stmt = (
            select(CourseRegistrationModel)
            .options(selectinload(CourseRegistrationModel.course))
            .where(CourseRegistrationModel.id == id)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @query_retry
    async def list_filtered(
        self,
        session: AsyncSession,
        status: RegistrationStatus | None = None,
        course_id: UUID | None = None,
        search: str | None = None,
    ) -> Sequence[CourseRegistrationModel]:
        """
        List registrations newest first with optional filters.

        Args:
            session: Async database session
            status: Only rows in this status
            course_id: Only rows for this course
            search: Case-insensitive match on course title, group reference
                or participant metadata (names, e-mail)

        Returns:
            Sequence of CourseRegistrationModels with course loaded
        """
        stmt = (
            select(CourseRegistrationModel)
            .join(CourseModel, CourseRegistrationModel.course_id == CourseModel.id)
            .options(selectinload(CourseRegistrationModel.course))
        )
        if status is not None:
            stmt = stmt.where(CourseRegistrationModel.status == status)
        if course_id is not None:
            stmt = stmt.where(CourseRegistrationModel.course_id == course_id)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    CourseModel.title.ilike(pattern),
                    CourseRegistrationModel.group_reference.ilike(pattern),
                    cast(CourseRegistrationModel.registration_metadata, String).ilike(pattern),
                )
            )
        stmt = stmt.order_by(CourseRegistrationModel.created_at.desc())
        result = await session.execute(stmt)
        return result.scalars().all()

    @query_retry
    async def list_for_user(
        self,
        session: AsyncSession,
        user_id: UUID,
    ) -> Sequence[CourseRegistrationModel]:
        """List a user's own individual registrations, newest first."""
        stmt = (
            select(CourseRegistrationModel)
            .options(selectinload(CourseRegistrationModel.course))
            .where(CourseRegistrationModel.user_id == user_id)
            .order_by(CourseRegistrationModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()


registration_crud = RegistrationCRUD()
