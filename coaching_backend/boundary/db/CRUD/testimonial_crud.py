"""
Testimonial CRUD operations.

Dependencies: sqlalchemy, coaching_backend.boundary.db.models
System role: Testimonial persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from coaching_backend.boundary.db.models.testimonial_model import TestimonialModel
from coaching_backend.boundary.db.CRUD.base_crud import BaseCRUD
from coaching_backend.boundary.db.retry import query_retry


class TestimonialCRUD(BaseCRUD[TestimonialModel]):
    """CRUD operations for TestimonialModel."""

    def __init__(self) -> None:
        super().__init__(TestimonialModel)

    @query_retry
    async def list_published(
        self,
        session: AsyncSession,
        featured_only: bool = False,
        course_id: UUID | None = None,
        limit: int | None = None,
    ) -> Sequence[TestimonialModel]:
        """
        List published testimonials, newest first.

        Args:
            session: Async database session
            featured_only: Restrict to featured testimonials
            course_id: Restrict to one course
            limit: Maximum rows

        Returns:
            Sequence of TestimonialModels
        """
        stmt = select(TestimonialModel).where(TestimonialModel.published.is_(True))
        if featured_only:
            stmt = stmt.where(TestimonialModel.is_featured.is_(True))
        if course_id is not None:
            stmt = stmt.where(TestimonialModel.course_id == course_id)
        stmt = stmt.order_by(TestimonialModel.created_at.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    @query_retry
    async def list_all(self, session: AsyncSession) -> Sequence[TestimonialModel]:
        """All testimonials for the back-office, newest first."""
        stmt = select(TestimonialModel).order_by(TestimonialModel.created_at.desc())
        result = await session.execute(stmt)
        return result.scalars().all()


testimonial_crud = TestimonialCRUD()
