"""
Testimonial service orchestrator.

Dependencies: coaching_backend.boundary.db.CRUD
System role: Testimonial use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coaching_backend.boundary.db.CRUD.testimonial_crud import testimonial_crud
from coaching_backend.core.exceptions import BackendCallError, NotFoundError
from coaching_backend.models.testimonial import TestimonialResponse

logger = logging.getLogger(__name__)


class TestimonialService:
    """Testimonial service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_published(
        self,
        featured_only: bool = False,
        limit: int | None = 10,
    ) -> list[TestimonialResponse]:
        """
        Published testimonials, newest first.

        Args:
            featured_only: Only carousel testimonials
            limit: Maximum number returned

        Returns:
            list[TestimonialResponse]
        """
        rows = await testimonial_crud.list_published(
            self.db, featured_only=featured_only, limit=limit
        )
        return [TestimonialResponse.model_validate(row) for row in rows]

    async def list_for_course(self, course_id: UUID) -> list[TestimonialResponse]:
        rows = await testimonial_crud.list_published(self.db, course_id=course_id)
        return [TestimonialResponse.model_validate(row) for row in rows]

    async def list_all(self) -> list[TestimonialResponse]:
        rows = await testimonial_crud.list_all(self.db)
        return [TestimonialResponse.model_validate(row) for row in rows]

    async def create(self, **fields) -> TestimonialResponse:
        try:
            row = await testimonial_crud.create(self.db, **fields)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"{__name__}:create - Insert failed", extra={"error": str(e)})
            raise BackendCallError("Testimonial could not be saved", operation="insert") from e
        return TestimonialResponse.model_validate(row)

    async def update(self, testimonial_id: UUID, **fields) -> TestimonialResponse:
        """
        Update a testimonial; only the given fields change.

        Raises:
            NotFoundError: Unknown testimonial
        """
        current = await testimonial_crud.get_by_id(self.db, testimonial_id)
        if current is None:
            raise NotFoundError("testimonial", testimonial_id)
        if not fields:
            return TestimonialResponse.model_validate(current)
        try:
            row = await testimonial_crud.update_by_id(self.db, testimonial_id, **fields)
            await self.db.commit()
            await self.db.refresh(row)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"{__name__}:update - Update failed",
                extra={"testimonial_id": str(testimonial_id), "error": str(e)},
            )
            raise BackendCallError("Testimonial could not be saved", operation="update") from e
        return TestimonialResponse.model_validate(row)

    async def delete(self, testimonial_id: UUID) -> None:
        try:
            deleted = await testimonial_crud.delete_by_id(self.db, testimonial_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise BackendCallError("Testimonial could not be deleted", operation="delete") from e
        if not deleted:
            raise NotFoundError("testimonial", testimonial_id)
