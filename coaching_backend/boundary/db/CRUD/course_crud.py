"""
Course CRUD operations.

Provides Create, Read, Update, Delete operations for CourseModel
with catalogue filters, template scoping and seat reservation.

Dependencies: sqlalchemy, coaching_backend.boundary.db.models
System role: Course persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from coaching_backend.boundary.db.models.course_model import CourseModel
from coaching_backend.boundary.db.CRUD.base_crud import BaseCRUD
from coaching_backend.boundary.db.retry import query_retry

VIRTUAL_LOCATION = "Virtual"
HYBRID_LOCATION = "Hybrid"


class CourseCRUD(BaseCRUD[CourseModel]):
    """
    CRUD operations for CourseModel.

    Extends BaseCRUD with public catalogue queries, template-scoped
    lookups and the conditional seat counter used for capacity enforcement.
    """

    def __init__(self) -> None:
        """Initialize CourseCRUD with CourseModel."""
        super().__init__(CourseModel)

    @query_retry
    async def get_by_slug(self, session: AsyncSession, slug: str) -> CourseModel | None:
        """
        Retrieve a course by its URL slug.

        Args:
            session: Async database session
            slug: Course slug

        Returns:
            CourseModel if found, None otherwise
        """
        stmt = select(CourseModel).where(CourseModel.slug == slug)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @query_retry
    async def list_published(
        self,
        session: AsyncSession,
        category: str | None = None,
        level: str | None = None,
        course_format: str | None = None,
        search: str | None = None,
    ) -> Sequence[CourseModel]:
        """
        List published scheduled courses ordered by start date.

        Args:
            session: Async database session
            category: Exact category match ("all" or None disables)
            level: Exact level match ("all" or None disables)
            course_format: "virtual", "in-person" or "hybrid" (derived from location)
            search: Case-insensitive substring of title or description

        Returns:
            Sequence of CourseModels
        """
        stmt = select(CourseModel).where(
            CourseModel.is_published.is_(True),
            CourseModel.is_template.is_(False),
        )
        if category and category != "all":
            stmt = stmt.where(CourseModel.category == category)
        if level and level != "all":
            stmt = stmt.where(CourseModel.level == level)
        if course_format == "virtual":
            stmt = stmt.where(CourseModel.location == VIRTUAL_LOCATION)
        elif course_format == "hybrid":
            stmt = stmt.where(CourseModel.location == HYBRID_LOCATION)
        elif course_format == "in-person":
            stmt = stmt.where(
                or_(
                    CourseModel.location.is_(None),
                    CourseModel.location.not_in([VIRTUAL_LOCATION, HYBRID_LOCATION]),
                )
            )
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(
                    CourseModel.title.ilike(pattern),
                    CourseModel.description.ilike(pattern),
                )
            )
        stmt = stmt.order_by(CourseModel.start_date.asc())
        result = await session.execute(stmt)
        return result.scalars().all()

    @query_retry
    async def list_categories(self, session: AsyncSession) -> list[str]:
        """
        Distinct non-null categories of published courses.

        Args:
            session: Async database session

        Returns:
            list[str]: Sorted category names
        """
        stmt = (
            select(CourseModel.category)
            .where(
                CourseModel.is_published.is_(True),
                CourseModel.is_template.is_(False),
                CourseModel.category.is_not(None),
            )
            .distinct()
            .order_by(CourseModel.category)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @query_retry
    async def list_courses(
        self,
        session: AsyncSession,
        templates: bool = False,
    ) -> Sequence[CourseModel]:
        """
        List courses or templates, newest first (admin views).

        Args:
            session: Async database session
            templates: True for templates, False for scheduled courses

        Returns:
            Sequence of CourseModels
        """
        stmt = (
            select(CourseModel)
            .where(CourseModel.is_template.is_(templates))
            .order_by(CourseModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    @query_retry
    async def get_template(self, session: AsyncSession, id: UUID) -> CourseModel | None:
        """
        Retrieve a template by id; scheduled courses are not returned.

        Args:
            session: Async database session
            id: Template UUID

        Returns:
            CourseModel if a template with that id exists, None otherwise
        """
        stmt = select(CourseModel).where(
            CourseModel.id == id,
            CourseModel.is_template.is_(True),
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_template(self, session: AsyncSession, id: UUID) -> bool:
        """
        Delete a template by id.

        Args:
            session: Async database session
            id: Template UUID

        Returns:
            True if a template row was deleted
        """
        stmt = delete(CourseModel).where(
            CourseModel.id == id,
            CourseModel.is_template.is_(True),
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def reserve_seats(self, session: AsyncSession, id: UUID, seats: int) -> bool:
        """
        Atomically reserve seats if capacity allows.

        A single conditional UPDATE: the row only changes when the new total
        stays within capacity (or capacity is unset), so concurrent writers
        cannot both take the last seat.

        Args:
            session: Async database session
            id: Course UUID
            seats: Number of seats to reserve

        Returns:
            bool: True if the seats were reserved
        """
        stmt = (
            update(CourseModel)
            .where(
                CourseModel.id == id,
                or_(
                    CourseModel.capacity.is_(None),
                    CourseModel.reserved_seats + seats <= CourseModel.capacity,
                ),
            )
            .values(reserved_seats=CourseModel.reserved_seats + seats)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    async def release_seats(self, session: AsyncSession, id: UUID, seats: int) -> None:
        """
        Release previously reserved seats, never going below zero.

        Args:
            session: Async database session
            id: Course UUID
            seats: Number of seats to release
        """
        stmt = (
            update(CourseModel)
            .where(CourseModel.id == id, CourseModel.reserved_seats >= seats)
            .values(reserved_seats=CourseModel.reserved_seats - seats)
            .execution_options(synchronize_session=False)
        )
        await session.execute(stmt)


course_crud = CourseCRUD()
