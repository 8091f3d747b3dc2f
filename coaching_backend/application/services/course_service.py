"""
Course service orchestrator.

Public catalogue queries, admin course CRUD, and course templates with
instantiation of scheduled courses from a template.

Dependencies: coaching_backend.boundary.db.CRUD, coaching_backend.boundary.db.models
System role: Course use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coaching_backend.boundary.db.CRUD.course_crud import course_crud
from coaching_backend.boundary.db.errors import is_unique_violation
from coaching_backend.boundary.db.models.course_model import TEMPLATE_FIELDS, CourseModel
from coaching_backend.core.exceptions import (
    BackendCallError,
    NotFoundError,
    ValidationError,
)
from coaching_backend.models.course import CourseFormat, CourseResponse

logger = logging.getLogger(__name__)


class CourseService:
    """Course service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize course service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    # ------------------------------------------------------------------
    # Public catalogue
    # ------------------------------------------------------------------

    async def list_courses(
        self,
        category: str | None = None,
        level: str | None = None,
        course_format: CourseFormat | None = None,
        search: str | None = None,
    ) -> list[CourseResponse]:
        """
        List published courses ordered by start date.

        Args:
            category: Category filter ("all" disables)
            level: Level filter ("all" disables)
            course_format: virtual, in-person or hybrid
            search: Substring of title or description

        Returns:
            list[CourseResponse]
        """
        courses = await course_crud.list_published(
            self.db,
            category=category,
            level=level,
            course_format=course_format,
            search=search.strip() if search else None,
        )
        return [CourseResponse.model_validate(c) for c in courses]

    async def get_course_by_slug(self, slug: str) -> CourseResponse:
        """
        Get a published course by slug.

        Raises:
            NotFoundError: No published course with that slug
        """
        course = await course_crud.get_by_slug(self.db, slug)
        if course is None or course.is_template or not course.is_published:
            raise NotFoundError("course", slug)
        return CourseResponse.model_validate(course)

    async def get_categories(self) -> list[str]:
        return await course_crud.list_categories(self.db)

    # ------------------------------------------------------------------
    # Admin course CRUD
    # ------------------------------------------------------------------

    async def list_all_courses(self) -> list[CourseResponse]:
        """All scheduled courses (published or not), newest first."""
        courses = await course_crud.list_courses(self.db, templates=False)
        return [CourseResponse.model_validate(c) for c in courses]

    async def get_course(self, course_id: UUID) -> CourseResponse:
        course = await self._require(course_id, template=False)
        return CourseResponse.model_validate(course)

    async def create_course(self, **fields) -> CourseResponse:
        """
        Create a scheduled course.

        Args:
            **fields: Course columns (slug and title required)

        Returns:
            CourseResponse

        Raises:
            ValidationError: Slug already used or end date before start date
        """
        self._check_schedule(fields.get("start_date"), fields.get("end_date"))
        course = await self._insert(is_template=False, **fields)
        logger.info(
            f"{__name__}:create_course - Course created",
            extra={"course_id": str(course.id), "slug": course.slug},
        )
        return CourseResponse.model_validate(course)

    async def update_course(self, course_id: UUID, **fields) -> CourseResponse:
        """
        Update a scheduled course; only the given fields change.

        Raises:
            NotFoundError: Unknown course
            ValidationError: Slug already used or invalid schedule
        """
        current = await self._require(course_id, template=False)
        if not fields:
            return CourseResponse.model_validate(current)
        self._check_schedule(
            fields.get("start_date", current.start_date),
            fields.get("end_date", current.end_date),
        )
        course = await self._update(course_id, **fields)
        return CourseResponse.model_validate(course)

    async def set_published(self, course_id: UUID, is_published: bool) -> CourseResponse:
        await self._require(course_id, template=False)
        course = await self._update(course_id, is_published=is_published)
        logger.info(
            f"{__name__}:set_published - Publication changed",
            extra={"course_id": str(course_id), "is_published": is_published},
        )
        return CourseResponse.model_validate(course)

    async def delete_course(self, course_id: UUID) -> None:
        """
        Delete a scheduled course together with its registrations.

        Raises:
            NotFoundError: Unknown course
        """
        course = await self._require(course_id, template=False)
        try:
            await course_crud.delete_by_id(self.db, course.id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"{__name__}:delete_course - Delete failed",
                extra={"course_id": str(course_id), "error": str(e)},
            )
            raise BackendCallError("Course could not be deleted", operation="delete") from e
        logger.info(f"{__name__}:delete_course - Course deleted", extra={"course_id": str(course_id)})

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    async def list_templates(self) -> list[CourseResponse]:
        templates = await course_crud.list_courses(self.db, templates=True)
        return [CourseResponse.model_validate(t) for t in templates]

    async def get_template(self, template_id: UUID) -> CourseResponse:
        template = await self._require(template_id, template=True)
        return CourseResponse.model_validate(template)

    async def create_template(self, **fields) -> CourseResponse:
        """Create a template from descriptive fields and a slug."""
        template = await self._insert(is_template=True, **fields)
        return CourseResponse.model_validate(template)

    async def update_template(self, template_id: UUID, **fields) -> CourseResponse:
        current = await self._require(template_id, template=True)
        if not fields:
            return CourseResponse.model_validate(current)
        template = await self._update(template_id, **fields)
        return CourseResponse.model_validate(template)

    async def delete_template(self, template_id: UUID) -> None:
        """
        Delete a template. Scheduled courses are never touched.

        Raises:
            NotFoundError: No template with that id
        """
        try:
            deleted = await course_crud.delete_template(self.db, template_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise BackendCallError("Template could not be deleted", operation="delete") from e
        if not deleted:
            raise NotFoundError("template", template_id)

    async def create_from_template(self, template_id: UUID, **overrides) -> CourseResponse:
        """
        Schedule a course from a template.

        Descriptive fields are copied from the template, then overrides
        (slug, schedule, price, ...) applied. The result is never a template.

        Args:
            template_id: Template UUID
            **overrides: Fields for the new course; slug required

        Returns:
            CourseResponse: The scheduled course

        Raises:
            NotFoundError: Unknown template
            ValidationError: Missing or duplicate slug, invalid schedule
        """
        template = await self._require(template_id, template=True)
        if not overrides.get("slug"):
            raise ValidationError("A new slug is required", field="slug")

        fields = {name: getattr(template, name) for name in TEMPLATE_FIELDS}
        fields.update({k: v for k, v in overrides.items() if v is not None})
        self._check_schedule(fields.get("start_date"), fields.get("end_date"))

        course = await self._insert(is_template=False, **fields)
        logger.info(
            f"{__name__}:create_from_template - Course scheduled from template",
            extra={"template_id": str(template_id), "course_id": str(course.id)},
        )
        return CourseResponse.model_validate(course)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _require(self, course_id: UUID, template: bool) -> CourseModel:
        course = await course_crud.get_by_id(self.db, course_id)
        if course is None or course.is_template != template:
            raise NotFoundError("template" if template else "course", course_id)
        return course

    @staticmethod
    def _check_schedule(start_date, end_date) -> None:
        if start_date and end_date and end_date < start_date:
            raise ValidationError("End date must not be before start date", field="end_date")

    async def _insert(self, **fields) -> CourseModel:
        try:
            course = await course_crud.create(self.db, **fields)
            await self.db.commit()
            return course
        except IntegrityError as e:
            await self.db.rollback()
            if is_unique_violation(e):
                raise ValidationError("A course with this slug already exists", field="slug") from e
            raise BackendCallError("Course could not be saved", operation="insert") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"{__name__}:_insert - Insert failed", extra={"error": str(e)})
            raise BackendCallError("Course could not be saved", operation="insert") from e

    async def _update(self, course_id: UUID, **fields) -> CourseModel:
        try:
            course = await course_crud.update_by_id(self.db, course_id, **fields)
            await self.db.commit()
            await self.db.refresh(course)
            return course
        except IntegrityError as e:
            await self.db.rollback()
            if is_unique_violation(e):
                raise ValidationError("A course with this slug already exists", field="slug") from e
            raise BackendCallError("Course could not be saved", operation="update") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"{__name__}:_update - Update failed",
                extra={"course_id": str(course_id), "error": str(e)},
            )
            raise BackendCallError("Course could not be saved", operation="update") from e
