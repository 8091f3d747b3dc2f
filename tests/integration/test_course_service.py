"""
Integration tests for CourseService.

Catalogue filtering, admin CRUD and template instantiation against the
in-memory database.

System role: Verification of course persistence and catalogue queries
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select

from coaching_backend.application.services.course_service import CourseService
from coaching_backend.application.services.registration_service import RegistrationService
from coaching_backend.boundary.db.models.registration_model import CourseRegistrationModel
from coaching_backend.configs.registration import RegistrationSettings
from coaching_backend.core.exceptions import NotFoundError, ValidationError
from coaching_backend.models.registration import IndividualRegistrationRequest


@pytest.fixture
def course_service(test_async_db) -> CourseService:
    return CourseService(db=test_async_db)


class TestCatalogue:
    """Public catalogue queries."""

    @pytest.mark.asyncio
    async def test_only_published_courses_are_listed_by_start_date(
        self, course_service, make_course
    ) -> None:
        now = datetime.now(timezone.utc)
        later = await make_course(slug="later", start_date=now + timedelta(days=60))
        sooner = await make_course(slug="sooner", start_date=now + timedelta(days=10))
        await make_course(slug="draft", is_published=False)
        await make_course(slug="stencil", is_template=True)

        courses = await course_service.list_courses()

        assert [c.slug for c in courses] == [sooner.slug, later.slug]

    @pytest.mark.asyncio
    async def test_format_is_derived_from_location(self, course_service, make_course) -> None:
        await make_course(slug="online", location="Virtual")
        await make_course(slug="mixed", location="Hybrid")
        await make_course(slug="onsite", location="Amsterdam")
        await make_course(slug="unknown", location=None)

        virtual = await course_service.list_courses(course_format="virtual")
        in_person = await course_service.list_courses(course_format="in-person")

        assert [c.slug for c in virtual] == ["online"]
        assert {c.slug for c in in_person} == {"onsite", "unknown"}

    @pytest.mark.asyncio
    async def test_category_and_search_filters(self, course_service, make_course) -> None:
        await make_course(
            slug="kanban",
            title="Kanban System Design",
            description="Designing flow-based delivery systems",
            category="Kanban",
        )
        await make_course(slug="psm", title="Professional Scrum Master", category="Scrum")

        by_category = await course_service.list_courses(category="Kanban")
        by_search = await course_service.list_courses(search="  scrum ")
        unfiltered = await course_service.list_courses(category="all")

        assert [c.slug for c in by_category] == ["kanban"]
        assert [c.slug for c in by_search] == ["psm"]
        assert len(unfiltered) == 2

    @pytest.mark.asyncio
    async def test_categories_are_distinct_and_sorted(self, course_service, make_course) -> None:
        await make_course(category="Scrum")
        await make_course(category="Kanban")
        await make_course(category="Scrum")
        await make_course(category="Leadership", is_published=False)

        assert await course_service.get_categories() == ["Kanban", "Scrum"]

    @pytest.mark.asyncio
    async def test_unpublished_slug_is_not_found(self, course_service, make_course) -> None:
        await make_course(slug="hidden", is_published=False)

        with pytest.raises(NotFoundError):
            await course_service.get_course_by_slug("hidden")


class TestAdminCourses:
    """Admin course CRUD."""

    @pytest.mark.asyncio
    async def test_create_then_publish(self, course_service) -> None:
        created = await course_service.create_course(slug="lean-leadership", title="Lean Leadership")
        assert not created.is_published

        published = await course_service.set_published(created.id, True)

        assert published.is_published
        assert (await course_service.get_course_by_slug("lean-leadership")).id == created.id

    @pytest.mark.asyncio
    async def test_duplicate_slug_is_a_validation_error(self, course_service, make_course) -> None:
        await make_course(slug="taken")

        with pytest.raises(ValidationError) as exc_info:
            await course_service.create_course(slug="taken", title="Another")

        assert exc_info.value.field == "slug"

    @pytest.mark.asyncio
    async def test_end_before_start_rejected(self, course_service) -> None:
        start = datetime.now(timezone.utc)

        with pytest.raises(ValidationError):
            await course_service.create_course(
                slug="backwards",
                title="Backwards",
                start_date=start,
                end_date=start - timedelta(days=1),
            )

    @pytest.mark.asyncio
    async def test_update_changes_only_given_fields(self, course_service, make_course) -> None:
        course = await make_course(price=900.0)

        updated = await course_service.update_course(course.id, price=1100.0)

        assert updated.price == 1100.0
        assert updated.title == course.title

    @pytest.mark.asyncio
    async def test_delete_removes_registrations(
        self, test_async_db, course_service, published_course, mock_notifier, participant_payload
    ) -> None:
        course_id = published_course.id
        registrations = RegistrationService(test_async_db, mock_notifier, RegistrationSettings())
        await registrations.register_individual(
            course_id, IndividualRegistrationRequest(**participant_payload)
        )

        await course_service.delete_course(course_id)

        remaining = await test_async_db.execute(
            select(func.count()).select_from(CourseRegistrationModel)
        )
        assert remaining.scalar_one() == 0
        with pytest.raises(NotFoundError):
            await course_service.get_course(course_id)


class TestTemplates:
    """Course templates and instantiation."""

    @pytest.mark.asyncio
    async def test_create_from_template_copies_descriptive_fields(self, course_service) -> None:
        template = await course_service.create_template(
            slug="psm-template",
            title="Professional Scrum Master",
            description="Two days of Scrum",
            category="Scrum",
            price=1200.0,
            duration=2,
        )
        start = datetime.now(timezone.utc) + timedelta(days=14)

        course = await course_service.create_from_template(
            template.id,
            slug="psm-march",
            price=999.0,
            location="Virtual",
            start_date=start,
            end_date=start + timedelta(days=1),
        )

        assert not course.is_template
        assert course.title == "Professional Scrum Master"
        assert course.category == "Scrum"
        assert course.duration == 2
        assert course.price == 999.0
        assert course.location == "Virtual"

    @pytest.mark.asyncio
    async def test_templates_are_listed_separately(self, course_service, make_course) -> None:
        await make_course(slug="scheduled")
        await course_service.create_template(slug="stencil", title="Stencil")

        templates = await course_service.list_templates()
        courses = await course_service.list_all_courses()

        assert [t.slug for t in templates] == ["stencil"]
        assert [c.slug for c in courses] == ["scheduled"]

    @pytest.mark.asyncio
    async def test_missing_slug_rejected(self, course_service) -> None:
        template = await course_service.create_template(slug="stencil", title="Stencil")

        with pytest.raises(ValidationError):
            await course_service.create_from_template(template.id, slug="")

    @pytest.mark.asyncio
    async def test_deleting_template_keeps_scheduled_courses(self, course_service) -> None:
        template = await course_service.create_template(slug="stencil", title="Stencil")
        course = await course_service.create_from_template(template.id, slug="stencil-june")

        await course_service.delete_template(template.id)

        assert (await course_service.get_course(course.id)).slug == "stencil-june"
        with pytest.raises(NotFoundError):
            await course_service.get_template(template.id)

    @pytest.mark.asyncio
    async def test_scheduled_course_is_not_a_template(self, course_service, make_course) -> None:
        course = await make_course()

        with pytest.raises(NotFoundError):
            await course_service.delete_template(course.id)
