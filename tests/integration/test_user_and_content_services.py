"""
Integration tests for UserService, testimonial and contact services.

System role: Verification of profiles, role administration and site content
"""

import uuid
from unittest.mock import AsyncMock

import pytest

from coaching_backend.application.services import testimonial_service as testimonials
from coaching_backend.application.services.contact_service import ContactService
from coaching_backend.application.services.registration_service import RegistrationService
from coaching_backend.application.services.user_service import UserService, highest_role
from coaching_backend.boundary.db.models.profile_model import UserRole
from coaching_backend.boundary.functions import CONTACT_FORM_FUNCTION
from coaching_backend.configs.registration import RegistrationSettings
from coaching_backend.core.exceptions import NotFoundError, NotificationError
from coaching_backend.models.contact import ContactRequest
from coaching_backend.models.registration import IndividualRegistrationRequest


@pytest.fixture
def user_service(test_async_db) -> UserService:
    return UserService(db=test_async_db)


class TestRoles:
    """Role derivation and administration."""

    @pytest.mark.parametrize(
        ("roles", "expected"),
        [
            (set(), UserRole.STUDENT),
            ({UserRole.INSTRUCTOR}, UserRole.INSTRUCTOR),
            ({UserRole.INSTRUCTOR, UserRole.ADMIN}, UserRole.ADMIN),
        ],
    )
    def test_highest_role(self, roles, expected) -> None:
        assert highest_role(roles) is expected

    @pytest.mark.asyncio
    async def test_set_roles_replaces_assignments(self, user_service, user_id) -> None:
        await user_service.set_roles(user_id, [UserRole.INSTRUCTOR])

        stored = await user_service.set_roles(user_id, [UserRole.ADMIN, UserRole.STUDENT])

        assert stored == {UserRole.ADMIN}
        assert await user_service.get_roles(user_id) == {UserRole.ADMIN}

    @pytest.mark.asyncio
    async def test_empty_role_list_means_student(self, user_service, user_id) -> None:
        await user_service.set_roles(user_id, [UserRole.ADMIN])

        await user_service.set_roles(user_id, [])

        assert await user_service.get_roles(user_id) == set()

    @pytest.mark.asyncio
    async def test_list_users_includes_role_holders_without_profile(self, user_service) -> None:
        with_profile = uuid.uuid4()
        role_only = uuid.uuid4()
        await user_service.update_profile(with_profile, first_name="Grace", last_name="Hopper")
        await user_service.set_roles(role_only, [UserRole.INSTRUCTOR])

        users = {u.id: u for u in await user_service.list_users()}

        assert users[with_profile].role is UserRole.STUDENT
        assert users[with_profile].last_name == "Hopper"
        assert users[role_only].role is UserRole.INSTRUCTOR


class TestProfiles:
    """Profile reads and writes."""

    @pytest.mark.asyncio
    async def test_missing_profile_is_empty(self, user_service, user_id) -> None:
        profile = await user_service.get_profile(user_id, email="ada@example.com")

        assert profile.id == user_id
        assert profile.first_name is None
        assert profile.email == "ada@example.com"

    @pytest.mark.asyncio
    async def test_update_profile_upserts(self, user_service, user_id) -> None:
        await user_service.update_profile(user_id, first_name="Ada")
        await user_service.update_profile(user_id, last_name="Lovelace")

        profile = await user_service.get_profile(user_id)

        assert (profile.first_name, profile.last_name) == ("Ada", "Lovelace")

    @pytest.mark.asyncio
    async def test_user_registrations_include_course(
        self, test_async_db, user_service, published_course, mock_notifier, participant_payload, user_id
    ) -> None:
        registrations = RegistrationService(test_async_db, mock_notifier, RegistrationSettings())
        await registrations.register_individual(
            published_course.id, IndividualRegistrationRequest(**participant_payload), user_id=user_id
        )

        rows = await user_service.get_user_registrations(user_id)

        assert len(rows) == 1
        assert rows[0].course.slug == published_course.slug


class TestTestimonials:
    """Testimonial visibility."""

    @pytest.mark.asyncio
    async def test_only_published_testimonials_listed(self, test_async_db) -> None:
        service = testimonials.TestimonialService(db=test_async_db)
        await service.create(name="Ada", content="Great course", published=True, is_featured=True)
        await service.create(name="Grace", content="Very practical", published=True)
        await service.create(name="Draft", content="Not yet", published=False)

        published = await service.list_published()
        featured = await service.list_published(featured_only=True)
        everything = await service.list_all()

        assert {t.name for t in published} == {"Ada", "Grace"}
        assert [t.name for t in featured] == ["Ada"]
        assert len(everything) == 3

    @pytest.mark.asyncio
    async def test_update_and_delete(self, test_async_db) -> None:
        service = testimonials.TestimonialService(db=test_async_db)
        created = await service.create(name="Ada", content="Great course")

        updated = await service.update(created.id, published=True, rating=5)
        await service.delete(created.id)

        assert updated.published and updated.rating == 5
        with pytest.raises(NotFoundError):
            await service.delete(created.id)


class TestContact:
    """Contact form delivery."""

    @pytest.mark.asyncio
    async def test_message_forwarded_to_function(self, mock_notifier) -> None:
        service = ContactService(notifier=mock_notifier)
        request = ContactRequest(
            name="Ada Lovelace", email="ada@example.com", subject="In-house training", message="Hello"
        )

        notice = await service.submit_contact(request)

        name, body = mock_notifier.invoke.await_args.args
        assert name == CONTACT_FORM_FUNCTION
        assert body["subject"] == "In-house training"
        assert notice.title == "Message sent"

    @pytest.mark.asyncio
    async def test_delivery_failure_is_reported(self, mock_notifier) -> None:
        mock_notifier.invoke = AsyncMock(side_effect=NotificationError("Function failed"))
        service = ContactService(notifier=mock_notifier)

        with pytest.raises(NotificationError):
            await service.submit_contact(
                ContactRequest(name="Ada", email="ada@example.com", message="Hello")
            )
