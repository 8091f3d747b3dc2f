"""
Integration tests for the registration workflow.

Runs RegistrationService and RegistrationAdminService against the
in-memory database: stored state after notification failures, group
insert policies, duplicates, capacity and admin status changes.

System role: End-to-end verification of registration persistence
"""

import uuid
from unittest.mock import patch

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from coaching_backend.application.services.registration_admin_service import (
    RegistrationAdminService,
)
from coaching_backend.application.services.registration_service import RegistrationService
from coaching_backend.application.services.user_service import UserService
from coaching_backend.boundary.db.CRUD.registration_crud import registration_crud
from coaching_backend.boundary.db.models.registration_model import (
    PLACEHOLDER_USER_ID,
    CourseRegistrationModel,
    PaymentStatus,
    RegistrationStatus,
)
from coaching_backend.configs.registration import RegistrationSettings
from coaching_backend.core.exceptions import (
    AlreadyRegisteredError,
    CapacityExceededError,
    GroupRegistrationError,
    NotificationError,
)
from coaching_backend.models.registration import (
    GroupRegistrationRequest,
    IndividualRegistrationRequest,
)


async def _count_rows(db, course_id) -> int:
    result = await db.execute(
        select(func.count())
        .select_from(CourseRegistrationModel)
        .where(CourseRegistrationModel.course_id == course_id)
    )
    return result.scalar_one()


def _service(db, notifier, **settings) -> RegistrationService:
    return RegistrationService(db=db, notifier=notifier, settings=RegistrationSettings(**settings))


def _fail_on_call(failing_call: int):
    """Wrap registration_crud.create so the given 1-based call raises."""
    original = registration_crud.create
    calls = {"count": 0}

    async def create(session, **values):
        calls["count"] += 1
        if calls["count"] == failing_call:
            raise OperationalError("INSERT INTO course_registrations", {}, Exception("connection lost"))
        return await original(session, **values)

    return create


class TestIndividualRegistration:
    """Stored state for individual registrations."""

    @pytest.mark.asyncio
    async def test_notification_failure_still_stores_one_pending_row(
        self, test_async_db, mock_notifier, published_course, participant_payload
    ) -> None:
        mock_notifier.invoke.side_effect = NotificationError("Function failed with status 500")
        service = _service(test_async_db, mock_notifier)

        result = await service.register_individual(
            published_course.id, IndividualRegistrationRequest(**participant_payload)
        )

        assert result.notice.title == "Registration submitted!"
        rows = await registration_crud.list_filtered(test_async_db, course_id=published_course.id)
        assert len(rows) == 1
        assert rows[0].status is RegistrationStatus.PENDING
        assert rows[0].payment_status is PaymentStatus.UNPAID
        assert rows[0].user_id is None

    @pytest.mark.asyncio
    async def test_second_registration_by_same_user_is_rejected(
        self, test_async_db, mock_notifier, published_course, participant_payload, user_id
    ) -> None:
        course_id = published_course.id
        service = _service(test_async_db, mock_notifier)
        request = IndividualRegistrationRequest(**participant_payload)
        await service.register_individual(course_id, request, user_id=user_id)

        with pytest.raises(AlreadyRegisteredError):
            await service.register_individual(course_id, request, user_id=user_id)

        assert await _count_rows(test_async_db, course_id) == 1
        assert mock_notifier.invoke.await_count == 1

    @pytest.mark.asyncio
    async def test_guests_may_register_repeatedly(
        self, test_async_db, mock_notifier, published_course, participant_payload
    ) -> None:
        service = _service(test_async_db, mock_notifier)
        request = IndividualRegistrationRequest(**participant_payload)

        await service.register_individual(published_course.id, request)
        await service.register_individual(published_course.id, request)

        assert await _count_rows(test_async_db, published_course.id) == 2


class TestGroupPolicies:
    """Stored state when the K-th participant insert fails."""

    @pytest.mark.asyncio
    async def test_atomic_policy_keeps_no_rows(
        self, test_async_db, mock_notifier, published_course, group_payload
    ) -> None:
        course_id = published_course.id
        service = _service(test_async_db, mock_notifier, group_insert_policy="atomic")

        with patch.object(registration_crud, "create", _fail_on_call(3)):
            with pytest.raises(GroupRegistrationError) as exc_info:
                await service.register_group(
                    course_id, GroupRegistrationRequest(**group_payload)
                )

        assert exc_info.value.failed_index == 2
        assert exc_info.value.persisted == []
        assert await _count_rows(test_async_db, course_id) == 0
        mock_notifier.invoke.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_abort_policy_keeps_rows_before_failure(
        self, test_async_db, mock_notifier, published_course, group_payload
    ) -> None:
        course_id = published_course.id
        service = _service(test_async_db, mock_notifier, group_insert_policy="abort_on_first_error")

        with patch.object(registration_crud, "create", _fail_on_call(3)):
            with pytest.raises(GroupRegistrationError) as exc_info:
                await service.register_group(
                    course_id, GroupRegistrationRequest(**group_payload)
                )

        assert len(exc_info.value.persisted) == 2
        assert await _count_rows(test_async_db, course_id) == 2
        mock_notifier.invoke.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_successful_group_rows_share_reference(
        self, test_async_db, mock_notifier, published_course, group_payload
    ) -> None:
        service = _service(test_async_db, mock_notifier)

        result = await service.register_group(
            published_course.id, GroupRegistrationRequest(**group_payload)
        )

        rows = await registration_crud.list_filtered(test_async_db, course_id=published_course.id)
        assert len(rows) == len(result.registrations) == 3
        assert {row.group_reference for row in rows} == {"Initech"}
        assert {row.user_id for row in rows} == {PLACEHOLDER_USER_ID}
        assert all(row.is_group for row in rows)


class TestCapacity:
    """Capacity is informational unless enforcement is switched on."""

    @pytest.mark.asyncio
    async def test_capacity_is_not_enforced_by_default(
        self, test_async_db, mock_notifier, make_course, participant_payload
    ) -> None:
        course = await make_course(capacity=1)
        service = _service(test_async_db, mock_notifier)
        request = IndividualRegistrationRequest(**participant_payload)

        await service.register_individual(course.id, request, user_id=uuid.uuid4())
        await service.register_individual(course.id, request, user_id=uuid.uuid4())

        assert await _count_rows(test_async_db, course.id) == 2

    @pytest.mark.asyncio
    async def test_enforced_capacity_rejects_extra_seat(
        self, test_async_db, mock_notifier, make_course, participant_payload
    ) -> None:
        course = await make_course(capacity=1)
        course_id = course.id
        service = _service(test_async_db, mock_notifier, enforce_capacity=True)
        request = IndividualRegistrationRequest(**participant_payload)

        await service.register_individual(course_id, request, user_id=uuid.uuid4())
        with pytest.raises(CapacityExceededError):
            await service.register_individual(course_id, request, user_id=uuid.uuid4())

        assert await _count_rows(test_async_db, course_id) == 1

    @pytest.mark.asyncio
    async def test_cancelling_frees_the_seat(
        self, test_async_db, mock_notifier, make_course, participant_payload
    ) -> None:
        course = await make_course(capacity=1)
        service = _service(test_async_db, mock_notifier, enforce_capacity=True)
        admin = RegistrationAdminService(test_async_db, enforce_capacity=True)
        request = IndividualRegistrationRequest(**participant_payload)

        first = await service.register_individual(course.id, request, user_id=uuid.uuid4())
        await admin.update_status(first.registration.id, status=RegistrationStatus.CANCELLED)
        await service.register_individual(course.id, request, user_id=uuid.uuid4())

        await test_async_db.refresh(course)
        assert course.reserved_seats == 1


class TestAdminUpdates:
    """Admin status changes and listings."""

    @pytest.mark.asyncio
    async def test_status_update_visible_in_next_listing(
        self, test_async_db, mock_notifier, published_course, participant_payload
    ) -> None:
        service = _service(test_async_db, mock_notifier)
        admin = RegistrationAdminService(test_async_db)
        created = await service.register_individual(
            published_course.id, IndividualRegistrationRequest(**participant_payload)
        )

        updated, notice = await admin.update_status(
            created.registration.id, status=RegistrationStatus.CONFIRMED
        )
        listed = await admin.list_for_course(published_course.id)

        assert updated.status is RegistrationStatus.CONFIRMED
        assert notice.title == "Registration updated"
        assert listed[0].status is RegistrationStatus.CONFIRMED
        assert listed[0].payment_status is PaymentStatus.UNPAID
        assert listed[0].course.title == published_course.title

    @pytest.mark.asyncio
    async def test_listing_includes_owner_profile_with_email(
        self, test_async_db, mock_notifier, published_course, participant_payload, user_id
    ) -> None:
        await UserService(test_async_db).update_profile(
            user_id, email="ada@example.com", first_name="Ada", last_name="Lovelace"
        )
        service = _service(test_async_db, mock_notifier)
        await service.register_individual(
            published_course.id, IndividualRegistrationRequest(**participant_payload), user_id=user_id
        )
        await service.register_individual(
            published_course.id, IndividualRegistrationRequest(**participant_payload)
        )

        listed = await RegistrationAdminService(test_async_db).list_for_course(published_course.id)

        by_owner = {row.user_id: row for row in listed}
        assert by_owner[user_id].profile.email == "ada@example.com"
        assert by_owner[user_id].profile.last_name == "Lovelace"
        assert by_owner[None].profile is None

    @pytest.mark.asyncio
    async def test_search_and_counts(
        self, test_async_db, mock_notifier, published_course, participant_payload, group_payload
    ) -> None:
        service = _service(test_async_db, mock_notifier)
        admin = RegistrationAdminService(test_async_db)
        await service.register_individual(
            published_course.id, IndividualRegistrationRequest(**participant_payload)
        )
        await service.register_group(published_course.id, GroupRegistrationRequest(**group_payload))

        matches = await admin.list_all(search="initech")
        everything = await admin.list_all()
        counts = RegistrationAdminService.status_counts(everything)

        assert len(matches) == 3
        assert counts.pending == 4
        assert counts.total == 4

    @pytest.mark.asyncio
    async def test_delete_removes_row(
        self, test_async_db, mock_notifier, published_course, participant_payload
    ) -> None:
        service = _service(test_async_db, mock_notifier)
        admin = RegistrationAdminService(test_async_db)
        created = await service.register_individual(
            published_course.id, IndividualRegistrationRequest(**participant_payload)
        )

        notice = await admin.delete(created.registration.id)

        assert notice.title == "Registration deleted"
        assert await _count_rows(test_async_db, published_course.id) == 0
