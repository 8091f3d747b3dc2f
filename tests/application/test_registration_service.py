"""
Test suite for RegistrationService.

Tests the registration workflow against mocked CRUD singletons and a
mocked notifier: validation, course lookup, duplicate handling and the
best-effort notification.

System role: Verification of registration orchestration
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from coaching_backend.application.services.registration_service import RegistrationService
from coaching_backend.boundary.db.models.course_model import CourseModel
from coaching_backend.boundary.db.models.registration_model import (
    CourseRegistrationModel,
    PaymentStatus,
    RegistrationStatus,
)
from coaching_backend.boundary.functions import (
    COURSE_REGISTRATION_NOTIFICATION,
    GROUP_REGISTRATION_NOTIFICATION,
)
from coaching_backend.configs.registration import RegistrationSettings
from coaching_backend.core.exceptions import (
    AlreadyRegisteredError,
    BackendCallError,
    NotFoundError,
    NotificationError,
    ValidationError,
)
from coaching_backend.models.registration import (
    GroupRegistrationRequest,
    IndividualRegistrationRequest,
)

SERVICE_MODULE = "coaching_backend.application.services.registration_service"


class _UniqueViolation(Exception):
    sqlstate = "23505"


@pytest.fixture
def mock_db_session() -> AsyncSession:
    """Provide mock async database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def course() -> CourseModel:
    return CourseModel(id=uuid.uuid4(), slug="safe-agilist", title="SAFe Agilist", is_template=False)


def _row(**values) -> CourseRegistrationModel:
    now = datetime.now(timezone.utc)
    return CourseRegistrationModel(id=uuid.uuid4(), created_at=now, updated_at=now, **values)


@pytest.fixture
def mock_course_crud(course: CourseModel):
    with patch(f"{SERVICE_MODULE}.course_crud") as crud:
        crud.get_by_id = AsyncMock(return_value=course)
        crud.reserve_seats = AsyncMock(return_value=True)
        yield crud


@pytest.fixture
def mock_registration_crud():
    with patch(f"{SERVICE_MODULE}.registration_crud") as crud:
        crud.create = AsyncMock(side_effect=lambda session, **values: _row(**values))
        yield crud


def _service(db, notifier, **settings) -> RegistrationService:
    return RegistrationService(db=db, notifier=notifier, settings=RegistrationSettings(**settings))


class TestRegisterIndividual:
    """Test suite for register_individual()."""

    @pytest.mark.asyncio
    async def test_row_is_pending_and_unpaid(
        self,
        mock_db_session,
        mock_notifier,
        mock_course_crud,
        mock_registration_crud,
        course,
        participant_payload,
        user_id,
    ) -> None:
        service = _service(mock_db_session, mock_notifier)

        result = await service.register_individual(
            course.id, IndividualRegistrationRequest(**participant_payload), user_id=user_id
        )

        assert result.registration.status is RegistrationStatus.PENDING
        assert result.registration.payment_status is PaymentStatus.UNPAID
        assert result.registration.user_id == user_id
        assert result.registration.metadata["email"] == "ada@example.com"
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_notification_carries_registration_details(
        self,
        mock_db_session,
        mock_notifier,
        mock_course_crud,
        mock_registration_crud,
        course,
        participant_payload,
    ) -> None:
        service = _service(mock_db_session, mock_notifier)

        result = await service.register_individual(
            course.id, IndividualRegistrationRequest(**participant_payload)
        )

        name, body = mock_notifier.invoke.await_args.args
        assert name == COURSE_REGISTRATION_NOTIFICATION
        assert body["registration"]["first_name"] == "Ada"
        assert body["registration"]["course_id"] == str(course.id)
        assert body["registration"]["registration_id"] == str(result.registration.id)

    @pytest.mark.asyncio
    async def test_notification_failure_keeps_registration(
        self,
        mock_db_session,
        mock_notifier,
        mock_course_crud,
        mock_registration_crud,
        course,
        participant_payload,
    ) -> None:
        mock_notifier.invoke.side_effect = NotificationError("Function failed with status 500")
        service = _service(mock_db_session, mock_notifier)

        result = await service.register_individual(
            course.id, IndividualRegistrationRequest(**participant_payload)
        )

        assert result.notice.variant == "default"
        mock_db_session.commit.assert_awaited_once()
        mock_db_session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_template_course_is_not_found(
        self,
        mock_db_session,
        mock_notifier,
        mock_course_crud,
        mock_registration_crud,
        course,
        participant_payload,
    ) -> None:
        course.is_template = True
        service = _service(mock_db_session, mock_notifier)

        with pytest.raises(NotFoundError):
            await service.register_individual(
                course.id, IndividualRegistrationRequest(**participant_payload)
            )

        mock_registration_crud.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_unique_violation_becomes_already_registered(
        self,
        mock_db_session,
        mock_notifier,
        mock_course_crud,
        mock_registration_crud,
        course,
        participant_payload,
        user_id,
    ) -> None:
        mock_registration_crud.create.side_effect = IntegrityError(
            "INSERT INTO course_registrations", {}, _UniqueViolation()
        )
        service = _service(mock_db_session, mock_notifier)

        with pytest.raises(AlreadyRegisteredError):
            await service.register_individual(
                course.id, IndividualRegistrationRequest(**participant_payload), user_id=user_id
            )

        mock_db_session.rollback.assert_awaited_once()
        mock_notifier.invoke.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_failure_is_not_retried(
        self,
        mock_db_session,
        mock_notifier,
        mock_course_crud,
        mock_registration_crud,
        course,
        participant_payload,
        caplog,
    ) -> None:
        mock_registration_crud.create.side_effect = OperationalError(
            "INSERT INTO course_registrations", {}, Exception("connection reset")
        )
        service = _service(mock_db_session, mock_notifier)

        with pytest.raises(BackendCallError):
            await service.register_individual(
                course.id, IndividualRegistrationRequest(**participant_payload)
            )

        assert mock_registration_crud.create.await_count == 1
        failure = next(r for r in caplog.records if r.levelname == "ERROR")
        assert failure.error_type == "OperationalError"
        assert failure.course_id == str(course.id)
        assert failure.exc_info is not None


class TestRegisterGroup:
    """Test suite for register_group()."""

    @pytest.mark.asyncio
    async def test_one_row_per_participant(
        self,
        mock_db_session,
        mock_notifier,
        mock_course_crud,
        mock_registration_crud,
        course,
        group_payload,
        user_id,
    ) -> None:
        service = _service(mock_db_session, mock_notifier)

        result = await service.register_group(
            course.id, GroupRegistrationRequest(**group_payload), submitted_by=user_id
        )

        assert len(result.registrations) == 3
        assert result.group_reference == "Initech"
        for registration in result.registrations:
            assert registration.is_group
            assert registration.group_reference == "Initech"
            assert registration.metadata["group_contact"]["email"] == "bill@initech.example"
            assert registration.metadata["submitted_by"] == str(user_id)

    @pytest.mark.asyncio
    async def test_group_notification_lists_rows(
        self,
        mock_db_session,
        mock_notifier,
        mock_course_crud,
        mock_registration_crud,
        course,
        group_payload,
    ) -> None:
        service = _service(mock_db_session, mock_notifier)

        result = await service.register_group(course.id, GroupRegistrationRequest(**group_payload))

        name, body = mock_notifier.invoke.await_args.args
        assert name == GROUP_REGISTRATION_NOTIFICATION
        assert body["groupRegistration"]["company"] == "Initech"
        assert body["groupRegistration"]["registration_ids"] == [
            str(r.id) for r in result.registrations
        ]

    @pytest.mark.asyncio
    async def test_too_few_participants_rejected(
        self,
        mock_db_session,
        mock_notifier,
        mock_course_crud,
        mock_registration_crud,
        course,
        group_payload,
    ) -> None:
        group_payload["participants"] = group_payload["participants"][:1]
        service = _service(mock_db_session, mock_notifier)

        with pytest.raises(ValidationError) as exc_info:
            await service.register_group(course.id, GroupRegistrationRequest(**group_payload))

        assert exc_info.value.field == "participants"
        mock_registration_crud.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_minimum_is_configurable(
        self,
        mock_db_session,
        mock_notifier,
        mock_course_crud,
        mock_registration_crud,
        course,
        group_payload,
    ) -> None:
        service = _service(mock_db_session, mock_notifier, min_group_participants=5)

        with pytest.raises(ValidationError):
            await service.register_group(course.id, GroupRegistrationRequest(**group_payload))


class TestRegistrationRequests:
    """Test suite for request schema validation."""

    def test_blank_names_rejected(self, participant_payload) -> None:
        from pydantic import ValidationError as SchemaError

        participant_payload["first_name"] = "   "
        with pytest.raises(SchemaError):
            IndividualRegistrationRequest(**participant_payload)

    def test_invalid_email_rejected(self, participant_payload) -> None:
        from pydantic import ValidationError as SchemaError

        participant_payload["email"] = "not-an-email"
        with pytest.raises(SchemaError):
            IndividualRegistrationRequest(**participant_payload)

    def test_group_contact_built_from_fields(self, group_payload) -> None:
        contact = GroupRegistrationRequest(**group_payload).contact
        assert contact.name == "Bill Lumbergh"
        assert contact.phone == "555-0100"
