"""
Registration workflow service.

Individual and group course sign-up: validate, persist rows as
pending/unpaid, then send a best-effort notification.

Dependencies: coaching_backend.boundary.db.CRUD, coaching_backend.boundary.functions
System role: Registration use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coaching_backend.boundary.db.CRUD.course_crud import course_crud
from coaching_backend.boundary.db.CRUD.registration_crud import registration_crud
from coaching_backend.boundary.db.errors import is_unique_violation
from coaching_backend.boundary.db.models.course_model import CourseModel
from coaching_backend.boundary.db.models.registration_model import (
    PLACEHOLDER_USER_ID,
    PaymentStatus,
    RegistrationStatus,
)
from coaching_backend.boundary.functions import (
    COURSE_REGISTRATION_NOTIFICATION,
    GROUP_REGISTRATION_NOTIFICATION,
    NotificationClient,
)
from coaching_backend.configs.registration import RegistrationSettings
from coaching_backend.core.exceptions import (
    AlreadyRegisteredError,
    BackendCallError,
    CapacityExceededError,
    GroupRegistrationError,
    NotificationError,
    NotFoundError,
    ValidationError,
)
from coaching_backend.models.common import success_notice
from coaching_backend.models.registration import (
    GroupRegistrationRequest,
    GroupRegistrationResult,
    IndividualRegistrationRequest,
    RegistrationResponse,
    RegistrationResult,
)
from coaching_backend.observability.log_utils import log_exception_with_context, mask_email

logger = logging.getLogger(__name__)


class RegistrationService:
    """
    Registration workflow orchestrator.

    Inserts are never retried. The notification runs only after the
    row(s) are committed and its failure never fails the registration.
    """

    def __init__(
        self,
        db: AsyncSession,
        notifier: NotificationClient,
        settings: RegistrationSettings,
    ) -> None:
        """
        Initialize registration service.

        Args:
            db: Async SQLAlchemy session
            notifier: Notification function client
            settings: Group insert policy, minimum group size and capacity switch
        """
        self.db = db
        self.notifier = notifier
        self.settings = settings

    async def _require_course(self, course_id: UUID) -> CourseModel:
        course = await course_crud.get_by_id(self.db, course_id)
        if course is None or course.is_template:
            raise NotFoundError("course", course_id)
        return course

    async def _reserve(self, course_id: UUID, seats: int) -> None:
        if not self.settings.enforce_capacity:
            return
        if not await course_crud.reserve_seats(self.db, course_id, seats):
            raise CapacityExceededError(course_id, seats)

    async def _notify(self, name: str, body: dict) -> bool:
        """Invoke a notification function; failures are logged, never raised."""
        try:
            await self.notifier.invoke(name, body)
            return True
        except NotificationError as e:
            logger.warning(
                f"{__name__}:_notify - Notification {name} failed, registration kept",
                extra={"function": name, "error": e.message, "details": e.details},
            )
            return False

    async def register_individual(
        self,
        course_id: UUID,
        participant: IndividualRegistrationRequest,
        user_id: UUID | None = None,
    ) -> RegistrationResult:
        """
        Register one participant for a course.

        Args:
            course_id: Target course UUID
            participant: Validated participant details
            user_id: Signed-in user, None for guests

        Returns:
            RegistrationResult: The stored row and its success notice

        Raises:
            NotFoundError: Unknown course
            AlreadyRegisteredError: The user already holds a registration
            CapacityExceededError: Course full (capacity enforcement only)
            BackendCallError: Insert failed for any other reason
        """
        await self._require_course(course_id)
        details = participant.model_dump(mode="json")

        try:
            await self._reserve(course_id, 1)
            row = await registration_crud.create(
                self.db,
                course_id=course_id,
                user_id=user_id,
                status=RegistrationStatus.PENDING,
                payment_status=PaymentStatus.UNPAID,
                is_group=False,
                registration_metadata=details,
            )
            await self.db.commit()
        except CapacityExceededError:
            await self.db.rollback()
            raise
        except IntegrityError as e:
            await self.db.rollback()
            if is_unique_violation(e):
                logger.info(
                    f"{__name__}:register_individual - Duplicate registration",
                    extra={"course_id": str(course_id), "user_id": str(user_id)},
                )
                raise AlreadyRegisteredError(course_id, user_id) from e
            log_exception_with_context(
                logger,
                f"{__name__}:register_individual - Insert rejected",
                e,
                course_id=course_id,
            )
            raise BackendCallError("Registration could not be saved", operation="insert") from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                f"{__name__}:register_individual - Insert failed",
                e,
                course_id=course_id,
            )
            raise BackendCallError("Registration could not be saved", operation="insert") from e

        registration = RegistrationResponse.from_model(row)
        logger.info(
            f"{__name__}:register_individual - Registration stored",
            extra={
                "registration_id": str(registration.id),
                "course_id": str(course_id),
                "email": mask_email(participant.email),
            },
        )

        await self._notify(
            COURSE_REGISTRATION_NOTIFICATION,
            {
                "registration": {
                    **details,
                    "course_id": str(course_id),
                    "registration_id": str(registration.id),
                }
            },
        )
        return RegistrationResult(
            registration=registration,
            notice=success_notice(
                "Registration submitted!",
                "We've received your course registration.",
            ),
        )

    async def register_group(
        self,
        course_id: UUID,
        group: GroupRegistrationRequest,
        submitted_by: UUID | None = None,
    ) -> GroupRegistrationResult:
        """
        Register every participant of a group, one row each.

        Rows share group_reference (the company) and carry the group
        contact in metadata. Inserts run one at a time. On the first
        failure the configured policy decides what remains stored:
        "atomic" keeps nothing, "abort_on_first_error" keeps the rows
        inserted before the failure.

        Args:
            course_id: Target course UUID
            group: Validated group submission
            submitted_by: Signed-in user who submitted the form, if any

        Returns:
            GroupRegistrationResult: Stored rows and the success notice

        Raises:
            ValidationError: Too few participants
            NotFoundError: Unknown course
            CapacityExceededError: Course full (atomic policy, capacity enforcement)
            GroupRegistrationError: A participant insert failed
        """
        minimum = self.settings.min_group_participants
        if len(group.participants) < minimum:
            raise ValidationError(
                f"At least {minimum} participants are required for a group registration",
                field="participants",
            )
        await self._require_course(course_id)

        atomic = self.settings.group_insert_policy == "atomic"
        contact = group.contact.model_dump(mode="json")
        persisted: list[RegistrationResponse] = []
        pending_rows = []

        if atomic:
            try:
                await self._reserve(course_id, len(group.participants))
            except CapacityExceededError:
                await self.db.rollback()
                raise

        for index, participant in enumerate(group.participants):
            try:
                if not atomic:
                    await self._reserve(course_id, 1)
                row = await registration_crud.create(
                    self.db,
                    course_id=course_id,
                    user_id=PLACEHOLDER_USER_ID,
                    status=RegistrationStatus.PENDING,
                    payment_status=PaymentStatus.UNPAID,
                    is_group=True,
                    group_reference=group.company,
                    registration_metadata={
                        **participant.model_dump(mode="json"),
                        "company": group.company,
                        "special_requests": group.special_requests,
                        "group_contact": contact,
                        "submitted_by": str(submitted_by) if submitted_by else None,
                    },
                )
                if atomic:
                    pending_rows.append(row)
                else:
                    await self.db.commit()
                    persisted.append(RegistrationResponse.from_model(row))
            except (SQLAlchemyError, CapacityExceededError) as e:
                await self.db.rollback()
                if atomic:
                    persisted = []
                reason = e.message if isinstance(e, CapacityExceededError) else str(e)
                log_exception_with_context(
                    logger,
                    f"{__name__}:register_group - Participant insert failed",
                    e,
                    course_id=course_id,
                    group_reference=group.company,
                    failed_index=index,
                    persisted_count=len(persisted),
                    policy=self.settings.group_insert_policy,
                )
                raise GroupRegistrationError(
                    "Group registration failed",
                    failed_index=index,
                    persisted=persisted,
                    details={"reason": reason},
                ) from e

        if atomic:
            try:
                await self.db.commit()
            except SQLAlchemyError as e:
                await self.db.rollback()
                raise GroupRegistrationError(
                    "Group registration failed",
                    failed_index=len(group.participants) - 1,
                    persisted=[],
                    details={"reason": str(e)},
                ) from e
            persisted = [RegistrationResponse.from_model(row) for row in pending_rows]

        logger.info(
            f"{__name__}:register_group - Group stored",
            extra={
                "course_id": str(course_id),
                "group_reference": group.company,
                "participants": len(persisted),
            },
        )

        await self._notify(
            GROUP_REGISTRATION_NOTIFICATION,
            {
                "groupRegistration": {
                    **group.model_dump(mode="json"),
                    "course_id": str(course_id),
                    "registration_ids": [str(r.id) for r in persisted],
                }
            },
        )
        return GroupRegistrationResult(
            registrations=persisted,
            group_reference=group.company,
            notice=success_notice(
                "Group registration submitted!",
                f"We've received your registration for {len(persisted)} participants.",
            ),
        )
