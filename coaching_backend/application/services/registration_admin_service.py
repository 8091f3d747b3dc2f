"""
Registration administration service.

Admin listing, status/payment updates and deletion of registrations.
Listings always read the store, so a change is visible on the next call.

Dependencies: coaching_backend.boundary.db.CRUD
System role: Back-office registration management
"""

import logging
from typing import Iterable
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coaching_backend.boundary.db.CRUD.course_crud import course_crud
from coaching_backend.boundary.db.CRUD.profile_crud import profile_crud
from coaching_backend.boundary.db.CRUD.registration_crud import registration_crud
from coaching_backend.boundary.db.models.registration_model import (
    PLACEHOLDER_USER_ID,
    CourseRegistrationModel,
    PaymentStatus,
    RegistrationStatus,
)
from coaching_backend.core.exceptions import (
    BackendCallError,
    CapacityExceededError,
    NotFoundError,
    ValidationError,
)
from coaching_backend.models.common import Notice, success_notice
from coaching_backend.models.registration import RegistrationResponse, StatusCounts
from coaching_backend.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class RegistrationAdminService:
    """Registration administration orchestrator."""

    def __init__(self, db: AsyncSession, enforce_capacity: bool = False) -> None:
        """
        Initialize registration admin service.

        Args:
            db: Async SQLAlchemy session
            enforce_capacity: Keep the course seat counter in step with cancellations
        """
        self.db = db
        self.enforce_capacity = enforce_capacity

    async def _with_profiles(
        self,
        rows: Iterable[CourseRegistrationModel],
    ) -> list[RegistrationResponse]:
        rows = list(rows)
        owner_ids = {
            row.user_id
            for row in rows
            if row.user_id is not None and row.user_id != PLACEHOLDER_USER_ID
        }
        profiles = await profile_crud.get_many(self.db, owner_ids)
        return [
            RegistrationResponse.from_model(row, profile=profiles.get(row.user_id))
            for row in rows
        ]

    async def list_for_course(self, course_id: UUID) -> list[RegistrationResponse]:
        """
        List a course's registrations, newest first, with course and owner profile.

        Args:
            course_id: Course UUID

        Returns:
            list[RegistrationResponse]
        """
        rows = await registration_crud.list_filtered(self.db, course_id=course_id)
        return await self._with_profiles(rows)

    async def list_all(
        self,
        status: RegistrationStatus | None = None,
        course_id: UUID | None = None,
        search: str | None = None,
    ) -> list[RegistrationResponse]:
        """
        List registrations across courses with optional filters.

        Args:
            status: Only this status
            course_id: Only this course
            search: Free-text match on course title, company or participant details

        Returns:
            list[RegistrationResponse]
        """
        rows = await registration_crud.list_filtered(
            self.db,
            status=status,
            course_id=course_id,
            search=search.strip() if search else None,
        )
        return await self._with_profiles(rows)

    async def update_status(
        self,
        registration_id: UUID,
        status: RegistrationStatus | None = None,
        payment_status: PaymentStatus | None = None,
    ) -> tuple[RegistrationResponse, Notice]:
        """
        Change status and/or payment status. Omitted fields stay as they are.

        Args:
            registration_id: Registration UUID
            status: New registration status
            payment_status: New payment status

        Returns:
            tuple: Updated registration and its notice

        Raises:
            ValidationError: Neither field given
            NotFoundError: Unknown registration
            CapacityExceededError: Reinstating a cancelled row into a full course
        """
        if status is None and payment_status is None:
            raise ValidationError("Nothing to update", field="status")

        current = await registration_crud.get_by_id(self.db, registration_id)
        if current is None:
            raise NotFoundError("registration", registration_id)

        values: dict = {}
        if status is not None:
            values["status"] = status
        if payment_status is not None:
            values["payment_status"] = payment_status

        try:
            if self.enforce_capacity and status is not None:
                await self._sync_seats(current, status)
            updated = await registration_crud.update_by_id(self.db, registration_id, **values)
            await self.db.commit()
            await self.db.refresh(updated)
        except CapacityExceededError:
            await self.db.rollback()
            raise
        except SQLAlchemyError as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                f"{__name__}:update_status - Update failed",
                e,
                registration_id=registration_id,
            )
            raise BackendCallError("Registration could not be updated", operation="update") from e

        logger.info(
            f"{__name__}:update_status - Registration updated",
            extra={"registration_id": str(registration_id), **{k: v.value for k, v in values.items()}},
        )
        return (
            RegistrationResponse.from_model(updated),
            success_notice("Registration updated", "The registration has been updated."),
        )

    async def _sync_seats(
        self,
        current: CourseRegistrationModel,
        new_status: RegistrationStatus,
    ) -> None:
        was_cancelled = current.status == RegistrationStatus.CANCELLED
        now_cancelled = new_status == RegistrationStatus.CANCELLED
        if was_cancelled and not now_cancelled:
            if not await course_crud.reserve_seats(self.db, current.course_id, 1):
                raise CapacityExceededError(current.course_id, 1)
        elif now_cancelled and not was_cancelled:
            await course_crud.release_seats(self.db, current.course_id, 1)

    async def delete(self, registration_id: UUID) -> Notice:
        """
        Hard-delete a registration.

        Args:
            registration_id: Registration UUID

        Returns:
            Notice confirming the deletion

        Raises:
            NotFoundError: Unknown registration
        """
        current = await registration_crud.get_by_id(self.db, registration_id)
        if current is None:
            raise NotFoundError("registration", registration_id)

        try:
            if self.enforce_capacity and current.status != RegistrationStatus.CANCELLED:
                await course_crud.release_seats(self.db, current.course_id, 1)
            await registration_crud.delete_by_id(self.db, registration_id)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                f"{__name__}:delete - Delete failed",
                e,
                registration_id=registration_id,
            )
            raise BackendCallError("Registration could not be deleted", operation="delete") from e

        logger.info(
            f"{__name__}:delete - Registration deleted",
            extra={"registration_id": str(registration_id)},
        )
        return success_notice("Registration deleted", "The registration has been removed.")

    @staticmethod
    def status_counts(registrations: Iterable[RegistrationResponse]) -> StatusCounts:
        """
        Count a loaded registration list by status.

        Args:
            registrations: Rows already loaded for display

        Returns:
            StatusCounts with a total
        """
        counts = StatusCounts()
        for registration in registrations:
            field = registration.status.value
            setattr(counts, field, getattr(counts, field) + 1)
            counts.total += 1
        return counts
