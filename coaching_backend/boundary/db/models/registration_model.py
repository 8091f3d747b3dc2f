"""
Course registration ORM model.

One row per participant per course. Group registrations are N rows that
share a group_reference (the company name); there is no group entity.

Dependencies: sqlalchemy, coaching_backend.boundary.db.base
System role: Registration persistence
"""

import enum
import uuid

from sqlalchemy import Boolean, Enum, ForeignKey, Index, JSON, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coaching_backend.boundary.db.base import Base, UUIDMixin, TimestampMixin

# Group participant rows carry this id; their identity lives in metadata.
PLACEHOLDER_USER_ID = uuid.UUID(int=0)


class RegistrationStatus(str, enum.Enum):
    """
    Registration lifecycle states.

    PENDING: Submitted, awaiting admin review
    CONFIRMED: Seat confirmed by an admin
    WAITLIST: Parked until a seat frees up
    CANCELLED: Withdrawn or rejected
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    WAITLIST = "waitlist"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    """Payment states tracked manually by admins."""

    UNPAID = "unpaid"
    PARTIALLY_PAID = "partially-paid"
    PAID = "paid"
    REFUNDED = "refunded"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class CourseRegistrationModel(Base, UUIDMixin, TimestampMixin):
    """
    Course registration ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        course_id: Foreign key to courses (CASCADE on delete)
        user_id: Registering user, None for guests, PLACEHOLDER_USER_ID for group rows
        status: RegistrationStatus
        payment_status: PaymentStatus
        is_group: Row belongs to a group submission
        group_reference: Company name shared by all rows of one group
        registration_metadata: Participant details (column "metadata")
        course: Owning CourseModel

    Constraints:
        (course_id, user_id) unique for individual rows with a user id
    """

    __tablename__ = "course_registrations"
    __table_args__ = (
        Index(
            "uq_course_registrations_course_user",
            "course_id",
            "user_id",
            unique=True,
            postgresql_where=text("is_group = false AND user_id IS NOT NULL"),
            sqlite_where=text("is_group = 0 AND user_id IS NOT NULL"),
        ),
    )

    course_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        nullable=True,
        index=True,
    )
    status: Mapped[RegistrationStatus] = mapped_column(
        Enum(RegistrationStatus, native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=RegistrationStatus.PENDING,
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, native_enum=False, values_callable=_enum_values),
        nullable=False,
        default=PaymentStatus.UNPAID,
    )
    is_group: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    group_reference: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        default=None,
        doc="Company name shared across a group submission",
    )
    registration_metadata: Mapped[dict] = mapped_column(
        "metadata",
        JSON,
        nullable=False,
        default=dict,
        doc="Participant details (names, e-mail, phone, company, requests, group contact)",
    )

    # Relationships
    course = relationship("CourseModel", back_populates="registrations")
