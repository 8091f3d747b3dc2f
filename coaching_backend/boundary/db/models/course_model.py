"""
Course ORM model.

Represents both scheduled course instances and reusable course templates.
Templates (is_template=True) are stencils: scheduled courses are stamped
out of them by copying descriptive fields and adding schedule fields.

Dependencies: sqlalchemy, coaching_backend.boundary.db.base
System role: Course persistence for the public catalogue and back-office
"""

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coaching_backend.boundary.db.base import Base, UUIDMixin, TimestampMixin


class CourseLevel(str, enum.Enum):
    """Course difficulty levels."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


# Descriptive fields copied from a template into a scheduled course.
TEMPLATE_FIELDS = (
    "title",
    "description",
    "content",
    "category",
    "level",
    "price",
    "duration",
    "image_url",
    "prerequisites",
)


class CourseModel(Base, UUIDMixin, TimestampMixin):
    """
    Course ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        slug: URL slug, unique across courses and templates
        title: Course title
        description: Short description shown in listings
        content: Long-form course content
        category: Free-text category used for filtering
        level: Difficulty level, optional
        price: Price in the site currency, optional
        duration: Duration in days, optional
        image_url: Cover image
        location: "Virtual", "Hybrid" or a physical venue
        prerequisites: Free-text prerequisites
        capacity: Informational seat count; enforced only when configured
        reserved_seats: Seats held by non-cancelled registrations (capacity enforcement)
        start_date / end_date: Schedule
        is_published: Visible in the public catalogue
        is_featured: Highlighted on the home page
        is_template: Template stencil rather than a scheduled course
        registrations: CourseRegistrationModel rows (deleted with the course)
    """

    __tablename__ = "courses"

    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    content: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    category: Mapped[str | None] = mapped_column(String(120), nullable=True, default=None)
    level: Mapped[CourseLevel | None] = mapped_column(
        Enum(
            CourseLevel,
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=True,
        default=None,
    )
    price: Mapped[float | None] = mapped_column(Float, nullable=True, default=None)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True, default=None)
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True, default=None)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    prerequisites: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    capacity: Mapped[int | None] = mapped_column(Integer, nullable=True, default=None)
    reserved_seats: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    start_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )
    end_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )
    is_published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_template: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    registrations = relationship(
        "CourseRegistrationModel",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
