"""
Testimonial ORM model.

Dependencies: sqlalchemy, coaching_backend.boundary.db.base
System role: Testimonial persistence
"""

import uuid

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from coaching_backend.boundary.db.base import Base, UUIDMixin, TimestampMixin


class TestimonialModel(Base, UUIDMixin, TimestampMixin):
    """
    Testimonial ORM model.

    Visibility is gated by the published and is_featured flags only.

    Attributes:
        name: Author name
        role / company: Author position, optional
        content: Testimonial text
        rating: 1-5, optional
        image_url: Author photo, optional
        published: Shown on the public site
        is_featured: Shown in the home page carousel
        course_id: Course the testimonial refers to (SET NULL on course delete)
    """

    __tablename__ = "testimonials"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    company: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True, default=None)
    image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True, default=None)
    published: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    course_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("courses.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
