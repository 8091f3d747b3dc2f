"""
Site setting ORM model.

Flat key-value table backing contact info, mail and social-link settings.

Dependencies: sqlalchemy, coaching_backend.boundary.db.base
System role: Site configuration persistence
"""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from coaching_backend.boundary.db.base import Base, UUIDMixin, TimestampMixin


class SiteSettingModel(Base, UUIDMixin, TimestampMixin):
    """
    Site setting ORM model.

    Attributes:
        key: Unique setting key (e.g. "contact_info")
        value: Arbitrary JSON value
        description: Optional admin-facing description
    """

    __tablename__ = "site_settings"

    key: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    value: Mapped[Any] = mapped_column(JSON, nullable=True)
    description: Mapped[str | None] = mapped_column(String(1024), nullable=True, default=None)
