"""
User profile and role ORM models.

Users themselves live in the identity service; these tables hold the
site-side profile and the authoritative role assignments.

Dependencies: sqlalchemy, coaching_backend.boundary.db.base
System role: Profile and role persistence
"""

import enum
import uuid

from sqlalchemy import Enum, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from coaching_backend.boundary.db.base import Base, UUIDMixin, TimestampMixin


class UserRole(str, enum.Enum):
    """Site roles. Admin implies instructor."""

    ADMIN = "admin"
    INSTRUCTOR = "instructor"
    STUDENT = "student"


ROLE_RANK = {UserRole.ADMIN: 3, UserRole.INSTRUCTOR: 2, UserRole.STUDENT: 1}


class ProfileModel(Base, TimestampMixin):
    """
    Profile ORM model keyed by the identity-service user id.

    Attributes:
        id: User id issued by the identity service
        first_name / last_name: Display name
        email: Sign-in e-mail, copied from the identity service on profile save
        avatar_url: Optional avatar image
    """

    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    first_name: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    last_name: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True, default=None)
    avatar_url: Mapped[str | None] = mapped_column(String(1024), nullable=True, default=None)


class UserRoleModel(Base, UUIDMixin, TimestampMixin):
    """
    Role assignment ORM model.

    A user may hold several roles; absence of rows means student.

    Constraints:
        (user_id, role) unique
    """

    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),)

    user_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
