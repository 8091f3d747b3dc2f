"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - CourseModel, CourseRegistrationModel, SiteSettingModel, TestimonialModel,
    ProfileModel, UserRoleModel: Domain tables
  - *_crud: CRUD operation singletons

Dependencies: sqlalchemy, coaching_backend.configs
System role: Database adapter for the course catalogue, registrations,
site settings and user roles.
"""

from coaching_backend.boundary.db.base import Base, TimestampMixin, UUIDMixin
from coaching_backend.boundary.db.connection import (
    dispose_engine,
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from coaching_backend.boundary.db.models import (
    CourseLevel,
    CourseModel,
    CourseRegistrationModel,
    PaymentStatus,
    PLACEHOLDER_USER_ID,
    ProfileModel,
    RegistrationStatus,
    SiteSettingModel,
    TestimonialModel,
    UserRole,
    UserRoleModel,
)
from coaching_backend.boundary.db.CRUD import (
    BaseCRUD,
    course_crud,
    profile_crud,
    registration_crud,
    site_setting_crud,
    testimonial_crud,
    user_role_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "dispose_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "CourseLevel",
    "CourseModel",
    "CourseRegistrationModel",
    "PaymentStatus",
    "PLACEHOLDER_USER_ID",
    "ProfileModel",
    "RegistrationStatus",
    "SiteSettingModel",
    "TestimonialModel",
    "UserRole",
    "UserRoleModel",
    # CRUD
    "BaseCRUD",
    "course_crud",
    "profile_crud",
    "registration_crud",
    "site_setting_crud",
    "testimonial_crud",
    "user_role_crud",
]
