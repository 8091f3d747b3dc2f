"""
Database models package.

Exports:
  - CourseModel, CourseLevel: Course ORM model and level enum
  - CourseRegistrationModel, RegistrationStatus, PaymentStatus: Registrations
  - SiteSettingModel: Key-value site settings
  - TestimonialModel: Testimonials
  - ProfileModel, UserRoleModel, UserRole: Profiles and role assignments

Dependencies: sqlalchemy, coaching_backend.boundary.db.base
System role: Database model definitions for domain entities
"""

from coaching_backend.boundary.db.models.course_model import CourseLevel, CourseModel
from coaching_backend.boundary.db.models.profile_model import (
    ProfileModel,
    UserRole,
    UserRoleModel,
)
from coaching_backend.boundary.db.models.registration_model import (
    PLACEHOLDER_USER_ID,
    CourseRegistrationModel,
    PaymentStatus,
    RegistrationStatus,
)
from coaching_backend.boundary.db.models.site_setting_model import SiteSettingModel
from coaching_backend.boundary.db.models.testimonial_model import TestimonialModel

__all__ = [
    "CourseLevel",
    "CourseModel",
    "CourseRegistrationModel",
    "PLACEHOLDER_USER_ID",
    "PaymentStatus",
    "ProfileModel",
    "RegistrationStatus",
    "SiteSettingModel",
    "TestimonialModel",
    "UserRole",
    "UserRoleModel",
]
