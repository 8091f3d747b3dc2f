"""
CRUD operations for database models.

Exports singleton CRUD instances for every table.
"""

from coaching_backend.boundary.db.CRUD.base_crud import BaseCRUD
from coaching_backend.boundary.db.CRUD.course_crud import CourseCRUD, course_crud
from coaching_backend.boundary.db.CRUD.profile_crud import (
    ProfileCRUD,
    UserRoleCRUD,
    profile_crud,
    user_role_crud,
)
from coaching_backend.boundary.db.CRUD.registration_crud import (
    RegistrationCRUD,
    registration_crud,
)
from coaching_backend.boundary.db.CRUD.site_setting_crud import (
    SiteSettingCRUD,
    site_setting_crud,
)
from coaching_backend.boundary.db.CRUD.testimonial_crud import (
    TestimonialCRUD,
    testimonial_crud,
)

__all__ = [
    "BaseCRUD",
    "CourseCRUD",
    "ProfileCRUD",
    "RegistrationCRUD",
    "SiteSettingCRUD",
    "TestimonialCRUD",
    "UserRoleCRUD",
    "course_crud",
    "profile_crud",
    "registration_crud",
    "site_setting_crud",
    "testimonial_crud",
    "user_role_crud",
]
