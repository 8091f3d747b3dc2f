"""Service orchestrators."""

from .contact_service import ContactService
from .course_service import CourseService
from .media_service import MediaService
from .registration_admin_service import RegistrationAdminService
from .registration_service import RegistrationService
from .testimonial_service import TestimonialService
from .user_service import UserService

__all__ = [
    "ContactService",
    "CourseService",
    "MediaService",
    "RegistrationAdminService",
    "RegistrationService",
    "TestimonialService",
    "UserService",
]
