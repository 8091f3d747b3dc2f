"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    get_contact_service,
    get_course_service,
    get_media_service,
    get_registration_admin_service,
    get_registration_service,
    get_session_provider,
    get_settings_dependency,
    get_settings_store,
    get_testimonial_service,
    get_user_service,
    require_admin,
    require_instructor,
    require_user,
)

__all__ = [
    "get_contact_service",
    "get_course_service",
    "get_media_service",
    "get_registration_admin_service",
    "get_registration_service",
    "get_session_provider",
    "get_settings_dependency",
    "get_settings_store",
    "get_testimonial_service",
    "get_user_service",
    "require_admin",
    "require_instructor",
    "require_user",
]
