"""API routers."""

from .auth import router as auth_router
from .contact import router as contact_router
from .courses import admin_router as admin_courses_router
from .courses import router as courses_router
from .courses import templates_router as course_templates_router
from .health import router as health_router
from .media import router as media_router
from .navigation import router as navigation_router
from .registrations import admin_router as admin_registrations_router
from .registrations import router as registrations_router
from .settings import admin_router as admin_settings_router
from .settings import router as settings_router
from .testimonials import admin_router as admin_testimonials_router
from .testimonials import router as testimonials_router
from .users import admin_router as admin_users_router
from .users import router as profile_router

__all__ = [
    "admin_courses_router",
    "admin_registrations_router",
    "admin_settings_router",
    "admin_testimonials_router",
    "admin_users_router",
    "auth_router",
    "contact_router",
    "course_templates_router",
    "courses_router",
    "health_router",
    "media_router",
    "navigation_router",
    "profile_router",
    "registrations_router",
    "settings_router",
    "testimonials_router",
]
