"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import (
    admin_courses_router,
    admin_registrations_router,
    admin_settings_router,
    admin_testimonials_router,
    admin_users_router,
    auth_router,
    contact_router,
    course_templates_router,
    courses_router,
    health_router,
    media_router,
    navigation_router,
    profile_router,
    registrations_router,
    settings_router,
    testimonials_router,
)

api_router = APIRouter()

# Public
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(navigation_router)
api_router.include_router(courses_router)
api_router.include_router(registrations_router)
api_router.include_router(testimonials_router)
api_router.include_router(settings_router)
api_router.include_router(contact_router)

# Signed-in users
api_router.include_router(profile_router)

# Admin
api_router.include_router(admin_courses_router)
api_router.include_router(course_templates_router)
api_router.include_router(admin_registrations_router)
api_router.include_router(admin_testimonials_router)
api_router.include_router(admin_users_router)
api_router.include_router(admin_settings_router)
api_router.include_router(media_router)

__all__ = ["api_router"]
