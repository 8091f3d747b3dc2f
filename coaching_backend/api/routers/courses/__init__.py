"""
Courses router package.

Exports the public catalogue router and the admin course/template routers.
"""

from .admin_courses_router import router as admin_router
from .courses_router import router
from .templates_router import router as templates_router

__all__ = ["admin_router", "router", "templates_router"]
