"""
Public course catalogue endpoints.

Routes:
- GET /courses - List published courses (category, level, format, search)
- GET /courses/categories - Distinct categories
- GET /courses/{slug} - Single published course

Dependencies: coaching_backend.application.services, coaching_backend.models
System role: Course catalogue HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from coaching_backend.api.deps.dependencies import get_course_service
from coaching_backend.application.services.course_service import CourseService
from coaching_backend.models.course import CourseFormat, CourseListResponse, CourseResponse

from ..router_utils import handle_service_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/courses", tags=["courses"])


@router.get("", response_model=CourseListResponse)
@handle_service_errors
async def list_courses(
    category: str | None = Query(None, description="Category, or 'all'"),
    level: str | None = Query(None, description="Level, or 'all'"),
    course_format: CourseFormat | None = Query(None, alias="format"),
    search: str | None = Query(None, max_length=200),
    course_service: CourseService = Depends(get_course_service),
) -> CourseListResponse:
    """
    List published courses ordered by start date.

    Returns:
        CourseListResponse: Matching courses
    """
    courses = await course_service.list_courses(
        category=category,
        level=level,
        course_format=course_format,
        search=search,
    )
    return CourseListResponse(courses=courses, total=len(courses))


@router.get("/categories", response_model=list[str])
@handle_service_errors
async def list_categories(
    course_service: CourseService = Depends(get_course_service),
) -> list[str]:
    """Distinct categories of published courses."""
    return await course_service.get_categories()


@router.get("/{slug}", response_model=CourseResponse)
@handle_service_errors
async def get_course(
    slug: str,
    course_service: CourseService = Depends(get_course_service),
) -> CourseResponse:
    """
    Get a published course by slug.

    Raises:
        HTTPException(404): Unknown or unpublished course
    """
    return await course_service.get_course_by_slug(slug)
