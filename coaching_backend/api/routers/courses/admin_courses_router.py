"""
Admin course management endpoints.

Routes:
- GET /admin/courses - All scheduled courses, newest first
- POST /admin/courses - Create course
- GET /admin/courses/{id} - Single course
- PUT /admin/courses/{id} - Update course
- PATCH /admin/courses/{id}/publish - Publish or unpublish
- DELETE /admin/courses/{id} - Delete course and its registrations

Dependencies: coaching_backend.application.services, coaching_backend.models
System role: Back-office course HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from coaching_backend.api.deps.dependencies import get_course_service, require_admin
from coaching_backend.application.services.course_service import CourseService
from coaching_backend.models.common import NoticeResponse, success_notice
from coaching_backend.models.course import (
    CourseListResponse,
    CourseMutationResponse,
    CourseResponse,
    CreateCourseRequest,
    PublishRequest,
    UpdateCourseRequest,
)

from ..router_utils import handle_service_errors

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin/courses",
    tags=["admin-courses"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=CourseListResponse)
@handle_service_errors
async def list_all_courses(
    course_service: CourseService = Depends(get_course_service),
) -> CourseListResponse:
    """List every scheduled course, published or not."""
    courses = await course_service.list_all_courses()
    return CourseListResponse(courses=courses, total=len(courses))


@router.post("", response_model=CourseMutationResponse, status_code=201)
@handle_service_errors
async def create_course(
    request: CreateCourseRequest,
    course_service: CourseService = Depends(get_course_service),
) -> CourseMutationResponse:
    """
    Create a scheduled course.

    Raises:
        HTTPException(400): Duplicate slug or invalid schedule
    """
    logger.info(f"{__name__}:create_course - Creating course", extra={"slug": request.slug})
    course = await course_service.create_course(**request.model_dump())
    return CourseMutationResponse(
        course=course,
        notice=success_notice("Course created", f"{course.title} has been created."),
    )


@router.get("/{course_id}", response_model=CourseResponse)
@handle_service_errors
async def get_course(
    course_id: UUID,
    course_service: CourseService = Depends(get_course_service),
) -> CourseResponse:
    return await course_service.get_course(course_id)


@router.put("/{course_id}", response_model=CourseMutationResponse)
@handle_service_errors
async def update_course(
    course_id: UUID,
    request: UpdateCourseRequest,
    course_service: CourseService = Depends(get_course_service),
) -> CourseMutationResponse:
    """
    Update a course; omitted fields keep their values.

    Raises:
        HTTPException(404): Unknown course
        HTTPException(400): Duplicate slug or invalid schedule
    """
    course = await course_service.update_course(
        course_id, **request.model_dump(exclude_unset=True)
    )
    return CourseMutationResponse(
        course=course,
        notice=success_notice("Course updated", f"{course.title} has been updated."),
    )


@router.patch("/{course_id}/publish", response_model=CourseMutationResponse)
@handle_service_errors
async def set_published(
    course_id: UUID,
    request: PublishRequest,
    course_service: CourseService = Depends(get_course_service),
) -> CourseMutationResponse:
    """Publish or unpublish a course."""
    course = await course_service.set_published(course_id, request.is_published)
    title = "Course published" if request.is_published else "Course unpublished"
    return CourseMutationResponse(course=course, notice=success_notice(title))


@router.delete("/{course_id}", response_model=NoticeResponse)
@handle_service_errors
async def delete_course(
    course_id: UUID,
    course_service: CourseService = Depends(get_course_service),
) -> NoticeResponse:
    """
    Delete a course together with its registrations.

    Raises:
        HTTPException(404): Unknown course
    """
    await course_service.delete_course(course_id)
    return NoticeResponse(
        notice=success_notice("Course deleted", "The course has been removed."),
    )
