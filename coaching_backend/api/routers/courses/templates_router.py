"""
Admin course template endpoints.

Routes:
- GET /admin/course-templates - List templates
- POST /admin/course-templates - Create template
- GET /admin/course-templates/{id} - Single template
- PUT /admin/course-templates/{id} - Update template
- DELETE /admin/course-templates/{id} - Delete template
- POST /admin/course-templates/{id}/courses - Schedule a course from a template

Dependencies: coaching_backend.application.services, coaching_backend.models
System role: Course template HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from coaching_backend.api.deps.dependencies import get_course_service, require_admin
from coaching_backend.application.services.course_service import CourseService
from coaching_backend.models.common import NoticeResponse, success_notice
from coaching_backend.models.course import (
    CourseListResponse,
    CourseMutationResponse,
    CourseResponse,
    CreateFromTemplateRequest,
    CreateTemplateRequest,
    UpdateTemplateRequest,
)

from ..router_utils import handle_service_errors

router = APIRouter(
    prefix="/admin/course-templates",
    tags=["admin-course-templates"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=CourseListResponse)
@handle_service_errors
async def list_templates(
    course_service: CourseService = Depends(get_course_service),
) -> CourseListResponse:
    templates = await course_service.list_templates()
    return CourseListResponse(courses=templates, total=len(templates))


@router.post("", response_model=CourseMutationResponse, status_code=201)
@handle_service_errors
async def create_template(
    request: CreateTemplateRequest,
    course_service: CourseService = Depends(get_course_service),
) -> CourseMutationResponse:
    template = await course_service.create_template(**request.model_dump())
    return CourseMutationResponse(
        course=template,
        notice=success_notice("Template created", f"{template.title} has been saved."),
    )


@router.get("/{template_id}", response_model=CourseResponse)
@handle_service_errors
async def get_template(
    template_id: UUID,
    course_service: CourseService = Depends(get_course_service),
) -> CourseResponse:
    return await course_service.get_template(template_id)


@router.put("/{template_id}", response_model=CourseMutationResponse)
@handle_service_errors
async def update_template(
    template_id: UUID,
    request: UpdateTemplateRequest,
    course_service: CourseService = Depends(get_course_service),
) -> CourseMutationResponse:
    template = await course_service.update_template(
        template_id, **request.model_dump(exclude_unset=True)
    )
    return CourseMutationResponse(
        course=template,
        notice=success_notice("Template updated", f"{template.title} has been updated."),
    )


@router.delete("/{template_id}", response_model=NoticeResponse)
@handle_service_errors
async def delete_template(
    template_id: UUID,
    course_service: CourseService = Depends(get_course_service),
) -> NoticeResponse:
    await course_service.delete_template(template_id)
    return NoticeResponse(notice=success_notice("Template deleted"))


@router.post("/{template_id}/courses", response_model=CourseMutationResponse, status_code=201)
@handle_service_errors
async def create_from_template(
    template_id: UUID,
    request: CreateFromTemplateRequest,
    course_service: CourseService = Depends(get_course_service),
) -> CourseMutationResponse:
    """
    Schedule a new course from a template.

    Raises:
        HTTPException(404): Unknown template
        HTTPException(400): Duplicate slug or invalid schedule
    """
    course = await course_service.create_from_template(
        template_id, **request.model_dump(exclude_unset=True)
    )
    return CourseMutationResponse(
        course=course,
        notice=success_notice("Course created", f"{course.title} has been scheduled."),
    )
