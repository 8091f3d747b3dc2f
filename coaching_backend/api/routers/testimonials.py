"""
Testimonial endpoints.

Routes:
- GET /testimonials - Published testimonials (featured filter, limit)
- GET /courses/{course_id}/testimonials - Published testimonials for a course
- GET /admin/testimonials - All testimonials
- POST /admin/testimonials - Create
- PUT /admin/testimonials/{id} - Update
- DELETE /admin/testimonials/{id} - Delete

Dependencies: coaching_backend.application.services.testimonial_service
System role: Testimonial HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from coaching_backend.api.deps.dependencies import get_testimonial_service, require_admin
from coaching_backend.application.services.testimonial_service import TestimonialService
from coaching_backend.models.common import NoticeResponse, success_notice
from coaching_backend.models.testimonial import (
    CreateTestimonialRequest,
    TestimonialMutationResponse,
    TestimonialResponse,
    UpdateTestimonialRequest,
)

from .router_utils import handle_service_errors

router = APIRouter(tags=["testimonials"])
admin_router = APIRouter(
    prefix="/admin/testimonials",
    tags=["admin-testimonials"],
    dependencies=[Depends(require_admin)],
)


@router.get("/testimonials", response_model=list[TestimonialResponse])
@handle_service_errors
async def list_testimonials(
    featured: bool = Query(False, description="Only featured testimonials"),
    limit: int = Query(10, ge=1, le=100),
    testimonial_service: TestimonialService = Depends(get_testimonial_service),
) -> list[TestimonialResponse]:
    return await testimonial_service.list_published(featured_only=featured, limit=limit)


@router.get("/courses/{course_id}/testimonials", response_model=list[TestimonialResponse])
@handle_service_errors
async def list_course_testimonials(
    course_id: UUID,
    testimonial_service: TestimonialService = Depends(get_testimonial_service),
) -> list[TestimonialResponse]:
    return await testimonial_service.list_for_course(course_id)


@admin_router.get("", response_model=list[TestimonialResponse])
@handle_service_errors
async def list_all_testimonials(
    testimonial_service: TestimonialService = Depends(get_testimonial_service),
) -> list[TestimonialResponse]:
    return await testimonial_service.list_all()


@admin_router.post("", response_model=TestimonialMutationResponse, status_code=201)
@handle_service_errors
async def create_testimonial(
    request: CreateTestimonialRequest,
    testimonial_service: TestimonialService = Depends(get_testimonial_service),
) -> TestimonialMutationResponse:
    testimonial = await testimonial_service.create(**request.model_dump())
    return TestimonialMutationResponse(
        testimonial=testimonial,
        notice=success_notice("Testimonial created"),
    )


@admin_router.put("/{testimonial_id}", response_model=TestimonialMutationResponse)
@handle_service_errors
async def update_testimonial(
    testimonial_id: UUID,
    request: UpdateTestimonialRequest,
    testimonial_service: TestimonialService = Depends(get_testimonial_service),
) -> TestimonialMutationResponse:
    testimonial = await testimonial_service.update(
        testimonial_id, **request.model_dump(exclude_unset=True)
    )
    return TestimonialMutationResponse(
        testimonial=testimonial,
        notice=success_notice("Testimonial updated"),
    )


@admin_router.delete("/{testimonial_id}", response_model=NoticeResponse)
@handle_service_errors
async def delete_testimonial(
    testimonial_id: UUID,
    testimonial_service: TestimonialService = Depends(get_testimonial_service),
) -> NoticeResponse:
    await testimonial_service.delete(testimonial_id)
    return NoticeResponse(notice=success_notice("Testimonial deleted"))
