"""
Course registration endpoints.

Routes:
- POST /courses/{course_id}/registrations - Individual registration (guest or signed in)
- POST /courses/{course_id}/registrations/group - Group registration
- GET /admin/registrations - List with status/course/search filters and counts
- GET /admin/courses/{course_id}/registrations - List one course's registrations
- PATCH /admin/registrations/{id} - Update status and/or payment status
- DELETE /admin/registrations/{id} - Delete registration

Dependencies: coaching_backend.application.services, coaching_backend.models.registration
System role: Registration HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from coaching_backend.api.deps.dependencies import (
    get_registration_admin_service,
    get_registration_service,
    get_session_provider,
    require_admin,
)
from coaching_backend.application.services.registration_admin_service import (
    RegistrationAdminService,
)
from coaching_backend.application.services.registration_service import RegistrationService
from coaching_backend.boundary.db.models.registration_model import RegistrationStatus
from coaching_backend.core.session_provider import SessionProvider
from coaching_backend.models.common import DataResponse, NoticeResponse
from coaching_backend.models.registration import (
    GroupRegistrationRequest,
    GroupRegistrationResult,
    IndividualRegistrationRequest,
    RegistrationListResponse,
    RegistrationResponse,
    RegistrationResult,
    UpdateRegistrationRequest,
)

from .router_utils import handle_service_errors

logger = logging.getLogger(__name__)

router = APIRouter(tags=["registrations"])
admin_router = APIRouter(
    prefix="/admin",
    tags=["admin-registrations"],
    dependencies=[Depends(require_admin)],
)


@router.post(
    "/courses/{course_id}/registrations",
    response_model=RegistrationResult,
    status_code=201,
)
@handle_service_errors
async def register_individual(
    course_id: UUID,
    request: IndividualRegistrationRequest,
    provider: SessionProvider = Depends(get_session_provider),
    registration_service: RegistrationService = Depends(get_registration_service),
) -> RegistrationResult:
    """
    Register one participant. Signed-in users are linked to the row.

    Raises:
        HTTPException(404): Unknown course
        HTTPException(409): Already registered, or course full
        HTTPException(502): Registration could not be saved
    """
    user = provider.current_user
    return await registration_service.register_individual(
        course_id,
        request,
        user_id=user.id if user else None,
    )


@router.post(
    "/courses/{course_id}/registrations/group",
    response_model=GroupRegistrationResult,
    status_code=201,
)
@handle_service_errors
async def register_group(
    course_id: UUID,
    request: GroupRegistrationRequest,
    provider: SessionProvider = Depends(get_session_provider),
    registration_service: RegistrationService = Depends(get_registration_service),
) -> GroupRegistrationResult:
    """
    Register a group, one row per participant.

    Raises:
        HTTPException(400): Too few participants
        HTTPException(404): Unknown course
        HTTPException(409): A participant insert failed (details list the rows kept)
    """
    user = provider.current_user
    return await registration_service.register_group(
        course_id,
        request,
        submitted_by=user.id if user else None,
    )


@admin_router.get("/registrations", response_model=RegistrationListResponse)
@handle_service_errors
async def list_registrations(
    status: RegistrationStatus | None = Query(None),
    course_id: UUID | None = Query(None),
    search: str | None = Query(None, max_length=200),
    admin_service: RegistrationAdminService = Depends(get_registration_admin_service),
) -> RegistrationListResponse:
    """List registrations newest first, with per-status counts."""
    registrations = await admin_service.list_all(
        status=status,
        course_id=course_id,
        search=search,
    )
    return RegistrationListResponse(
        registrations=registrations,
        counts=admin_service.status_counts(registrations),
    )


@admin_router.get(
    "/courses/{course_id}/registrations",
    response_model=RegistrationListResponse,
)
@handle_service_errors
async def list_course_registrations(
    course_id: UUID,
    admin_service: RegistrationAdminService = Depends(get_registration_admin_service),
) -> RegistrationListResponse:
    """List one course's registrations with owner profiles."""
    registrations = await admin_service.list_for_course(course_id)
    return RegistrationListResponse(
        registrations=registrations,
        counts=admin_service.status_counts(registrations),
    )


@admin_router.patch(
    "/registrations/{registration_id}",
    response_model=DataResponse[RegistrationResponse],
)
@handle_service_errors
async def update_registration(
    registration_id: UUID,
    request: UpdateRegistrationRequest,
    admin_service: RegistrationAdminService = Depends(get_registration_admin_service),
) -> DataResponse[RegistrationResponse]:
    """
    Update status and/or payment status.

    Raises:
        HTTPException(400): Neither field given
        HTTPException(404): Unknown registration
    """
    registration, notice = await admin_service.update_status(
        registration_id,
        status=request.status,
        payment_status=request.payment_status,
    )
    return DataResponse[RegistrationResponse](data=registration, notice=notice)


@admin_router.delete("/registrations/{registration_id}", response_model=NoticeResponse)
@handle_service_errors
async def delete_registration(
    registration_id: UUID,
    admin_service: RegistrationAdminService = Depends(get_registration_admin_service),
) -> NoticeResponse:
    """
    Delete a registration.

    Raises:
        HTTPException(404): Unknown registration
    """
    return NoticeResponse(notice=await admin_service.delete(registration_id))
