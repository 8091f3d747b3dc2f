"""
Contact form endpoint.

Routes: POST /contact - Send a contact message

Dependencies: coaching_backend.application.services.contact_service
System role: Contact HTTP API
"""

from fastapi import APIRouter, Depends

from coaching_backend.api.deps.dependencies import get_contact_service
from coaching_backend.application.services.contact_service import ContactService
from coaching_backend.models.common import NoticeResponse
from coaching_backend.models.contact import ContactRequest

from .router_utils import handle_service_errors

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", response_model=NoticeResponse)
@handle_service_errors
async def submit_contact(
    request: ContactRequest,
    contact_service: ContactService = Depends(get_contact_service),
) -> NoticeResponse:
    """
    Send a contact message.

    Raises:
        HTTPException(502): Delivery failed
    """
    return NoticeResponse(notice=await contact_service.submit_contact(request))
