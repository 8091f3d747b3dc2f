"""
Media endpoints.

Routes:
- POST /admin/media - Upload a file (multipart)
- GET /admin/media/url - Public URL for a stored path

Dependencies: coaching_backend.application.services.media_service
System role: Media upload HTTP API
"""

from fastapi import APIRouter, Depends, File, Query, UploadFile

from coaching_backend.api.deps.dependencies import get_media_service, require_admin
from coaching_backend.application.services.media_service import MediaService
from coaching_backend.models.media import MediaUploadResponse, PublicUrlResponse

from .router_utils import handle_service_errors

router = APIRouter(
    prefix="/admin/media",
    tags=["admin-media"],
    dependencies=[Depends(require_admin)],
)


@router.post("", response_model=MediaUploadResponse, status_code=201)
@handle_service_errors
async def upload_media(
    file: UploadFile = File(...),
    media_service: MediaService = Depends(get_media_service),
) -> MediaUploadResponse:
    """
    Upload a file to the media bucket.

    Raises:
        HTTPException(400): Empty or oversized file
        HTTPException(502): Storage failure
    """
    content = await file.read()
    return await media_service.upload(
        file.filename or "file",
        content,
        file.content_type,
    )


@router.get("/url", response_model=PublicUrlResponse)
@handle_service_errors
async def get_public_url(
    path: str = Query(..., min_length=1),
    media_service: MediaService = Depends(get_media_service),
) -> PublicUrlResponse:
    return media_service.get_public_url(path)
