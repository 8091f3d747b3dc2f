"""
Health check API endpoints.

Routes: GET /health, GET /health/db

Dependencies: coaching_backend.boundary.db
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coaching_backend.boundary.db import get_async_db

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/db", response_model=HealthResponse)
async def health_check_db(db: AsyncSession = Depends(get_async_db)) -> HealthResponse:
    """Database health check."""
    try:
        await db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"{__name__}:health_check_db - Database unreachable", extra={"error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"status": "unhealthy", "message": "Database unreachable"},
        )
    return HealthResponse(status="healthy", message="Database connection OK")
