"""
Dependency injection container.

Factory functions for FastAPI dependencies: configuration, database
session, per-request session provider, route guards and services.

Dependencies: coaching_backend.configs, coaching_backend.application, coaching_backend.boundary
System role: DI container for service injection
"""

from typing import AsyncGenerator

import httpx
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from coaching_backend.application.services import (
    ContactService,
    CourseService,
    MediaService,
    RegistrationAdminService,
    RegistrationService,
    TestimonialService,
    UserService,
)
from coaching_backend.boundary.aws import S3MediaClient
from coaching_backend.boundary.db import get_async_db
from coaching_backend.boundary.db.CRUD.profile_crud import user_role_crud
from coaching_backend.boundary.functions import NotificationClient
from coaching_backend.boundary.identity import create_identity_client
from coaching_backend.configs import Settings, get_settings
from coaching_backend.core.route_guard import (
    AccessRequirement,
    GuardOutcome,
    evaluate_access,
)
from coaching_backend.core.session_provider import SessionProvider
from coaching_backend.core.settings_store import SiteSettingsStore

REFRESH_TOKEN_HEADER = "X-Refresh-Token"


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_http_client(request: Request) -> httpx.AsyncClient | None:
    """Shared HTTP client for identity and function calls (None when unconfigured)."""
    return getattr(request.app.state, "http_client", None)


def get_bearer_token(request: Request) -> str | None:
    """Extract the bearer token from the Authorization header, if any."""
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_session_provider(
    request: Request,
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
    http_client: httpx.AsyncClient | None = Depends(get_http_client),
) -> AsyncGenerator[SessionProvider, None]:
    """
    Per-request session provider, started before the handler runs.

    Roles are looked up on the request's database session.

    Yields:
        SessionProvider: Started provider; closed after the response
    """
    client = create_identity_client(
        http_client,
        settings.auth.url,
        settings.auth.anon_key,
        access_token=get_bearer_token(request),
        refresh_token=request.headers.get(REFRESH_TOKEN_HEADER),
    )

    async def load_roles(user_id):
        return await user_role_crud.roles_for_user(db, user_id)

    provider = SessionProvider(
        client,
        role_loader=load_roles,
        site_url=settings.site_url,
        password_reset_path=settings.auth.password_reset_path,
    )
    await provider.start()
    try:
        yield provider
    finally:
        provider.close()


def _guard(requirement: AccessRequirement):
    """Build a dependency that enforces a route requirement."""

    async def dependency(
        request: Request,
        provider: SessionProvider = Depends(get_session_provider),
    ) -> SessionProvider:
        decision = evaluate_access(provider.state, requirement, request.url.path)
        if decision.allowed:
            return provider
        detail = {
            "error": "Access denied",
            "outcome": decision.outcome.value,
            "redirect_to": decision.redirect_to,
            "from": decision.from_path,
        }
        if decision.outcome is GuardOutcome.DENY_REDIRECT_LOGIN:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)
        if decision.outcome is GuardOutcome.LOADING:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)

    return dependency


require_user = _guard(AccessRequirement.AUTHENTICATED)
require_instructor = _guard(AccessRequirement.INSTRUCTOR)
require_admin = _guard(AccessRequirement.ADMIN)


def get_notification_client(
    settings: Settings = Depends(get_settings_dependency),
    http_client: httpx.AsyncClient | None = Depends(get_http_client),
) -> NotificationClient:
    return NotificationClient(http_client, settings.auth.url, settings.auth.anon_key)


def get_settings_store(request: Request) -> SiteSettingsStore:
    """Site settings store owned by the application lifespan."""
    store = getattr(request.app.state, "settings_store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": "Settings store not initialized"},
        )
    return store


def get_media_client(request: Request) -> S3MediaClient:
    client = getattr(request.app.state, "media_client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": "Media storage not initialized"},
        )
    return client


def get_course_service(db: AsyncSession = Depends(get_async_db)) -> CourseService:
    """
    Get course service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        CourseService: Course service instance
    """
    return CourseService(db=db)


def get_registration_service(
    db: AsyncSession = Depends(get_async_db),
    notifier: NotificationClient = Depends(get_notification_client),
    settings: Settings = Depends(get_settings_dependency),
) -> RegistrationService:
    """
    Get registration workflow service.

    Args:
        db: Async database session (injected via Depends)
        notifier: Notification function client
        settings: Application settings (registration policy)

    Returns:
        RegistrationService
    """
    return RegistrationService(db=db, notifier=notifier, settings=settings.registration)


def get_registration_admin_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> RegistrationAdminService:
    return RegistrationAdminService(
        db=db,
        enforce_capacity=settings.registration.enforce_capacity,
    )


def get_testimonial_service(db: AsyncSession = Depends(get_async_db)) -> TestimonialService:
    return TestimonialService(db=db)


def get_user_service(db: AsyncSession = Depends(get_async_db)) -> UserService:
    return UserService(db=db)


def get_media_service(
    storage: S3MediaClient = Depends(get_media_client),
) -> MediaService:
    return MediaService(storage=storage)


def get_contact_service(
    notifier: NotificationClient = Depends(get_notification_client),
) -> ContactService:
    return ContactService(notifier=notifier)
