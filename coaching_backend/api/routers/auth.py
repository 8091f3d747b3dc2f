"""
Authentication API endpoints.

Routes:
- POST /auth/sign-up - Create account (e-mail verification required)
- POST /auth/sign-in - Password sign-in
- POST /auth/refresh - Exchange refresh token
- POST /auth/sign-out - Sign out
- POST /auth/password-reset - Request reset e-mail
- POST /auth/password-update - Set new password (recovery link or session)
- GET /auth/session - Current session state
- PUT /auth/user - Update identity metadata

Dependencies: coaching_backend.core.session_provider, coaching_backend.models.auth
System role: Identity HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from coaching_backend.api.deps.dependencies import get_session_provider, require_user
from coaching_backend.core.session_provider import SessionProvider
from coaching_backend.models.auth import (
    IdentityUser,
    PasswordResetRequest,
    RefreshRequest,
    SessionResponse,
    SignInRequest,
    SignUpRequest,
    UpdatePasswordRequest,
    UpdateUserDataRequest,
)
from coaching_backend.models.common import NoticeResponse, success_notice

from .router_utils import handle_service_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_response(provider: SessionProvider, session=None, notice=None) -> SessionResponse:
    state = provider.state
    return SessionResponse(
        user=state.current_user,
        access_token=state.access_token,
        refresh_token=session.refresh_token if session else None,
        expires_in=session.expires_in if session else None,
        is_admin=state.is_admin,
        is_instructor=state.is_instructor,
        notice=notice,
    )


@router.post("/sign-up", response_model=NoticeResponse, status_code=201)
@handle_service_errors
async def sign_up(
    request: SignUpRequest,
    provider: SessionProvider = Depends(get_session_provider),
) -> NoticeResponse:
    """
    Create an account. The user is not signed in until the e-mail is verified.

    Raises:
        HTTPException(400): Rejected by the identity service
        HTTPException(503): Identity service not configured
    """
    data = {
        key: value
        for key, value in {"first_name": request.first_name, "last_name": request.last_name}.items()
        if value
    }
    notice = await provider.sign_up(request.email, request.password, data=data)
    return NoticeResponse(notice=notice)


@router.post("/sign-in", response_model=SessionResponse)
@handle_service_errors
async def sign_in(
    request: SignInRequest,
    provider: SessionProvider = Depends(get_session_provider),
) -> SessionResponse:
    """
    Sign in with e-mail and password.

    Raises:
        HTTPException(401): Invalid credentials
    """
    session = await provider.sign_in(request.email, request.password)
    return _session_response(provider, session, success_notice("Signed in", "Welcome back!"))


@router.post("/refresh", response_model=SessionResponse)
@handle_service_errors
async def refresh(
    request: RefreshRequest,
    provider: SessionProvider = Depends(get_session_provider),
) -> SessionResponse:
    """Exchange a refresh token for a new session."""
    session = await provider.refresh(request.refresh_token)
    return _session_response(provider, session)


@router.post("/sign-out", response_model=NoticeResponse)
@handle_service_errors
async def sign_out(
    provider: SessionProvider = Depends(get_session_provider),
) -> NoticeResponse:
    """Sign out. Always succeeds locally."""
    return NoticeResponse(notice=await provider.sign_out())


@router.post("/password-reset", response_model=NoticeResponse)
@handle_service_errors
async def request_password_reset(
    request: PasswordResetRequest,
    provider: SessionProvider = Depends(get_session_provider),
) -> NoticeResponse:
    """
    Request a password reset e-mail.

    The response is the same whether or not the account exists.
    """
    return NoticeResponse(notice=await provider.reset_password(request.email))


@router.post("/password-update", response_model=NoticeResponse)
@handle_service_errors
async def update_password(
    request: UpdatePasswordRequest,
    provider: SessionProvider = Depends(get_session_provider),
) -> NoticeResponse:
    """
    Set a new password.

    Accepts the full recovery link from the reset e-mail, an explicit
    token pair, or an active session.

    Raises:
        HTTPException(400): Link without a token
        HTTPException(401): Expired link or no session
    """
    notice = await provider.update_password(
        request.password,
        recovery_url=request.recovery_url,
        access_token=request.access_token,
        refresh_token=request.refresh_token,
    )
    return NoticeResponse(notice=notice)


@router.get("/session", response_model=SessionResponse)
@handle_service_errors
async def get_session(
    provider: SessionProvider = Depends(get_session_provider),
) -> SessionResponse:
    """Current session state; a visitor gets an empty session."""
    return _session_response(provider)


@router.put("/user", response_model=IdentityUser)
@handle_service_errors
async def update_user_data(
    request: UpdateUserDataRequest,
    provider: SessionProvider = Depends(require_user),
) -> IdentityUser:
    """Update the signed-in user's identity metadata."""
    return await provider.update_profile(request.data)
