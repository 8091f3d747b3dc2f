"""
Session provider.

Owns the current-user state for one caller. It subscribes to the identity
client's auth events on start and re-derives the admin/instructor flags
from stored role assignments on every event.

Dependencies: coaching_backend.boundary.identity, coaching_backend.models
System role: Current-user state and auth operations for request handlers
"""

import logging
import uuid
from typing import Awaitable, Callable

from coaching_backend.boundary.db.models.profile_model import UserRole
from coaching_backend.boundary.identity import IdentityClient, StubIdentityClient
from coaching_backend.core.exceptions import AuthError, ValidationError
from coaching_backend.core.recovery import parse_recovery_tokens
from coaching_backend.models.auth import (
    AuthEvent,
    IdentitySession,
    IdentityUser,
    SessionState,
)
from coaching_backend.models.common import Notice, success_notice
from coaching_backend.observability.log_utils import mask_email

logger = logging.getLogger(__name__)

RoleLoader = Callable[[uuid.UUID], Awaitable[set[UserRole]]]

# Same notice whether or not the account exists.
RESET_REQUESTED_NOTICE = success_notice(
    "Reset link sent",
    "If an account exists for this e-mail, you will receive a link to reset your password.",
)

# Identity statuses that may reveal whether an account exists.
_ENUMERATION_STATUSES = {400, 404, 422}


class SessionProvider:
    """
    Per-caller session state holder.

    Lifecycle is explicit: start() subscribes and loads any existing
    session, close() unsubscribes. State starts as loading and is only
    written by this provider.
    """

    def __init__(
        self,
        identity_client: IdentityClient | StubIdentityClient,
        role_loader: RoleLoader,
        site_url: str = "",
        password_reset_path: str = "/reset-password",
    ) -> None:
        """
        Initialize the provider.

        Args:
            identity_client: Identity client for this caller
            role_loader: Coroutine returning the stored roles of a user
            site_url: Public site origin used for e-mail redirects
            password_reset_path: Site path that handles recovery links
        """
        self._client = identity_client
        self._role_loader = role_loader
        self._site_url = site_url.rstrip("/")
        self._password_reset_path = password_reset_path
        self._state = SessionState()
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def current_user(self) -> IdentityUser | None:
        return self._state.current_user

    async def start(self) -> SessionState:
        """
        Subscribe to auth events and load the existing session.

        Returns:
            SessionState after the initial load (no longer loading)
        """
        if self._unsubscribe is None:
            self._unsubscribe = self._client.on_auth_state_change(self._on_auth_event)
        session = await self._client.get_session()
        await self._apply(AuthEvent.INITIAL_SESSION, session)
        return self._state

    def close(self) -> None:
        """Remove the auth-event subscription."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def _on_auth_event(self, event: AuthEvent, session: IdentitySession | None) -> None:
        await self._apply(event, session)

    async def _apply(self, event: AuthEvent, session: IdentitySession | None) -> None:
        if session is None:
            self._state = SessionState(is_loading=False)
            logger.debug(f"{__name__}:_apply - {event.value}: no session")
            return

        roles = await self._load_roles(session.user.id)
        is_admin = UserRole.ADMIN in roles
        self._state = SessionState(
            current_user=session.user,
            access_token=session.access_token,
            is_loading=False,
            is_admin=is_admin,
            is_instructor=is_admin or UserRole.INSTRUCTOR in roles,
        )
        logger.debug(
            f"{__name__}:_apply - {event.value}",
            extra={"user_id": str(session.user.id), "is_admin": is_admin},
        )

    async def _load_roles(self, user_id: uuid.UUID) -> set[UserRole]:
        """Stored roles of a user; a failed lookup grants nothing."""
        try:
            return set(await self._role_loader(user_id))
        except Exception as e:
            logger.warning(
                f"{__name__}:_load_roles - Role lookup failed, no elevated role granted",
                extra={"user_id": str(user_id), "error": str(e)},
            )
            return set()

    # ------------------------------------------------------------------
    # Auth operations
    # ------------------------------------------------------------------

    async def sign_up(self, email: str, password: str, data: dict | None = None) -> Notice:
        """
        Create an account without signing in.

        Returns:
            Notice asking the user to verify their e-mail
        """
        await self._client.sign_up(email, password, data=data, redirect_to=self._site_url or None)
        logger.info(f"{__name__}:sign_up - Account created", extra={"email": mask_email(email)})
        return success_notice(
            "Registration successful",
            "Please check your e-mail to verify your account.",
        )

    async def sign_in(self, email: str, password: str) -> IdentitySession:
        """
        Sign in with e-mail and password.

        The auth listener updates the state before this returns.
        """
        session = await self._client.sign_in_with_password(email, password)
        logger.info(f"{__name__}:sign_in - Signed in", extra={"user_id": str(session.user.id)})
        return session

    async def refresh(self, refresh_token: str) -> IdentitySession:
        return await self._client.refresh_session(refresh_token)

    async def sign_out(self) -> Notice:
        """
        Sign out. Local state is cleared even when the remote call fails.

        Returns:
            Notice confirming the sign-out
        """
        try:
            await self._client.sign_out()
        except AuthError as e:
            logger.warning(
                f"{__name__}:sign_out - Remote sign-out failed: {e.message}",
                extra={"status": e.status},
            )
        finally:
            self._state = SessionState(is_loading=False)
        return success_notice("Signed out", "You have been signed out.")

    async def reset_password(self, email: str) -> Notice:
        """
        Request a password reset e-mail.

        Rejections that could reveal whether the account exists produce
        the same notice as success. Other failures propagate.
        """
        redirect_to = f"{self._site_url}{self._password_reset_path}"
        try:
            await self._client.reset_password_for_email(email, redirect_to)
        except AuthError as e:
            if e.status not in _ENUMERATION_STATUSES:
                raise
            logger.info(
                f"{__name__}:reset_password - Identity service rejected reset: {e.message}",
                extra={"email": mask_email(email), "status": e.status},
            )
        return RESET_REQUESTED_NOTICE

    async def update_password(
        self,
        new_password: str,
        recovery_url: str | None = None,
        access_token: str | None = None,
        refresh_token: str | None = None,
    ) -> Notice:
        """
        Set a new password, adopting the recovery session first when given.

        Args:
            new_password: Password to set
            recovery_url: Full link from the reset e-mail
            access_token: Recovery access token, when already extracted
            refresh_token: Matching refresh token

        Returns:
            Notice confirming the update

        Raises:
            ValidationError: Recovery link without a token or of another type
            AuthError: No recovery token and no active session
        """
        if recovery_url:
            tokens = parse_recovery_tokens(recovery_url)
            if tokens is None:
                raise ValidationError(
                    "No access token found. Please request a new password reset link.",
                    field="recovery_url",
                )
            if not tokens.is_recovery:
                raise ValidationError("Link is not a password recovery link", field="recovery_url")
            access_token, refresh_token = tokens.access_token, tokens.refresh_token

        if access_token:
            await self._client.set_session(
                access_token, refresh_token, event=AuthEvent.PASSWORD_RECOVERY
            )
        elif self._state.current_user is None:
            raise AuthError(
                "The reset link may have expired. Please request a new one.",
                status=401,
                code="session_missing",
            )

        await self._client.update_user(password=new_password)
        return success_notice(
            "Password updated",
            "Your password has been updated successfully. Please sign in with your new password.",
        )

    async def update_profile(self, data: dict) -> IdentityUser:
        """Update the signed-in user's identity metadata."""
        return await self._client.update_user(data=data)
