"""
Identity service client.

Thin async adapter over the hosted GoTrue-style auth REST API
(``{base_url}/auth/v1``). One client instance represents one caller: it
holds that caller's session and notifies registered listeners whenever the
session changes.

Dependencies: httpx, tenacity, coaching_backend.models.auth
System role: Identity boundary for sign-up, sign-in, recovery and session state
"""

import logging
from typing import Any, Awaitable, Callable

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from coaching_backend.core.exceptions import (
    AuthError,
    AuthNotConfiguredError,
    BackendCallError,
)
from coaching_backend.models.auth import AuthEvent, IdentitySession, IdentityUser

logger = logging.getLogger(__name__)

AuthListener = Callable[[AuthEvent, IdentitySession | None], Awaitable[None]]
Unsubscribe = Callable[[], None]


def _parse_user(payload: dict[str, Any]) -> IdentityUser:
    return IdentityUser(
        id=payload["id"],
        email=payload.get("email"),
        metadata=payload.get("user_metadata") or {},
    )


def _parse_session(payload: dict[str, Any]) -> IdentitySession:
    return IdentitySession(
        access_token=payload["access_token"],
        refresh_token=payload.get("refresh_token"),
        expires_in=payload.get("expires_in"),
        token_type=payload.get("token_type", "bearer"),
        user=_parse_user(payload["user"]),
    )


class IdentityClient:
    """
    Per-caller identity client backed by a shared httpx.AsyncClient.

    Errors returned by the service are raised as AuthError carrying the
    service message and status. Transport failures are raised as
    BackendCallError. Only get_user is retried.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str,
        anon_key: str,
        access_token: str | None = None,
        refresh_token: str | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            http_client: Shared async HTTP client (owned by the app lifespan)
            base_url: Platform base URL
            anon_key: Public anon API key
            access_token: Bearer token presented by the caller, validated lazily
            refresh_token: Matching refresh token, if known
        """
        self._http = http_client
        self._auth_url = f"{base_url.rstrip('/')}/auth/v1"
        self._anon_key = anon_key
        self._pending_tokens = (access_token, refresh_token) if access_token else None
        self._session: IdentitySession | None = None
        self._listeners: list[AuthListener] = []

    # ------------------------------------------------------------------
    # Listener management
    # ------------------------------------------------------------------

    def on_auth_state_change(self, listener: AuthListener) -> Unsubscribe:
        """
        Register a listener for session changes.

        Args:
            listener: Coroutine called with (event, session)

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def _emit(self, event: AuthEvent, session: IdentitySession | None) -> None:
        for listener in list(self._listeners):
            await listener(event, session)

    # ------------------------------------------------------------------
    # HTTP plumbing
    # ------------------------------------------------------------------

    def _headers(self, token: str | None = None) -> dict[str, str]:
        return {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {token or self._anon_key}",
        }

    async def _request(
        self,
        method: str,
        path: str,
        operation: str,
        json: dict | None = None,
        params: dict | None = None,
        token: str | None = None,
    ) -> dict[str, Any]:
        try:
            response = await self._http.request(
                method,
                f"{self._auth_url}{path}",
                json=json,
                params=params,
                headers=self._headers(token),
            )
        except httpx.HTTPError as e:
            logger.error(
                f"{__name__}:{operation} - Identity service unreachable: {type(e).__name__}",
                extra={"operation": operation},
            )
            raise BackendCallError(
                "Identity service unreachable",
                operation=f"identity:{operation}",
                details={"error": str(e)},
            ) from e

        if response.is_error:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = (
                body.get("msg")
                or body.get("error_description")
                or body.get("message")
                or response.reason_phrase
                or "Authentication failed"
            )
            raise AuthError(
                message,
                status=response.status_code,
                code=body.get("error_code") or body.get("code") or body.get("error"),
            )

        if not response.content:
            return {}
        return response.json()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def sign_up(
        self,
        email: str,
        password: str,
        data: dict | None = None,
        redirect_to: str | None = None,
    ) -> IdentityUser:
        """
        Create an account. The user must confirm their e-mail before signing in.

        Args:
            email: Account e-mail
            password: Account password
            data: Initial user metadata
            redirect_to: Where the confirmation link should land

        Returns:
            IdentityUser: The created (unconfirmed) user
        """
        params = {"redirect_to": redirect_to} if redirect_to else None
        payload = await self._request(
            "POST",
            "/signup",
            "sign_up",
            json={"email": email, "password": password, "data": data or {}},
            params=params,
        )
        # Autoconfirm deployments answer with a session envelope
        return _parse_user(payload.get("user") or payload)

    async def sign_in_with_password(self, email: str, password: str) -> IdentitySession:
        """
        Exchange e-mail and password for a session.

        Returns:
            IdentitySession: The new session (also stored on the client)
        """
        payload = await self._request(
            "POST",
            "/token",
            "sign_in",
            json={"email": email, "password": password},
            params={"grant_type": "password"},
        )
        self._session = _parse_session(payload)
        self._pending_tokens = None
        await self._emit(AuthEvent.SIGNED_IN, self._session)
        return self._session

    async def refresh_session(self, refresh_token: str) -> IdentitySession:
        """Exchange a refresh token for a fresh session."""
        payload = await self._request(
            "POST",
            "/token",
            "refresh_session",
            json={"refresh_token": refresh_token},
            params={"grant_type": "refresh_token"},
        )
        self._session = _parse_session(payload)
        self._pending_tokens = None
        await self._emit(AuthEvent.TOKEN_REFRESHED, self._session)
        return self._session

    async def sign_out(self) -> None:
        """
        Revoke the current session.

        Local state is cleared and SIGNED_OUT emitted even when the remote
        call fails; the failure is re-raised afterwards.
        """
        session = await self.get_session()
        try:
            if session is not None:
                await self._request("POST", "/logout", "sign_out", token=session.access_token)
        finally:
            self._session = None
            self._pending_tokens = None
            await self._emit(AuthEvent.SIGNED_OUT, None)

    async def reset_password_for_email(self, email: str, redirect_to: str) -> None:
        """
        Request a password reset e-mail.

        Args:
            email: Account e-mail
            redirect_to: Page the reset link should open
        """
        await self._request(
            "POST",
            "/recover",
            "reset_password",
            json={"email": email},
            params={"redirect_to": redirect_to},
        )

    async def update_user(
        self,
        password: str | None = None,
        data: dict | None = None,
    ) -> IdentityUser:
        """
        Update the signed-in user's password and/or metadata.

        Raises:
            AuthError: When no session is active
        """
        session = await self.get_session()
        if session is None:
            raise AuthError("Auth session missing", status=401, code="session_missing")
        body: dict[str, Any] = {}
        if password is not None:
            body["password"] = password
        if data is not None:
            body["data"] = data
        payload = await self._request(
            "PUT", "/user", "update_user", json=body, token=session.access_token
        )
        user = _parse_user(payload)
        self._session = session.model_copy(update={"user": user})
        await self._emit(AuthEvent.USER_UPDATED, self._session)
        return user

    async def set_session(
        self,
        access_token: str,
        refresh_token: str | None = None,
        event: AuthEvent = AuthEvent.SIGNED_IN,
    ) -> IdentitySession:
        """
        Adopt an externally issued token pair (e.g. from a recovery link).

        The token is validated against the service before it is stored.
        """
        user = await self.get_user(access_token)
        self._session = IdentitySession(
            access_token=access_token,
            refresh_token=refresh_token,
            user=user,
        )
        self._pending_tokens = None
        await self._emit(event, self._session)
        return self._session

    async def get_session(self) -> IdentitySession | None:
        """
        Return the current session.

        A bearer token supplied at construction is validated on first call;
        an invalid token yields no session rather than an error.
        """
        if self._session is None and self._pending_tokens is not None:
            access_token, refresh_token = self._pending_tokens
            self._pending_tokens = None
            try:
                user = await self.get_user(access_token)
            except AuthError as e:
                logger.info(
                    f"{__name__}:get_session - Presented token rejected",
                    extra={"status": e.status},
                )
                return None
            self._session = IdentitySession(
                access_token=access_token,
                refresh_token=refresh_token,
                user=user,
            )
        return self._session

    @retry(
        retry=retry_if_exception_type(BackendCallError),
        stop=stop_after_attempt(3),
        wait=wait_exponential_jitter(multiplier=0.2, max=2, jitter=0.2),
        reraise=True,
    )
    async def get_user(self, access_token: str | None = None) -> IdentityUser:
        """
        Fetch the user that owns a token (defaults to the current session).

        Args:
            access_token: Bearer token to resolve

        Returns:
            IdentityUser
        """
        token = access_token or (self._session.access_token if self._session else None)
        if token is None:
            raise AuthError("Auth session missing", status=401, code="session_missing")
        payload = await self._request("GET", "/user", "get_user", token=token)
        return _parse_user(payload)


class StubIdentityClient:
    """
    Stand-in used when identity configuration is missing.

    Always logged out. Session reads succeed with no user so pages keep
    rendering; any operation that needs the service raises
    AuthNotConfiguredError.
    """

    def on_auth_state_change(self, listener: AuthListener) -> Unsubscribe:
        return lambda: None

    async def get_session(self) -> IdentitySession | None:
        return None

    async def sign_out(self) -> None:
        return None

    async def sign_up(self, email: str, password: str, data=None, redirect_to=None) -> IdentityUser:
        raise AuthNotConfiguredError()

    async def sign_in_with_password(self, email: str, password: str) -> IdentitySession:
        raise AuthNotConfiguredError()

    async def refresh_session(self, refresh_token: str) -> IdentitySession:
        raise AuthNotConfiguredError()

    async def reset_password_for_email(self, email: str, redirect_to: str) -> None:
        raise AuthNotConfiguredError()

    async def update_user(self, password=None, data=None) -> IdentityUser:
        raise AuthNotConfiguredError()

    async def set_session(self, access_token, refresh_token=None, event=AuthEvent.SIGNED_IN):
        raise AuthNotConfiguredError()

    async def get_user(self, access_token: str | None = None) -> IdentityUser:
        raise AuthNotConfiguredError()


def create_identity_client(
    http_client: httpx.AsyncClient | None,
    base_url: str | None,
    anon_key: str | None,
    access_token: str | None = None,
    refresh_token: str | None = None,
) -> IdentityClient | StubIdentityClient:
    """
    Build the identity client for one caller.

    Returns:
        IdentityClient when fully configured, StubIdentityClient otherwise
    """
    if http_client is None or not base_url or not anon_key:
        return StubIdentityClient()
    return IdentityClient(
        http_client,
        base_url,
        anon_key,
        access_token=access_token,
        refresh_token=refresh_token,
    )
