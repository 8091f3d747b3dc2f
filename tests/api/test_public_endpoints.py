"""
API tests for health, navigation, settings and auth endpoints.

System role: Verification of public HTTP contracts
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from coaching_backend.api.deps.dependencies import get_session_provider, get_settings_store
from coaching_backend.api.main import create_app
from coaching_backend.boundary.db import get_async_db
from coaching_backend.boundary.identity import StubIdentityClient
from coaching_backend.core.exceptions import AuthError
from coaching_backend.core.session_provider import SessionProvider
from coaching_backend.core.settings_store import SiteSettingsStore


async def _signed_out_provider() -> SessionProvider:
    provider = SessionProvider(StubIdentityClient(), role_loader=AsyncMock(return_value=set()))
    await provider.start()
    return provider


@pytest.fixture
def client():
    app = create_app()
    app.dependency_overrides[get_session_provider] = _signed_out_provider
    return TestClient(app)


class TestHealth:
    """GET /health and /health/db"""

    def test_health_check(self, client) -> None:
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "message": "Server Healthy"}

    def test_health_check_db(self, client) -> None:
        db = AsyncMock()
        client.app.dependency_overrides[get_async_db] = lambda: db

        response = client.get("/api/v1/health/db")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "message": "Database connection OK"}

    def test_health_check_db_unreachable(self, client) -> None:
        db = AsyncMock()
        db.execute.side_effect = OperationalError("SELECT 1", {}, Exception("timeout"))
        client.app.dependency_overrides[get_async_db] = lambda: db

        response = client.get("/api/v1/health/db")

        assert response.status_code == 503


class TestNavigation:
    """GET /navigation/access"""

    def test_signed_out_visitor_sent_to_login(self, client) -> None:
        response = client.get("/api/v1/navigation/access", params={"path": "/my-courses"})

        assert response.status_code == 200
        body = response.json()
        assert body["requirement"] == "authenticated"
        assert body["outcome"] == "deny_redirect_login"
        assert body["redirect_to"] == "/login"
        assert body["from_path"] == "/my-courses"
        assert body["allowed"] is False

    def test_public_page_allowed(self, client) -> None:
        response = client.get("/api/v1/navigation/access", params={"path": "/courses"})

        assert response.json()["allowed"] is True


class TestSettings:
    """GET /settings and /settings/{key}"""

    @pytest.fixture
    def store(self, client) -> MagicMock:
        store = MagicMock(spec=SiteSettingsStore)
        store.is_loaded = False
        store.get_all = AsyncMock(return_value={"contact_info": {"email": "hello@coaching.example"}})
        store.snapshot.return_value = {"contact_info": {"email": "hello@coaching.example"}}
        store.get.side_effect = lambda key, default=None: (
            {"email": "hello@coaching.example"} if key == "contact_info" else default
        )
        client.app.dependency_overrides[get_settings_store] = lambda: store
        return store

    def test_stale_store_is_refreshed(self, client, store) -> None:
        response = client.get("/api/v1/settings")

        assert response.status_code == 200
        assert response.json()["settings"]["contact_info"]["email"] == "hello@coaching.example"
        store.get_all.assert_awaited_once()

    def test_missing_key_reports_not_found(self, client, store) -> None:
        response = client.get("/api/v1/settings/social_links")

        assert response.status_code == 200
        assert response.json() == {"key": "social_links", "value": None, "found": False}

    def test_known_key_returned(self, client, store) -> None:
        response = client.get("/api/v1/settings/contact_info")

        assert response.json()["found"] is True
        assert response.json()["value"] == {"email": "hello@coaching.example"}

    def test_store_missing_is_unavailable(self) -> None:
        app = create_app()
        # Lifespan not run, so no store on app.state
        response = TestClient(app).get("/api/v1/settings")

        assert response.status_code == 503


class TestAuthWithoutIdentityService:
    """Auth endpoints when the identity service is not configured."""

    def test_session_is_signed_out(self, client) -> None:
        response = client.get("/api/v1/auth/session")

        assert response.status_code == 200
        assert response.json()["user"] is None
        assert response.json()["is_admin"] is False

    def test_sign_in_reports_unavailable(self, client) -> None:
        response = client.post(
            "/api/v1/auth/sign-in",
            json={"email": "coach@example.com", "password": "secret123"},
        )

        assert response.status_code == 503
        assert response.json()["detail"]["notice"]["title"] == "Authentication unavailable"

    def test_sign_out_always_succeeds(self, client) -> None:
        response = client.post("/api/v1/auth/sign-out")

        assert response.status_code == 200
        assert response.json()["notice"]["title"] == "Signed out"

    def test_profile_update_requires_user(self, client) -> None:
        response = client.put("/api/v1/auth/user", json={"data": {"first_name": "Ada"}})

        assert response.status_code == 401


class TestAuthRejections:
    """Identity-service rejections mapped to HTTP statuses."""

    @pytest.fixture
    def provider(self, client) -> MagicMock:
        provider = MagicMock(spec=SessionProvider)
        client.app.dependency_overrides[get_session_provider] = lambda: provider
        return provider

    @pytest.mark.parametrize("code", ["invalid_grant", "invalid_credentials"])
    def test_wrong_password_is_unauthorized(self, client, provider, code) -> None:
        provider.sign_in.side_effect = AuthError("Invalid login credentials", status=400, code=code)

        response = client.post(
            "/api/v1/auth/sign-in",
            json={"email": "coach@example.com", "password": "wrong-password"},
        )

        assert response.status_code == 401
        detail = response.json()["detail"]
        assert detail["error"] == "Invalid login credentials"
        assert detail["notice"]["variant"] == "destructive"

    def test_other_rejection_is_bad_request(self, client, provider) -> None:
        provider.sign_up.side_effect = AuthError(
            "Password should be at least 6 characters", status=422, code="weak_password"
        )

        response = client.post(
            "/api/v1/auth/sign-up",
            json={"email": "coach@example.com", "password": "secret1"},
        )

        assert response.status_code == 400
        assert response.json()["detail"]["details"]["code"] == "weak_password"
