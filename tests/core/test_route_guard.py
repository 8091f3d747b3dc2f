"""
Test suite for route guard access decisions.

Covers the evaluation order (loading, no user, admin, instructor, allow)
and front-end path requirement lookup.

System role: Verification of role-gated navigation
"""

import uuid

import pytest

from coaching_backend.core.route_guard import (
    DASHBOARD_PATH,
    LOGIN_PATH,
    AccessRequirement,
    GuardOutcome,
    evaluate_access,
    requirement_for_path,
)
from coaching_backend.models.auth import IdentityUser, SessionState


def _state(
    signed_in: bool = True,
    is_admin: bool = False,
    is_instructor: bool = False,
    is_loading: bool = False,
) -> SessionState:
    user = IdentityUser(id=uuid.uuid4(), email="coach@example.com") if signed_in else None
    return SessionState(
        current_user=user,
        access_token="token" if signed_in else None,
        is_loading=is_loading,
        is_admin=is_admin,
        is_instructor=is_instructor or is_admin,
    )


class TestEvaluateAccess:
    """Test suite for evaluate_access()."""

    def test_public_route_is_always_allowed(self) -> None:
        decision = evaluate_access(_state(signed_in=False, is_loading=True), AccessRequirement.PUBLIC, "/courses")
        assert decision.outcome is GuardOutcome.ALLOW
        assert decision.allowed

    def test_loading_state_defers_decision(self) -> None:
        decision = evaluate_access(SessionState(), AccessRequirement.ADMIN, "/admin")
        assert decision.outcome is GuardOutcome.LOADING
        assert decision.redirect_to is None
        assert not decision.allowed

    def test_anonymous_user_is_sent_to_login_with_origin(self) -> None:
        decision = evaluate_access(_state(signed_in=False), AccessRequirement.AUTHENTICATED, "/my-courses")
        assert decision.outcome is GuardOutcome.DENY_REDIRECT_LOGIN
        assert decision.redirect_to == LOGIN_PATH
        assert decision.from_path == "/my-courses"

    def test_non_admin_is_sent_to_dashboard(self) -> None:
        decision = evaluate_access(_state(is_instructor=True), AccessRequirement.ADMIN, "/admin/courses")
        assert decision.outcome is GuardOutcome.DENY_REDIRECT_DASHBOARD
        assert decision.redirect_to == DASHBOARD_PATH
        assert decision.from_path is None

    def test_admin_satisfies_instructor_requirement(self) -> None:
        state = SessionState(
            current_user=IdentityUser(id=uuid.uuid4()),
            is_loading=False,
            is_admin=True,
            is_instructor=False,
        )
        decision = evaluate_access(state, AccessRequirement.INSTRUCTOR, "/dashboard")
        assert decision.allowed

    def test_student_denied_instructor_route(self) -> None:
        decision = evaluate_access(_state(), AccessRequirement.INSTRUCTOR, "/dashboard/teaching")
        assert decision.outcome is GuardOutcome.DENY_REDIRECT_DASHBOARD

    @pytest.mark.parametrize(
        "requirement",
        [AccessRequirement.AUTHENTICATED, AccessRequirement.INSTRUCTOR, AccessRequirement.ADMIN],
    )
    def test_admin_is_allowed_everywhere(self, requirement: AccessRequirement) -> None:
        assert evaluate_access(_state(is_admin=True), requirement, "/admin").allowed


class TestRequirementForPath:
    """Test suite for requirement_for_path()."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/", AccessRequirement.PUBLIC),
            ("/courses/scrum-master", AccessRequirement.PUBLIC),
            ("/dashboard", AccessRequirement.AUTHENTICATED),
            ("/profile/", AccessRequirement.AUTHENTICATED),
            ("/my-courses?tab=upcoming", AccessRequirement.AUTHENTICATED),
            ("/admin", AccessRequirement.ADMIN),
            ("/admin/registrations#pending", AccessRequirement.ADMIN),
            ("/administrators", AccessRequirement.PUBLIC),
        ],
    )
    def test_path_lookup(self, path: str, expected: AccessRequirement) -> None:
        assert requirement_for_path(path) is expected
