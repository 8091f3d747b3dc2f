"""
Role-gated access decisions.

A pure function over the current session state: no I/O and no state of
its own. Web routes and API dependencies both evaluate it per request.

Dependencies: coaching_backend.models.auth
System role: Access control for authenticated and admin areas
"""

from dataclasses import dataclass
from enum import Enum

from coaching_backend.models.auth import SessionState

LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"


class AccessRequirement(str, Enum):
    """What a route demands from the caller."""

    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    INSTRUCTOR = "instructor"
    ADMIN = "admin"


class GuardOutcome(str, Enum):
    """Result of an access evaluation."""

    LOADING = "loading"
    DENY_REDIRECT_LOGIN = "deny_redirect_login"
    DENY_REDIRECT_DASHBOARD = "deny_redirect_dashboard"
    ALLOW = "allow"


@dataclass(frozen=True)
class GuardDecision:
    """
    Access decision.

    Attributes:
        outcome: GuardOutcome
        redirect_to: Target path for deny outcomes
        from_path: Originally requested path (login redirects only)
    """

    outcome: GuardOutcome
    redirect_to: str | None = None
    from_path: str | None = None

    @property
    def allowed(self) -> bool:
        return self.outcome is GuardOutcome.ALLOW


# Front-end paths that need more than a visitor. Longest prefix wins.
ROUTE_REQUIREMENTS: dict[str, AccessRequirement] = {
    "/dashboard": AccessRequirement.AUTHENTICATED,
    "/profile": AccessRequirement.AUTHENTICATED,
    "/my-courses": AccessRequirement.AUTHENTICATED,
    "/admin": AccessRequirement.ADMIN,
}


def requirement_for_path(path: str) -> AccessRequirement:
    """
    Look up the requirement for a front-end path.

    Args:
        path: Requested path, e.g. "/admin/courses"

    Returns:
        AccessRequirement (PUBLIC when no entry matches)
    """
    normalized = "/" + path.split("?", 1)[0].split("#", 1)[0].strip("/")
    best: str | None = None
    for prefix in ROUTE_REQUIREMENTS:
        if normalized == prefix or normalized.startswith(prefix + "/"):
            if best is None or len(prefix) > len(best):
                best = prefix
    return ROUTE_REQUIREMENTS[best] if best else AccessRequirement.PUBLIC


def evaluate_access(
    state: SessionState,
    requirement: AccessRequirement,
    requested_path: str,
) -> GuardDecision:
    """
    Decide whether the session may see a route.

    Checks run in order: still loading, no user, admin required,
    instructor required (admins qualify), then allow.

    Args:
        state: Current session state
        requirement: Route requirement
        requested_path: Path the caller asked for

    Returns:
        GuardDecision
    """
    if requirement is AccessRequirement.PUBLIC:
        return GuardDecision(GuardOutcome.ALLOW)
    if state.is_loading:
        return GuardDecision(GuardOutcome.LOADING)
    if state.current_user is None:
        return GuardDecision(
            GuardOutcome.DENY_REDIRECT_LOGIN,
            redirect_to=LOGIN_PATH,
            from_path=requested_path,
        )
    if requirement is AccessRequirement.ADMIN and not state.is_admin:
        return GuardDecision(GuardOutcome.DENY_REDIRECT_DASHBOARD, redirect_to=DASHBOARD_PATH)
    if requirement is AccessRequirement.INSTRUCTOR and not (
        state.is_instructor or state.is_admin
    ):
        return GuardDecision(GuardOutcome.DENY_REDIRECT_DASHBOARD, redirect_to=DASHBOARD_PATH)
    return GuardDecision(GuardOutcome.ALLOW)
