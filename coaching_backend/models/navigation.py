"""
Navigation access schemas.

Dependencies: pydantic
System role: Route guard API contract
"""

from pydantic import BaseModel

from coaching_backend.core.route_guard import AccessRequirement, GuardOutcome


class AccessDecisionResponse(BaseModel):
    """Guard decision for a front-end path."""

    path: str
    requirement: AccessRequirement
    outcome: GuardOutcome
    allowed: bool
    redirect_to: str | None = None
    from_path: str | None = None
