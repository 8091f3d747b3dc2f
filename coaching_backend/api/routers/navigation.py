"""
Navigation access endpoint.

Routes: GET /navigation/access?path=... - Evaluate the route guard for a front-end path

Dependencies: coaching_backend.core.route_guard
System role: Lets the front end decide redirects before rendering a page
"""

from fastapi import APIRouter, Depends, Query

from coaching_backend.api.deps.dependencies import get_session_provider
from coaching_backend.core.route_guard import evaluate_access, requirement_for_path
from coaching_backend.core.session_provider import SessionProvider
from coaching_backend.models.navigation import AccessDecisionResponse

router = APIRouter(prefix="/navigation", tags=["navigation"])


@router.get("/access", response_model=AccessDecisionResponse)
async def check_access(
    path: str = Query(..., min_length=1),
    provider: SessionProvider = Depends(get_session_provider),
) -> AccessDecisionResponse:
    """Guard decision for the caller on the given path."""
    requirement = requirement_for_path(path)
    decision = evaluate_access(provider.state, requirement, path)
    return AccessDecisionResponse(
        path=path,
        requirement=requirement,
        outcome=decision.outcome,
        allowed=decision.allowed,
        redirect_to=decision.redirect_to,
        from_path=decision.from_path,
    )
