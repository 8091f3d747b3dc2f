"""
Service error handling for routers.

A decorator that maps the service exception hierarchy onto HTTP errors
with a single user-facing notice, logging each failure once.

Dependencies: fastapi, coaching_backend.core.exceptions
System role: Uniform error responses across endpoints
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from coaching_backend.core.exceptions import (
    AlreadyRegisteredError,
    AuthError,
    AuthNotConfiguredError,
    BackendCallError,
    CapacityExceededError,
    CoachingSiteException,
    GroupRegistrationError,
    NotFoundError,
    ValidationError,
)
from coaching_backend.models.common import failure_notice

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Identity-service codes for a rejected password grant (sent with HTTP 400)
INVALID_CREDENTIAL_CODES = frozenset({"invalid_grant", "invalid_credentials"})

GENERIC_FAILURE = "Something went wrong. Please try again."


def error_detail(
    message: str,
    title: str,
    details: dict | None = None,
    description: str | None = None,
) -> dict[str, Any]:
    """Build the HTTPException detail payload: message, context and notice."""
    return {
        "error": message,
        "details": details or {},
        "notice": failure_notice(title, description or message).model_dump(),
    }


def exception_to_http(exc: CoachingSiteException) -> HTTPException:
    """
    Map a service exception to an HTTPException.

    Backend call failures expose only a generic message; the original
    error is expected to have been logged by the caller.

    Args:
        exc: Service exception

    Returns:
        HTTPException
    """
    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_detail(exc.message, "Invalid request", exc.details),
        )
    if isinstance(exc, NotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=error_detail(exc.message, "Not found", exc.details),
        )
    if isinstance(exc, AlreadyRegisteredError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=error_detail(exc.message, "Already registered", exc.details),
        )
    if isinstance(exc, CapacityExceededError):
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=error_detail(exc.message, "Course full", exc.details),
        )
    if isinstance(exc, GroupRegistrationError):
        details = {
            "failed_index": exc.failed_index,
            "persisted_ids": [str(r.id) for r in exc.persisted],
        }
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=error_detail(
                exc.message,
                "Group registration failed",
                details,
                "There was an error submitting your group registration. Please try again.",
            ),
        )
    if isinstance(exc, AuthNotConfiguredError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=error_detail(exc.message, "Authentication unavailable"),
        )
    if isinstance(exc, AuthError):
        code = (
            status.HTTP_401_UNAUTHORIZED
            if exc.status in (None, 401, 403) or exc.code in INVALID_CREDENTIAL_CODES
            else status.HTTP_400_BAD_REQUEST
        )
        return HTTPException(
            status_code=code,
            detail=error_detail(exc.message, "Authentication failed", {"code": exc.code}),
        )
    if isinstance(exc, BackendCallError):
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=error_detail(exc.message, "Request failed", description=GENERIC_FAILURE),
        )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error_detail(GENERIC_FAILURE, "Request failed"),
    )


def handle_service_errors(func: F) -> F:
    """
    Decorator translating service exceptions into HTTPExceptions.

    This centralizes:
    - Logging of errors with context
    - Mapping exception types to HTTP status codes
    - A single failure notice per request
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except (ValidationError, NotFoundError, AlreadyRegisteredError, CapacityExceededError) as e:
            logger.warning(
                f"{func.__module__}:{func.__name__} - {type(e).__name__}: {e.message}",
                extra={"details": e.details},
            )
            raise exception_to_http(e)

        except CoachingSiteException as e:
            logger.error(
                f"{func.__module__}:{func.__name__} - {type(e).__name__}: {e.message}",
                extra={"details": e.details},
            )
            raise exception_to_http(e)

        except Exception as e:
            logger.exception(
                f"{func.__module__}:{func.__name__} - Unexpected failure",
                extra={"error": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=error_detail(GENERIC_FAILURE, "Request failed"),
            )

    return wrapper  # type: ignore
