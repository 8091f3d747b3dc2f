"""
Core business logic module.

Contains the exception hierarchy, session state, access decisions and
the site settings cache.
"""

from coaching_backend.core.exceptions import (
    AlreadyRegisteredError,
    AuthError,
    AuthNotConfiguredError,
    BackendCallError,
    CapacityExceededError,
    CoachingSiteException,
    GroupRegistrationError,
    NotFoundError,
    NotificationError,
    StorageError,
    ValidationError,
)
from coaching_backend.core.route_guard import (
    AccessRequirement,
    GuardDecision,
    GuardOutcome,
    evaluate_access,
    requirement_for_path,
)

__all__ = [
    # Exceptions
    "AlreadyRegisteredError",
    "AuthError",
    "AuthNotConfiguredError",
    "BackendCallError",
    "CapacityExceededError",
    "CoachingSiteException",
    "GroupRegistrationError",
    "NotFoundError",
    "NotificationError",
    "StorageError",
    "ValidationError",
    # Access control
    "AccessRequirement",
    "GuardDecision",
    "GuardOutcome",
    "evaluate_access",
    "requirement_for_path",
]
