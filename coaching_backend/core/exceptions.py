"""
Exception hierarchy for the coaching site backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class CoachingSiteException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(CoachingSiteException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class AuthError(CoachingSiteException):
    """Raised when the identity service rejects an operation."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize auth error.

        Args:
            message: Error message returned by the identity service
            status: HTTP status returned by the identity service
            code: Machine-readable error code, when provided
            details: Additional context
        """
        details = details or {}
        if status is not None:
            details["status"] = status
        if code:
            details["code"] = code
        self.status = status
        self.code = code
        super().__init__(message, details)


class AuthNotConfiguredError(AuthError):
    """Raised when an auth operation is attempted without identity configuration."""

    def __init__(self) -> None:
        super().__init__("Authentication is not configured")


class NotFoundError(CoachingSiteException):
    """Raised when a requested resource does not exist."""

    def __init__(
        self,
        resource: str,
        resource_id: Any,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize not found error.

        Args:
            resource: Resource kind (course, registration, ...)
            resource_id: Identifier that was looked up
            details: Additional context
        """
        details = details or {}
        details[f"{resource}_id"] = str(resource_id)
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource.capitalize()} not found: {resource_id}", details)


class AlreadyRegisteredError(CoachingSiteException):
    """Raised when a unique registration already exists for the course/user pair."""

    def __init__(self, course_id: Any, user_id: Any = None) -> None:
        details = {"course_id": str(course_id)}
        if user_id is not None:
            details["user_id"] = str(user_id)
        super().__init__("You have already registered for this course", details)


class CapacityExceededError(CoachingSiteException):
    """Raised when capacity enforcement rejects a registration."""

    def __init__(self, course_id: Any, requested: int) -> None:
        super().__init__(
            "This course is fully booked",
            {"course_id": str(course_id), "requested_seats": requested},
        )


class GroupRegistrationError(CoachingSiteException):
    """
    Raised when a participant insert fails during a group registration.

    Attributes:
        persisted: Registration rows that remain stored after the failure
        failed_index: Zero-based index of the participant whose insert failed
    """

    def __init__(
        self,
        message: str,
        failed_index: int,
        persisted: list | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.failed_index = failed_index
        self.persisted = persisted or []
        details = details or {}
        details.update({
            "failed_index": failed_index,
            "persisted_count": len(self.persisted),
        })
        super().__init__(message, details)


class BackendCallError(CoachingSiteException):
    """Raised when a store, identity or function call fails."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize backend call error.

        Args:
            message: Error message
            operation: Operation that failed (insert, update, invoke, ...)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class StorageError(BackendCallError):
    """Raised when object storage operations fail."""

    pass


class NotificationError(BackendCallError):
    """Raised when a notification function invocation fails."""

    pass
