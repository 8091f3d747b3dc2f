"""Router utilities."""

from .error_handling import exception_to_http, handle_service_errors

__all__ = ["exception_to_http", "handle_service_errors"]
