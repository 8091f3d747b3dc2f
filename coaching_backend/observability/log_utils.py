"""
Logging utilities for safe structured logging.

Provides helpers for safe logging without string concatenation errors,
and masking of participant e-mail addresses.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any


def mask_email(email: str | None) -> str:
    """
    Mask the local part of an e-mail address for logs.

    Args:
        email: Address to mask

    Returns:
        str: e.g. "j***@example.com", or "None"
    """
    if not email:
        return "None"
    local, sep, domain = email.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Safely convert any value to a string for logging.

    Handles lists, dicts, None, and other types safely.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, str):
            val_str = value
        elif isinstance(value, (list, tuple)):
            val_str = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, dict):
            val_str = f"dict({len(value)} keys)"
        else:
            val_str = str(value)

        if len(val_str) > max_length:
            return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
        return val_str
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an exception with full context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context dict
    """
    safe_context = {
        key: safe_log_value(val) for key, val in context.items()
    }
    safe_context.update({
        "error_type": type(exc).__name__,
        "error_msg": str(exc),
    })
    logger.error(message, exc_info=exc, extra=safe_context)
