"""
Database error classification helpers.

Dependencies: sqlalchemy
System role: Maps driver-specific failures onto domain meaning
"""

from sqlalchemy.exc import IntegrityError

UNIQUE_VIOLATION = "23505"


def is_unique_violation(exc: BaseException) -> bool:
    """
    Check whether an exception is a unique-constraint violation.

    PostgreSQL drivers expose SQLSTATE 23505 (asyncpg as ``sqlstate``,
    psycopg as ``pgcode``); SQLite reports it only through the message.

    Args:
        exc: Exception raised by a flush/commit

    Returns:
        bool: True for duplicate-key failures
    """
    if not isinstance(exc, IntegrityError):
        return False
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is not None:
        return code == UNIQUE_VIOLATION
    return "UNIQUE constraint failed" in str(orig)
