"""
Bounded retry for read-only queries.

Mutations are never wrapped: a retried insert could duplicate a
registration.

Dependencies: tenacity, sqlalchemy
System role: Transient-failure resilience for store reads
"""

import logging

from sqlalchemy.exc import DBAPIError, OperationalError
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

logger = logging.getLogger(__name__)

QUERY_ATTEMPTS = 3


def is_transient(exc: BaseException) -> bool:
    """Connection drops and operational failures are worth another attempt."""
    if isinstance(exc, OperationalError):
        return True
    return isinstance(exc, DBAPIError) and exc.connection_invalidated


query_retry = retry(
    retry=retry_if_exception(is_transient),
    stop=stop_after_attempt(QUERY_ATTEMPTS),
    wait=wait_exponential_jitter(multiplier=0.2, max=2, jitter=0.2),
    before_sleep=lambda retry_state: logger.warning(
        f"{__name__}:query - Retry {retry_state.attempt_number}/{QUERY_ATTEMPTS} "
        f"after {type(retry_state.outcome.exception()).__name__}"
    ),
    reraise=True,
)
