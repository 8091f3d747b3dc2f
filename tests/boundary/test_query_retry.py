"""
Test suite for the read retry policy.

System role: Verification of bounded retries on store and identity reads
"""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from coaching_backend.boundary.db.CRUD.registration_crud import registration_crud
from coaching_backend.boundary.db.retry import QUERY_ATTEMPTS, is_transient, query_retry
from coaching_backend.boundary.identity import IdentityClient


def _operational_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("server closed the connection"))


class TestTransientErrors:
    """Which failures are retried."""

    def test_operational_error_is_transient(self) -> None:
        assert is_transient(_operational_error())

    def test_integrity_error_is_not_transient(self) -> None:
        assert not is_transient(IntegrityError("INSERT", {}, Exception("duplicate key")))


class TestQueryRetry:
    """Retry behaviour of decorated reads."""

    @pytest.mark.asyncio
    async def test_read_succeeds_after_transient_failure(self) -> None:
        calls = []

        @query_retry
        async def read() -> str:
            calls.append(1)
            if len(calls) == 1:
                raise _operational_error()
            return "rows"

        assert await read() == "rows"
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_gives_up_after_bounded_attempts(self) -> None:
        calls = []

        @query_retry
        async def read() -> None:
            calls.append(1)
            raise _operational_error()

        with pytest.raises(OperationalError):
            await read()

        assert len(calls) == QUERY_ATTEMPTS

    def test_backoff_uses_multiplier(self) -> None:
        store_wait = registration_crud.list_filtered.retry.wait
        identity_wait = IdentityClient.get_user.retry.wait

        for wait in (store_wait, identity_wait):
            assert wait.multiplier == 0.2
            assert wait.max == 2
