"""
Site settings store.

Read-through cache over the key-value site_settings table. get_all()
materializes every row; get() is a pure lookup in that materialization;
upsert() writes and invalidates it. No TTL, last write wins.

Dependencies: sqlalchemy, coaching_backend.boundary.db
System role: Shared configuration cache (contact info, mail, social links)
"""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from coaching_backend.boundary.db.CRUD.site_setting_crud import site_setting_crud
from coaching_backend.boundary.db.models.site_setting_model import SiteSettingModel
from coaching_backend.core.exceptions import BackendCallError

logger = logging.getLogger(__name__)


class SiteSettingsStore:
    """
    Key-value settings cache owned by the application lifespan.

    Attributes:
        is_loaded: True once a materialization exists and is not invalidated
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Initialize the store.

        Args:
            session_factory: Factory for short-lived database sessions
        """
        self._session_factory = session_factory
        self._values: dict[str, Any] = {}
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    async def get_all(self) -> dict[str, Any]:
        """
        Fetch every setting and replace the materialization.

        Returns:
            dict: {key: value} snapshot
        """
        try:
            async with self._session_factory() as session:
                rows = await site_setting_crud.list_all(session)
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:get_all - Settings fetch failed", extra={"error": str(e)})
            raise BackendCallError("Settings could not be loaded", operation="select") from e
        self._values = {row.key: row.value for row in rows}
        self._loaded = True
        logger.debug(f"{__name__}:get_all - Materialized {len(self._values)} settings")
        return dict(self._values)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a materialized value. Never fetches.

        Args:
            key: Setting key
            default: Returned when the key is absent

        Returns:
            Stored value or default
        """
        return self._values.get(key, default)

    def snapshot(self) -> dict[str, Any]:
        return dict(self._values)

    async def upsert(
        self,
        key: str,
        value: Any,
        description: str | None = None,
    ) -> SiteSettingModel:
        """
        Create or update a setting and invalidate the materialization.

        An existing description is kept when none is given. The write is a
        single insert-or-update, so concurrent writers of a new key both
        succeed and the last one wins.

        Args:
            key: Setting key
            value: JSON-serializable value
            description: Optional admin-facing description

        Returns:
            SiteSettingModel after the write
        """
        try:
            async with self._session_factory() as session:
                row = await site_setting_crud.upsert(
                    session, key=key, value=value, description=description
                )
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(
                f"{__name__}:upsert - Setting save failed",
                extra={"key": key, "error": str(e)},
            )
            raise BackendCallError("Settings could not be saved", operation="upsert") from e

        self.invalidate()
        logger.info(f"{__name__}:upsert - Setting saved", extra={"key": key})
        return row

    def invalidate(self) -> None:
        """Mark the materialization stale; the next get_all() re-fetches."""
        self._loaded = False

    def clear(self) -> None:
        """Forget every value (application shutdown)."""
        self._values = {}
        self._loaded = False
