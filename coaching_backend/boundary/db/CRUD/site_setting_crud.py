"""
Site setting CRUD operations.

Dependencies: sqlalchemy, coaching_backend.boundary.db.models
System role: Key-value settings persistence
"""

import uuid
from typing import Any, Sequence

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from coaching_backend.boundary.db.base import utcnow
from coaching_backend.boundary.db.models.site_setting_model import SiteSettingModel
from coaching_backend.boundary.db.CRUD.base_crud import BaseCRUD
from coaching_backend.boundary.db.retry import query_retry


class SiteSettingCRUD(BaseCRUD[SiteSettingModel]):
    """CRUD operations for SiteSettingModel."""

    def __init__(self) -> None:
        super().__init__(SiteSettingModel)

    @query_retry
    async def list_all(self, session: AsyncSession) -> Sequence[SiteSettingModel]:
        """All setting rows ordered by key."""
        stmt = select(SiteSettingModel).order_by(SiteSettingModel.key)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def upsert(
        self,
        session: AsyncSession,
        key: str,
        value: Any,
        description: str | None = None,
    ) -> SiteSettingModel:
        """
        Insert a setting or overwrite the existing row in one statement.

        Concurrent writers of the same key never collide on the unique
        key; the last statement to run wins. An existing description is
        kept when none is given.

        Args:
            session: Async database session
            key: Setting key
            value: JSON-serializable value
            description: Optional admin-facing description

        Returns:
            SiteSettingModel as stored after the write
        """
        dialect = session.get_bind().dialect.name
        insert = sqlite_insert if dialect == "sqlite" else pg_insert
        now = utcnow()

        stmt = insert(SiteSettingModel).values(
            id=uuid.uuid4(),
            key=key,
            value=value,
            description=description,
            created_at=now,
            updated_at=now,
        )
        changes = {"value": stmt.excluded["value"], "updated_at": now}
        if description is not None:
            changes["description"] = stmt.excluded["description"]
        stmt = stmt.on_conflict_do_update(
            index_elements=[SiteSettingModel.key],
            set_=changes,
        ).returning(SiteSettingModel)

        result = await session.execute(
            stmt, execution_options={"populate_existing": True}
        )
        return result.scalar_one()


site_setting_crud = SiteSettingCRUD()
