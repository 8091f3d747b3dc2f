"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, coaching_backend.configs
System role: Database schema initialization

Usage:
    python -m coaching_backend.boundary.db.create_tables
    python -m coaching_backend.boundary.db.create_tables --drop
"""

import argparse
import asyncio
import logging

from coaching_backend.boundary.db.base import Base
from coaching_backend.boundary.db.connection import dispose_engine, get_async_engine

# Import all models to register them with Base.metadata
from coaching_backend.boundary.db import models  # noqa: F401
from coaching_backend.observability import configure_logging

logger = logging.getLogger(__name__)


async def create_all_tables() -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: existing tables are left unchanged, so it is safe to run
    on every deploy.

    Raises:
        SQLAlchemyError: If the connection or DDL fails
    """
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_all_tables - Created {len(Base.metadata.tables)} tables")


async def drop_all_tables() -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.warning(f"{__name__}:drop_all_tables - All tables dropped")


async def _main(drop: bool) -> None:
    try:
        if drop:
            await drop_all_tables()
        await create_all_tables()
    finally:
        await dispose_engine()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the coaching site tables")
    parser.add_argument("--drop", action="store_true", help="Drop all tables first")
    args = parser.parse_args()
    configure_logging()
    asyncio.run(_main(args.drop))
