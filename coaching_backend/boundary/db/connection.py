"""
Database connection management.

Provides the async SQLAlchemy engine, session factory, and FastAPI
dependency for database session injection.

Dependencies: sqlalchemy, coaching_backend.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker

from coaching_backend.configs import get_settings


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Create async SQLAlchemy engine with connection pooling.

    The engine is created once per process and reused. pool_pre_ping=True
    verifies connections before use to detect stale/broken connections early.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = get_settings().database

    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory for database operations.

    autocommit=False and autoflush=False keep transaction control explicit:
    services decide when to commit.

    Returns:
        async_sessionmaker: Async session factory configured for manual transaction control

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=get_async_engine(),
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Creates a new async database session for each request and ensures it's closed
    after the route completes, even if exceptions occur.

    Yields:
        AsyncSession: Async SQLAlchemy database session (scoped to request lifetime)

    Usage:
        from fastapi import Depends

        @app.get("/courses/{id}")
        async def get_course(id: UUID, db: AsyncSession = Depends(get_async_db)):
            return await course_crud.get_by_id(db, id)
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session


async def dispose_engine() -> None:
    """Dispose the cached engine and forget it (application shutdown)."""
    if get_async_engine.cache_info().currsize:
        await get_async_engine().dispose()
    get_async_session_factory.cache_clear()
    get_async_engine.cache_clear()
