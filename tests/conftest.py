"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database engine/sessions, seeded courses, notifier mocks
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine with foreign keys enforced (lazy imported to avoid settings issues)
    """
    from sqlalchemy import event
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool
    from coaching_backend.boundary.db.base import Base

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    """Session factory bound to the test engine."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_async_db(test_session_factory):
    """
    Create a session on the in-memory database.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    async with test_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def make_course(test_async_db):
    """
    Factory inserting committed courses.

    Returns:
        Callable: async (**overrides) -> CourseModel
    """
    from coaching_backend.boundary.db.CRUD.course_crud import course_crud

    async def _make(**overrides):
        suffix = uuid.uuid4().hex[:8]
        start = datetime.now(timezone.utc) + timedelta(days=30)
        values = {
            "slug": f"scrum-master-{suffix}",
            "title": "Professional Scrum Master",
            "description": "Two days of Scrum in practice",
            "category": "Scrum",
            "location": "Virtual",
            "price": 1200.0,
            "start_date": start,
            "end_date": start + timedelta(days=2),
            "is_published": True,
        }
        values.update(overrides)
        course = await course_crud.create(test_async_db, **values)
        await test_async_db.commit()
        return course

    return _make


@pytest.fixture
async def published_course(make_course):
    """A published, scheduled course."""
    return await make_course()


@pytest.fixture
def mock_notifier() -> MagicMock:
    """
    Create mock NotificationClient.

    Returns:
        MagicMock: invoke() succeeds with an empty body
    """
    notifier = MagicMock()
    notifier.is_configured = True
    notifier.invoke = AsyncMock(return_value={})
    return notifier


@pytest.fixture
def participant_payload() -> dict:
    """Individual registration form body."""
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "phone": "+44 20 7946 0000",
        "company": "Analytical Engines Ltd",
        "special_requests": None,
    }


@pytest.fixture
def group_payload() -> dict:
    """Group registration form body with three participants."""
    return {
        "company": "Initech",
        "contact_name": "Bill Lumbergh",
        "contact_email": "bill@initech.example",
        "contact_phone": "555-0100",
        "special_requests": "Vegetarian lunch",
        "participants": [
            {"first_name": "Peter", "last_name": "Gibbons", "email": "peter@initech.example"},
            {"first_name": "Michael", "last_name": "Bolton", "email": "michael@initech.example"},
            {"first_name": "Samir", "last_name": "Nagheenanajar", "email": "samir@initech.example"},
        ],
    }


@pytest.fixture
def user_id() -> uuid.UUID:
    """Generate a test user ID."""
    return uuid.uuid4()
