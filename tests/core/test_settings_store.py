"""
Test suite for SiteSettingsStore.

Runs against the in-memory database through the shared session factory.

System role: Verification of the settings read-through cache
"""

from unittest.mock import patch

import pytest

from coaching_backend.boundary.db.CRUD.site_setting_crud import site_setting_crud
from coaching_backend.core.settings_store import SiteSettingsStore


@pytest.fixture
def store(test_session_factory) -> SiteSettingsStore:
    """Provide a store over the test database."""
    return SiteSettingsStore(test_session_factory)


@pytest.mark.asyncio
async def test_get_falls_back_before_load(store: SiteSettingsStore) -> None:
    assert not store.is_loaded
    assert store.get("contact_info") is None
    assert store.get("contact_info", {"email": "info@example.com"}) == {"email": "info@example.com"}


@pytest.mark.asyncio
async def test_upsert_then_get_all_returns_value(store: SiteSettingsStore) -> None:
    await store.upsert("contact_info", {"email": "hello@coaching.example", "phone": "+1 555 0100"})

    values = await store.get_all()

    assert values["contact_info"]["email"] == "hello@coaching.example"
    assert store.get("contact_info")["phone"] == "+1 555 0100"
    assert store.is_loaded


@pytest.mark.asyncio
async def test_upsert_invalidates_materialization(store: SiteSettingsStore) -> None:
    await store.upsert("social_links", {"linkedin": "https://linkedin.example/old"})
    await store.get_all()

    await store.upsert("social_links", {"linkedin": "https://linkedin.example/new"})

    assert not store.is_loaded
    # Stale value stays readable until the next fetch
    assert store.get("social_links")["linkedin"] == "https://linkedin.example/old"
    await store.get_all()
    assert store.get("social_links")["linkedin"] == "https://linkedin.example/new"


@pytest.mark.asyncio
async def test_upsert_keeps_description_when_omitted(store: SiteSettingsStore) -> None:
    await store.upsert("mail_settings", {"sender": "a@example.com"}, description="Outgoing mail")

    row = await store.upsert("mail_settings", {"sender": "b@example.com"})

    assert row.value == {"sender": "b@example.com"}
    assert row.description == "Outgoing mail"


@pytest.mark.asyncio
async def test_clear_forgets_values(store: SiteSettingsStore) -> None:
    await store.upsert("contact_info", {"email": "hello@coaching.example"})
    await store.get_all()

    store.clear()

    assert store.snapshot() == {}
    assert not store.is_loaded


@pytest.mark.asyncio
async def test_upsert_wins_over_row_created_by_another_writer(
    store: SiteSettingsStore, test_session_factory
) -> None:
    async with test_session_factory() as session:
        await site_setting_crud.create(
            session,
            key="contact_info",
            value={"email": "first@coaching.example"},
            description="Public contact details",
        )
        await session.commit()

    row = await store.upsert("contact_info", {"email": "second@coaching.example"})

    assert row.value == {"email": "second@coaching.example"}
    assert row.description == "Public contact details"
    values = await store.get_all()
    assert values == {"contact_info": {"email": "second@coaching.example"}}


@pytest.mark.asyncio
async def test_new_key_written_by_racing_writer_does_not_fail_save(
    store: SiteSettingsStore, test_session_factory
) -> None:
    write = site_setting_crud.upsert

    async def racing_upsert(session, **values):
        # Another writer commits the same new key just before this write lands
        async with test_session_factory() as other:
            await site_setting_crud.create(
                other, key=values["key"], value={"linkedin": "https://linkedin.example/a"}
            )
            await other.commit()
        return await write(session, **values)

    with patch.object(site_setting_crud, "upsert", side_effect=racing_upsert):
        await store.upsert("social_links", {"linkedin": "https://linkedin.example/b"})

    values = await store.get_all()
    assert values == {"social_links": {"linkedin": "https://linkedin.example/b"}}
