"""
Site settings endpoints.

Routes:
- GET /settings - Materialized settings (public: contact info, social links)
- GET /settings/{key} - One setting, with fallback flag
- PUT /admin/settings/{key} - Create or replace a setting

Dependencies: coaching_backend.core.settings_store
System role: Site configuration HTTP API
"""

from fastapi import APIRouter, Depends

from coaching_backend.api.deps.dependencies import get_settings_store, require_admin
from coaching_backend.core.settings_store import SiteSettingsStore
from coaching_backend.models.common import success_notice
from coaching_backend.models.settings import (
    SettingMutationResponse,
    SettingsResponse,
    SettingValueResponse,
    UpsertSettingRequest,
)

from .router_utils import handle_service_errors

router = APIRouter(prefix="/settings", tags=["settings"])
admin_router = APIRouter(
    prefix="/admin/settings",
    tags=["admin-settings"],
    dependencies=[Depends(require_admin)],
)

_MISSING = object()


@router.get("", response_model=SettingsResponse)
@handle_service_errors
async def get_settings(
    store: SiteSettingsStore = Depends(get_settings_store),
) -> SettingsResponse:
    """All settings; fetched when the cache is stale."""
    if not store.is_loaded:
        await store.get_all()
    return SettingsResponse(settings=store.snapshot())


@router.get("/{key}", response_model=SettingValueResponse)
@handle_service_errors
async def get_setting(
    key: str,
    store: SiteSettingsStore = Depends(get_settings_store),
) -> SettingValueResponse:
    """One setting; found is False when the key is not stored."""
    if not store.is_loaded:
        await store.get_all()
    value = store.get(key, _MISSING)
    if value is _MISSING:
        return SettingValueResponse(key=key, value=None, found=False)
    return SettingValueResponse(key=key, value=value, found=True)


@admin_router.put("/{key}", response_model=SettingMutationResponse)
@handle_service_errors
async def upsert_setting(
    key: str,
    request: UpsertSettingRequest,
    store: SiteSettingsStore = Depends(get_settings_store),
) -> SettingMutationResponse:
    """Create or replace a setting; the cache is refreshed on the next read."""
    row = await store.upsert(key, request.value, request.description)
    return SettingMutationResponse(
        key=row.key,
        value=row.value,
        description=row.description,
        notice=success_notice("Settings saved", "Your changes have been saved."),
    )
