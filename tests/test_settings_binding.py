"""Tests for single-row settings bindings."""

import pytest

from festival_cms.repositories.collection_repo import StoreError
from festival_cms.sync.notifications import Severity
from festival_cms.sync.settings import (
    COUNTDOWN_DEFAULTS,
    THEME_DEFAULTS,
    countdown_settings,
    merge_settings,
    theme_settings,
)


@pytest.mark.asyncio
async def test_load_without_row_keeps_defaults(store, notifier):
    binding = countdown_settings(store, notifier)
    assert await binding.load() is True
    assert binding.record_id is None
    assert binding.values == COUNTDOWN_DEFAULTS
    assert notifier.of(Severity.ERROR) == []


@pytest.mark.asyncio
async def test_first_save_inserts_then_updates(store, notifier):
    binding = theme_settings(store, notifier)
    await binding.load()

    assert await binding.save({"primary_color": "#ff0000"})
    first_id = binding.record_id
    assert first_id is not None

    assert await binding.save({"font_body": "Roboto"})
    assert binding.record_id == first_id

    rows = await store.select("theme_settings")
    assert len(rows) == 1
    assert rows[0]["primary_color"] == "#ff0000"
    assert rows[0]["font_body"] == "Roboto"
    assert binding.values == {
        **THEME_DEFAULTS, "primary_color": "#ff0000", "font_body": "Roboto"
    }


@pytest.mark.asyncio
async def test_fresh_binding_finds_saved_row(store, notifier):
    writer = countdown_settings(store, notifier)
    await writer.load()
    await writer.save({"title": "J-30", "display_duration": 10})

    reader = countdown_settings(store, notifier)
    await reader.load()
    assert reader.record_id == writer.record_id
    assert reader.values["title"] == "J-30"
    assert reader.values["display_duration"] == 10
    assert reader.values["text_color"] == COUNTDOWN_DEFAULTS["text_color"]


@pytest.mark.asyncio
async def test_save_after_row_deleted_elsewhere_recovers(store, notifier):
    binding = theme_settings(store, notifier)
    assert await binding.save({"primary_color": "#ff0000"})
    await store.delete("theme_settings", binding.record_id)

    assert await binding.save({"primary_color": "#00ff00"}) is False
    assert binding.record_id is None
    assert notifier.of(Severity.ERROR)[-1].title == "Could not save theme settings"

    assert await binding.save({"primary_color": "#00ff00"}) is True
    rows = await store.select("theme_settings")
    assert len(rows) == 1
    assert rows[0]["id"] == binding.record_id
    assert rows[0]["primary_color"] == "#00ff00"


@pytest.mark.asyncio
async def test_unknown_keys_are_ignored_on_save(store, notifier):
    binding = theme_settings(store, notifier)
    await binding.load()
    assert await binding.save({"accent_color": "#000000", "favicon": "x.ico"})
    assert "favicon" not in binding.values


@pytest.mark.asyncio
async def test_fetch_error_keeps_current_values(store, notifier, monkeypatch):
    binding = countdown_settings(store, notifier)
    await binding.load()
    await binding.save({"title": "Soon"})

    async def broken_single(*args, **kwargs):
        raise StoreError("timeout")

    monkeypatch.setattr(store, "single", broken_single)
    assert await binding.load() is False
    assert binding.values["title"] == "Soon"
    assert notifier.of(Severity.ERROR)[-1].title == "Could not load countdown settings"


@pytest.mark.asyncio
async def test_subscribed_settings_follow_other_writers(store, notifier):
    admin = theme_settings(store, notifier)
    site = theme_settings(store, notifier)
    async with site:
        await admin.load()
        await admin.save({"text_color": "#222222"})
        assert site.values["text_color"] == "#222222"
        assert site.record_id == admin.record_id


def test_merge_settings_ignores_nulls_and_extra_columns():
    row = {"id": "1", "title": None, "enabled": False, "created_at": "now"}
    merged = merge_settings(COUNTDOWN_DEFAULTS, row)
    assert merged["title"] == COUNTDOWN_DEFAULTS["title"]
    assert merged["enabled"] is False
    assert "created_at" not in merged
