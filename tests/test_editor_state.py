"""Tests for the record editor and the notifier."""

from datetime import timedelta

import pytest

from festival_cms.sync.editor import EditorNotOpenError, EditorState
from festival_cms.sync.notifications import Notifier, Severity


@pytest.fixture
async def partners(make_binding):
    binding = make_binding("partners")
    await binding.create({"name": "Acme", "logo_url": "https://cdn.test/acme.png"})
    return binding


@pytest.mark.asyncio
async def test_editing_copy_does_not_touch_displayed_record(partners):
    editor = EditorState(partners)
    record_id = partners.records[0]["id"]
    assert editor.open_existing(record_id)

    editor.set("name", "Acme Corp")

    assert partners.records[0]["name"] == "Acme"
    assert editor.values["name"] == "Acme Corp"
    assert editor.dirty_fields == {"name": "Acme Corp"}


@pytest.mark.asyncio
async def test_save_sends_only_changed_fields(partners, store, monkeypatch):
    editor = EditorState(partners)
    record_id = partners.records[0]["id"]
    sent = []
    original = store.update

    async def spy(collection, pk, values):
        sent.append(values)
        return await original(collection, pk, values)

    monkeypatch.setattr(store, "update", spy)
    editor.open_existing(record_id)
    editor.set("website_url", "https://acme.test")

    assert await editor.save() is True
    assert sent == [{"website_url": "https://acme.test"}]
    assert not editor.is_open
    assert partners.get(record_id)["website_url"] == "https://acme.test"


@pytest.mark.asyncio
async def test_save_without_changes_is_noop_success(partners, store, monkeypatch):
    editor = EditorState(partners)
    calls = []

    async def spy(*args, **kwargs):
        calls.append(args)

    monkeypatch.setattr(store, "update", spy)
    editor.open_existing(partners.records[0]["id"])
    assert await editor.save() is True
    assert calls == []


@pytest.mark.asyncio
async def test_create_mode_and_failed_save_stays_open(partners):
    editor = EditorState(partners)
    editor.open_new({"active": True})
    editor.set("name", "Beta")

    # logo_url missing: validation keeps the editor open with its edits
    assert await editor.save() is False
    assert editor.is_open
    assert editor.get("name") == "Beta"

    editor.set("logo_url", "https://cdn.test/beta.png")
    assert await editor.save() is True
    assert [p["name"] for p in partners.records] == ["Acme", "Beta"]
    assert partners.records[1]["order_number"] == 1


@pytest.mark.asyncio
async def test_reopen_reinitializes_and_cancel_discards(partners, notifier):
    editor = EditorState(partners)
    record_id = partners.records[0]["id"]
    editor.open_existing(record_id)
    editor.set("name", "Draft")
    editor.open_existing(record_id)
    assert editor.get("name") == "Acme"

    editor.cancel()
    assert not editor.is_open
    with pytest.raises(EditorNotOpenError):
        editor.set("name", "Nope")

    assert editor.open_existing("missing-id") is False
    assert notifier.of(Severity.ERROR)[-1].title == "Partner not found"


def test_notifier_history_dismiss_and_listeners():
    notifier = Notifier(max_history=2)
    seen = []
    notifier.add_listener(seen.append)

    first = notifier.success("Saved")
    notifier.info("Heads up")
    notifier.error("Failed", "boom")

    assert [n.title for n in notifier.history] == ["Heads up", "Failed"]
    assert len(seen) == 3
    assert first.id == 1

    notifier.dismiss(notifier.history[0].id)
    assert [n.title for n in notifier.active] == ["Failed"]
    notifier.clear()
    assert notifier.active == []


def test_failing_listener_does_not_break_notify():
    notifier = Notifier()

    def broken(note):
        raise RuntimeError("listener down")

    notifier.add_listener(broken)
    note = notifier.error("Still recorded")
    assert notifier.history == [note]


def test_notifications_are_stamped_in_utc():
    note = Notifier().info("Synced")
    assert note.created_at.utcoffset() == timedelta(0)
