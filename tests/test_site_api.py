"""Tests for the public site, settings and media endpoints."""

import json

import pytest

from conftest import assert_response_error, assert_response_success
from festival_cms.services.content import CONTACT_SECTION_KEY
from festival_cms.sync.settings import COUNTDOWN_DEFAULTS, STANDS_DEFAULTS, THEME_DEFAULTS

API = "/api/v1"
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.mark.asyncio
async def test_public_lists_hide_inactive_records(client, store):
    await store.insert("tickets", {"name": "Day", "price": 30, "available": True})
    await store.insert("tickets", {"name": "Sold out", "price": 10, "available": False})
    await store.insert("slider_images", {"image_url": "b.png", "order_number": 1})
    await store.insert("slider_images", {"image_url": "a.png", "order_number": 0})
    await store.insert("slider_images", {"image_url": "hidden.png", "order_number": 2, "active": False})
    await store.insert("header_menu_links", {"title": "Home", "url": "/", "is_active": True})
    await store.insert("header_menu_links", {"title": "Old", "url": "/old", "is_active": False})

    r = await client.get(f"{API}/site/tickets")
    assert [t["name"] for t in r.json()] == ["Day"]

    r = await client.get(f"{API}/site/slider")
    assert [s["image_url"] for s in r.json()] == ["a.png", "b.png"]

    r = await client.get(f"{API}/site/menu")
    assert [m["title"] for m in r.json()] == ["Home"]


@pytest.mark.asyncio
async def test_events_and_gallery_filter_by_category(client, store):
    await store.insert("events", {"name": "Quiz", "place": "A", "event_date": "2025-05-09", "category": "games"})
    await store.insert("events", {"name": "Concert", "place": "B", "event_date": "2025-05-08", "category": "music"})
    await store.insert("gallery_items", {"src": "1.jpg", "alt": "Cosplay", "category": "cosplay"})
    await store.insert("gallery_items", {"src": "2.jpg", "alt": "Stage", "category": "stage"})

    r = await client.get(f"{API}/site/events")
    assert [e["name"] for e in r.json()] == ["Concert", "Quiz"]
    r = await client.get(f"{API}/site/events", params={"category": "games"})
    assert [e["name"] for e in r.json()] == ["Quiz"]

    r = await client.get(f"{API}/site/gallery", params={"category": "stage"})
    assert [g["alt"] for g in r.json()] == ["Stage"]


@pytest.mark.asyncio
async def test_schedule_nests_events_under_days(client, store):
    saturday = await store.insert("schedule_days", {"day_name": "Saturday", "date": "2025-05-10", "order_number": 1})
    friday = await store.insert("schedule_days", {"day_name": "Friday", "date": "2025-05-09", "order_number": 0})
    base = {"start_time": "10:00", "end_time": "11:00", "category": "stage"}
    await store.insert("schedule_events", {**base, "title": "Parade", "day_id": saturday["id"]})
    await store.insert("schedule_events", {**base, "title": "Late", "day_id": friday["id"], "order_number": 1})
    await store.insert("schedule_events", {**base, "title": "Early", "day_id": friday["id"], "order_number": 0})

    r = await client.get(f"{API}/site/schedule")
    assert_response_success(r)
    days = r.json()
    assert [d["day_name"] for d in days] == ["Friday", "Saturday"]
    assert [e["title"] for e in days[0]["events"]] == ["Early", "Late"]
    assert [e["title"] for e in days[1]["events"]] == ["Parade"]


@pytest.mark.asyncio
async def test_contact_info_defaults_and_saved(client, store):
    r = await client.get(f"{API}/site/contact")
    body = r.json()
    assert body["fallback"] is True
    assert body["content"]["map_lng"] == "-7.603869"

    await store.insert("general_content", {
        "section_key": CONTACT_SECTION_KEY,
        "content": json.dumps({"email": "info@festival.ma"}),
    })
    body = (await client.get(f"{API}/site/contact")).json()
    assert body["fallback"] is False
    assert body["content"]["email"] == "info@festival.ma"


@pytest.mark.asyncio
async def test_only_published_pages_are_served(client, store):
    await store.insert("pages", {"title": "About", "slug": "about", "path": "/about", "is_published": True})
    await store.insert("pages", {"title": "Draft", "slug": "draft", "path": "/draft"})
    await store.insert("page_content", {"page_id": "about", "content": {"header": {"title": "About us"}}})

    r = await client.get(f"{API}/site/pages/about")
    assert_response_success(r)
    page = r.json()
    assert page["title"] == "About"
    assert page["content"] == {"header": {"title": "About us"}}
    assert page["fallback"] is False

    assert_response_error(await client.get(f"{API}/site/pages/draft"), 404)
    assert_response_error(await client.get(f"{API}/site/pages/Not_A_Slug"), 404)

    r = await client.get(f"{API}/site/content/home")
    assert r.json()["fallback"] is True
    assert r.json()["content"]["header"]["title"]


@pytest.mark.asyncio
async def test_newsletter_subscription(client, store):
    r = await client.post(f"{API}/site/newsletter", json={"email": "Fan@Example.com"})
    assert r.status_code == 201
    assert r.json()["email"] == "fan@example.com"

    r = await client.post(f"{API}/site/newsletter", json={"email": "fan@example.com"})
    assert_response_error(r, 409)

    r = await client.post(f"{API}/site/newsletter", json={"email": "not-an-email"})
    assert r.status_code == 422

    assert len(await store.select("newsletter_subscribers")) == 1


@pytest.mark.asyncio
async def test_settings_defaults_then_saved(client, admin_headers, store):
    r = await client.get(f"{API}/settings/countdown")
    assert r.status_code == 200
    body = r.json()
    assert body["id"] is None
    assert body["title"] == COUNTDOWN_DEFAULTS["title"]

    r = await client.put(f"{API}/admin/settings/theme", json={"primary_color": "#000"})
    assert r.status_code == 401

    for color in ("#000000", "#111111"):
        r = await client.put(
            f"{API}/admin/settings/theme",
            json={"primary_color": color},
            headers=admin_headers,
        )
        assert r.status_code == 200, r.text

    assert r.json()["primary_color"] == "#111111"
    assert r.json()["font_body"] == THEME_DEFAULTS["font_body"]
    assert len(await store.select("theme_settings")) == 1

    r = await client.get(f"{API}/settings/theme")
    assert r.json()["primary_color"] == "#111111"


@pytest.mark.asyncio
async def test_settings_validation(client, admin_headers):
    r = await client.put(
        f"{API}/admin/settings/countdown",
        json={"display_duration": -5},
        headers=admin_headers,
    )
    assert r.status_code == 422

    r = await client.get(f"{API}/settings/layout")
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_media_upload_and_serve(client, admin_headers):
    r = await client.post(
        f"{API}/admin/media/upload",
        files={"file": ("logo.png", PNG, "image/png")},
        data={"folder": "partners"},
        headers=admin_headers,
    )
    assert r.status_code == 200, r.text
    media = r.json()["media"]
    assert media["category"] == "image"
    assert media["originalName"] == "logo.png"
    assert media["path"].startswith("partners/")
    assert media["publicUrl"].endswith(media["path"])

    r = await client.get(f"{API}/media/{media['path']}")
    assert r.status_code == 200
    assert r.content == PNG

    r = await client.get(f"{API}/media/partners/missing.png")
    assert_response_error(r, 404)


@pytest.mark.asyncio
async def test_media_upload_rejections(client, admin_headers):
    r = await client.post(
        f"{API}/admin/media/upload",
        files={"file": ("logo.png", PNG, "image/png")},
    )
    assert r.status_code == 401

    cases = [
        ("empty.png", b""),
        ("virus.exe", b"MZ\x90\x00"),
        ("fake.jpg", PNG),
    ]
    for filename, content in cases:
        r = await client.post(
            f"{API}/admin/media/upload",
            files={"file": (filename, content, "application/octet-stream")},
            headers=admin_headers,
        )
        assert_response_error(r, 400)


@pytest.mark.asyncio
async def test_access_badges_show_active_by_type(client, admin_headers):
    badges = [
        {"title": "Press", "description": "Media access", "type": "Media"},
        {"title": "Crew", "description": "Staff access", "type": "Team"},
        {"title": "Old", "description": "Retired", "type": "Cosplay", "is_active": False},
    ]
    for badge in badges:
        r = await client.post(f"{API}/admin/access_badges", json=badge, headers=admin_headers)
        assert r.status_code == 201, r.text

    r = await client.get(f"{API}/site/access-badges")
    assert [b["title"] for b in r.json()] == ["Press", "Crew"]

    r = await client.get(f"{API}/site/access-badges", params={"type": "Team"})
    assert [b["title"] for b in r.json()] == ["Crew"]

    r = await client.post(
        f"{API}/admin/access_badges",
        json={"title": "VIP", "description": "x", "type": "Vip"},
        headers=admin_headers,
    )
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_stands_page_defaults_then_saved(client, admin_headers, store):
    r = await client.get(f"{API}/settings/stands")
    assert r.json()["id"] is None
    assert r.json()["title"] == STANDS_DEFAULTS["title"]

    r = await client.put(
        f"{API}/admin/settings/stands",
        json={"url": "https://docs.google.com/spreadsheets/d/x", "is_active": False},
        headers=admin_headers,
    )
    assert r.status_code == 200, r.text
    assert r.json()["is_active"] is False
    assert r.json()["title"] == STANDS_DEFAULTS["title"]

    rows = await store.select("stands_content")
    assert len(rows) == 1
    assert rows[0]["url"] == "https://docs.google.com/spreadsheets/d/x"
