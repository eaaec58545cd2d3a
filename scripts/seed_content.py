"""
Content Seeding Script

Creates the initial header menu, the countdown, theme and stands settings
and the contact block so a fresh install renders a complete site.
Collections that already hold rows are left untouched.

Usage:
    python scripts/seed_content.py
    python scripts/seed_content.py --hash-password <password>
"""
import argparse
import asyncio
import json

from festival_cms.db.config import SessionLocal, close_db, init_models
from festival_cms.models.schemas import ContactInfo
from festival_cms.services.auth import hash_password
from festival_cms.services.content import CONTACT_SECTION_KEY
from festival_cms.store.collection_store import CollectionStore
from festival_cms.sync.settings import (
    COUNTDOWN_DEFAULTS,
    STANDS_DEFAULTS,
    THEME_DEFAULTS,
)


SEED_MENU_LINKS = [
    {"title": "Accueil", "url": "/"},
    {"title": "À propos", "url": "/about"},
    {"title": "Programme", "url": "/schedule"},
    {"title": "Galerie", "url": "/gallery"},
    {"title": "Événements", "url": "/events"},
    {"title": "Bénévoles", "url": "/volunteer"},
    {"title": "Contact", "url": "/contact"},
    {"title": "Billets", "url": "/tickets"},
    {"title": "Stands", "url": "/stands"},
    {"title": "Accès", "url": "/access"},
]


async def _seed_if_empty(store: CollectionStore, collection: str, rows) -> int:
    existing = await store.select(collection, limit=1)
    if existing:
        print(f"{collection}: already populated, skipping")
        return 0
    for row in rows:
        await store.insert(collection, row)
    print(f"{collection}: seeded {len(rows)} record(s)")
    return len(rows)


async def seed_content() -> None:
    """Seed the database with the default site content."""
    await init_models()
    store = CollectionStore(SessionLocal)

    menu = [
        {**link, "order_number": index, "is_active": True}
        for index, link in enumerate(SEED_MENU_LINKS)
    ]
    await _seed_if_empty(store, "header_menu_links", menu)
    await _seed_if_empty(store, "countdown_settings", [dict(COUNTDOWN_DEFAULTS)])
    await _seed_if_empty(store, "theme_settings", [dict(THEME_DEFAULTS)])
    await _seed_if_empty(store, "stands_content", [dict(STANDS_DEFAULTS)])
    await _seed_if_empty(store, "general_content", [{
        "section_key": CONTACT_SECTION_KEY,
        "title": "Contact",
        "content": json.dumps(ContactInfo().model_dump()),
    }])

    await close_db()


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument(
        "--hash-password",
        metavar="PASSWORD",
        help="print an ADMIN_PASSWORD_HASH value for PASSWORD and exit",
    )
    args = parser.parse_args()
    if args.hash_password:
        print(hash_password(args.hash_password))
        return
    asyncio.run(seed_content())


if __name__ == "__main__":
    main()
