"""
Structured content loading with default fallback.

Some collections keep JSON in a content field (the contact block in
``general_content``, page bodies in ``page_content``). Missing rows and
unparseable JSON do not fail the public site: the built-in default is served,
the problem is logged, and the result is flagged ``fallback`` so callers can
tell real content from the default.
"""

import copy
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError

from festival_cms.models.schemas import ContactInfo
from festival_cms.repositories.collection_repo import (
    RecordNotFoundError,
    StoreError,
)

logger = logging.getLogger(__name__)

CONTACT_SECTION_KEY = "contact_info"

DEFAULT_PAGE_CONTENT: Dict[str, Dict[str, Any]] = {
    "home": {
        "header": {
            "title": "Festival Marocain d'Anime & Manga",
            "subtitle": (
                "Le plus grand événement célébrant la culture japonaise "
                "au Maroc"
            ),
        },
        "sections": [
            {
                "id": "s1",
                "title": "Bienvenue au SHOTAKU",
                "content": (
                    "Le plus grand événement célébrant la culture japonaise, "
                    "l'anime et le manga au Maroc."
                ),
            }
        ],
        "footer": {
            "text": "SHOTAKU © 2024 | Le festival d'anime et manga du Maroc",
        },
    },
}


@dataclass
class ContentResult:
    value: Any
    fallback: bool = False
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"content": self.value, "fallback": self.fallback}


def default_page_content(page_id: str) -> Dict[str, Any]:
    return copy.deepcopy(
        DEFAULT_PAGE_CONTENT.get(page_id, DEFAULT_PAGE_CONTENT["home"])
    )


def parse_json_content(raw: Any, default: Any, context: str = "") -> ContentResult:
    """Decode ``raw`` JSON, falling back to a copy of ``default``.

    Dicts and lists pass through untouched (JSON columns are already
    decoded). Anything else that is not valid JSON yields the default.
    """
    if isinstance(raw, (dict, list)):
        return ContentResult(raw)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return ContentResult(copy.deepcopy(default), fallback=True)
    try:
        return ContentResult(json.loads(raw))
    except (TypeError, ValueError) as exc:
        logger.error("Error parsing content for %s: %s", context or "field", exc)
        return ContentResult(
            copy.deepcopy(default), fallback=True, error=str(exc)
        )


async def load_contact_info(store) -> ContentResult:
    """Contact block from general content, defaults for absent fields."""
    try:
        row = await store.single(
            "general_content", {"section_key": CONTACT_SECTION_KEY}
        )
    except RecordNotFoundError:
        return ContentResult(ContactInfo(), fallback=True)
    except StoreError as exc:
        logger.error("Error fetching contact info: %s", exc)
        return ContentResult(ContactInfo(), fallback=True, error=str(exc))

    parsed = parse_json_content(row.get("content"), {}, CONTACT_SECTION_KEY)
    data = parsed.value if isinstance(parsed.value, dict) else {}
    # empty strings fall back to the model defaults like absent keys do
    cleaned = {k: str(v) for k, v in data.items() if v not in (None, "")}
    try:
        info = ContactInfo(**{
            k: v for k, v in cleaned.items() if k in ContactInfo.model_fields
        })
    except PydanticValidationError as exc:
        logger.error("Invalid contact info content: %s", exc)
        return ContentResult(ContactInfo(), fallback=True, error=str(exc))
    return ContentResult(info, fallback=parsed.fallback, error=parsed.error)


async def load_page_content(store, page_id: str) -> ContentResult:
    default = default_page_content(page_id)
    try:
        row = await store.single("page_content", {"page_id": page_id})
    except RecordNotFoundError:
        return ContentResult(default, fallback=True)
    except StoreError as exc:
        logger.error("Error fetching page content for %s: %s", page_id, exc)
        return ContentResult(default, fallback=True, error=str(exc))
    parsed = parse_json_content(row.get("content"), default, f"page {page_id}")
    if not isinstance(parsed.value, dict):
        logger.error("Page content for %s is not an object", page_id)
        return ContentResult(
            default, fallback=True, error="Page content is not an object"
        )
    return parsed
