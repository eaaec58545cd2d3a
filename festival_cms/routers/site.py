"""Public site endpoints.

Read-only views of the published content, filtered to what visitors may
see (active slider images, partners and access badges, available tickets,
active menu links, published pages), plus the newsletter sign-up.
"""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from festival_cms.models.schemas import NewsletterSubscriberCreate
from festival_cms.repositories.collection_repo import (
    RecordConflictError,
    RecordNotFoundError,
)
from festival_cms.routers.deps import get_store
from festival_cms.services.content import load_contact_info, load_page_content
from festival_cms.store.collection_store import CollectionStore
from festival_cms.utils.validation import is_valid_slug

router = APIRouter(prefix="/site", tags=["Site"])


@router.get("/events")
async def list_events(
    category: Optional[str] = None, store: CollectionStore = Depends(get_store)
) -> List[Dict[str, Any]]:
    filters = {"category": category} if category else None
    return await store.select("events", filters, "event_date")


@router.get("/schedule")
async def schedule(store: CollectionStore = Depends(get_store)) -> List[Dict[str, Any]]:
    """Schedule days in order, each with its events in order."""
    days = await store.select("schedule_days", order_by="order_number")
    events = await store.select("schedule_events", order_by="order_number")
    by_day: Dict[str, List[Dict[str, Any]]] = {}
    for event in events:
        by_day.setdefault(event["day_id"], []).append(event)
    return [{**day, "events": by_day.get(day["id"], [])} for day in days]


@router.get("/tickets")
async def list_tickets(store: CollectionStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return await store.select("tickets", {"available": True}, "price")


@router.get("/gallery")
async def list_gallery(
    category: Optional[str] = None, store: CollectionStore = Depends(get_store)
) -> List[Dict[str, Any]]:
    filters = {"category": category} if category else None
    return await store.select("gallery_items", filters, "created_at", descending=True)


@router.get("/slider")
async def list_slider(store: CollectionStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return await store.select("slider_images", {"active": True}, "order_number")


@router.get("/partners")
async def list_partners(store: CollectionStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return await store.select("partners", {"active": True}, "order_number")


@router.get("/social-links")
async def list_social_links(store: CollectionStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return await store.select("social_links", order_by="created_at")


@router.get("/menu")
async def list_menu(store: CollectionStore = Depends(get_store)) -> List[Dict[str, Any]]:
    return await store.select("header_menu_links", {"is_active": True}, "order_number")


@router.get("/access-badges")
async def list_access_badges(
    type: Optional[str] = None, store: CollectionStore = Depends(get_store)
) -> List[Dict[str, Any]]:
    filters: Dict[str, Any] = {"is_active": True}
    if type:
        filters["type"] = type
    return await store.select("access_badges", filters, "type")


@router.get("/contact")
async def contact_info(store: CollectionStore = Depends(get_store)) -> Dict[str, Any]:
    result = await load_contact_info(store)
    return {"content": result.value.model_dump(), "fallback": result.fallback}


@router.get("/content/{page_id}")
async def page_content(
    page_id: str, store: CollectionStore = Depends(get_store)
) -> Dict[str, Any]:
    result = await load_page_content(store, page_id)
    return result.to_dict()


@router.get("/pages/{slug}")
async def published_page(
    slug: str, store: CollectionStore = Depends(get_store)
) -> Dict[str, Any]:
    if not is_valid_slug(slug):
        raise HTTPException(status_code=404, detail="Page not found")
    try:
        page = await store.single("pages", {"slug": slug, "is_published": True})
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Page not found")
    content = await load_page_content(store, slug)
    return {**page, **content.to_dict()}


@router.post("/newsletter", status_code=status.HTTP_201_CREATED)
async def subscribe_newsletter(
    payload: NewsletterSubscriberCreate,
    store: CollectionStore = Depends(get_store),
) -> Dict[str, Any]:
    email = payload.email.strip().lower()
    try:
        await store.insert("newsletter_subscribers", {"email": email})
    except RecordConflictError:
        raise HTTPException(status_code=409, detail="Email already subscribed")
    return {"success": True, "email": email}
