"""Registry of the managed content collections.

A ``ResourceSpec`` carries everything the generic layers need to know about
one collection: its table, the fields a draft must fill, how the list is
ordered, which boolean acts as its visibility flag and which fields the admin
list may be filtered on.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Type

from pydantic import BaseModel

from festival_cms.models import records, schemas


@dataclass(frozen=True)
class ResourceSpec:
    collection: str
    model: type
    label: str
    required_fields: Tuple[str, ...] = ()
    order_by: Optional[str] = None
    descending: bool = False
    active_field: Optional[str] = None
    filter_fields: Tuple[str, ...] = ()
    # fields that partition order_number, e.g. schedule events per day
    order_scope: Tuple[str, ...] = ()
    singleton: bool = False
    create_schema: Optional[Type[BaseModel]] = None
    update_schema: Optional[Type[BaseModel]] = None

    @property
    def orderable(self) -> bool:
        return self.order_by == "order_number"


RESOURCES: Dict[str, ResourceSpec] = {
    spec.collection: spec
    for spec in (
        ResourceSpec(
            collection="events",
            model=records.EventRecord,
            label="Event",
            required_fields=("name", "place", "event_date"),
            order_by="event_date",
            filter_fields=("category",),
            create_schema=schemas.EventCreate,
            update_schema=schemas.EventUpdate,
        ),
        ResourceSpec(
            collection="tickets",
            model=records.TicketRecord,
            label="Ticket",
            required_fields=("name", "price"),
            order_by="price",
            active_field="available",
            create_schema=schemas.TicketCreate,
            update_schema=schemas.TicketUpdate,
        ),
        ResourceSpec(
            collection="gallery_items",
            model=records.GalleryItemRecord,
            label="Gallery item",
            required_fields=("src", "alt", "category", "type"),
            order_by="created_at",
            descending=True,
            filter_fields=("category", "type"),
            create_schema=schemas.GalleryItemCreate,
            update_schema=schemas.GalleryItemUpdate,
        ),
        ResourceSpec(
            collection="slider_images",
            model=records.SliderImageRecord,
            label="Slider image",
            required_fields=("image_url",),
            order_by="order_number",
            active_field="active",
            create_schema=schemas.SliderImageCreate,
            update_schema=schemas.SliderImageUpdate,
        ),
        ResourceSpec(
            collection="social_links",
            model=records.SocialLinkRecord,
            label="Social link",
            required_fields=("title", "url", "icon"),
            order_by="created_at",
            create_schema=schemas.SocialLinkCreate,
            update_schema=schemas.SocialLinkUpdate,
        ),
        ResourceSpec(
            collection="header_menu_links",
            model=records.HeaderMenuLinkRecord,
            label="Menu link",
            required_fields=("title", "url"),
            order_by="order_number",
            active_field="is_active",
            create_schema=schemas.HeaderMenuLinkCreate,
            update_schema=schemas.HeaderMenuLinkUpdate,
        ),
        ResourceSpec(
            collection="schedule_days",
            model=records.ScheduleDayRecord,
            label="Schedule day",
            required_fields=("day_name", "date"),
            order_by="order_number",
            create_schema=schemas.ScheduleDayCreate,
            update_schema=schemas.ScheduleDayUpdate,
        ),
        ResourceSpec(
            collection="schedule_events",
            model=records.ScheduleEventRecord,
            label="Schedule event",
            required_fields=("title", "start_time", "end_time", "category"),
            order_by="order_number",
            filter_fields=("day_id", "category"),
            order_scope=("day_id",),
            create_schema=schemas.ScheduleEventCreate,
            update_schema=schemas.ScheduleEventUpdate,
        ),
        ResourceSpec(
            collection="partners",
            model=records.PartnerRecord,
            label="Partner",
            required_fields=("name", "logo_url"),
            order_by="order_number",
            active_field="active",
            filter_fields=("category",),
            create_schema=schemas.PartnerCreate,
            update_schema=schemas.PartnerUpdate,
        ),
        ResourceSpec(
            collection="access_badges",
            model=records.AccessBadgeRecord,
            label="Access badge",
            required_fields=("title", "description", "type"),
            order_by="type",
            active_field="is_active",
            filter_fields=("type",),
            create_schema=schemas.AccessBadgeCreate,
            update_schema=schemas.AccessBadgeUpdate,
        ),
        ResourceSpec(
            collection="general_content",
            model=records.GeneralContentRecord,
            label="Content section",
            required_fields=("section_key",),
            order_by="section_key",
            filter_fields=("section_key",),
            create_schema=schemas.GeneralContentCreate,
            update_schema=schemas.GeneralContentUpdate,
        ),
        ResourceSpec(
            collection="pages",
            model=records.PageRecord,
            label="Page",
            required_fields=("title", "slug", "path"),
            order_by="title",
            active_field="is_published",
            filter_fields=("slug",),
            create_schema=schemas.PageCreate,
            update_schema=schemas.PageUpdate,
        ),
        ResourceSpec(
            collection="page_content",
            model=records.PageContentRecord,
            label="Page content",
            required_fields=("page_id", "content"),
            order_by="page_id",
            filter_fields=("page_id",),
            create_schema=schemas.PageContentCreate,
            update_schema=schemas.PageContentUpdate,
        ),
        ResourceSpec(
            collection="newsletter_subscribers",
            model=records.NewsletterSubscriberRecord,
            label="Subscriber",
            required_fields=("email",),
            order_by="subscribed_at",
            descending=True,
            create_schema=schemas.NewsletterSubscriberCreate,
            update_schema=schemas.NewsletterSubscriberUpdate,
        ),
        ResourceSpec(
            collection="countdown_settings",
            model=records.CountdownSettingsRecord,
            label="Countdown settings",
            order_by="created_at",
            descending=True,
            singleton=True,
            update_schema=schemas.CountdownSettingsIn,
        ),
        ResourceSpec(
            collection="theme_settings",
            model=records.ThemeSettingsRecord,
            label="Theme settings",
            order_by="created_at",
            descending=True,
            singleton=True,
            update_schema=schemas.ThemeSettingsIn,
        ),
        ResourceSpec(
            collection="stands_content",
            model=records.StandsContentRecord,
            label="Stands page",
            order_by="created_at",
            descending=True,
            singleton=True,
            update_schema=schemas.StandsContentIn,
        ),
    )
}
