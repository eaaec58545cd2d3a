"""
Pydantic models for request and response payloads

Create models describe the draft an admin submits; Update models are the
partial-field counterparts (every field optional, unset fields untouched).
"""

from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from festival_cms.utils.validation import SLUG_PATTERN

GalleryType = Literal["image", "video"]
Direction = Literal["up", "down"]
BadgeType = Literal["Media", "Cosplay", "Team"]


# Events ---------------------------------------------------------------------

class EventCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    place: str = Field(..., min_length=1, max_length=200)
    event_date: str = Field(..., min_length=1, max_length=32)
    start_time: Optional[str] = Field(None, max_length=16)
    end_time: Optional[str] = Field(None, max_length=16)
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=200)
    category: Optional[str] = Field(None, max_length=64)
    image_url: Optional[str] = None


class EventUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    place: Optional[str] = Field(None, min_length=1, max_length=200)
    event_date: Optional[str] = Field(None, min_length=1, max_length=32)
    start_time: Optional[str] = Field(None, max_length=16)
    end_time: Optional[str] = Field(None, max_length=16)
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=200)
    category: Optional[str] = Field(None, max_length=64)
    image_url: Optional[str] = None


# Tickets --------------------------------------------------------------------

class TicketCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0)
    description: Optional[str] = None
    available: bool = True


class TicketUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None
    available: Optional[bool] = None


# Gallery --------------------------------------------------------------------

class GalleryItemCreate(BaseModel):
    src: str = Field(..., min_length=1)
    alt: str = Field(..., min_length=1, max_length=300)
    category: str = Field(..., min_length=1, max_length=64)
    type: GalleryType = "image"


class GalleryItemUpdate(BaseModel):
    src: Optional[str] = Field(None, min_length=1)
    alt: Optional[str] = Field(None, min_length=1, max_length=300)
    category: Optional[str] = Field(None, min_length=1, max_length=64)
    type: Optional[GalleryType] = None


# Slider ---------------------------------------------------------------------

class SliderImageCreate(BaseModel):
    image_url: str = Field(..., min_length=1)
    link: Optional[str] = None
    order_number: Optional[int] = Field(None, ge=0)
    active: bool = True


class SliderImageUpdate(BaseModel):
    image_url: Optional[str] = Field(None, min_length=1)
    link: Optional[str] = None
    active: Optional[bool] = None


# Social links ---------------------------------------------------------------

class SocialLinkCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    url: str = Field(..., min_length=1)
    icon: str = Field(..., min_length=1, max_length=64)


class SocialLinkUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    url: Optional[str] = Field(None, min_length=1)
    icon: Optional[str] = Field(None, min_length=1, max_length=64)


# Header menu ----------------------------------------------------------------

class HeaderMenuLinkCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    url: str = Field(..., min_length=1)
    order_number: Optional[int] = Field(None, ge=0)
    is_active: bool = True


class HeaderMenuLinkUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    url: Optional[str] = Field(None, min_length=1)
    is_active: Optional[bool] = None


# Schedule -------------------------------------------------------------------

class ScheduleDayCreate(BaseModel):
    day_name: str = Field(..., min_length=1, max_length=64)
    date: str = Field(..., min_length=1, max_length=32)
    order_number: Optional[int] = Field(None, ge=0)


class ScheduleDayUpdate(BaseModel):
    day_name: Optional[str] = Field(None, min_length=1, max_length=64)
    date: Optional[str] = Field(None, min_length=1, max_length=32)


class ScheduleEventCreate(BaseModel):
    day_id: Optional[str] = None
    title: str = Field(..., min_length=1, max_length=200)
    start_time: str = Field(..., min_length=1, max_length=16)
    end_time: str = Field(..., min_length=1, max_length=16)
    category: str = Field(..., min_length=1, max_length=64)
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=200)
    order_number: Optional[int] = Field(None, ge=0)


class ScheduleEventUpdate(BaseModel):
    day_id: Optional[str] = None
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    start_time: Optional[str] = Field(None, min_length=1, max_length=16)
    end_time: Optional[str] = Field(None, min_length=1, max_length=16)
    category: Optional[str] = Field(None, min_length=1, max_length=64)
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=200)


# Partners -------------------------------------------------------------------

class PartnerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    logo_url: str = Field(..., min_length=1)
    website_url: Optional[str] = None
    category: Optional[str] = Field(None, max_length=64)
    order_number: Optional[int] = Field(None, ge=0)
    active: bool = True


class PartnerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    logo_url: Optional[str] = Field(None, min_length=1)
    website_url: Optional[str] = None
    category: Optional[str] = Field(None, max_length=64)
    active: Optional[bool] = None


# Access badges --------------------------------------------------------------

class AccessBadgeCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    type: BadgeType = "Media"
    image_url: Optional[str] = None
    is_active: bool = True


class AccessBadgeUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    type: Optional[BadgeType] = None
    image_url: Optional[str] = None
    is_active: Optional[bool] = None


# General content / pages ----------------------------------------------------

class GeneralContentCreate(BaseModel):
    section_key: str = Field(..., min_length=1, max_length=64)
    title: Optional[str] = Field(None, max_length=200)
    subtitle: Optional[str] = Field(None, max_length=300)
    content: Optional[str] = None
    image_url: Optional[str] = None


class GeneralContentUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=200)
    subtitle: Optional[str] = Field(None, max_length=300)
    content: Optional[str] = None
    image_url: Optional[str] = None


class PageCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    slug: str = Field(..., min_length=1, max_length=100, pattern=SLUG_PATTERN)
    path: str = Field(..., min_length=1, max_length=200)
    layout: Optional[str] = Field("default", max_length=32)
    meta_description: Optional[str] = None
    is_published: bool = False

    @field_validator("path")
    def path_must_be_absolute(cls, v: str):
        if not v.startswith("/"):
            raise ValueError("Path must start with '/'")
        return v


class PageUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    slug: Optional[str] = Field(
        None, min_length=1, max_length=100, pattern=SLUG_PATTERN
    )
    path: Optional[str] = Field(None, min_length=1, max_length=200)
    layout: Optional[str] = Field(None, max_length=32)
    meta_description: Optional[str] = None
    is_published: Optional[bool] = None


class PageContentCreate(BaseModel):
    page_id: str = Field(..., min_length=1, max_length=100)
    content: Dict[str, Any]


class PageContentUpdate(BaseModel):
    content: Optional[Dict[str, Any]] = None


class NewsletterSubscriberCreate(BaseModel):
    email: str = Field(
        ..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
    )


class NewsletterSubscriberUpdate(BaseModel):
    email: Optional[str] = Field(
        None, min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
    )


# Singleton settings ---------------------------------------------------------

class CountdownSettingsIn(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    target_date: Optional[str] = Field(None, min_length=1, max_length=32)
    background_color: Optional[str] = Field(None, max_length=32)
    text_color: Optional[str] = Field(None, max_length=32)
    background_image_url: Optional[str] = None
    enabled: Optional[bool] = None
    show_on_load: Optional[bool] = None
    display_duration: Optional[int] = Field(None, ge=0)


class ThemeSettingsIn(BaseModel):
    primary_color: Optional[str] = Field(None, max_length=32)
    secondary_color: Optional[str] = Field(None, max_length=32)
    accent_color: Optional[str] = Field(None, max_length=32)
    background_color: Optional[str] = Field(None, max_length=32)
    text_color: Optional[str] = Field(None, max_length=32)
    font_heading: Optional[str] = Field(None, max_length=64)
    font_body: Optional[str] = Field(None, max_length=64)


class StandsContentIn(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    url: Optional[str] = Field(None, max_length=500)
    is_active: Optional[bool] = None


# Misc -----------------------------------------------------------------------

class ActiveToggle(BaseModel):
    value: bool


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SessionOut(BaseModel):
    token: Optional[str] = None
    username: str
    expiresAt: datetime


class ContactInfo(BaseModel):
    """Structured contact block stored as JSON in general content."""
    email: str = ""
    phone: str = ""
    whatsapp: str = ""
    address: str = ""
    hours: str = ""
    additional_info: str = ""
    map_lat: str = "33.589886"
    map_lng: str = "-7.603869"
    map_zoom: str = "15"


class HealthCheckResponse(BaseModel):
    """Health check response model"""
    status: Literal["healthy", "degraded", "unhealthy"]
    version: str
    environment: str
    timestamp: datetime
    uptime: float
