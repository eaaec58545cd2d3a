"""SQLAlchemy ORM models for the festival content collections.

Each table is one Resource Collection. Rows are exchanged with the rest of
the application as plain dicts (``to_dict``) keyed by column name, so the
collection store can stay generic over every content type.
"""
from __future__ import annotations
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from sqlalchemy.orm import Mapped, mapped_column, declarative_base
from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
)

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class RecordMixin:
    """Shared id column and dict serialization."""

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=_new_id
    )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for column in self.__table__.columns:  # type: ignore[attr-defined]
            value = getattr(self, column.key)
            if isinstance(value, datetime):
                value = value.isoformat()
            data[column.key] = value
        return data


def utcnow() -> datetime:
    # columns are naive and always hold UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow, onupdate=utcnow
    )


class EventRecord(RecordMixin, TimestampMixin, Base):
    __tablename__ = "events"

    name: Mapped[str] = mapped_column(String(200))
    place: Mapped[str] = mapped_column(String(200))
    event_date: Mapped[str] = mapped_column(String(32), index=True)
    start_time: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    end_time: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class TicketRecord(RecordMixin, TimestampMixin, Base):
    __tablename__ = "tickets"

    name: Mapped[str] = mapped_column(String(200))
    price: Mapped[float] = mapped_column(Float)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    available: Mapped[bool] = mapped_column(Boolean, default=True)


class GalleryItemRecord(RecordMixin, TimestampMixin, Base):
    __tablename__ = "gallery_items"

    src: Mapped[str] = mapped_column(Text)
    alt: Mapped[str] = mapped_column(String(300))
    category: Mapped[str] = mapped_column(String(64), index=True)
    type: Mapped[str] = mapped_column(String(16), default="image")


class SliderImageRecord(RecordMixin, TimestampMixin, Base):
    __tablename__ = "slider_images"

    image_url: Mapped[str] = mapped_column(Text)
    link: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    order_number: Mapped[int] = mapped_column(Integer, default=0)
    active: Mapped[bool] = mapped_column(Boolean, default=True)


class SocialLinkRecord(RecordMixin, TimestampMixin, Base):
    __tablename__ = "social_links"

    title: Mapped[str] = mapped_column(String(100))
    url: Mapped[str] = mapped_column(Text)
    icon: Mapped[str] = mapped_column(String(64))


class HeaderMenuLinkRecord(RecordMixin, TimestampMixin, Base):
    __tablename__ = "header_menu_links"

    title: Mapped[str] = mapped_column(String(100))
    url: Mapped[str] = mapped_column(Text)
    order_number: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class ScheduleDayRecord(RecordMixin, TimestampMixin, Base):
    __tablename__ = "schedule_days"

    day_name: Mapped[str] = mapped_column(String(64))
    date: Mapped[str] = mapped_column(String(32))
    order_number: Mapped[int] = mapped_column(Integer, default=0)


class ScheduleEventRecord(RecordMixin, TimestampMixin, Base):
    __tablename__ = "schedule_events"

    day_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("schedule_days.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200))
    start_time: Mapped[str] = mapped_column(String(16))
    end_time: Mapped[str] = mapped_column(String(16))
    category: Mapped[str] = mapped_column(String(64))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    order_number: Mapped[int] = mapped_column(Integer, default=0)


class PartnerRecord(RecordMixin, TimestampMixin, Base):
    __tablename__ = "partners"

    name: Mapped[str] = mapped_column(String(200))
    logo_url: Mapped[str] = mapped_column(Text)
    website_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    order_number: Mapped[int] = mapped_column(Integer, default=0)
    active: Mapped[bool] = mapped_column(Boolean, default=True)


class AccessBadgeRecord(RecordMixin, TimestampMixin, Base):
    __tablename__ = "access_badges"

    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text)
    type: Mapped[str] = mapped_column(String(32), default="Media", index=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class CountdownSettingsRecord(RecordMixin, TimestampMixin, Base):
    __tablename__ = "countdown_settings"

    title: Mapped[str] = mapped_column(
        String(200), default="COUNTDOWN TO FESTIVAL"
    )
    target_date: Mapped[str] = mapped_column(
        String(32), default="2025-05-08T00:00:00"
    )
    background_color: Mapped[str] = mapped_column(String(32), default="#1F1F3F")
    text_color: Mapped[str] = mapped_column(String(32), default="#00FFB9")
    background_image_url: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True
    )
    enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    show_on_load: Mapped[bool] = mapped_column(Boolean, default=True)
    display_duration: Mapped[int] = mapped_column(Integer, default=0)


class ThemeSettingsRecord(RecordMixin, TimestampMixin, Base):
    __tablename__ = "theme_settings"

    primary_color: Mapped[str] = mapped_column(String(32), default="#3b82f6")
    secondary_color: Mapped[str] = mapped_column(String(32), default="#6b7280")
    accent_color: Mapped[str] = mapped_column(String(32), default="#f97316")
    background_color: Mapped[str] = mapped_column(String(32), default="#ffffff")
    text_color: Mapped[str] = mapped_column(String(32), default="#111827")
    font_heading: Mapped[str] = mapped_column(String(64), default="Inter")
    font_body: Mapped[str] = mapped_column(String(64), default="Inter")


class StandsContentRecord(RecordMixin, TimestampMixin, Base):
    __tablename__ = "stands_content"

    title: Mapped[str] = mapped_column(String(200), default="Stands & Exhibitors")
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class GeneralContentRecord(RecordMixin, TimestampMixin, Base):
    __tablename__ = "general_content"

    section_key: Mapped[str] = mapped_column(
        String(64), unique=True, index=True
    )
    title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    subtitle: Mapped[Optional[str]] = mapped_column(String(300), nullable=True)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class PageRecord(RecordMixin, TimestampMixin, Base):
    __tablename__ = "pages"

    title: Mapped[str] = mapped_column(String(200))
    slug: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    path: Mapped[str] = mapped_column(String(200))
    layout: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    meta_description: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True
    )
    is_published: Mapped[bool] = mapped_column(Boolean, default=False)


class PageContentRecord(RecordMixin, TimestampMixin, Base):
    __tablename__ = "page_content"

    page_id: Mapped[str] = mapped_column(String(100), index=True)
    content: Mapped[dict] = mapped_column(JSON, nullable=False)


class NewsletterSubscriberRecord(RecordMixin, Base):
    __tablename__ = "newsletter_subscribers"

    email: Mapped[str] = mapped_column(String(320), unique=True, index=True)
    subscribed_at: Mapped[datetime] = mapped_column(
        DateTime, default=utcnow
    )
