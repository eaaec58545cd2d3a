"""Single-row settings bindings (countdown, theme, stands page).

Same lifecycle as a collection binding with cardinality 0 or 1. ``save``
updates the row whose id is known and inserts otherwise, remembering the new
id so repeated saves never create a second row.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Mapping, Optional

from festival_cms.repositories.collection_repo import RecordNotFoundError
from festival_cms.resources import RESOURCES, ResourceSpec
from festival_cms.sync.binding import SubscribedBinding
from festival_cms.sync.notifications import Notifier

logger = logging.getLogger(__name__)

COUNTDOWN_DEFAULTS: Dict[str, Any] = {
    "title": "COUNTDOWN TO FESTIVAL",
    "target_date": "2025-05-08T00:00:00",
    "background_color": "#1F1F3F",
    "text_color": "#00FFB9",
    "background_image_url": None,
    "enabled": True,
    "show_on_load": True,
    # 0 keeps the popup open until closed by the visitor
    "display_duration": 0,
}

THEME_DEFAULTS: Dict[str, Any] = {
    "primary_color": "#3b82f6",
    "secondary_color": "#6b7280",
    "accent_color": "#f97316",
    "background_color": "#ffffff",
    "text_color": "#111827",
    "font_heading": "Inter",
    "font_body": "Inter",
}

STANDS_DEFAULTS: Dict[str, Any] = {
    "title": "Stands & Exhibitors",
    "description": "Discover our festival exhibitors and their stands",
    "url": "https://exhibitors.shotaku.ma",
    "is_active": True,
}

SETTINGS_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "countdown_settings": COUNTDOWN_DEFAULTS,
    "theme_settings": THEME_DEFAULTS,
    "stands_content": STANDS_DEFAULTS,
}


def merge_settings(defaults: Mapping[str, Any], row: Mapping[str, Any]) -> Dict[str, Any]:
    """Defaults overlaid with the row's non-null setting fields."""
    merged = dict(defaults)
    for name in defaults:
        if row.get(name) is not None:
            merged[name] = row[name]
    return merged


class SettingsBinding(SubscribedBinding):
    def __init__(
        self,
        store,
        spec: ResourceSpec,
        notifier: Notifier,
        defaults: Optional[Mapping[str, Any]] = None,
    ):
        super().__init__(store, notifier)
        self.spec = spec
        self.collection = spec.collection
        self.filters = {}
        self.defaults = dict(
            defaults if defaults is not None
            else SETTINGS_DEFAULTS.get(spec.collection, {})
        )
        self.values: Dict[str, Any] = dict(self.defaults)
        self.record_id: Optional[str] = None
        self.loaded = False
        self.loading = False
        self.saving = False

    async def load(self) -> bool:
        self.loading = True
        try:
            row = await self.store.single(
                self.collection,
                order_by=self.spec.order_by,
                descending=self.spec.descending,
            )
        except RecordNotFoundError:
            # nothing saved yet, defaults stand
            self.record_id = None
            self.values = dict(self.defaults)
            self.loaded = True
            return True
        except Exception as exc:
            logger.error("Error fetching %s: %s", self.collection, exc, exc_info=True)
            self.notifier.error(f"Could not load {self.spec.label.lower()}", str(exc))
            return False
        finally:
            self.loading = False
        self.record_id = row["id"]
        self.values = merge_settings(self.defaults, row)
        self.loaded = True
        return True

    async def save(self, values: Mapping[str, Any]) -> bool:
        changes = {k: v for k, v in values.items() if k in self.defaults}
        self.saving = True
        try:
            if self.record_id:
                row = await self.store.update(self.collection, self.record_id, changes)
            else:
                row = await self.store.insert(self.collection, {**self.values, **changes})
        except RecordNotFoundError as exc:
            # row removed elsewhere; the next save inserts a fresh one
            logger.warning("%s row %s is gone: %s", self.collection, self.record_id, exc)
            self.record_id = None
            self.notifier.error(f"Could not save {self.spec.label.lower()}", str(exc))
            return False
        except Exception as exc:
            logger.error("Error saving %s: %s", self.collection, exc, exc_info=True)
            self.notifier.error(f"Could not save {self.spec.label.lower()}", str(exc))
            return False
        finally:
            self.saving = False
        self.record_id = row["id"]
        self.values = merge_settings(self.defaults, row)
        self.notifier.success(f"{self.spec.label} saved")
        return True


def countdown_settings(store, notifier: Notifier) -> SettingsBinding:
    return SettingsBinding(store, RESOURCES["countdown_settings"], notifier)


def theme_settings(store, notifier: Notifier) -> SettingsBinding:
    return SettingsBinding(store, RESOURCES["theme_settings"], notifier)



def stands_content(store, notifier: Notifier) -> SettingsBinding:
    return SettingsBinding(store, RESOURCES["stands_content"], notifier)
