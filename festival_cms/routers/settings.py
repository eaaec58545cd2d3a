"""Countdown, theme and stands page settings endpoints.

All are single-row collections handled through ``SettingsBinding``: reads
fall back to the built-in defaults when nothing has been saved, and writes
update the existing row or insert the first one.
"""
from typing import Any, Dict, Literal

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from festival_cms.models.schemas import (
    CountdownSettingsIn,
    StandsContentIn,
    ThemeSettingsIn,
)
from festival_cms.resources import RESOURCES
from festival_cms.routers.deps import get_store, require_admin
from festival_cms.store.collection_store import CollectionStore
from festival_cms.sync.notifications import Notifier, Severity
from festival_cms.sync.settings import SettingsBinding

router = APIRouter(tags=["Settings"])

SettingsKind = Literal["countdown", "theme", "stands"]

_COLLECTIONS = {
    "countdown": "countdown_settings",
    "theme": "theme_settings",
    "stands": "stands_content",
}

_SCHEMAS = {
    "countdown": CountdownSettingsIn,
    "theme": ThemeSettingsIn,
    "stands": StandsContentIn,
}


def _last_error(notifier: Notifier) -> str:
    errors = notifier.of(Severity.ERROR)
    if not errors:
        return "Unknown error"
    return errors[-1].message or errors[-1].title


async def _loaded_binding(kind: str, store: CollectionStore) -> SettingsBinding:
    binding = SettingsBinding(store, RESOURCES[_COLLECTIONS[kind]], Notifier())
    if not await binding.load():
        raise HTTPException(status_code=503, detail=_last_error(binding.notifier))
    return binding


def _payload(binding: SettingsBinding) -> Dict[str, Any]:
    return {"id": binding.record_id, **binding.values}


@router.get("/settings/{kind}")
async def read_settings(
    kind: SettingsKind, store: CollectionStore = Depends(get_store)
) -> Dict[str, Any]:
    binding = await _loaded_binding(kind, store)
    return _payload(binding)


@router.put("/admin/settings/{kind}", dependencies=[Depends(require_admin)])
async def save_settings(
    kind: SettingsKind,
    payload: Dict[str, Any] = Body(...),
    store: CollectionStore = Depends(get_store),
) -> Dict[str, Any]:
    try:
        values = _SCHEMAS[kind].model_validate(payload).model_dump(
            exclude_unset=True
        )
    except PydanticValidationError as exc:
        raise RequestValidationError(exc.errors())
    binding = await _loaded_binding(kind, store)
    if not await binding.save(values):
        raise HTTPException(status_code=500, detail=_last_error(binding.notifier))
    return _payload(binding)
