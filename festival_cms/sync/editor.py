"""Form/editor state for one draft or one record copy.

The editor never holds a reference to a displayed record: opening it copies
the record, setters change only the copy, and ``save`` hands the result to
the binding. Cancelling simply drops the copy.
"""
from __future__ import annotations
from typing import Any, Dict, Mapping, Optional

from festival_cms.repositories.collection_repo import IMMUTABLE_FIELDS
from festival_cms.sync.binding import ResourceBinding

CREATE = "create"
EDIT = "edit"


class EditorNotOpenError(RuntimeError):
    """Raised when a field is set on a closed editor."""


class EditorState:
    def __init__(self, binding: ResourceBinding):
        self.binding = binding
        self.mode: Optional[str] = None
        self.record_id: Optional[str] = None
        self._original: Dict[str, Any] = {}
        self._values: Dict[str, Any] = {}

    @property
    def is_open(self) -> bool:
        return self.mode is not None

    @property
    def values(self) -> Dict[str, Any]:
        return dict(self._values)

    @property
    def dirty_fields(self) -> Dict[str, Any]:
        return {
            name: value
            for name, value in self._values.items()
            if name not in IMMUTABLE_FIELDS and self._original.get(name) != value
        }

    def open_new(self, defaults: Optional[Mapping[str, Any]] = None) -> None:
        self.mode = CREATE
        self.record_id = None
        self._original = {}
        self._values = dict(defaults or {})

    def open_existing(self, record_id: str) -> bool:
        record = self.binding.get(record_id)
        if record is None:
            self.binding.notifier.error(
                f"{self.binding.label} not found",
                "It may have been deleted in another session.",
            )
            return False
        self.mode = EDIT
        self.record_id = record_id
        self._original = dict(record)
        self._values = dict(record)
        return True

    def get(self, name: str, default: Any = None) -> Any:
        return self._values.get(name, default)

    def set(self, name: str, value: Any) -> None:
        if not self.is_open:
            raise EditorNotOpenError("Open the editor before changing fields")
        self._values[name] = value

    async def save(self) -> bool:
        """Create or update through the binding; close on success."""
        if not self.is_open:
            return False
        if self.mode == CREATE:
            ok = await self.binding.create(self._values) is not None
        else:
            changes = self.dirty_fields
            if not changes:
                self.close()
                return True
            ok = await self.binding.update(self.record_id, changes)
        if ok:
            self.close()
        return ok

    def cancel(self) -> None:
        self.close()

    def close(self) -> None:
        self.mode = None
        self.record_id = None
        self._original = {}
        self._values = {}
