"""Transient user-facing notifications.

The notifier turns operation outcomes into dismissible messages. It is a
pure side channel: posting a notification never changes control flow, return
values or retries of the operation that produced it.
"""
from __future__ import annotations
import itertools
import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Deque, List

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    ERROR = "error"


@dataclass
class Notification:
    id: int
    severity: Severity
    title: str
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    dismissed: bool = False


NotificationListener = Callable[[Notification], None]


class Notifier:
    def __init__(self, max_history: int = 50):
        self._history: Deque[Notification] = deque(maxlen=max_history)
        self._ids = itertools.count(1)
        self._listeners: List[NotificationListener] = []

    def add_listener(self, listener: NotificationListener) -> None:
        self._listeners.append(listener)

    def notify(self, severity: Severity, title: str, message: str = "") -> Notification:
        note = Notification(next(self._ids), severity, title, message)
        self._history.append(note)
        logger.debug("Notification [%s] %s: %s", severity.value, title, message)
        for listener in list(self._listeners):
            try:
                listener(note)
            except Exception:
                logger.exception("Notification listener failed")
        return note

    def success(self, title: str, message: str = "") -> Notification:
        return self.notify(Severity.SUCCESS, title, message)

    def info(self, title: str, message: str = "") -> Notification:
        return self.notify(Severity.INFO, title, message)

    def error(self, title: str, message: str = "") -> Notification:
        return self.notify(Severity.ERROR, title, message)

    def dismiss(self, notification_id: int) -> None:
        for note in self._history:
            if note.id == notification_id:
                note.dismissed = True

    def clear(self) -> None:
        for note in self._history:
            note.dismissed = True

    @property
    def history(self) -> List[Notification]:
        return list(self._history)

    @property
    def active(self) -> List[Notification]:
        return [n for n in self._history if not n.dismissed]

    def of(self, severity: Severity) -> List[Notification]:
        return [n for n in self._history if n.severity is severity]
