"""Change feed for collection mutations.

Every committed insert, update or delete is published as a typed
``ChangeEvent``. Subscribers register per collection, optionally with
equality filters matched against the changed row, and receive events through
an async listener. The feed is in-process; the realtime websocket router
relays it to browsers.
"""
from __future__ import annotations
import itertools
import logging
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


@dataclass(frozen=True)
class ChangeEvent:
    collection: str
    kind: ChangeKind
    record_id: str
    # new row for INSERT/UPDATE, the removed row for DELETE
    record: Optional[Dict[str, Any]] = None
    # row before the change, UPDATE only
    previous: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "collection": self.collection,
            "kind": self.kind.value,
            "recordId": self.record_id,
            "record": self.record,
        }
        if self.previous is not None:
            data["previous"] = self.previous
        return data


Listener = Callable[[ChangeEvent], Awaitable[None]]


class Subscription:
    """Handle returned by ``ChangeFeed.subscribe``."""

    _ids = itertools.count(1)

    def __init__(
        self,
        feed: "ChangeFeed",
        collection: str,
        listener: Listener,
        filters: Optional[Mapping[str, Any]] = None,
    ):
        self.id = next(self._ids)
        self.collection = collection
        self.filters = dict(filters or {})
        self._feed = feed
        self._listener = listener
        self.active = True

    def matches(self, event: ChangeEvent) -> bool:
        """True when the new row, or for updates the old row, passes the filters."""
        if event.collection != self.collection:
            return False
        if not self.filters:
            return True
        return any(
            all(row.get(k) == v for k, v in self.filters.items())
            for row in (event.record, event.previous) if row is not None
        )

    async def deliver(self, event: ChangeEvent) -> None:
        await self._listener(event)

    def unsubscribe(self) -> None:
        if self.active:
            self.active = False
            self._feed._remove(self)


class ChangeFeed:
    def __init__(self):
        self._subscriptions: Dict[str, List[Subscription]] = defaultdict(list)

    def subscribe(
        self,
        collection: str,
        listener: Listener,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> Subscription:
        subscription = Subscription(self, collection, listener, filters)
        self._subscriptions[collection].append(subscription)
        logger.debug(
            "Subscription %s added for %s (filters=%s)",
            subscription.id, collection, subscription.filters,
        )
        return subscription

    def _remove(self, subscription: Subscription) -> None:
        subscribers = self._subscriptions.get(subscription.collection, [])
        if subscription in subscribers:
            subscribers.remove(subscription)
            logger.debug("Subscription %s removed", subscription.id)

    def subscriber_count(self, collection: str) -> int:
        return len(self._subscriptions.get(collection, []))

    async def publish(self, event: ChangeEvent) -> None:
        """Deliver ``event`` to every matching subscriber.

        A failing listener is logged and skipped; it never fails the
        mutation that produced the event or starves the other subscribers.
        """
        for subscription in list(self._subscriptions.get(event.collection, [])):
            if not subscription.active or not subscription.matches(event):
                continue
            try:
                await subscription.deliver(event)
            except Exception:
                logger.exception(
                    "Change listener %s failed for %s %s",
                    subscription.id, event.kind.value, event.collection,
                )
