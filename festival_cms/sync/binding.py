"""Resource binding: a synchronized local copy of one collection.

A binding loads a collection from the store, keeps it fresh through the
change feed and exposes the admin mutations (create, update, delete,
reorder, toggle). Local ``records`` are a cache: they are only ever replaced
wholesale by ``load()``, never patched optimistically. After a mutation the
binding relies on its own subscription to refetch, or refetches directly
when it is not subscribed.

Nothing raises past a binding. Failures are logged, reported through the
notifier, and leave ``records`` at their last good value; the caller gets a
falsy return and may retry.
"""
from __future__ import annotations
import logging
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple

from festival_cms.resources import ResourceSpec
from festival_cms.store.changefeed import ChangeEvent, Subscription
from festival_cms.sync.notifications import Notifier
from festival_cms.sync.ordering import find_swap_partner, next_order_number
from festival_cms.utils.validation import missing_required_fields

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Confirm = Callable[[str], bool]


def deny(prompt: str) -> bool:
    """Default confirmation: destructive actions need an explicit yes."""
    return False


class SubscribedBinding:
    """Change-feed lifecycle shared by collection and settings bindings.

    ``async with binding:`` loads and subscribes on entry and always
    unsubscribes on exit.
    """

    collection: str
    filters: Dict[str, Any]

    def __init__(self, store, notifier: Notifier):
        self.store = store
        self.notifier = notifier
        self._subscription: Optional[Subscription] = None

    async def load(self) -> bool:
        raise NotImplementedError

    @property
    def subscribed(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def subscribe(self) -> None:
        if self.subscribed:
            return
        self._subscription = self.store.subscribe(
            self.collection, self._on_change, self.filters or None
        )

    def unsubscribe(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    async def _on_change(self, event: ChangeEvent) -> None:
        logger.debug(
            "%s change on %s %s, reloading",
            event.kind.value, event.collection, event.record_id,
        )
        await self.load()

    async def _reconcile(self) -> None:
        if not self.subscribed:
            await self.load()

    async def __aenter__(self):
        await self.load()
        self.subscribe()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.unsubscribe()


class ResourceBinding(SubscribedBinding):
    def __init__(
        self,
        store,
        spec: ResourceSpec,
        notifier: Notifier,
        filters: Optional[Mapping[str, Any]] = None,
        confirm: Optional[Confirm] = None,
    ):
        super().__init__(store, notifier)
        self.spec = spec
        self.collection = spec.collection
        self.filters = dict(filters or {})
        self.confirm = confirm or deny
        self.records: List[Record] = []
        self.loaded = False
        self.loading = False
        self.saving = False

    @property
    def label(self) -> str:
        return self.spec.label

    def get(self, record_id: str) -> Optional[Record]:
        """A copy of the displayed record, or None."""
        for record in self.records:
            if record["id"] == record_id:
                return dict(record)
        return None

    # LOAD -------------------------------------------------------------------
    async def load(self) -> bool:
        self.loading = True
        try:
            rows = await self.store.select(
                self.collection,
                self.filters or None,
                self.spec.order_by,
                self.spec.descending,
            )
        except Exception as exc:
            logger.error("Error loading %s: %s", self.collection, exc, exc_info=True)
            self.notifier.error(f"Could not load {self.label.lower()} list", str(exc))
            return False
        finally:
            self.loading = False
        self.records = list(rows)
        self.loaded = True
        return True

    async def _perform(
        self, failure_title: str, operation: Callable[[], Awaitable[Any]]
    ) -> Tuple[bool, Any]:
        self.saving = True
        try:
            result = await operation()
        except Exception as exc:
            logger.error("%s: %s", failure_title, exc, exc_info=True)
            self.notifier.error(failure_title, str(exc))
            return False, None
        finally:
            self.saving = False
        return True, result

    def _check_required(self, values: Mapping[str, Any], fields) -> bool:
        missing = missing_required_fields(values, fields)
        if missing:
            self.notifier.error(
                "Missing required fields",
                "Please fill in: " + ", ".join(missing),
            )
            return False
        return True

    # CREATE -----------------------------------------------------------------
    async def create(self, draft: Mapping[str, Any]) -> Optional[Record]:
        values = dict(draft)
        for name, value in self.filters.items():
            values.setdefault(name, value)
        if not self._check_required(values, self.spec.required_fields):
            return None
        if self.spec.orderable and values.get("order_number") is None:
            values["order_number"] = next_order_number(self.records)

        ok, record = await self._perform(
            f"Could not create {self.label.lower()}",
            lambda: self.store.insert(self.collection, values),
        )
        if not ok:
            return None
        self.notifier.success(f"{self.label} created")
        await self._reconcile()
        return record

    # UPDATE -----------------------------------------------------------------
    async def update(self, record_id: str, fields: Mapping[str, Any]) -> bool:
        changes = dict(fields)
        required_present = [f for f in self.spec.required_fields if f in changes]
        if not self._check_required(changes, required_present):
            return False
        ok, _ = await self._perform(
            f"Could not update {self.label.lower()}",
            lambda: self.store.update(self.collection, record_id, changes),
        )
        if not ok:
            return False
        self.notifier.success(f"{self.label} updated")
        await self._reconcile()
        return True

    # DELETE -----------------------------------------------------------------
    async def delete(self, record_id: str, confirm: Optional[Confirm] = None) -> bool:
        approve = confirm or self.confirm
        if not approve(f"Are you sure you want to delete this {self.label.lower()}?"):
            logger.info("Deletion of %s %s not confirmed", self.collection, record_id)
            return False
        ok, _ = await self._perform(
            f"Could not delete {self.label.lower()}",
            lambda: self.store.delete(self.collection, record_id),
        )
        if not ok:
            return False
        self.notifier.success(f"{self.label} deleted")
        await self._reconcile()
        return True

    # REORDER ----------------------------------------------------------------
    async def reorder(self, record_id: str, direction: str) -> bool:
        """Swap order numbers with the neighbour in ``direction``.

        The swap is two separate updates. If the second one fails the
        collection is reloaded so the inconsistent order is visible; it is
        not repaired.
        """
        if not self.spec.orderable:
            self.notifier.error(f"{self.label} list cannot be reordered")
            return False
        try:
            pair = find_swap_partner(self.records, record_id, direction)
        except (KeyError, ValueError) as exc:
            self.notifier.error("Could not change order", str(exc))
            return False
        if pair is None:
            return False

        current, neighbour = pair
        first_ok, _ = await self._perform(
            "Could not change order",
            lambda: self.store.update(
                self.collection, current["id"],
                {"order_number": neighbour["order_number"]},
            ),
        )
        if not first_ok:
            return False
        second_ok, _ = await self._perform(
            "Order may be inconsistent",
            lambda: self.store.update(
                self.collection, neighbour["id"],
                {"order_number": current["order_number"]},
            ),
        )
        if not second_ok:
            await self.load()
            return False
        self.notifier.success("Order updated")
        await self._reconcile()
        return True

    # TOGGLE -----------------------------------------------------------------
    async def toggle_active(self, record_id: str, value: bool) -> bool:
        field = self.spec.active_field
        if not field:
            self.notifier.error(f"{self.label} has no visibility flag")
            return False
        ok, _ = await self._perform(
            f"Could not update {self.label.lower()}",
            lambda: self.store.update(self.collection, record_id, {field: value}),
        )
        if not ok:
            return False
        self.notifier.success(
            f"{self.label} {'enabled' if value else 'disabled'}"
        )
        await self._reconcile()
        return True
