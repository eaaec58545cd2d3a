"""Collection store: CRUD over named collections plus change notification.

This is the single shared source of truth for both the HTTP routers and the
synchronization bindings. Each call runs in its own session; records cross
this boundary as plain dicts. Mutations are published on the change feed
only after they are committed.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import async_sessionmaker

from festival_cms.repositories.collection_repo import (
    CollectionRepository,
    StoreError,
)
from festival_cms.resources import RESOURCES
from festival_cms.store.changefeed import (
    ChangeEvent,
    ChangeFeed,
    ChangeKind,
    Listener,
    Subscription,
)

logger = logging.getLogger(__name__)


class UnknownCollectionError(StoreError):
    """Raised when a collection name is not registered."""


class CollectionStore:
    def __init__(
        self,
        session_factory: async_sessionmaker,
        feed: Optional[ChangeFeed] = None,
    ):
        self.session_factory = session_factory
        self.feed = feed or ChangeFeed()

    def _model(self, collection: str) -> type:
        try:
            return RESOURCES[collection].model
        except KeyError:
            raise UnknownCollectionError(f"Unknown collection '{collection}'")

    # READ -------------------------------------------------------------------
    async def select(
        self,
        collection: str,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        model = self._model(collection)
        async with self.session_factory() as session:
            repo = CollectionRepository(session, model)
            rows = await repo.list(filters, order_by, descending, limit)
            return [row.to_dict() for row in rows]

    async def single(
        self,
        collection: str,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> Dict[str, Any]:
        model = self._model(collection)
        async with self.session_factory() as session:
            repo = CollectionRepository(session, model)
            row = await repo.first(filters, order_by, descending)
            return row.to_dict()

    async def get(self, collection: str, record_id: str) -> Dict[str, Any]:
        model = self._model(collection)
        async with self.session_factory() as session:
            row = await CollectionRepository(session, model).get(record_id)
            return row.to_dict()

    # WRITE ------------------------------------------------------------------
    async def insert(
        self, collection: str, values: Mapping[str, Any]
    ) -> Dict[str, Any]:
        model = self._model(collection)
        async with self.session_factory() as session:
            row = await CollectionRepository(session, model).create(values)
            record = row.to_dict()
        logger.info("Inserted %s %s", collection, record["id"])
        await self.feed.publish(
            ChangeEvent(collection, ChangeKind.INSERT, record["id"], record)
        )
        return record

    async def update(
        self, collection: str, record_id: str, values: Mapping[str, Any]
    ) -> Dict[str, Any]:
        model = self._model(collection)
        async with self.session_factory() as session:
            repo = CollectionRepository(session, model)
            previous = (await repo.get(record_id)).to_dict()
            row = await repo.update_record(record_id, values)
            record = row.to_dict()
        logger.info("Updated %s %s: %s", collection, record_id, sorted(values))
        await self.feed.publish(
            ChangeEvent(
                collection, ChangeKind.UPDATE, record_id, record, previous
            )
        )
        return record

    async def delete(self, collection: str, record_id: str) -> None:
        model = self._model(collection)
        async with self.session_factory() as session:
            snapshot = await CollectionRepository(
                session, model
            ).delete_record(record_id)
        logger.info("Deleted %s %s", collection, record_id)
        await self.feed.publish(
            ChangeEvent(collection, ChangeKind.DELETE, record_id, snapshot)
        )

    # CHANGE FEED ------------------------------------------------------------
    def subscribe(
        self,
        collection: str,
        listener: Listener,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> Subscription:
        self._model(collection)
        return self.feed.subscribe(collection, listener, filters)

    async def ping(self) -> bool:
        async with self.session_factory() as session:
            await session.execute(text("SELECT 1"))
        return True
