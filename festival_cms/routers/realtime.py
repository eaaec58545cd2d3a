"""Realtime change feed over WebSocket.

A client connects to ``/realtime/{collection}`` (query parameters naming
filter fields narrow the feed, e.g. ``?day_id=...``) and receives one JSON
message per committed change. Clients treat each message as an
invalidation and refetch the collection.
"""

import asyncio
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from festival_cms.resources import RESOURCES
from festival_cms.store.changefeed import ChangeEvent

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Realtime"])

# Feeds that expose personal data need an admin token
PRIVATE_COLLECTIONS = {"newsletter_subscribers"}

MAX_PENDING_EVENTS = 256


class EventRelay:
    """Bounded buffer between the change feed and one websocket client.

    A client that falls more than ``maxsize`` events behind is flagged
    through ``overflowed`` and disconnected; its events are dropped.
    """

    def __init__(self, maxsize: int = MAX_PENDING_EVENTS):
        self.queue: "asyncio.Queue[ChangeEvent]" = asyncio.Queue(maxsize=maxsize)
        self.overflowed = asyncio.Event()

    async def __call__(self, event: ChangeEvent) -> None:
        try:
            self.queue.put_nowait(event)
        except asyncio.QueueFull:
            if not self.overflowed.is_set():
                logger.warning(
                    "Realtime client fell %d events behind on %s, disconnecting",
                    self.queue.maxsize, event.collection,
                )
            self.overflowed.set()


@router.websocket("/realtime/{collection}")
async def realtime_feed(websocket: WebSocket, collection: str):
    spec = RESOURCES.get(collection)
    if spec is None:
        await websocket.close(
            code=status.WS_1008_POLICY_VIOLATION, reason="Unknown collection"
        )
        return

    params = dict(websocket.query_params)
    token = params.pop("token", None)
    if collection in PRIVATE_COLLECTIONS:
        if websocket.app.state.auth.get_session(token) is None:
            await websocket.close(
                code=status.WS_1008_POLICY_VIOLATION,
                reason="Authentication required",
            )
            return
    filters = {k: v for k, v in params.items() if k in spec.filter_fields}

    await websocket.accept()
    relay = EventRelay()
    subscription = websocket.app.state.store.subscribe(
        collection, relay, filters or None
    )
    logger.info("Realtime client subscribed to %s %s", collection, filters)

    async def send_events() -> None:
        while True:
            event = await relay.queue.get()
            await websocket.send_json(event.to_dict())

    async def receive_messages() -> None:
        while True:
            message = await websocket.receive_text()
            if message == "ping":
                await websocket.send_json({"type": "pong"})

    tasks = []
    try:
        await websocket.send_json(
            {"status": "subscribed", "collection": collection, "filters": filters}
        )
        tasks = [
            asyncio.create_task(send_events()),
            asyncio.create_task(receive_messages()),
            asyncio.create_task(relay.overflowed.wait()),
        ]
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            exc = task.exception()
            if exc is not None and not isinstance(exc, WebSocketDisconnect):
                logger.error(
                    "Realtime connection on %s failed: %s", collection, exc,
                    exc_info=exc,
                )
        if relay.overflowed.is_set():
            await websocket.close(
                code=status.WS_1013_TRY_AGAIN_LATER, reason="Client too slow"
            )
    except WebSocketDisconnect:
        pass
    finally:
        subscription.unsubscribe()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Realtime client left %s", collection)
