"""
Live booking-update connections.

Staff calendars keep a server-sent-events stream open; whenever a booking
changes, the event is pushed to every registered connection. One registry is
created per process in the application lifespan and closed on shutdown.
"""

import asyncio
import json
import logging
import time
import uuid
from collections.abc import AsyncIterator
from typing import Optional

logger = logging.getLogger(__name__)

# Queue item that tells a stream to finish
_CLOSE = None


def _close_queue(queue: asyncio.Queue) -> None:
    while not queue.empty():
        queue.get_nowait()
    queue.put_nowait(_CLOSE)


class ConnectionRegistry:
    """Registry of open booking streams keyed by client id"""

    def __init__(self, queue_size: int = 100):
        self.queue_size = queue_size
        self._clients: dict[str, asyncio.Queue] = {}

    def __len__(self) -> int:
        return len(self._clients)

    def __contains__(self, client_id: str) -> bool:
        return client_id in self._clients

    def register(self) -> tuple[str, asyncio.Queue]:
        client_id = str(uuid.uuid4())
        queue: asyncio.Queue = asyncio.Queue(maxsize=self.queue_size)
        self._clients[client_id] = queue
        logger.info(f"Stream client connected: {client_id}. Total clients: {len(self)}")
        return client_id, queue

    def unregister(self, client_id: str) -> None:
        if self._clients.pop(client_id, None) is not None:
            logger.info(f"Stream client disconnected: {client_id}. Remaining clients: {len(self)}")

    def broadcast(self, event: dict) -> int:
        """Queue `event` for every client; clients that cannot keep up are dropped"""
        delivered = 0
        for client_id, queue in list(self._clients.items()):
            try:
                queue.put_nowait(event)
                delivered += 1
            except asyncio.QueueFull:
                logger.warning(f"Dropping slow stream client {client_id}")
                self._clients.pop(client_id, None)
                _close_queue(queue)
        logger.info(f"Broadcast {event.get('type')}: {delivered} delivered, {len(self)} connected")
        return delivered

    def close_all(self) -> None:
        for queue in self._clients.values():
            _close_queue(queue)
        count = len(self._clients)
        self._clients.clear()
        logger.info(f"Closed {count} stream client(s)")


def booking_update_event(booking_id: Optional[int] = None) -> dict:
    event = {"type": "booking_update", "timestamp": int(time.time() * 1000)}
    if booking_id is not None:
        event["bookingId"] = booking_id
    return event


async def event_stream(
    registry: ConnectionRegistry,
    client_id: str,
    queue: asyncio.Queue,
    heartbeat_seconds: float,
) -> AsyncIterator[str]:
    """Yield SSE frames for one client until the registry closes its queue"""
    try:
        while True:
            try:
                event = await asyncio.wait_for(queue.get(), timeout=heartbeat_seconds)
            except asyncio.TimeoutError:
                yield ": heartbeat\n\n"
                continue
            if event is _CLOSE:
                break
            yield f"data: {json.dumps(event)}\n\n"
    finally:
        registry.unregister(client_id)
