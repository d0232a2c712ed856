"""Notification hub broadcasting sport event updates to live subscribers."""

import asyncio
import logging
from uuid import uuid4

from sportevents.domain import SportEvent
from sportevents.events.types import Notification

logger = logging.getLogger(__name__)

DEFAULT_MAX_BUFFER = 100


class Subscription:
    """One live, ordered channel from the hub to a single observer.

    Iterating a subscription yields notifications until it is closed, either
    by the observer (``close()``) or by the hub shutting down.
    """

    def __init__(self, hub: "NotificationHub", subscriber_id: str, max_buffer: int):
        self.id = subscriber_id
        self._hub = hub
        self.max_buffer = max_buffer
        # max_buffer is enforced in offer(); the end-of-stream marker is exempt
        self._queue: asyncio.Queue[Notification | None] = asyncio.Queue()
        self.closed = False
        self.dropped = 0

    def offer(self, notification: Notification) -> None:
        """Enqueue without waiting; drop the oldest entry when full."""
        while self._queue.qsize() >= self.max_buffer:
            self._queue.get_nowait()
            self.dropped += 1
            logger.warning(
                f"Subscriber {self.id} buffer full, dropped oldest notification "
                f"(total dropped: {self.dropped})"
            )
        self._queue.put_nowait(notification)

    async def get(self) -> Notification:
        """Wait for the next notification.

        Raises:
            StopAsyncIteration: If the subscription has been closed.
        """
        if self.closed and self._queue.empty():
            raise StopAsyncIteration
        notification = await self._queue.get()
        if notification is None:
            raise StopAsyncIteration
        return notification

    def pending(self) -> int:
        """Number of notifications buffered and not yet consumed."""
        return self._queue.qsize()

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> Notification:
        return await self.get()

    async def close(self) -> None:
        """Detach from the hub. Safe to call more than once."""
        await self._hub.unsubscribe(self.id)

    def _terminate(self) -> None:
        if not self.closed:
            self.closed = True
            self._queue.put_nowait(None)


class NotificationHub:
    """Registry of live subscriber channels with fire-and-forget fan-out.

    One hub is created per process and handed to whatever needs to publish
    or subscribe. Each subscriber gets its own bounded queue, so a slow
    observer only ever delays itself.
    """

    def __init__(self, max_buffer: int = DEFAULT_MAX_BUFFER) -> None:
        if max_buffer < 1:
            raise ValueError("max_buffer must be at least 1")
        self.max_buffer = max_buffer
        self._subscribers: dict[str, Subscription] = {}
        self._lock = asyncio.Lock()

    async def subscribe(self) -> Subscription:
        """Register a new channel.

        The channel receives every notification broadcast after this call
        returns; there is no backlog of earlier ones.
        """
        async with self._lock:
            subscription = Subscription(self, f"sub-{uuid4().hex[:8]}", self.max_buffer)
            self._subscribers[subscription.id] = subscription
            logger.debug(
                f"Subscriber {subscription.id} connected (total: {len(self._subscribers)})"
            )
            return subscription

    async def unsubscribe(self, subscriber_id: str) -> None:
        """Remove a channel and end its stream."""
        async with self._lock:
            subscription = self._subscribers.pop(subscriber_id, None)
            if subscription is not None:
                subscription._terminate()
                logger.debug(
                    f"Subscriber {subscriber_id} disconnected (remaining: {len(self._subscribers)})"
                )

    async def broadcast(self, sport_event: SportEvent) -> Notification:
        """Push one update notification to every currently attached subscriber."""
        notification = Notification.from_sport_event(sport_event)
        async with self._lock:
            for subscription in self._subscribers.values():
                subscription.offer(notification)
            logger.debug(
                f"Broadcast {notification.event} for event {sport_event.id} "
                f"to {len(self._subscribers)} subscriber(s)"
            )
        return notification

    async def close(self) -> None:
        """End every subscription, e.g. on process shutdown."""
        async with self._lock:
            for subscription in self._subscribers.values():
                subscription._terminate()
            count = len(self._subscribers)
            self._subscribers.clear()
        logger.info(f"Notification hub closed ({count} subscriber(s) detached)")

    @property
    def subscriber_count(self) -> int:
        """Get the number of active subscribers."""
        return len(self._subscribers)
