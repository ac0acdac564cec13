"""
In-process publish/subscribe bus for status change notifications.

``PubSub`` keeps, per topic, the set of currently open
``Subscription`` streams.  ``publish`` walks that set and enqueues the
payload on every stream without awaiting, so a mutation is never held
up by a slow listener.  Each ``Subscription`` owns an
``asyncio.Queue`` and is consumed as an async iterator; iteration
suspends until the next payload arrives and ends once the stream is
closed.

Events are not persisted: a stream only sees payloads published while
it is registered, and it is registered as soon as ``subscribe``
returns (not lazily on first iteration).
"""

import asyncio
import logging
from typing import Any, Dict, Set


logger = logging.getLogger(__name__)

# Sentinel placed on a queue to wake a waiting consumer after ``close``.
_CLOSED = object()


class Subscription:
    """A single subscriber's stream of payloads for one topic."""

    def __init__(self, bus: "PubSub", topic: str, maxsize: int = 0) -> None:
        self.topic = topic
        self._bus = bus
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self._closed = False
        self.dropped = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def _offer(self, payload: Any) -> bool:
        """Enqueue ``payload`` without blocking; return whether it was accepted."""
        if self._closed:
            return False
        try:
            self._queue.put_nowait(payload)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(
                "Subscriber queue full on topic '%s'; dropped event (%d dropped so far)",
                self.topic,
                self.dropped,
            )
            return False
        return True

    def close(self) -> None:
        """Deregister from the bus and end iteration.

        Safe to call more than once.  Payloads already queued are
        discarded.
        """
        if self._closed:
            return
        self._closed = True
        self._bus._remove(self)
        # Drain so the sentinel always fits in a bounded queue.
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> Any:
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        payload = await self._queue.get()
        if payload is _CLOSED:
            raise StopAsyncIteration
        return payload

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()


class PubSub:
    """Topic based fan-out of payloads to open subscriber streams."""

    def __init__(self, queue_size: int = 0) -> None:
        self.queue_size = queue_size
        self._topics: Dict[str, Set[Subscription]] = {}

    def subscribe(self, topic: str) -> Subscription:
        """Open a new stream on ``topic`` and register it immediately."""
        subscription = Subscription(self, topic, maxsize=self.queue_size)
        self._topics.setdefault(topic, set()).add(subscription)
        logger.debug(
            "Subscriber added to '%s' (%d open)", topic, self.subscriber_count(topic)
        )
        return subscription

    def publish(self, topic: str, payload: Any) -> int:
        """Hand ``payload`` to every stream open on ``topic``.

        Returns the number of streams that accepted the payload.
        """
        subscribers = list(self._topics.get(topic, ()))
        delivered = sum(1 for subscription in subscribers if subscription._offer(payload))
        logger.debug("Published to '%s': %d/%d subscribers", topic, delivered, len(subscribers))
        return delivered

    def subscriber_count(self, topic: str) -> int:
        return len(self._topics.get(topic, ()))

    def close_all(self) -> None:
        """Close every open stream, e.g. at application shutdown."""
        for subscribers in list(self._topics.values()):
            for subscription in list(subscribers):
                subscription.close()

    def _remove(self, subscription: Subscription) -> None:
        subscribers = self._topics.get(subscription.topic)
        if not subscribers:
            return
        subscribers.discard(subscription)
        if not subscribers:
            del self._topics[subscription.topic]
        logger.debug(
            "Subscriber removed from '%s' (%d open)",
            subscription.topic,
            self.subscriber_count(subscription.topic),
        )
