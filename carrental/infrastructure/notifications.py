"""Distribución de eventos de cambio a suscriptores en proceso."""

import asyncio
import logging
from collections import defaultdict
from collections.abc import Iterable

from carrental.application.interfaces.persistence import ChangeEvent, Subscription

logger = logging.getLogger(__name__)

_CLOSED = object()


class QueueSubscription(Subscription):
    """Suscripción respaldada por una asyncio.Queue; `close()` termina el iterador."""

    def __init__(self, notifier: "ChangeNotifier", collection: str, event_types: Iterable[str]):
        self._notifier = notifier
        self.collection = collection
        self.event_types = frozenset(event_types)
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, event: ChangeEvent) -> None:
        if not self._closed and event.event_type in self.event_types:
            self._queue.put_nowait(event)

    async def __anext__(self) -> ChangeEvent:
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        return item

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._notifier.unsubscribe(self)
        self._queue.put_nowait(_CLOSED)


class ChangeNotifier:
    """Registro de suscripciones por colección."""

    def __init__(self) -> None:
        self._subscriptions: dict[str, list[QueueSubscription]] = defaultdict(list)

    def subscribe(self, collection: str, event_types: Iterable[str]) -> QueueSubscription:
        subscription = QueueSubscription(self, collection, event_types)
        self._subscriptions[collection].append(subscription)
        return subscription

    def unsubscribe(self, subscription: QueueSubscription) -> None:
        subscribers = self._subscriptions.get(subscription.collection, [])
        if subscription in subscribers:
            subscribers.remove(subscription)

    def subscriber_count(self, collection: str) -> int:
        return len(self._subscriptions.get(collection, []))

    def publish(self, event: ChangeEvent) -> None:
        subscribers = list(self._subscriptions.get(event.collection, []))
        for subscription in subscribers:
            subscription.push(event)
        if subscribers:
            logger.debug(
                "Change event published",
                extra={
                    "collection": event.collection,
                    "event_type": event.event_type,
                    "record_id": event.record_id,
                    "subscribers": len(subscribers),
                },
            )
