"""Publish/subscribe channel used to ask views to refresh themselves."""

import inspect
from collections.abc import Callable
from logging import getLogger
from typing import Any

logger = getLogger(__name__)

# Published with the collection id after a collection was changed
COLLECTION_CHANGED = "collection.changed"
# Published with no arguments when a list of collections must be reloaded
COLLECTIONS_RELOAD = "collections.reload"

Callback = Callable[..., Any]


class RefreshBus:
    """Topic-based event bus owned by an application session."""

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Callback]] = {}

    def subscribe(self, topic: str, callback: Callback) -> Callable[[], None]:
        """Register ``callback`` for ``topic``.

        Returns:
            A function that removes this subscription when called
        """
        self._subscribers.setdefault(topic, []).append(callback)
        logger.debug("Subscribed %r to %s", callback, topic)

        def unsubscribe() -> None:
            self.unsubscribe(topic, callback)

        return unsubscribe

    def unsubscribe(self, topic: str, callback: Callback) -> None:
        callbacks = self._subscribers.get(topic)
        if not callbacks or callback not in callbacks:
            return
        callbacks.remove(callback)
        if not callbacks:
            del self._subscribers[topic]

    def subscribers(self, topic: str) -> list[Callback]:
        return list(self._subscribers.get(topic, []))

    def topics(self) -> list[str]:
        return list(self._subscribers)

    async def publish(self, topic: str, *args: Any) -> int:
        """Deliver an event to every subscriber of ``topic`` in order.

        Coroutine callbacks are awaited. A subscriber that raises is logged
        and skipped so the remaining ones still run.

        Returns:
            The number of subscribers that handled the event
        """
        delivered = 0
        for callback in self.subscribers(topic):
            try:
                result = callback(*args)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Subscriber %r failed on %s", callback, topic)
                continue
            delivered += 1
        return delivered

    def clear(self) -> None:
        self._subscribers.clear()
