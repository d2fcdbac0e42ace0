"""Pub/sub bus for effect lifecycle notifications."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

EventHandler = Callable[[Any], None]


class EventBus:
    """Minimal event bus for the single-threaded UI loop.

    Handlers run synchronously in subscription order. A handler may
    unsubscribe itself (or others) while an emit is in progress.
    """

    def __init__(self) -> None:
        self._subscribers: defaultdict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, topic: str, handler: EventHandler) -> None:
        if handler not in self._subscribers[topic]:
            self._subscribers[topic].append(handler)

    def unsubscribe(self, topic: str, handler: EventHandler) -> None:
        if handler in self._subscribers[topic]:
            self._subscribers[topic].remove(handler)

    def emit(self, topic: str, payload: Any = None) -> None:
        handlers = list(self._subscribers.get(topic, ()))
        for handler in handlers:
            handler(payload)
