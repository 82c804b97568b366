"""In-process event bus the rendering layer uses to learn about desktop changes."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from typing import Any

EventHandler = Callable[[dict[str, Any]], None]

WINDOWS_CHANGED = "windows_changed"

logger = logging.getLogger("webtop.event_bus")


class EventBus:
    """Dispatches events to subscribers by event name."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_name: str, handler: EventHandler) -> Callable[[], None]:
        """Register a callback; returns a function that removes it again."""
        self._handlers[event_name].append(handler)

        def unsubscribe() -> None:
            self.unsubscribe(event_name, handler)

        return unsubscribe

    def unsubscribe(self, event_name: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_name, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event_name: str, payload: dict[str, Any]) -> None:
        """Emit an event to all current subscribers, in subscription order.

        A failing subscriber is logged and skipped; the rest still receive the event.
        """
        for handler in list(self._handlers.get(event_name, [])):
            try:
                handler(dict(payload))
            except Exception as exc:
                logger.warning("%s subscriber %r failed: %s", event_name, handler, exc)
