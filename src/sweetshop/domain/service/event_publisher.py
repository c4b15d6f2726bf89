"""In-process publisher for domain events."""

from __future__ import annotations

import logging
from collections.abc import Callable

from sweetshop.domain.model.events import DomainEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[DomainEvent], None]


class EventPublisher:
    """Fans committed-mutation events out to subscribers.

    Events are published after storage has applied the change, so a
    failing subscriber is logged and skipped: it must not make a
    committed purchase look like a failed one.
    """

    def __init__(self) -> None:
        self._handlers: list[EventHandler] = []

    def subscribe(self, handler: EventHandler) -> None:
        self._handlers.append(handler)

    def publish(self, event: DomainEvent) -> None:
        for handler in list(self._handlers):
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Event handler %r failed for %s", handler, type(event).__name__
                )
