"""In-memory event bus for tests and single-process wiring.

Handlers are called synchronously in publish order. A handler that
raises does not stop delivery to the others: the failure is logged and
kept as a dead letter, which can be redelivered later.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Callable

import structlog

from warehouse.command.application.event_publisher import EventPublisher
from warehouse.shared.events import ProductEvent, topic_for

logger = structlog.get_logger(__name__)

Handler = Callable[[ProductEvent], None]


@dataclass(frozen=True)
class DeadLetter:
    """Record of a handler failure."""

    topic: str
    event: ProductEvent
    handler: Handler
    error: str


class InMemoryEventBus(EventPublisher):

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)
        self.history: list[ProductEvent] = []
        self.dead_letters: list[DeadLetter] = []

    def subscribe(self, topic: str, handler: Handler) -> None:
        self._handlers[topic].append(handler)

    def publish(self, event: ProductEvent) -> None:
        """Record the event and deliver it to every subscriber of its topic."""
        self.history.append(event)
        topic = topic_for(event)
        for handler in self._handlers.get(topic, []):
            self._deliver(topic, event, handler)

    def redeliver_dead_letters(self) -> int:
        """Deliver every dead letter again. Returns how many now succeeded."""
        pending, self.dead_letters = self.dead_letters, []
        return sum(
            self._deliver(letter.topic, letter.event, letter.handler)
            for letter in pending
        )

    def _deliver(self, topic: str, event: ProductEvent, handler: Handler) -> bool:
        try:
            handler(event)
        except Exception as exc:
            self.dead_letters.append(
                DeadLetter(topic=topic, event=event, handler=handler, error=str(exc))
            )
            logger.warning(
                "Event dead-lettered",
                topic=topic,
                event_type=type(event).__name__,
                error=str(exc),
            )
            return False
        return True
