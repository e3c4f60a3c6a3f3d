"""Outbound port: publishes domain events to the message bus.

Delivery is at-least-once. Implementations raise on failure; the caller
decides what a failed publish means for state it has already committed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from warehouse.shared.events import ProductEvent


class EventPublisher(ABC):

    @abstractmethod
    def publish(self, event: ProductEvent) -> None:
        """Hand an event to the bus."""
