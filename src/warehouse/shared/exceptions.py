"""Raised errors.

Expected business outcomes (not found, broken rules) are returned as
data by the services. Everything here is raised: infrastructure faults,
caller contract violations and rejected replication events.
"""

from __future__ import annotations

from warehouse.shared.validation import ValidationError, join_messages


class WarehouseException(Exception):
    """Base class for all raised warehouse errors."""


class InvalidOperationError(WarehouseException):
    """An entity method was called in a state the caller should have checked."""


class ConstraintViolationError(WarehouseException):
    """The store rejected a commit because a unique index was violated."""


class ProductValidationException(WarehouseException):
    """A product or an inbound event failed validation."""

    def __init__(self, errors: list[ValidationError]) -> None:
        super().__init__(join_messages(errors))
        self.errors = list(errors)


class EventDeliveryError(WarehouseException):
    """A domain event could not be published after its change was committed.

    The committed state is kept. ``event`` is the undelivered event so it
    can be published again.
    """

    def __init__(self, event: object, reason: str) -> None:
        super().__init__(f"Failed to publish {type(event).__name__}: {reason}")
        self.event = event


class MessageFormatError(WarehouseException):
    """An inbound message could not be decoded into a domain event."""
