"""Domain events shared by the command and query services.

This module is the only contract between the two sides: the command
service publishes these events, the query service consumes them. Each
event has its own topic and a flat JSON wire shape.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Union

from warehouse.shared.exceptions import MessageFormatError

PRODUCT_CREATED_TOPIC = "product-created-events"
PRODUCT_UPDATED_TOPIC = "product-updated-events"
PRODUCT_DELETED_TOPIC = "product-deleted-events"


@dataclass(frozen=True)
class ProductCreated:
    """A product was created. Stock starts at zero."""

    id: uuid.UUID
    code: str


@dataclass(frozen=True)
class ProductUpdated:
    """A product's stock changed. ``stock`` is the new absolute level."""

    id: uuid.UUID
    stock: int


@dataclass(frozen=True)
class ProductDeleted:
    """A product was removed."""

    id: uuid.UUID


ProductEvent = Union[ProductCreated, ProductUpdated, ProductDeleted]

_TOPICS: dict[type, str] = {
    ProductCreated: PRODUCT_CREATED_TOPIC,
    ProductUpdated: PRODUCT_UPDATED_TOPIC,
    ProductDeleted: PRODUCT_DELETED_TOPIC,
}

ALL_TOPICS = tuple(_TOPICS.values())


def topic_for(event: ProductEvent) -> str:
    return _TOPICS[type(event)]


# --- Wire format --------------------------------------------------------------


def to_message(event: ProductEvent) -> dict:
    """Serialize an event to its JSON-compatible wire shape."""
    message: dict = {"type": type(event).__name__, "id": str(event.id)}
    if isinstance(event, ProductCreated):
        message["code"] = event.code
    elif isinstance(event, ProductUpdated):
        message["stock"] = event.stock
    return message


def from_message(message: dict) -> ProductEvent:
    """Decode a wire message back into an event.

    Raises MessageFormatError for unknown types or missing/invalid fields.
    """
    kind = message.get("type")
    try:
        event_id = uuid.UUID(str(message["id"]))
        if kind == "ProductCreated":
            return ProductCreated(id=event_id, code=_code_field(message))
        if kind == "ProductUpdated":
            return ProductUpdated(id=event_id, stock=_stock_field(message))
        if kind == "ProductDeleted":
            return ProductDeleted(id=event_id)
    except (KeyError, ValueError, TypeError) as exc:
        raise MessageFormatError(f"Malformed {kind} message: {exc}") from exc
    raise MessageFormatError(f"Unknown event type: {kind!r}")


# A null code decodes and is left to the replica's validation.
def _code_field(message: dict) -> str | None:
    code = message["code"]
    if code is not None and not isinstance(code, str):
        raise TypeError(f"code must be a string, got {code!r}")
    return code


def _stock_field(message: dict) -> int:
    stock = message["stock"]
    if isinstance(stock, bool) or not isinstance(stock, int):
        raise TypeError(f"stock must be an integer, got {stock!r}")
    return stock
