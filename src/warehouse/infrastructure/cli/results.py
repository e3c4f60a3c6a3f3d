"""Turning service results and raised errors into CLI failures."""

from __future__ import annotations

import contextlib
import uuid

import click

from warehouse.shared.exceptions import (
    ConstraintViolationError,
    EventDeliveryError,
    WarehouseException,
)
from warehouse.shared.validation import join_messages


def require_success(result, product_id: uuid.UUID | None = None):
    """Return the product of a successful result, else fail the command."""
    product, errors = result
    if product is None:
        raise click.ClickException(f"Product {product_id} not found")
    if errors:
        raise click.ClickException(join_messages(errors))
    return product


@contextlib.contextmanager
def reported_errors():
    try:
        yield
    except ConstraintViolationError as exc:
        raise click.ClickException(f"Conflict: {exc}")
    except EventDeliveryError as exc:
        raise click.ClickException(f"Change saved but not replicated: {exc}")
    except WarehouseException as exc:
        raise click.ClickException(str(exc))
