"""CLI commands for stock movements."""

from __future__ import annotations

import uuid

import click

from warehouse.infrastructure.bootstrap import command_product_service
from warehouse.infrastructure.cli.results import reported_errors, require_success
from warehouse.infrastructure.config import Settings


@click.command("add")
@click.option("--id", "product_id", required=True, type=click.UUID, help="Product ID.")
@click.pass_obj
def stock_add(settings: Settings, product_id: uuid.UUID) -> None:
    """Add one unit of stock."""
    service = command_product_service(settings)

    with reported_errors():
        product = require_success(service.try_add_stock(product_id), product_id)

    click.echo(f"Product {product.id} stock is now {product.stock}")


@click.command("remove")
@click.option("--id", "product_id", required=True, type=click.UUID, help="Product ID.")
@click.pass_obj
def stock_remove(settings: Settings, product_id: uuid.UUID) -> None:
    """Remove one unit of stock."""
    service = command_product_service(settings)

    with reported_errors():
        product = require_success(service.try_remove_stock(product_id), product_id)

    click.echo(f"Product {product.id} stock is now {product.stock}")
