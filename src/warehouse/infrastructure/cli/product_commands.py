"""CLI commands for the Product aggregate (command side)."""

from __future__ import annotations

import uuid

import click

from warehouse.command.application.seed import seed_products
from warehouse.command.domain.model.product import Product
from warehouse.infrastructure.bootstrap import command_product_service
from warehouse.infrastructure.cli.results import reported_errors, require_success
from warehouse.infrastructure.config import Settings
from warehouse.shared.validation import join_messages


@click.command("add")
@click.option("--code", required=True, help="Product code (8 characters).")
@click.pass_obj
def product_add(settings: Settings, code: str) -> None:
    """Create a new product with zero stock."""
    candidate, errors = Product.create(id=uuid.uuid4(), code=code)
    if errors:
        raise click.ClickException(join_messages(errors))

    service = command_product_service(settings)

    with reported_errors():
        product = require_success(service.try_insert(candidate))

    click.echo(f"Product {product.id} '{product.code}' created")


@click.command("delete")
@click.option("--id", "product_id", required=True, type=click.UUID, help="Product ID.")
@click.pass_obj
def product_delete(settings: Settings, product_id: uuid.UUID) -> None:
    """Delete a product that holds no stock."""
    service = command_product_service(settings)

    with reported_errors():
        require_success(service.try_delete(product_id), product_id)

    click.echo(f"Product {product_id} deleted")


@click.command("show")
@click.option("--id", "product_id", required=True, type=click.UUID, help="Product ID.")
@click.pass_obj
def product_show(settings: Settings, product_id: uuid.UUID) -> None:
    """Show one product from the command store."""
    product = command_product_service(settings).get_product(product_id)
    if product is None:
        raise click.ClickException(f"Product {product_id} not found")
    click.echo(f"{product.id}  code={product.code}  stock={product.stock}")


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products in the command store."""
    print_products(command_product_service(settings).list_products())


@click.command("seed")
@click.pass_obj
def product_seed(settings: Settings) -> None:
    """Insert the seed products into an empty store."""
    with reported_errors():
        inserted = seed_products(command_product_service(settings))

    if not inserted:
        click.echo("Store already holds products; nothing seeded.")
        return
    for product in inserted:
        click.echo(f"Product {product.id} '{product.code}' created")


def print_products(products) -> None:
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<38} {'Code':<10} {'Stock':>6}")
    click.echo("-" * 56)
    for p in products:
        click.echo(f"{str(p.id):<38} {p.code:<10} {p.stock:>6}")
