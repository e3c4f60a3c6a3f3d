"""CLI commands for the replica (query side)."""

from __future__ import annotations

import uuid

import click

from warehouse.infrastructure.bootstrap import (
    query_product_service,
    queue_receiver,
    replica_consumers,
)
from warehouse.infrastructure.cli.product_commands import print_products
from warehouse.infrastructure.config import Settings
from warehouse.shared.events import ALL_TOPICS


@click.command("sync")
@click.pass_obj
def replica_sync(settings: Settings) -> None:
    """Apply every pending event to the replica."""
    receiver = queue_receiver(settings)

    for consumer in replica_consumers(settings):
        report = receiver.drain(consumer.topic, consumer)
        click.echo(
            f"{report.topic}: {report.delivered} applied, "
            f"{len(report.dead_lettered)} dead-lettered"
        )
        for error in report.dead_lettered:
            click.echo(f"  ! {error}")


@click.command("list")
@click.pass_obj
def replica_list(settings: Settings) -> None:
    """List all products in the replica."""
    print_products(query_product_service(settings).list_products())


@click.command("show")
@click.option("--id", "product_id", required=True, type=click.UUID, help="Product ID.")
@click.pass_obj
def replica_show(settings: Settings, product_id: uuid.UUID) -> None:
    """Show one product from the replica."""
    product = query_product_service(settings).get_product(product_id)
    if product is None:
        raise click.ClickException(f"Product {product_id} not found")
    click.echo(f"{product.id}  code={product.code}  stock={product.stock}")


@click.command("dead-letters")
@click.pass_obj
def replica_dead_letters(settings: Settings) -> None:
    """Show events the replica rejected."""
    receiver = queue_receiver(settings)
    found = False
    for topic in ALL_TOPICS:
        for letter in receiver.dead_letters(topic):
            found = True
            click.echo(f"{topic}: {letter['message']}  ({letter['error']})")
    if not found:
        click.echo("No dead letters.")


@click.command("redeliver")
@click.pass_obj
def replica_redeliver(settings: Settings) -> None:
    """Retry the events the replica rejected."""
    receiver = queue_receiver(settings)

    for consumer in replica_consumers(settings):
        report = receiver.redeliver_dead_letters(consumer.topic, consumer)
        click.echo(
            f"{report.topic}: {report.delivered} applied, "
            f"{len(report.dead_lettered)} still dead-lettered"
        )
        for error in report.dead_lettered:
            click.echo(f"  ! {error}")
