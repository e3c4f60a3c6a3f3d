from __future__ import annotations

from pathlib import Path

import click

from warehouse.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_seed,
    product_show,
)
from warehouse.infrastructure.cli.replica_commands import (
    replica_dead_letters,
    replica_list,
    replica_redeliver,
    replica_show,
    replica_sync,
)
from warehouse.infrastructure.cli.stock_commands import stock_add, stock_remove
from warehouse.infrastructure.config import Settings
from warehouse.infrastructure.logging import configure_logging


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding both stores and the queues.",
)
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, ...).")
@click.pass_context
def cli(ctx: click.Context, data_dir: Path | None, log_level: str | None) -> None:
    """Warehouse: product stock with a replicated read store"""
    settings = Settings.from_env()
    if data_dir is not None:
        settings = Settings(data_dir=data_dir, log_level=settings.log_level)
    if log_level is not None:
        settings = Settings(data_dir=settings.data_dir, log_level=log_level.upper())
    configure_logging(settings.log_level)
    ctx.obj = settings


@cli.group()
def product() -> None:
    """Manage products (command side)."""


@cli.group()
def stock() -> None:
    """Move product stock (command side)."""


@cli.group()
def replica() -> None:
    """Replicate and read products (query side)."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_seed)
product.add_command(product_show)
stock.add_command(stock_add)
stock.add_command(stock_remove)
replica.add_command(replica_sync)
replica.add_command(replica_list)
replica.add_command(replica_show)
replica.add_command(replica_dead_letters)
replica.add_command(replica_redeliver)
