import logging
from pathlib import Path

import click

from orderdesk.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_edit,
    order_list,
    order_show,
)
from orderdesk.infrastructure.cli.product_commands import product_add, product_list
from orderdesk.infrastructure.config import (
    DATA_DIR_ENVVAR,
    DEFAULT_DATA_DIR,
    DEFAULT_LOG_LEVEL,
    LOG_LEVEL_ENVVAR,
    Settings,
)


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_DATA_DIR,
    envvar=DATA_DIR_ENVVAR,
    show_default=True,
    help="Directory holding orders.json and products.json.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=DEFAULT_LOG_LEVEL,
    envvar=LOG_LEVEL_ENVVAR,
    show_default=True,
    help="Logging verbosity.",
)
@click.pass_context
def cli(ctx: click.Context, data_dir: Path, log_level: str) -> None:
    """orderdesk: order records with product references"""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = Settings(data_dir=data_dir, log_level=log_level.upper())


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_edit)
order.add_command(order_list)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_list)
