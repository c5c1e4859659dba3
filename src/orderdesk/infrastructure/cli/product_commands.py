"""CLI commands for seeding and listing the product catalog."""

from __future__ import annotations

import asyncio
from decimal import Decimal, InvalidOperation

import click

from orderdesk.domain.exceptions import StoreError
from orderdesk.domain.model.product import Product
from orderdesk.infrastructure.bootstrap import product_store
from orderdesk.infrastructure.config import Settings


@click.command("add")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.pass_obj
def product_add(settings: Settings, product_id: str, name: str, price: str) -> None:
    """Add or replace a product in the catalog."""
    try:
        amount = Decimal(price)
    except InvalidOperation:
        raise click.BadParameter(f"Invalid price {price!r}.", param_hint="--price")

    product = Product(id=product_id, name=name.strip(), price=amount)
    try:
        asyncio.run(product_store(settings).save(product))
    except StoreError as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' saved at {product.display_price()}")


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products in the catalog."""
    try:
        products = asyncio.run(product_store(settings).list_all())
    except StoreError as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<26} {'Name':<20} {'Price':>10}")
    click.echo("-" * 58)
    for p in products:
        click.echo(f"{p.id:<26} {p.name:<20} {p.display_price():>10}")
