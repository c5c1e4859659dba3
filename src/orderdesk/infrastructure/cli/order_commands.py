"""CLI commands for the Order aggregate."""

from __future__ import annotations

import asyncio

import click

from orderdesk.application.dto import OrderDTO
from orderdesk.domain.exceptions import DomainException, StoreError
from orderdesk.domain.model.order import OrderStatus
from orderdesk.infrastructure.bootstrap import order_repository
from orderdesk.infrastructure.config import Settings

_STATUS_CHOICE = click.Choice([s.value for s in OrderStatus], case_sensitive=False)


def _parse_products(raw: str) -> list[str]:
    """Parse 'p1,p2,p1' into ['p1', 'p2', 'p1']."""
    products = [pid.strip() for pid in raw.split(",") if pid.strip()]
    if not products:
        raise click.BadParameter("Expected at least one product id, e.g. 'p1,p2'.")
    return products


def _run(coro):
    try:
        return asyncio.run(coro)
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Buyer: {dto.buyer_email}")
    click.echo()
    click.echo(f"  {'ID':<26} {'Product':<20} {'Price':>10}")
    click.echo(f"  {'-'*58}")
    for item in dto.products:
        click.echo(f"  {item.id:<26} {item.name:<20} {item.price:>10}")


@click.command("create")
@click.option("--email", required=True, help="Buyer email.")
@click.option("--products", required=True, help="Product ids as 'p1,p2'.")
@click.option("--status", type=_STATUS_CHOICE, default=None, help="Initial status.")
@click.option("--id", "order_id", default=None, help="Explicit order ID.")
@click.pass_obj
def order_create(
    settings: Settings,
    email: str,
    products: str,
    status: str | None,
    order_id: str | None,
) -> None:
    """Create a new order."""
    fields: dict[str, object] = {
        "buyer_email": email,
        "products": _parse_products(products),
    }
    if status:
        fields["status"] = status.upper()
    if order_id:
        fields["id"] = order_id

    dto = _run(order_repository(settings).create(fields))
    click.echo(f"Order {dto.id} created  (status={dto.status})")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_obj
def order_show(settings: Settings, order_id: str) -> None:
    """Show details of an existing order."""
    dto = _run(order_repository(settings).get(order_id))
    if dto is None:
        raise click.ClickException(f"Order {order_id} not found")
    _display_order(dto)


@click.command("list")
@click.option("--offset", type=click.IntRange(min=0), default=0, show_default=True)
@click.option("--limit", type=click.IntRange(min=1), default=25, show_default=True)
@click.option("--product", "product_id", default=None, help="Only orders containing this product.")
@click.option("--status", type=_STATUS_CHOICE, default=None, help="Only orders in this status.")
@click.pass_obj
def order_list(
    settings: Settings,
    offset: int,
    limit: int,
    product_id: str | None,
    status: str | None,
) -> None:
    """List orders, sorted by ID."""
    orders = _run(
        order_repository(settings).list(
            offset=offset,
            limit=limit,
            product_id=product_id,
            status=status.upper() if status else None,
        )
    )

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<34} {'Status':<10} {'Buyer':<30} {'Products':>8}")
    click.echo("-" * 85)
    for dto in orders:
        click.echo(
            f"{dto.id:<34} {dto.status:<10} {dto.buyer_email:<30} {len(dto.products):>8}"
        )


@click.command("edit")
@click.option("--id", "order_id", required=True, help="Order ID to edit.")
@click.option("--email", default=None, help="New buyer email.")
@click.option("--products", default=None, help="New product ids as 'p1,p2'.")
@click.option("--status", type=_STATUS_CHOICE, default=None, help="New status.")
@click.pass_obj
def order_edit(
    settings: Settings,
    order_id: str,
    email: str | None,
    products: str | None,
    status: str | None,
) -> None:
    """Change fields of an existing order."""
    changes: dict[str, object] = {}
    if email is not None:
        changes["buyer_email"] = email
    if products is not None:
        changes["products"] = _parse_products(products)
    if status is not None:
        changes["status"] = status.upper()
    if not changes:
        raise click.UsageError("Nothing to change: pass --email, --products or --status.")

    dto = _run(order_repository(settings).edit(order_id, changes))
    _display_order(dto)


@click.command("delete")
@click.option("--id", "order_id", required=True, help="Order ID to delete.")
@click.pass_obj
def order_delete(settings: Settings, order_id: str) -> None:
    """Delete an order (no error if it does not exist)."""
    _run(order_repository(settings).destroy(order_id))
    click.echo(f"Order {order_id} deleted.")
