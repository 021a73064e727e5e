"""CLI commands for the Order aggregate."""

from __future__ import annotations

import asyncio

import click

from orderflow.application.cancel_order import CancelOrderHandler
from orderflow.application.create_order import CreateOrderHandler
from orderflow.application.dto import CreateOrderRequest, OrderDTO, OrderItemSpec
from orderflow.application.list_orders import ListOrdersHandler
from orderflow.application.show_order import ShowOrderHandler
from orderflow.application.update_order_status import UpdateOrderStatusHandler
from orderflow.domain.exceptions import DomainException
from orderflow.domain.model.order_status import OrderStatus
from orderflow.infrastructure.bootstrap import (
    event_publisher,
    notifier,
    order_repository,
    product_repository,
    user_repository,
)
from orderflow.infrastructure.config import Settings

STATUS_CHOICES = click.Choice([s.value for s in OrderStatus], case_sensitive=False)


def _parse_items(raw: str, default_currency: str) -> list[OrderItemSpec]:
    """Parse 'PRODUCT_ID:QTY:PRICE[:CURRENCY],...' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for entry in raw.split(","):
        entry = entry.strip()
        parts = entry.split(":")
        if len(parts) not in (3, 4):
            raise click.BadParameter(
                f"Invalid item format '{entry}'. Expected 'ProductId:Qty:Price[:Currency]'."
            )
        product_id, qty_str, price = (p.strip() for p in parts[:3])
        currency = (parts[3] if len(parts) == 4 else default_currency).strip().upper()
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(
            OrderItemSpec(
                product_id=product_id,
                quantity=qty,
                unit_price=price,
                currency=currency,
            )
        )
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name} <{dto.customer_email}>")
    click.echo(f"Created:  {dto.created_at:%Y-%m-%d %H:%M UTC}")
    click.echo(f"Updated:  {dto.updated_at:%Y-%m-%d %H:%M UTC}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Subtotal':>12}")
    click.echo(f"  {'-'*50}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.unit_price:>10} {item.subtotal:>12}"
        )
    click.echo(f"  {'-'*50}")
    click.echo(f"  {'Order Total':<27} {dto.total_amount:>18} {dto.currency}")


@click.command("create")
@click.option("--user", "user_id", required=True, help="ID of the ordering user.")
@click.option(
    "--items",
    required=True,
    help="Items as 'ProductId:Qty:Price[:Currency],...'.",
)
@click.option("--currency", default="USD", show_default=True, help="Default currency for items.")
@click.pass_obj
def order_create(settings: Settings, user_id: str, items: str, currency: str) -> None:
    """Create a new purchase order."""
    specs = _parse_items(items, currency)

    users = user_repository(settings)
    products = product_repository(settings)
    handler = CreateOrderHandler(
        order_repo=order_repository(settings, user_repo=users, product_repo=products),
        user_repo=users,
        product_repo=products,
        publisher=event_publisher(),
        notifier=notifier(settings),
    )

    try:
        dto = asyncio.run(handler.handle(CreateOrderRequest(user_id=user_id, items=specs)))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} created  (status={dto.status})")
    click.echo(f"Total: {dto.total_amount} {dto.currency}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@click.pass_obj
def order_show(settings: Settings, order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository(settings))

    try:
        dto = asyncio.run(handler.handle(order_id))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--user", "user_id", default=None, help="Only orders of this user.")
@click.option("--status", type=STATUS_CHOICES, default=None, help="Only orders in this status.")
@click.option("--limit", default=10, show_default=True, type=int)
@click.option("--offset", default=0, show_default=True, type=int)
@click.pass_obj
def order_list(
    settings: Settings,
    user_id: str | None,
    status: str | None,
    limit: int,
    offset: int,
) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(order_repo=order_repository(settings))

    try:
        page = asyncio.run(
            handler.handle(user_id=user_id, status=status, limit=limit, offset=offset)
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not page.orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<36}  {'Status':<11} {'Customer':<20} {'Total':>14}")
    click.echo("-" * 85)
    for dto in page.orders:
        total = f"{dto.total_amount} {dto.currency}"
        click.echo(f"{dto.id:<36}  {dto.status:<11} {dto.customer_name:<20} {total:>14}")
    shown_to = page.offset + len(page.orders)
    click.echo(f"Showing {page.offset + 1}-{shown_to} of {page.total}")


@click.command("status")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option("--to", "new_status", required=True, type=STATUS_CHOICES, help="Target status.")
@click.pass_obj
def order_status(settings: Settings, order_id: str, new_status: str) -> None:
    """Move an order to a new lifecycle status."""
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(settings),
        publisher=event_publisher(),
        notifier=notifier(settings),
    )

    try:
        dto = asyncio.run(handler.handle(order_id, new_status))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.id} is now {dto.status}.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
@click.pass_obj
def order_cancel(settings: Settings, order_id: str) -> None:
    """Cancel a pending or confirmed order."""
    handler = CancelOrderHandler(
        order_repo=order_repository(settings),
        publisher=event_publisher(),
        notifier=notifier(settings),
    )

    try:
        asyncio.run(handler.handle(order_id))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {order_id} cancelled.")
