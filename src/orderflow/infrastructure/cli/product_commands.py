"""CLI commands for the Product aggregate."""

from __future__ import annotations

import asyncio

import click

from orderflow.application.add_product import AddProductHandler
from orderflow.application.adjust_stock import AdjustStockHandler
from orderflow.domain.exceptions import DomainException
from orderflow.infrastructure.bootstrap import product_repository
from orderflow.infrastructure.config import Settings


@click.command("create")
@click.option("--name", required=True, help="Product name.")
@click.option("--description", required=True, help="Product description.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--currency", default="USD", show_default=True, help="3-letter currency code.")
@click.option("--sku", required=True, help="Stock-keeping unit (unique).")
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
@click.pass_obj
def product_create(
    settings: Settings,
    name: str,
    description: str,
    price: str,
    currency: str,
    sku: str,
    stock: int,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository(settings))

    try:
        dto = asyncio.run(
            handler.handle(
                name=name,
                description=description,
                price=price,
                currency=currency,
                sku=sku,
                stock=stock,
            )
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product {dto.id} '{dto.name}' added at {dto.price} {dto.currency} "
        f"(sku={dto.sku}, stock={dto.stock})"
    )


@click.command("list")
@click.option("--available/--all", default=False, help="Only show products in stock.")
@click.pass_obj
def product_list(settings: Settings, available: bool) -> None:
    """List products in the catalog."""
    repo = product_repository(settings)
    if available:
        products = asyncio.run(repo.find_by_availability(True))
    else:
        products = asyncio.run(repo.find_all())

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<36}  {'SKU':<12} {'Name':<20} {'Price':>14} {'Stock':>6}")
    click.echo("-" * 92)
    for p in products:
        click.echo(f"{p.id:<36}  {p.sku:<12} {p.name:<20} {str(p.price):>14} {p.stock:>6}")


@click.command("restock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--delta", required=True, type=int, help="Units to add (negative to remove).")
@click.pass_obj
def product_restock(settings: Settings, product_id: str, delta: int) -> None:
    """Adjust a product's stock level."""
    handler = AdjustStockHandler(product_repo=product_repository(settings))

    try:
        dto = asyncio.run(handler.handle(product_id=product_id, delta=delta))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} stock is now {dto.stock}")
