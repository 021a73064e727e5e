import click

from orderflow.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_list,
    order_show,
    order_status,
)
from orderflow.infrastructure.cli.product_commands import (
    product_create,
    product_list,
    product_restock,
)
from orderflow.infrastructure.cli.scheduler_commands import scheduler_run
from orderflow.infrastructure.cli.user_commands import user_create
from orderflow.infrastructure.config import Settings
from orderflow.infrastructure.logging import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """orderflow: order management backend."""
    settings = Settings()
    configure_logging(settings.log_level, json_output=settings.log_json)
    ctx.obj = settings


@cli.group()
def user() -> None:
    """Manage users."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def scheduler() -> None:
    """Run the order progression scheduler."""


# Register subcommands
user.add_command(user_create)
product.add_command(product_create)
product.add_command(product_list)
product.add_command(product_restock)
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
scheduler.add_command(scheduler_run)
