"""CLI commands for the order progression scheduler."""

from __future__ import annotations

import asyncio

import click

from orderflow.infrastructure.bootstrap import progression_scheduler
from orderflow.infrastructure.config import Settings
from orderflow.infrastructure.scheduler.order_progression_scheduler import (
    OrderProgressionScheduler,
)


async def _run_forever(scheduler: OrderProgressionScheduler) -> None:
    await scheduler.start()
    try:
        await asyncio.Event().wait()
    finally:
        await scheduler.stop()


@click.command("run")
@click.option("--once", is_flag=True, default=False, help="Run one scan of each kind and exit.")
@click.pass_obj
def scheduler_run(settings: Settings, once: bool) -> None:
    """Advance orders automatically until interrupted (Ctrl-C)."""
    scheduler = progression_scheduler(settings)

    if once:
        confirmed, processing = asyncio.run(scheduler.run_once())
        click.echo(f"Confirmed {confirmed} order(s); started processing {processing} order(s).")
        return

    if not scheduler.enabled:
        raise click.ClickException("Scheduler is disabled (ORDERFLOW_SCHEDULER_ENABLED=false)")

    click.echo("Order progression scheduler running. Press Ctrl-C to stop.")
    try:
        asyncio.run(_run_forever(scheduler))
    except KeyboardInterrupt:
        click.echo("Scheduler stopped.")
