"""CLI commands for the User aggregate."""

from __future__ import annotations

import asyncio

import click

from orderflow.application.create_user import CreateUserHandler
from orderflow.domain.exceptions import DomainException
from orderflow.infrastructure.bootstrap import user_repository
from orderflow.infrastructure.config import Settings


@click.command("create")
@click.option("--name", required=True, help="Full name.")
@click.option("--email", required=True, help="E-mail address (unique).")
@click.pass_obj
def user_create(settings: Settings, name: str, email: str) -> None:
    """Register a new user."""
    handler = CreateUserHandler(user_repo=user_repository(settings))

    try:
        dto = asyncio.run(handler.handle(name=name, email=email))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User {dto.id} created  ({dto.name} <{dto.email}>)")
