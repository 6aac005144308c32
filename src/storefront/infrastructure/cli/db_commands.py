"""CLI commands for the database schema."""

from __future__ import annotations

import click

from storefront.infrastructure.cli.context import CliContext


@click.command("init")
@click.pass_obj
def db_init(obj: CliContext) -> None:
    """Create every table that does not exist yet."""
    obj.database.create_schema()
    click.echo("Database schema ready.")


@click.command("drop")
@click.confirmation_option(prompt="Drop every storefront table?")
@click.pass_obj
def db_drop(obj: CliContext) -> None:
    """Drop every table, including all data."""
    obj.database.drop_schema()
    click.echo("Database schema dropped.")
