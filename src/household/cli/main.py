#!/usr/bin/env python3
"""
Main CLI Entry Point for Household Finances

Provides the unified command-line interface for workspace analytics.
"""

import logging
import os
from pathlib import Path

import click

from ..analysis import DEFAULT_CATALOG
from ..core.config import reload_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--data-dir", type=click.Path(file_okay=False, path_type=Path), help="Override data directory")
@click.option("--user", help="Acting user id (default: HOUSEHOLD_USER)")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(
    ctx: click.Context,
    config_env: str | None,
    data_dir: Path | None,
    user: str | None,
    verbose: bool,
    debug: bool,
) -> None:
    """
    Household Finances - Shared and Personal Expense Analytics

    Settlement balances, category breakdowns, spending trends and budget
    tracking for personal, split and joint workspaces.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["HOUSEHOLD_ENV"] = config_env
    if data_dir:
        os.environ["HOUSEHOLD_DATA_DIR"] = str(data_dir)
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"

    try:
        config = reload_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("household").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["user"] = user
    ctx.obj["config"] = config

    if verbose:
        click.echo(f"Environment: {config.environment.value}")
        click.echo(f"Data directory: {config.data_dir}")


@main.command()
def version() -> None:
    """Show version information."""
    from household import __author__, __version__

    click.echo(f"Household Finances v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Timezone: {config_obj.analysis.timezone}")
    click.echo(f"  Trend Months: {config_obj.analysis.trend_months}")
    click.echo(f"  Budget Warning: {config_obj.analysis.budget_warning_percent}%")
    click.echo(f"  Current User: {config_obj.current_user or '(none)'}")
    click.echo(f"  Log Level: {config_obj.log_level}")


@main.command()
def categories() -> None:
    """List the expense category catalog."""
    for info in DEFAULT_CATALOG:
        click.echo(f"{info.icon}  {info.id:<14} {info.name}")


from .budget import budget  # noqa: E402
from .expense import expense  # noqa: E402
from .report import report  # noqa: E402
from .workspace import workspace  # noqa: E402

main.add_command(workspace)
main.add_command(expense)
main.add_command(report)
main.add_command(budget)


if __name__ == "__main__":
    main()
