#!/usr/bin/env python3
"""
Main CLI Entry Point for Cashplan

Provides unified command-line interface for the planning tools.
"""

import logging
import os

import click

from ..core.config import get_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Cashplan - Cash-Flow Planning for an E-Commerce Seller

    Projects monthly balances from revenue, one-off transactions and
    recorded actuals, and resolves supplier lead times.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["CASHPLAN_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("cashplan").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    try:
        ctx.obj["config"] = get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"Data directory: {ctx.obj['config'].data_dir}")


@main.command()
def version() -> None:
    """Show version information."""
    from cashplan import __author__, __version__

    click.echo(f"Cashplan v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Snapshot File: {config_obj.snapshot_file}")
    click.echo(f"  Default Start Month: {config_obj.projection.default_start_month}")
    click.echo(f"  Default Horizon: {config_obj.projection.default_horizon_months} months")
    click.echo(f"  Payout Factor: {config_obj.projection.payout_pct}")
    click.echo(
        f"  Sync Heartbeat/Poll: {config_obj.sync.heartbeat_seconds}s / {config_obj.sync.poll_seconds}s"
    )
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


from .leadtime import leadtime  # noqa: E402
from .projection import projection  # noqa: E402
from .snapshot import snapshot  # noqa: E402

main.add_command(projection)
main.add_command(leadtime)
main.add_command(snapshot)


if __name__ == "__main__":
    main()
