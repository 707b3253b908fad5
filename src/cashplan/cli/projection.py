#!/usr/bin/env python3
"""
Projection CLI - Balance Projection Commands

Print or chart the projected month-by-month balance of the workspace.
"""

from decimal import Decimal
from pathlib import Path

import click

from ..core.config import get_config
from ..core.currency import format_eur
from ..core.json_utils import format_json
from ..projection import (
    actual_comparisons,
    build_projection,
    format_table,
    render_balance_chart,
    summarize_series,
)
from .snapshot import load_state, resolve_snapshot_path


def _projection_defaults() -> dict:
    projection_config = get_config().projection
    return {
        "default_start": projection_config.default_start_month,
        "default_horizon": projection_config.default_horizon_months,
        "default_payout_pct": Decimal(str(projection_config.payout_pct)),
    }


@click.group()
def projection() -> None:
    """Balance projection commands."""
    pass


@projection.command()
@click.option("--snapshot", "snapshot_path", help="Snapshot file (defaults to configured workspace)")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format (default: table)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def show(ctx: click.Context, snapshot_path: str | None, output_format: str, verbose: bool) -> None:
    """
    Show the projected balance per month.

    Examples:
      cashplan projection show
      cashplan projection show --snapshot ./workspace.json --format json
    """
    path = resolve_snapshot_path(snapshot_path)
    state = load_state(path)

    if verbose or (ctx.obj or {}).get("verbose", False):
        click.echo(f"Snapshot: {path}")

    points = build_projection(state, **_projection_defaults())

    if output_format == "json":
        click.echo(
            format_json(
                {
                    "series": [p.to_dict() for p in points],
                    "summary": summarize_series(points),
                    "actualComparisons": actual_comparisons(points),
                }
            )
        )
        return

    click.echo(format_table(points))

    summary = summarize_series(points)
    click.echo("\n[SUMMARY] Key Figures:")
    click.echo(f"   Final Closing: {format_eur(summary['final_closing'])}")
    click.echo(f"   Lowest Closing: {format_eur(summary['lowest_closing'])} ({summary['lowest_month'] or '-'})")
    if summary["first_negative_month"]:
        click.echo(f"   ⚠️  Balance turns negative in {summary['first_negative_month']}")
    click.echo(f"   Locked Months: {summary['locked_months']}")


@projection.command()
@click.option("--snapshot", "snapshot_path", help="Snapshot file (defaults to configured workspace)")
@click.option("--output-dir", help="Override output directory")
def chart(snapshot_path: str | None, output_dir: str | None) -> None:
    """
    Render the projected balance chart to PNG.

    Example:
      cashplan projection chart --output-dir ./charts
    """
    config = get_config()
    state = load_state(resolve_snapshot_path(snapshot_path))
    output_path = Path(output_dir) if output_dir else config.chart.output_dir

    try:
        points = build_projection(state, **_projection_defaults())
        output_file = render_balance_chart(
            points,
            output_path,
            figure_size=(config.chart.width, config.chart.height),
            dpi=config.chart.dpi,
        )
    except Exception as e:
        click.echo(f"❌ Error rendering chart: {e}", err=True)
        raise click.ClickException(str(e)) from e

    click.echo(f"✅ Chart saved to: {output_file}")
