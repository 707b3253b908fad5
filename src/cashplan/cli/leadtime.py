#!/usr/bin/env python3
"""
Lead-Time CLI - Production Lead-Time Lookup
"""

import click

from ..leadtime import LeadTimeReference, resolve_lead_time, resolve_lead_times
from .snapshot import load_state, resolve_snapshot_path


@click.group()
def leadtime() -> None:
    """Production lead-time commands."""
    pass


@leadtime.command()
@click.argument("sku")
@click.argument("supplier_id")
@click.option("--snapshot", "snapshot_path", help="Snapshot file (defaults to configured workspace)")
def resolve(sku: str, supplier_id: str, snapshot_path: str | None) -> None:
    """
    Resolve the production lead time of SKU at SUPPLIER_ID.

    Example:
      cashplan leadtime resolve SKU-1 sup-1
    """
    reference = LeadTimeReference.from_state(load_state(resolve_snapshot_path(snapshot_path)))
    resolution = resolve_lead_time(sku, supplier_id, reference)

    if resolution.value is None:
        click.echo(f"{sku} @ {supplier_id}: no lead time found (missing)")
        return
    click.echo(f"{sku} @ {supplier_id}: {resolution.value.normalize():f} days ({resolution.source})")


@leadtime.command(name="report")
@click.option("--snapshot", "snapshot_path", help="Snapshot file (defaults to configured workspace)")
def report_cmd(snapshot_path: str | None) -> None:
    """Resolve lead times for every supplier-product mapping in the workspace."""
    reference = LeadTimeReference.from_state(load_state(resolve_snapshot_path(snapshot_path)))
    pairs = [(m.get("sku"), m.get("supplierId")) for m in reference.product_suppliers]
    if not pairs:
        click.echo("No supplier-product mappings in snapshot")
        return

    df = resolve_lead_times(pairs, reference)
    click.echo(df.to_string(index=False))
    missing = int((df["source"] == "missing").sum())
    if missing:
        click.echo(f"\n⚠️  {missing} mapping(s) without a lead time")
