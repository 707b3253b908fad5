#!/usr/bin/env python3
"""
Snapshot CLI - Workspace Document Commands

Create and inspect the local workspace snapshot document.
"""

from pathlib import Path
from typing import Any

import click

from ..core.config import get_config
from ..core.document import SnapshotFormatError, SnapshotStore
from ..core.json_utils import read_json

EMPTY_STATE: dict[str, Any] = {
    "settings": {"startMonth": None, "horizonMonths": None, "openingBalance": "0"},
    "extras": [],
    "outgoings": [],
    "actuals": [],
    "suppliers": [],
    "products": [],
    "productSuppliers": [],
}


def resolve_snapshot_path(snapshot: str | None) -> Path:
    """Use the --snapshot option if given, else the configured workspace file."""
    return Path(snapshot) if snapshot else get_config().snapshot_file


def load_state(path: Path) -> dict[str, Any]:
    """
    Load workspace state from a snapshot document or a bare state file.

    Raises:
        click.ClickException: If the file is missing or malformed
    """
    if not path.exists():
        raise click.ClickException(f"Snapshot not found: {path}")
    try:
        payload = read_json(path)
    except ValueError as e:
        raise click.ClickException(f"Invalid JSON in {path}: {e}") from e

    if isinstance(payload, dict) and "data" in payload and "rev" in payload:
        try:
            return SnapshotStore(path).load().data
        except SnapshotFormatError as e:
            raise click.ClickException(str(e)) from e
    if not isinstance(payload, dict):
        raise click.ClickException(f"Snapshot must be a JSON object: {path}")
    return payload


@click.group()
def snapshot() -> None:
    """Workspace snapshot document commands."""
    pass


@snapshot.command()
@click.option("--snapshot", "snapshot_path", help="Snapshot file (defaults to configured workspace)")
@click.pass_context
def init(ctx: click.Context, snapshot_path: str | None) -> None:
    """
    Create an empty workspace snapshot document.

    Example:
      cashplan snapshot init --snapshot ./workspace.json
    """
    path = resolve_snapshot_path(snapshot_path)
    store = SnapshotStore(path)
    if store.exists():
        raise click.ClickException(f"Snapshot already exists: {path}")

    document = store.save(dict(EMPTY_STATE), updated_by=get_config().sync.updated_by)
    click.echo(f"✅ Created snapshot {path} (rev {document.rev})")


@snapshot.command()
@click.option("--snapshot", "snapshot_path", help="Snapshot file (defaults to configured workspace)")
def info(snapshot_path: str | None) -> None:
    """Show revision metadata of the workspace snapshot."""
    path = resolve_snapshot_path(snapshot_path)
    try:
        document = SnapshotStore(path).load()
    except (FileNotFoundError, SnapshotFormatError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Snapshot: {path}")
    click.echo(f"  Schema Version: {document.schema_version}")
    click.echo(f"  Revision: {document.rev}")
    click.echo(f"  Updated At: {document.updated_at}")
    click.echo(f"  Updated By: {document.updated_by or '-'}")
    click.echo(f"  Sections: {', '.join(sorted(document.data)) or '-'}")
