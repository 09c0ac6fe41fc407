"""localindex remove — drop one file from the index.

Usage:
  localindex remove /home/me/notes/old.md
  localindex remove /home/me/notes/old.md --yes

The file itself is not touched. A later ``localindex index`` re-adds it if
it is still within the indexed roots.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from localindex.cli.common import console, open_engine
from localindex.cli.errors import err_not_indexed, err_snapshot_write
from localindex.store.snapshot import SnapshotError


def remove_cmd(
    path: Annotated[str, typer.Argument(help="Indexed path to remove.")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Remove a file from the index (the file on disk is left alone)."""
    engine = open_engine()
    target = str(Path(path).expanduser().absolute())

    existing = engine.get_file(target)
    if existing is None:
        console.print(err_not_indexed(target))
        raise typer.Exit(0)

    console.print(f"\nRemove from index: [bold]{existing.path}[/] ({existing.file_type.value})")
    if not yes:
        if not typer.confirm("Confirm removal?", default=False):
            console.print("[dim]Cancelled.[/]")
            raise typer.Exit(0)

    try:
        engine.remove_file(target)
    except SnapshotError as exc:
        console.print(err_snapshot_write(str(exc)))
        raise typer.Exit(1) from None

    console.print(f"[green]✓[/] Removed: {existing.path}")
