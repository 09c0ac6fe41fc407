"""localindex search — ranked keyword search over the index."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.table import Table

from localindex.cli.common import console, format_size, open_engine
from localindex.cli.errors import warn_empty_index
from localindex.index.models import IndexedFile
from localindex.index.search import DEFAULT_LIMIT


def search_cmd(
    query: Annotated[str, typer.Argument(help="Words to search for.")],
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", min=1, help="Maximum number of results."),
    ] = DEFAULT_LIMIT,
) -> None:
    """Search indexed file names, paths and content keywords."""
    engine = open_engine()
    if engine.statistics().total_files == 0:
        console.print(warn_empty_index())
        raise typer.Exit(0)

    results = engine.search(query, limit=limit)
    if not results:
        console.print(f"[yellow]No matches for[/] '{query}'.")
        raise typer.Exit(0)

    console.print(file_table(results, title=f"Results for '{query}'"))


def file_table(files: list[IndexedFile], title: str) -> Table:
    """Table of files shared by search, files and recent."""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Size", justify="right")
    table.add_column("Modified", style="dim")
    table.add_column("Path", overflow="fold")
    for f in files:
        table.add_row(
            f.name,
            f.file_type.value,
            format_size(f.size),
            f"{f.modified:%Y-%m-%d %H:%M}",
            f.path,
        )
    return table
