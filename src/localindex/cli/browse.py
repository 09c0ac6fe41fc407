"""localindex files / recent / repos — browse the index without a query."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.table import Table

from localindex.cli.common import console, open_engine
from localindex.cli.errors import warn_empty_index
from localindex.cli.search import file_table
from localindex.index.models import FileType


def files_cmd(
    file_type: Annotated[
        FileType,
        typer.Option("--type", "-t", case_sensitive=False, help="File category to list."),
    ],
) -> None:
    """List indexed files of one category."""
    engine = open_engine()
    files = engine.files_by_type(file_type)
    if not files:
        console.print(f"[yellow]No {file_type.value} files indexed.[/]")
        raise typer.Exit(0)
    console.print(file_table(files, title=f"{file_type.value.capitalize()} files ({len(files)})"))


def recent_cmd(
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", min=1, help="Number of files to show."),
    ] = 20,
) -> None:
    """List the most recently modified indexed files."""
    engine = open_engine()
    files = engine.recent_files(limit)
    if not files:
        console.print(warn_empty_index())
        raise typer.Exit(0)
    console.print(file_table(files, title="Recently modified"))


def repos_cmd() -> None:
    """List git repositories found by the last indexing run."""
    engine = open_engine()
    repos = engine.repositories()
    if not repos:
        console.print("[yellow]No repositories indexed.[/]")
        raise typer.Exit(0)

    table = Table(title=f"Repositories ({len(repos)})", show_header=True, header_style="bold")
    table.add_column("Name", style="bold")
    table.add_column("Remote")
    table.add_column("Path", overflow="fold")
    for repo in repos:
        table.add_row(repo.name, repo.remote_url or "[dim](none)[/]", repo.path)
    console.print(table)
