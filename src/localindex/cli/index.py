"""localindex index — crawl configured roots and rebuild the index.

Phases: home directory → documentation roots → git repositories →
search index → snapshot. Ctrl-C cancels at the next file; the previous
index is kept.
"""

from __future__ import annotations

from typing import Annotated

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from localindex.cli.common import console, format_size, open_engine
from localindex.cli.errors import err_indexing_failed
from localindex.engine import IndexEngine
from localindex.index.models import IndexingState

_POLL_SECONDS = 0.1


def index_cmd(
    if_stale: Annotated[
        bool,
        typer.Option("--if-stale", help="Only reindex when older than the reindex interval."),
    ] = False,
) -> None:
    """Index the configured roots and save a snapshot."""
    engine = open_engine()

    if if_stale and not engine.is_stale():
        last = engine.statistics().last_indexed
        console.print(f"[dim]Index is up to date (last indexed {last:%Y-%m-%d %H:%M}).[/]")
        raise typer.Exit(0)

    engine.start_indexing()
    try:
        _show_progress(engine)
    except KeyboardInterrupt:
        engine.cancel()
        engine.wait()
        console.print("[yellow]Cancelled.[/] Previous index kept.")
        raise typer.Exit(130) from None

    if engine.state is IndexingState.ERROR:
        error = engine.error
        console.print(err_indexing_failed(str(error) if error else "unknown error"))
        raise typer.Exit(1)

    stats = engine.statistics()
    console.print(
        f"[green]✓[/] Indexed [bold]{stats.total_files:,}[/] files "
        f"({format_size(stats.total_size)}), "
        f"{len(engine.repositories())} repositories"
    )


def _show_progress(engine: IndexEngine) -> None:
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        transient=True,
        console=console,
    ) as prog:
        task = prog.add_task("Starting...", total=1.0)
        while not engine.wait(_POLL_SECONDS):
            prog.update(task, completed=engine.progress, description=engine.current_operation)
        prog.update(task, completed=engine.progress, description=engine.current_operation)
