"""localindex status — index statistics, run state and policy overview."""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table

from localindex.cli.common import console, format_duration, format_size, open_engine
from localindex.config import IndexingPolicy, data_dir
from localindex.engine import IndexEngine
from localindex.index.models import FileType


def status_cmd() -> None:
    """Show index statistics, repositories and the active policy."""
    engine = open_engine()
    _show_index_panel(engine)
    _show_types_panel(engine)
    _show_policy_panel(engine.policy)


# ---------------------------------------------------------------------------
# Panel renderers
# ---------------------------------------------------------------------------


def _show_index_panel(engine: IndexEngine) -> None:
    stats = engine.statistics()
    lines = [
        f"Files:        [bold]{stats.total_files:,}[/]",
        f"Total size:   {format_size(stats.total_size)}",
        f"Repositories: [bold]{len(engine.repositories())}[/]",
        f"Snapshot:     {data_dir()}",
    ]
    if stats.last_indexed is None:
        lines.append("[dim]Not indexed yet.[/]  Run:  localindex index")
    else:
        stale = " [yellow](stale)[/]" if engine.is_stale() else ""
        lines.append(f"Last indexed: [dim]{stats.last_indexed:%Y-%m-%d %H:%M}[/]{stale}")
    console.print(Panel("\n".join(lines), title="[bold]Index[/]", expand=False))


def _show_types_panel(engine: IndexEngine) -> None:
    if engine.statistics().total_files == 0:
        return
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Type", style="bold")
    table.add_column("Files", justify="right")
    for file_type in FileType:
        count = len(engine.files_by_type(file_type))
        if count:
            table.add_row(file_type.value, f"{count:,}")
    console.print(Panel(table, title="[bold]By type[/]", expand=False))


def _show_policy_panel(policy: IndexingPolicy) -> None:
    def _flag(enabled: bool) -> str:
        return "[green]✓[/]" if enabled else "[dim]✗[/]"

    lines = [
        f"{_flag(policy.index_home)} Home:           {policy.home_root}",
        f"{_flag(policy.index_documentation)} Documentation:  "
        f"{len(policy.documentation_roots)} roots",
        f"{_flag(policy.index_repositories)} Repositories:   "
        f"{len(policy.repository_search_paths)} search paths",
        f"Max depth: {policy.max_depth}  |  "
        f"Max file size: {format_size(policy.max_file_size_bytes)}  |  "
        f"Reindex every: {format_duration(policy.reindex_interval_seconds)}",
    ]
    console.print(Panel("\n".join(lines), title="[bold]Policy[/]", expand=False))
