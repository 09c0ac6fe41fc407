"""localindex rich error messages — actionable feedback.

Every error shown to the user must contain:
  1. What went wrong (clear cause)
  2. The exact action the user should take to fix it

Usage:
    from localindex.cli.errors import err_invalid_config
    console.print(err_invalid_config(str(exc)))
    raise typer.Exit(1)
"""

from __future__ import annotations


def err_invalid_config(detail: str, config_path: str) -> str:
    """Config file could not be loaded."""
    return (
        f"[red]Error:[/] Invalid configuration: {detail}\n"
        f"  Fix or remove '{config_path}', or run:  localindex config show"
    )


def err_unknown_setting(detail: str) -> str:
    """``config set`` with a bad key or value."""
    return (
        f"[red]Error:[/] {detail}\n"
        "  Run:  localindex config show  to list settings and current values."
    )


def err_indexing_failed(reason: str) -> str:
    """Indexing run ended in the error state."""
    return (
        f"[red]Error:[/] Indexing failed: {reason}\n"
        "  Check that the configured roots are readable and the data directory\n"
        "  is writable, then run:  localindex index"
    )


def err_snapshot_write(reason: str) -> str:
    """Snapshot could not be written after a change."""
    return (
        f"[red]Error:[/] Could not save the index: {reason}\n"
        "  Check permissions on the data directory (set LOCALINDEX_HOME to move it)."
    )


def err_not_indexed(path: str) -> str:
    """Path given to ``remove`` is not in the index."""
    return (
        f"[yellow]Not indexed:[/] '{path}' is not in the index.\n"
        "  Run:  localindex search <name>  to find the indexed path."
    )


def warn_empty_index() -> str:
    """Shown by read commands when nothing has been indexed yet."""
    return (
        "[yellow]The index is empty.[/]\n"
        "  Run:  localindex index"
    )
