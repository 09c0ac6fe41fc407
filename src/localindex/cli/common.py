"""Shared CLI helpers: engine construction and formatting."""

from __future__ import annotations

import typer
from rich.console import Console

from localindex.cli.errors import err_invalid_config
from localindex.config import ConfigError, data_dir, default_config_path, load_policy
from localindex.engine import IndexEngine
from localindex.store.snapshot import SnapshotStore

console = Console()

_UNITS = ("KB", "MB", "GB", "TB")


def open_engine() -> IndexEngine:
    """Build the engine for one CLI invocation (restores the snapshot).

    Config and snapshot live under ``$LOCALINDEX_HOME`` (default
    ``~/.localindex``). Exits with status 1 when the config file is invalid.
    """
    config_path = default_config_path()
    try:
        policy = load_policy(config_path)
    except ConfigError as exc:
        console.print(err_invalid_config(str(exc), str(config_path)))
        raise typer.Exit(1) from None
    return IndexEngine(policy, SnapshotStore.in_dir(data_dir()), config_path=config_path)


def format_size(size: int) -> str:
    """Human-readable byte count in decimal units."""
    if size < 1000:
        return f"{size} bytes"
    value = size / 1000
    for unit in _UNITS[:-1]:
        if value < 1000:
            return f"{value:.1f} {unit}"
        value /= 1000
    return f"{value:.1f} {_UNITS[-1]}"


def format_duration(seconds: int) -> str:
    """Compact duration such as ``1 h 30 min``, ``45 min`` or ``30 s``."""
    if seconds < 60:
        return f"{seconds} s"
    hours, rest = divmod(seconds, 3600)
    minutes = rest // 60
    if not hours:
        return f"{minutes} min"
    return f"{hours} h {minutes} min" if minutes else f"{hours} h"
