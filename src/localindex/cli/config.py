"""localindex config CLI commands.

Commands:
  localindex config show             — print every setting and its value
  localindex config set KEY VALUE    — change one setting and save it
"""

from __future__ import annotations

from typing import Annotated

import typer
from rich.table import Table

from localindex.cli.common import console, open_engine
from localindex.cli.errors import err_unknown_setting
from localindex.config import ConfigError, default_config_path, policy_to_dict, set_policy_value

config_app = typer.Typer(
    name="config",
    help="Show or change the indexing policy.",
    add_completion=False,
)


@config_app.command("show")
def config_show_cmd() -> None:
    """Print the effective indexing policy."""
    engine = open_engine()
    table = Table(title=str(default_config_path()), show_header=True, header_style="bold")
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    for key, value in policy_to_dict(engine.policy).items():
        shown = ", ".join(value) if isinstance(value, list) else str(value)
        table.add_row(key, shown)
    console.print(table)


@config_app.command("set")
def config_set_cmd(
    key: Annotated[str, typer.Argument(help="Setting name, e.g. max_depth.")],
    value: Annotated[str, typer.Argument(help="New value, e.g. 5, false or '[a, b]'.")],
) -> None:
    """Change one setting and save the config file."""
    engine = open_engine()
    try:
        policy = set_policy_value(engine.policy, key, value)
    except ConfigError as exc:
        console.print(err_unknown_setting(str(exc)))
        raise typer.Exit(1) from None
    engine.update_policy(policy)
    console.print(f"[green]✓[/] {key} = {policy_to_dict(policy)[key]}")
    console.print("[dim]Takes effect on the next indexing run.[/]")
