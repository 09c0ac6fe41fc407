"""localindex CLI entry point."""

from __future__ import annotations

import importlib.metadata
from typing import Annotated

import typer

from localindex.cli.browse import files_cmd, recent_cmd, repos_cmd
from localindex.cli.config import config_app
from localindex.cli.index import index_cmd
from localindex.cli.remove import remove_cmd
from localindex.cli.search import search_cmd
from localindex.cli.status import status_cmd
from localindex.log import configure_logging


def _installed_version() -> str:
    try:
        return importlib.metadata.version("localindex")
    except importlib.metadata.PackageNotFoundError:
        return "dev"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"localindex {_installed_version()}")
        raise typer.Exit()


app = typer.Typer(
    name="localindex",
    help=(
        "localindex — index local files and search them by keyword.\n\n"
        "  localindex index   Crawl home, documentation and git repositories.\n"
        "  localindex search  Ranked search over names, paths and content."
    ),
    add_completion=False,
)


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug details to stderr."),
    ] = False,
) -> None:
    """localindex — index local files and search them by keyword."""
    configure_logging(verbose)


app.command("index")(index_cmd)
app.command("search")(search_cmd)
app.command("files")(files_cmd)
app.command("recent")(recent_cmd)
app.command("repos")(repos_cmd)
app.command("status")(status_cmd)
app.command("remove")(remove_cmd)
app.add_typer(config_app, name="config")


@app.command("version")
def version_cmd() -> None:
    """Show the installed localindex version."""
    typer.echo(f"localindex {_installed_version()}")


if __name__ == "__main__":
    app()
