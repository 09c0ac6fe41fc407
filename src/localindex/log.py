"""Logging setup for the command-line app.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, by the CLI, never at import time.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_ROOT_LOGGER = "localindex"


def configure_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Attach a single RichHandler (stderr) to the ``localindex`` logger.

    Args:
        verbose: DEBUG when True, WARNING otherwise.
        console: Console to log to (defaults to a stderr console).

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=verbose,
        rich_tracebacks=verbose,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
