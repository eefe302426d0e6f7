"""Logging setup for the CLI."""

from __future__ import annotations

import logging
import os

from rich.logging import RichHandler

from dbremote.cli.common.output import err_console

LOG_LEVEL_ENV = "DBREMOTE_LOG_LEVEL"


def setup_logging(verbose: bool = False) -> None:
    """
    Route library logs through rich on stderr.

    `--verbose` forces DEBUG; otherwise the level comes from
    DBREMOTE_LOG_LEVEL and defaults to WARNING.
    """
    if verbose:
        level = logging.DEBUG
    else:
        name = os.getenv(LOG_LEVEL_ENV, "WARNING").strip().upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            level = logging.WARNING

    root = logging.getLogger("dbremote")
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(
        RichHandler(console=err_console, show_path=False, rich_tracebacks=True)
    )
