"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer
from rich.markup import escape

from dbremote.cli.common.output import out
from dbremote.core.errors import ErrorKind, RemoteTableError

# Input problems exit with 2, failures talking to the cluster with 1
_EXIT_CODES = {
    ErrorKind.RESOLUTION: 1,
}


def die(msg: str, code: int = 1) -> NoReturn:
    """Exit with an error message and optional exit code."""
    out.error(msg)
    raise typer.Exit(code)


def warn_exit(msg: str, code: int = 0) -> NoReturn:
    """Exit with a warning message and optional exit code."""
    out.warn(msg)
    raise typer.Exit(code)


def exit_from_exc(exc: Exception, *, message: str, code: int = 1) -> NoReturn:
    """
    Helper function to print an error message and exit with a given code.

    Exists to satisfy pylint W0707 and to standardize error exits.
    """
    out.error(message)
    raise typer.Exit(code) from exc


def exit_from_error(exc: RemoteTableError) -> NoReturn:
    """Exit with the message and exit code matching a construction error."""
    exit_from_exc(exc, message=escape(str(exc)), code=_EXIT_CODES.get(exc.kind, 2))
