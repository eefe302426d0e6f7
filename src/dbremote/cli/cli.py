"""CLI application for remote table tooling."""

import typer

from dbremote.cli.commands.remote import describe, topology
from dbremote.cli.common.logs import setup_logging
from dbremote.cli.common.options import VerboseOpt

app = typer.Typer(
    help="dbremote - resolve cluster topologies and remote table schemas",
    no_args_is_help=True,
)


@app.callback()
def _init(verbose: bool = VerboseOpt):
    """Configure logging for every command."""
    setup_logging(verbose)


app.command("topology")(topology)
app.command("describe")(describe)


if __name__ == "__main__":
    app()
