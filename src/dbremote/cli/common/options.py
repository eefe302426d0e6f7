"""Common CLI options for the CLI."""

import typer

VerboseOpt = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Enable debug logging",
)

PortOpt = typer.Option(
    None,
    "--port",
    "-p",
    help="Port for endpoints without an explicit port (env: DBREMOTE_HTTP_PORT)",
    min=1,
    max=65535,
)

SchemeOpt = typer.Option(
    None,
    "--scheme",
    help="URL scheme, http or https (env: DBREMOTE_HTTP_SCHEME)",
)

TimeoutOpt = typer.Option(
    None,
    "--timeout",
    "-t",
    help="Request timeout in seconds (env: DBREMOTE_TIMEOUT)",
    min=0.001,
)
