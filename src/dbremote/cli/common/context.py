"""Application context management for the CLI."""

from dataclasses import dataclass

from dbremote.cli.common.exits import die
from dbremote.core.adapters.http import HttpConnectionAdapter
from dbremote.core.config import ConnectionSettings


@dataclass
class RemoteAppContext:
    """Application context holding connection settings and the connection adapter."""

    settings: ConnectionSettings
    adapter: HttpConnectionAdapter


def build_remote_context(
    *,
    port: int | None = None,
    scheme: str | None = None,
    timeout: float | None = None,
) -> RemoteAppContext:
    """Build the application context; CLI options override environment settings.

    Args:
        port: Default endpoint port, if given on the command line.
        scheme: URL scheme, if given on the command line.
        timeout: Request timeout in seconds, if given on the command line.

    Returns:
        RemoteAppContext: Context with the resolved settings and adapter.
    """
    if scheme is not None and scheme.lower() not in {"http", "https"}:
        die(f"Unsupported scheme '{scheme}' (expected http or https).", code=2)
    settings = ConnectionSettings.from_env().with_overrides(
        port=port, scheme=scheme, timeout=timeout
    )
    adapter = HttpConnectionAdapter(settings)
    return RemoteAppContext(settings=settings, adapter=adapter)
