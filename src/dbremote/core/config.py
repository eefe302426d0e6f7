"""Connection settings for remote endpoints.

Defaults can be overridden through environment variables. Invalid values
fall back to the defaults instead of failing.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class ConnectionSettings:
    """
    Settings used to reach remote endpoints.

    Attributes:
        port: Port used when an endpoint does not name one.
        scheme: URL scheme (`http` or `https`).
        timeout: Connect/read timeout in seconds.
    """

    port: int = 8123
    scheme: str = "http"
    timeout: float = 10.0

    PORT_ENV = "DBREMOTE_HTTP_PORT"
    SCHEME_ENV = "DBREMOTE_HTTP_SCHEME"
    TIMEOUT_ENV = "DBREMOTE_TIMEOUT"

    @classmethod
    def from_env(cls) -> ConnectionSettings:
        """Return settings with environment overrides applied."""
        defaults = cls()
        return cls(
            port=_env_port(cls.PORT_ENV, defaults.port),
            scheme=_env_scheme(cls.SCHEME_ENV, defaults.scheme),
            timeout=_env_timeout(cls.TIMEOUT_ENV, defaults.timeout),
        )

    def with_overrides(
        self,
        *,
        port: int | None = None,
        scheme: str | None = None,
        timeout: float | None = None,
    ) -> ConnectionSettings:
        """Return a copy with every non-None argument applied."""
        changes: dict[str, object] = {}
        if port is not None:
            changes["port"] = port
        if scheme is not None:
            changes["scheme"] = scheme.lower()
        if timeout is not None:
            changes["timeout"] = timeout
        return replace(self, **changes)


def _env_port(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        port = int(raw)
    except ValueError:
        return default
    return port if 0 < port < 65536 else default


def _env_scheme(name: str, default: str) -> str:
    raw = os.getenv(name, "").strip().lower()
    return raw if raw in {"http", "https"} else default


def _env_timeout(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        timeout = float(raw)
    except ValueError:
        return default
    return timeout if timeout > 0 else default
