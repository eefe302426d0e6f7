from __future__ import annotations

import json
import logging
from typing import Iterator

import requests

from dbremote.core.config import ConnectionSettings
from dbremote.core.errors import ResolutionError

logger = logging.getLogger(__name__)


def split_endpoint(endpoint: str, default_port: int) -> tuple[str, int]:
    """
    Split `host[:port]` into (host, port).

    Bracketed IPv6 literals (`[::1]:8123`) are supported; a bare IPv6
    literal without brackets is taken as a host without a port.
    """
    endpoint = endpoint.strip()
    if endpoint.startswith("["):
        host, sep, rest = endpoint[1:].partition("]")
        if not sep:
            raise ValueError(f"Invalid endpoint: {endpoint!r}")
        if not rest:
            return host, default_port
        if not rest.startswith(":") or not rest[1:].isdigit():
            raise ValueError(f"Invalid endpoint: {endpoint!r}")
        return host, int(rest[1:])

    host, sep, port = endpoint.rpartition(":")
    if not sep or ":" in host:
        return endpoint, default_port
    if not port.isdigit():
        raise ValueError(f"Invalid port in endpoint: {endpoint!r}")
    return host, int(port)


class HttpSession:
    """Session running queries over an HTTP SQL interface of one server."""

    def __init__(self, http: requests.Session, base_url: str, timeout: float):
        self.http = http
        self.base_url = base_url
        self.timeout = timeout

    def execute(self, query: str) -> Iterator[dict]:
        """Send `query` and yield its rows as they arrive."""
        logger.debug("POST %s: %s", self.base_url, query)
        with self.http.post(
            self.base_url,
            params={"default_format": "JSONEachRow"},
            data=query.encode("utf-8"),
            timeout=self.timeout,
            stream=True,
        ) as resp:
            if not resp.ok:
                detail = resp.text.strip()
                raise ResolutionError(
                    f"Query failed with HTTP {resp.status_code}: {detail}"
                )
            for line in resp.iter_lines(decode_unicode=True):
                if not line:
                    continue
                try:
                    row = json.loads(line)
                except json.JSONDecodeError as exc:
                    raise ResolutionError(f"Malformed row in response: {line!r}") from exc
                if not isinstance(row, dict):
                    raise ResolutionError(f"Unexpected row in response: {line!r}")
                yield row


class HttpConnectionAdapter:
    """Connection adapter reaching endpoints through their HTTP SQL interface."""

    def __init__(
        self,
        settings: ConnectionSettings | None = None,
        http: requests.Session | None = None,
    ) -> None:
        self.settings = settings or ConnectionSettings.from_env()
        self.http = http or requests.Session()

    def base_url(self, endpoint: str) -> str:
        """Return the URL queries for `endpoint` are posted to."""
        try:
            host, port = split_endpoint(endpoint, self.settings.port)
        except ValueError as exc:
            raise ResolutionError(str(exc), endpoint=endpoint) from exc
        if ":" in host:
            host = f"[{host}]"
        return f"{self.settings.scheme}://{host}:{port}/"

    def connect(self, endpoint: str) -> HttpSession:
        """Return a session for `endpoint`; the connection is opened lazily."""
        return HttpSession(self.http, self.base_url(endpoint), self.settings.timeout)

    def close(self) -> None:
        self.http.close()
