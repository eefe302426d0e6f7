"""Output formatting utilities for the CLI."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Mapping

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from dbremote.core.schema import RemoteTableSchema
from dbremote.core.topology import ClusterTopology

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME)
err_console = Console(theme=_THEME, stderr=True)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {msg}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with err_console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        err_console.print(f"[err]✗[/] {msg}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {v}")

    def topology_table(self, topology: ClusterTopology, title: str = "Topology") -> None:
        """
        Render one row per shard with its replicas in order.

        The first replica of the first shard is highlighted, since that is
        the endpoint asked for the table schema.
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Shard", style="meta", no_wrap=True, justify="right")
        t.add_column("Replicas", style="ok")

        for num, shard in enumerate(topology, start=1):
            replicas = [escape(r) for r in shard.replicas]
            if num == 1:
                replicas[0] = f"[bold]{replicas[0]}[/bold]"
            t.add_row(str(num), ", ".join(replicas))

        console.print(t)

    def columns_table(self, schema: RemoteTableSchema, title: str = "Columns") -> None:
        """Render the columns of a remote table schema."""
        t = Table(title=title, show_lines=False)
        t.add_column("#", style="meta", no_wrap=True, justify="right")
        t.add_column("Name", style="ok")
        t.add_column("Type")

        for num, column in enumerate(schema, start=1):
            t.add_row(str(num), escape(column.name), escape(column.type_name))

        console.print(t)


out = Out()
