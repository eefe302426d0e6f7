"""Remote table schema models and the schema resolver.

The resolver asks exactly one endpoint of a topology to describe a remote
table and turns the returned `name`/`type` rows into a RemoteTableSchema.
Connection handling is delegated to a ConnectionAdapter, so the resolver
itself stays free of any transport details.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Protocol

from dbremote.core.errors import ResolutionError
from dbremote.core.topology import ClusterTopology

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    A single column of a remote table.

    Attributes:
        name: Column name.
        type_name: Type name exactly as reported by the remote endpoint.
    """

    name: str
    type_name: str


@dataclass(frozen=True)
class RemoteTableSchema:
    """Ordered columns of a remote table, in the order the endpoint returned them."""

    columns: tuple[ColumnDescriptor, ...] = ()

    @property
    def names(self) -> list[str]:
        """Column names in order."""
        return [c.name for c in self.columns]

    def __len__(self) -> int:
        return len(self.columns)

    def __iter__(self) -> Iterator[ColumnDescriptor]:
        return iter(self.columns)


class Session(Protocol):
    """A usable connection to one endpoint."""

    def execute(self, query: str) -> Iterable[Mapping[str, object]]:
        """Run a query and return its rows in arrival order."""
        ...


class ConnectionAdapter(Protocol):
    """Interface for acquiring sessions, used by the core domain."""

    def connect(self, endpoint: str) -> Session:
        """Return a session connected to `endpoint`."""
        ...


def describe_query(database: str, table: str) -> str:
    """Return the schema description query for `database.table`."""
    return f"DESC TABLE {database}.{table}"


def _decode_row(row: Mapping[str, object]) -> ColumnDescriptor:
    try:
        name = row["name"]
        type_name = row["type"]
    except KeyError as exc:
        raise ResolutionError(f"Description row is missing field {exc}") from exc
    if not isinstance(name, str) or not isinstance(type_name, str):
        raise ResolutionError(f"Description row has non-string name or type: {row!r}")
    return ColumnDescriptor(name=name, type_name=type_name)


def resolve_schema(
    adapter: ConnectionAdapter,
    topology: ClusterTopology,
    database: str,
    table: str,
) -> RemoteTableSchema:
    """
    Fetch the column schema of a remote table from one endpoint.

    The endpoint is always the first replica of the first shard; no other
    endpoint is contacted, even if this one fails.

    Args:
        adapter: Connection adapter used to reach the endpoint.
        topology: Topology to pick the endpoint from.
        database: Remote database name.
        table: Remote table name.

    Returns:
        The remote schema. It may be empty if the endpoint returned no rows.

    Raises:
        ResolutionError: On any transport or query failure, or a malformed row.
    """
    endpoint = topology.first_replica()
    query = describe_query(database, table)
    logger.info("Resolving schema of %s.%s via %s", database, table, endpoint)

    columns: list[ColumnDescriptor] = []
    try:
        session = adapter.connect(endpoint)
        for row in session.execute(query):
            column = _decode_row(row)
            logger.debug("Column %s %s", column.name, column.type_name)
            columns.append(column)
    except ResolutionError as exc:
        if exc.endpoint is None:
            exc.endpoint = endpoint
        raise
    except Exception as exc:  # noqa: BLE001
        raise ResolutionError(
            f"Failed to describe {database}.{table} on {endpoint}: {exc}",
            endpoint=endpoint,
        ) from exc

    if not columns:
        logger.warning("Remote table %s.%s has no columns", database, table)
    return RemoteTableSchema(columns=tuple(columns))
