"""The `remote` table function.

    remote('example01-01-1', merge, hits)

builds a temporary distributed table over the servers described by the
first argument, backed by table `merge.hits` on each of them. The column
structure is obtained by running `DESC TABLE` on one of the servers.

Construction is all-or-nothing: arguments are validated before anything is
parsed, and the handle is only created once the topology and the schema
have both been resolved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from dbremote.core.arguments import (
    ExpressionList,
    Function,
    Identifier,
    IdentifierKind,
    Literal,
    remote_call,
)
from dbremote.core.errors import (
    ArgumentTypeError,
    ArityError,
    UnknownTableFunctionError,
)
from dbremote.core.schema import ConnectionAdapter, RemoteTableSchema, resolve_schema
from dbremote.core.topology import ClusterTopology, build_topology

logger = logging.getLogger(__name__)

_USAGE = (
    "Table function 'remote' requires 3 parameters"
    " - description of remote servers, name of remote database, name of remote table."
)


@dataclass(frozen=True)
class DistributedTableHandle:
    """
    A distributed table over a resolved cluster topology.

    The handle holds its own reference to the topology, so it stays valid
    independently of the table function that created it.

    Attributes:
        topology: Shards and replicas the table is spread over.
        remote_database: Database name on the remote servers.
        remote_table: Table name on the remote servers.
        schema: Columns of the remote table.
        function_name: Name of the table function that built the handle.
    """

    topology: ClusterTopology
    remote_database: str
    remote_table: str
    schema: RemoteTableSchema
    function_name: str = "remote"

    @property
    def full_name(self) -> str:
        return f"{self.remote_database}.{self.remote_table}"


class RemoteTableFunction:
    """Table function building a DistributedTableHandle from `remote(...)` arguments."""

    name = "remote"

    def __init__(self, adapter: ConnectionAdapter) -> None:
        self.adapter = adapter

    def _arguments(self, function: Function) -> tuple[Literal, Identifier, Identifier]:
        """Validate the argument tree and return its three argument nodes."""
        if len(function.children) != 1:
            raise ArityError(_USAGE)
        group = function.children[0]
        if not isinstance(group, ExpressionList):
            raise ArgumentTypeError(
                f"Table function '{self.name}' expects a parenthesized argument list."
            )
        if len(group.children) != 3:
            raise ArityError(f"{_USAGE} Got {len(group.children)}.")

        descriptor, database, table = group.children
        if not isinstance(descriptor, Literal) or not isinstance(descriptor.value, str):
            raise ArgumentTypeError(
                "First argument of 'remote' must be a string literal"
                " describing the remote servers."
            )
        for position, node in ((2, database), (3, table)):
            if not isinstance(node, Identifier):
                raise ArgumentTypeError(
                    f"Argument {position} of 'remote' must be an identifier."
                )
        return descriptor, database, table

    def execute(self, function: Function) -> DistributedTableHandle:
        """
        Construct the distributed table described by a `remote(...)` call.

        Args:
            function: Argument tree of the call.

        Returns:
            The constructed table handle.

        Raises:
            ArityError: If the call does not have exactly one group of 3 arguments.
            ArgumentTypeError: If an argument has the wrong node type.
            GrammarError: If the topology descriptor is malformed.
            EmptyShardError: If the descriptor resolves to an empty shard.
            ResolutionError: If the remote schema cannot be fetched.
        """
        descriptor, database, table = self._arguments(function)

        # Later analysis must not resolve these as column names
        database.kind = IdentifierKind.DATABASE
        table.kind = IdentifierKind.TABLE

        topology = build_topology(descriptor.value)
        schema = resolve_schema(self.adapter, topology, database.name, table.name)

        logger.info(
            "Constructed remote table %s.%s over %d shard(s) with %d column(s)",
            database.name,
            table.name,
            len(topology),
            len(schema),
        )
        return DistributedTableHandle(
            topology=topology,
            remote_database=database.name,
            remote_table=table.name,
            schema=schema,
            function_name=self.name,
        )


TABLE_FUNCTIONS: dict[str, type[RemoteTableFunction]] = {
    RemoteTableFunction.name: RemoteTableFunction,
}


def get_table_function(name: str, adapter: ConnectionAdapter) -> RemoteTableFunction:
    """Return the table function registered under `name`, bound to `adapter`."""
    try:
        cls = TABLE_FUNCTIONS[name]
    except KeyError as exc:
        raise UnknownTableFunctionError(f"Unknown table function '{name}'.") from exc
    return cls(adapter)


def construct_remote_table(
    adapter: ConnectionAdapter,
    descriptor: str,
    database: str,
    table: str,
) -> DistributedTableHandle:
    """Shortcut for executing `remote('<descriptor>', <database>, <table>)`."""
    return RemoteTableFunction(adapter).execute(remote_call(descriptor, database, table))
