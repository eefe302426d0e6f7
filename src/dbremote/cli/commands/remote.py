"""Commands for resolving remote tables."""

import typer
from rich.markup import escape

from dbremote.cli.common.context import build_remote_context
from dbremote.cli.common.exits import exit_from_error, warn_exit
from dbremote.cli.common.options import PortOpt, SchemeOpt, TimeoutOpt
from dbremote.cli.common.output import out
from dbremote.core.arguments import remote_call
from dbremote.core.errors import RemoteTableError
from dbremote.core.remote import get_table_function
from dbremote.core.topology import build_topology


def topology(
    descriptor: str = typer.Argument(
        ..., help="Topology descriptor, e.g. 'example01-0{1..2}-{1|2}'"
    ),
):
    """
    Expand a topology descriptor into shards and replicas.
    """
    try:
        topo = build_topology(descriptor)
    except RemoteTableError as exc:
        exit_from_error(exc)

    out.header("Topology")
    out.info(f"Shards: {len(topo)} | Addresses: {topo.address_count}")
    out.topology_table(topo, title="Shards")


def describe(
    descriptor: str = typer.Argument(..., help="Topology descriptor"),
    database: str = typer.Argument(..., help="Remote database name"),
    table: str = typer.Argument(..., help="Remote table name"),
    port: int | None = PortOpt,
    scheme: str | None = SchemeOpt,
    timeout: float | None = TimeoutOpt,
):
    """
    Build a remote table and show the columns reported by its first replica.
    """
    appctx = build_remote_context(port=port, scheme=scheme, timeout=timeout)
    function = get_table_function("remote", appctx.adapter)

    try:
        with out.status(f"Describing {database}.{table}..."):
            handle = function.execute(remote_call(descriptor, database, table))
    except RemoteTableError as exc:
        exit_from_error(exc)
    finally:
        appctx.adapter.close()

    out.header(f"Remote table {escape(handle.full_name)}")
    out.kv(
        {
            "Shards": len(handle.topology),
            "Addresses": handle.topology.address_count,
            "Described on": escape(handle.topology.first_replica()),
        }
    )

    if not len(handle.schema):
        warn_exit("Remote table has no columns.", code=0)

    out.columns_table(handle.schema, title="Columns")
    endpoint = escape(handle.topology.first_replica())
    out.success(f"Resolved {len(handle.schema)} column(s) from {endpoint}")
