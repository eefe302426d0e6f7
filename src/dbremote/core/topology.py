"""Cluster topology models and the two-pass topology builder.

A topology descriptor is expanded twice: once with the shard separator
over the whole text, then once with the replica separator over every
shard token. The result is an immutable ClusterTopology that can be
shared freely between the code that built it and every table handle
backed by it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from dbremote.core.addresses import MAX_ADDRESSES, expand
from dbremote.core.errors import AddressLimitExceeded, EmptyShardError, GrammarError

logger = logging.getLogger(__name__)

SHARD_SEPARATOR = ","
REPLICA_SEPARATOR = "|"


@dataclass(frozen=True)
class ShardSpec:
    """
    One shard of a cluster.

    Attributes:
        replicas: Ordered, non-empty tuple of interchangeable replica endpoints.
    """

    replicas: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.replicas:
            raise EmptyShardError("A shard must have at least one replica.")

    def __len__(self) -> int:
        return len(self.replicas)

    def __iter__(self) -> Iterator[str]:
        return iter(self.replicas)


@dataclass(frozen=True)
class ClusterTopology:
    """
    Ordered shards of replicas resolved from a topology descriptor.

    Attributes:
        shards: Shards in descriptor order.
    """

    shards: tuple[ShardSpec, ...]

    @property
    def address_count(self) -> int:
        """Total number of (shard, replica) pairs."""
        return sum(len(shard) for shard in self.shards)

    def first_replica(self) -> str:
        """Return the first replica of the first shard."""
        if not self.shards:
            raise EmptyShardError("Topology has no shards.")
        return self.shards[0].replicas[0]

    def as_lists(self) -> list[list[str]]:
        """Return the topology as nested lists of endpoint strings."""
        return [list(shard.replicas) for shard in self.shards]

    def __len__(self) -> int:
        return len(self.shards)

    def __iter__(self) -> Iterator[ShardSpec]:
        return iter(self.shards)


def build_topology(descriptor: str) -> ClusterTopology:
    """
    Build a ClusterTopology from a topology descriptor.

    Args:
        descriptor: Descriptor text, e.g. `example01-0{1..2}-{1|2}`.

    Returns:
        The immutable topology, shards and replicas in expansion order.

    Raises:
        GrammarError: If the descriptor is malformed, or names an empty endpoint
            or one with an unexpanded brace group.
        AddressLimitExceeded: If the topology exceeds MAX_ADDRESSES endpoints.
        EmptyShardError: If the descriptor or one of its shards has no endpoints.
    """
    shard_tokens = expand(descriptor, SHARD_SEPARATOR)
    if not shard_tokens:
        raise EmptyShardError(f"Descriptor {descriptor!r} resolves to no shards.")

    shards: list[ShardSpec] = []
    for token in shard_tokens:
        try:
            replicas = expand(token, REPLICA_SEPARATOR)
        except GrammarError as exc:
            # Positions from this pass count from the start of the shard token
            where = "within" if exc.position is not None else "in"
            exc.args = (f"{exc.args[0]} {where} shard {token!r}",)
            exc.shard = token
            raise
        if not replicas:
            raise EmptyShardError(f"Shard {token!r} resolves to no replicas.")
        if "" in replicas:
            raise GrammarError("Empty endpoint in shard", fragment=token)
        for replica in replicas:
            if "{" in replica or "}" in replica:
                raise GrammarError(
                    "Unexpanded brace group in endpoint", fragment=replica
                )
        shards.append(ShardSpec(replicas=tuple(replicas)))

    topology = ClusterTopology(shards=tuple(shards))
    if topology.address_count > MAX_ADDRESSES:
        raise AddressLimitExceeded(
            topology.address_count, MAX_ADDRESSES, fragment=descriptor
        )

    logger.debug(
        "Built topology from %r: %d shard(s), %d address(es)",
        descriptor,
        len(topology),
        topology.address_count,
    )
    return topology
