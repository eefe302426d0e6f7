"""Error taxonomy for remote table construction.

Every error raised while building a remote table derives from
RemoteTableError and carries an explicit ErrorKind. Construction is
all-or-nothing: the first error aborts it and no partial object is
returned to the caller.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """
    Enumeration of the failure categories of remote table construction.

    Values:
        ARITY: Wrong number of invocation arguments.
        ARGUMENT_TYPE: An invocation argument has the wrong node type.
        GRAMMAR: The topology descriptor is malformed.
        ADDRESS_LIMIT: Expansion produced too many addresses.
        EMPTY_SHARD: A shard (or the whole descriptor) has no endpoints.
        RESOLUTION: The remote schema could not be fetched.
        UNKNOWN_FUNCTION: No table function is registered under a name.
    """

    ARITY = "ARITY"
    ARGUMENT_TYPE = "ARGUMENT_TYPE"
    GRAMMAR = "GRAMMAR"
    ADDRESS_LIMIT = "ADDRESS_LIMIT"
    EMPTY_SHARD = "EMPTY_SHARD"
    RESOLUTION = "RESOLUTION"
    UNKNOWN_FUNCTION = "UNKNOWN_FUNCTION"


class RemoteTableError(Exception):
    """Base class for all remote table construction failures."""

    kind: ErrorKind


class ArityError(RemoteTableError):
    """Raised when the invocation does not have the expected argument count."""

    kind = ErrorKind.ARITY


class ArgumentTypeError(RemoteTableError):
    """Raised when an invocation argument is not the expected node type."""

    kind = ErrorKind.ARGUMENT_TYPE


class GrammarError(RemoteTableError):
    """
    Raised when a topology descriptor cannot be parsed.

    Attributes:
        fragment: The offending part of the descriptor, if known.
        position: Index of the fragment in the parsed text, if known.
        shard: Shard token the error was found in during the replica pass;
            `position` then counts from the start of that token.
    """

    kind = ErrorKind.GRAMMAR

    def __init__(
        self,
        message: str,
        *,
        fragment: str | None = None,
        position: int | None = None,
    ):
        if fragment is not None:
            message = f"{message}: {fragment!r}"
            if position is not None:
                message = f"{message} at position {position}"
        super().__init__(message)
        self.fragment = fragment
        self.position = position
        self.shard: str | None = None


class AddressLimitExceeded(GrammarError):
    """
    Raised when an expansion step would generate too many addresses.

    Attributes:
        count: Number of addresses the step would have produced.
        limit: The configured maximum.
    """

    kind = ErrorKind.ADDRESS_LIMIT

    def __init__(self, count: int, limit: int, *, fragment: str | None = None):
        super().__init__(
            f"Descriptor generates too many addresses ({count} > {limit})",
            fragment=fragment,
        )
        self.count = count
        self.limit = limit


class EmptyShardError(RemoteTableError):
    """Raised when a shard resolves to zero replica endpoints."""

    kind = ErrorKind.EMPTY_SHARD


class ResolutionError(RemoteTableError):
    """
    Raised when the remote table schema cannot be fetched.

    The transport or query failure is chained as __cause__.
    """

    kind = ErrorKind.RESOLUTION

    def __init__(self, message: str, *, endpoint: str | None = None):
        super().__init__(message)
        self.endpoint = endpoint


class UnknownTableFunctionError(RemoteTableError):
    """Raised when no table function is registered under the requested name."""

    kind = ErrorKind.UNKNOWN_FUNCTION
