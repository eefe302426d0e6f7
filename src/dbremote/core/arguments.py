"""Argument nodes handed to table functions by the query analyzer.

These are the minimal node shapes a table function needs to read its
arguments. Identifier nodes are mutable on purpose: a table function tags
their kind so that later name resolution treats them as a database or
table name instead of a column reference.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class IdentifierKind(str, Enum):
    """Semantic role of an identifier in a query."""

    COLUMN = "COLUMN"
    DATABASE = "DATABASE"
    TABLE = "TABLE"


@dataclass
class Node:
    """Base class for argument nodes."""


@dataclass
class Literal(Node):
    """A constant value such as a string literal."""

    value: object


@dataclass
class Identifier(Node):
    """A bare name; analyzed as a column reference unless tagged otherwise."""

    name: str
    kind: IdentifierKind = IdentifierKind.COLUMN


@dataclass
class ExpressionList(Node):
    """A parenthesized group of expressions."""

    children: list[Node] = field(default_factory=list)


@dataclass
class Function(Node):
    """A function call, e.g. `remote('host', db, table)`."""

    name: str
    children: list[Node] = field(default_factory=list)


def remote_call(descriptor: str, database: str, table: str) -> Function:
    """Build the argument tree of `remote('<descriptor>', <database>, <table>)`."""
    return Function(
        name="remote",
        children=[
            ExpressionList(
                children=[Literal(descriptor), Identifier(database), Identifier(table)]
            )
        ],
    )
