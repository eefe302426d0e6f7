"""Address grammar expansion for topology descriptors.

A descriptor is a compact way to write many host names at once:

    host1,host2         two shards
    host1|host2         two replicas
    abc{8..10}def       abc8def, abc9def, abc10def
    abc{x,yy,z}def      abcxdef, abcyydef, abczdef
    abc{1..9}de{f,g,h}  cartesian product, 27 strings
    abc{1..9}de{0|1}    9 shards with 2 replicas each (after both passes)

Expansion is parametrized by one separator character. A brace group that
only contains the other separator is kept verbatim so the pass using that
separator can expand it later.
"""

from __future__ import annotations

import logging

from dbremote.core.errors import AddressLimitExceeded, GrammarError

logger = logging.getLogger(__name__)

# Maximum number of shards, and of (shard, replica) pairs in a topology
MAX_ADDRESSES = 200

_MAX_RANGE_BOUND = 10**15
_RESERVED = frozenset("{}.")


def _append(to: list[str], what: list[str], *, fragment: str) -> list[str]:
    """Return the cartesian product `to x what`, preserving nested order."""
    if not what:
        return to
    if not to:
        return list(what)
    if len(to) * len(what) > MAX_ADDRESSES:
        raise AddressLimitExceeded(
            len(to) * len(what), MAX_ADDRESSES, fragment=fragment
        )
    return [a + b for a in to for b in what]


def _parse_number(text: str, lo: int, hi: int) -> int | None:
    """Parse text[lo:hi] as a bounded decimal number, or None if invalid."""
    if lo >= hi:
        return None
    value = 0
    for pos in range(lo, hi):
        if not "0" <= text[pos] <= "9":
            return None
        value = value * 10 + ord(text[pos]) - ord("0")
        if value > _MAX_RANGE_BOUND:
            return None
    return value


def _expand_range(text: str, start: int, end: int, last_dot: int) -> list[str]:
    """Expand the numeric range group text[start:end + 1] (`{left..right}`)."""
    group = text[start : end + 1]
    left = _parse_number(text, start + 1, last_dot - 1)
    if left is None:
        raise GrammarError(
            "Incorrect left number in range", fragment=group, position=start
        )
    right = _parse_number(text, last_dot + 1, end)
    if right is None:
        raise GrammarError(
            "Incorrect right number in range", fragment=group, position=start
        )
    if left > right:
        raise GrammarError(
            "Left number is greater than right in range",
            fragment=group,
            position=start,
        )
    if right - left + 1 > MAX_ADDRESSES:
        raise AddressLimitExceeded(right - left + 1, MAX_ADDRESSES, fragment=group)
    return [str(n) for n in range(left, right + 1)]


def _expand(text: str, lo: int, hi: int, separator: str) -> list[str]:
    """Expand text[lo:hi]; recursive on brace groups containing `separator`."""
    if lo >= hi:
        return [""]

    result: list[str] = []
    current: list[str] = []

    i = lo
    while i < hi:
        ch = text[i]
        if ch == "{":
            depth = 1
            last_dot = -1  # right dot of the right-most top-level `..` pair
            has_separator = False
            end = i + 1
            while end < hi:
                c = text[end]
                if c == "{":
                    depth += 1
                elif c == "}":
                    depth -= 1
                    if depth == 0:
                        break
                elif c == "." and depth == 1 and text[end - 1] == ".":
                    last_dot = end
                elif c == separator:
                    has_separator = True
                end += 1
            if depth != 0:
                raise GrammarError(
                    "Unbalanced braces", fragment=text[i:hi], position=i
                )

            if last_dot != -1:
                group = _expand_range(text, i, end, last_dot)
            elif has_separator:
                group = _expand(text, i + 1, end, separator)
            else:
                group = [text[i : end + 1]]
            current = _append(current, group, fragment=text[i : end + 1])
            i = end
        elif ch == "}":
            raise GrammarError("Unexpected closing brace", fragment=ch, position=i)
        elif ch == separator:
            result.extend(current)
            current = []
        else:
            current = _append(current, [ch], fragment=ch)
        i += 1

    result.extend(current)
    if len(result) > MAX_ADDRESSES:
        raise AddressLimitExceeded(len(result), MAX_ADDRESSES, fragment=text[lo:hi])
    return result


def expand(text: str, separator: str) -> list[str]:
    """
    Expand a descriptor into the ordered list of strings it denotes.

    Args:
        text: Descriptor text.
        separator: The alternation character for this pass (`,` or `|`).

    Returns:
        The expanded strings in cartesian generation order. An empty text
        yields `[""]`.

    Raises:
        GrammarError: If braces are unbalanced or a range is malformed.
        AddressLimitExceeded: If any step produces more than MAX_ADDRESSES.
        ValueError: If `separator` is not a single non-reserved character.
    """
    if len(separator) != 1 or separator in _RESERVED:
        raise ValueError(f"Invalid separator: {separator!r}")
    expanded = _expand(text, 0, len(text), separator)
    logger.debug("Expanded %r with %r into %d item(s)", text, separator, len(expanded))
    return expanded
