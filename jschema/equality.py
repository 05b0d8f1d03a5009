"""Structural equality and uniqueness over JSON-like values.

Object key order carries no meaning in JSON, so mappings are canonicalized
into key-sorted pairs before comparison. Array order is meaningful and is
kept as-is.
"""

from typing import Any, Hashable, Iterable

from jschema.classify import BLOB_TYPES, is_array, is_number, is_object


def _key_order(pair):
    return str(pair[0])


def canonicalize(value: Any) -> Hashable:
    """Build an order-normalized, hashable form of a value.

    Scalars are tagged with their kind so that ``True`` and ``1`` (equal in
    Python) stay distinct, while ``1`` and ``1.0`` compare equal as numbers.

    Examples:
        >>> canonicalize({"b": 1, "a": [2]}) == canonicalize({"a": [2], "b": 1})
        True
        >>> canonicalize([1, 2]) == canonicalize([2, 1])
        False
    """
    if is_object(value):
        return (
            "object",
            tuple(
                (key, canonicalize(item)) for key, item in sorted(value.items(), key=_key_order)
            ),
        )
    if is_array(value):
        return ("array", tuple(canonicalize(item) for item in value))
    if isinstance(value, bool):
        return ("boolean", value)
    if is_number(value):
        return ("number", value)
    if isinstance(value, BLOB_TYPES):
        return ("buffer", bytes(value))
    return (type(value).__name__, value)


def structurally_equal(left: Any, right: Any) -> bool:
    return canonicalize(left) == canonicalize(right)


def all_unique(items: Iterable[Any]) -> bool:
    """True when no two items are structurally equal."""
    seen = set()
    for item in items:
        key = canonicalize(item)
        if key in seen:
            return False
        seen.add(key)
    return True


__all__ = [
    "canonicalize",
    "structurally_equal",
    "all_unique",
]
