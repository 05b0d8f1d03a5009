"""Runtime value classification.

Maps Python values onto the semantic type names used by ``type`` and
``disallow`` constraints. A value can belong to more than one type: ``3``
is both an ``integer`` and a ``number``, and everything is ``any``.

    >>> sorted(classify(3))
    ['any', 'integer', 'number']
    >>> matches_type_name("object", [1, 2])
    False
"""

import datetime
import decimal
import numbers
from collections.abc import Mapping
from typing import Any, FrozenSet

from jschema.types import ValueKind

BLOB_TYPES = (bytes, bytearray, memoryview)
NUMBER_TYPES = (numbers.Real, decimal.Decimal)
DATE_TYPES = (datetime.date,)
SEQUENCE_TYPES = (list, tuple)


def is_array(value: Any) -> bool:
    return isinstance(value, SEQUENCE_TYPES)


def is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_number(value: Any) -> bool:
    # bool subclasses int but is never a number here; Decimal is not a Real
    return isinstance(value, NUMBER_TYPES) and not isinstance(value, bool)


def is_integer(value: Any) -> bool:
    if not is_number(value):
        return False
    if isinstance(value, numbers.Integral):
        return True
    if isinstance(value, decimal.Decimal):
        return value.is_finite() and value == value.to_integral_value()
    return float(value).is_integer()


def classify(value: Any) -> FrozenSet[str]:
    """Return every type name the value matches.

    Args:
        value: Any JSON-like value, blob or date

    Returns:
        Frozen set of ``ValueKind`` values, always including ``"any"``
    """
    kinds = {ValueKind.ANY.value}
    if value is None:
        kinds.add(ValueKind.NULL.value)
    elif isinstance(value, bool):
        kinds.add(ValueKind.BOOLEAN.value)
    elif is_number(value):
        kinds.add(ValueKind.NUMBER.value)
        if is_integer(value):
            kinds.add(ValueKind.INTEGER.value)
    elif isinstance(value, str):
        kinds.add(ValueKind.STRING.value)
    elif isinstance(value, BLOB_TYPES):
        kinds.add(ValueKind.BUFFER.value)
    elif isinstance(value, DATE_TYPES):
        kinds.add(ValueKind.DATE.value)
    elif is_array(value):
        kinds.add(ValueKind.ARRAY.value)
    elif is_object(value):
        kinds.add(ValueKind.OBJECT.value)
    return frozenset(kinds)


def matches_type_name(name: str, value: Any) -> bool:
    """Check a single type name against a value.

    Names are compared case-insensitively. Unknown names never match.
    """
    return name.lower() in classify(value)


def kind_of(value: Any) -> str:
    """Most specific type name of a value, used for ``received`` in errors."""
    kinds = classify(value)
    for kind in (
        ValueKind.NULL,
        ValueKind.BOOLEAN,
        ValueKind.INTEGER,
        ValueKind.NUMBER,
        ValueKind.STRING,
        ValueKind.BUFFER,
        ValueKind.DATE,
        ValueKind.ARRAY,
        ValueKind.OBJECT,
    ):
        if kind.value in kinds:
            return kind.value
    return type(value).__name__


__all__ = [
    "classify",
    "matches_type_name",
    "kind_of",
    "is_array",
    "is_object",
    "is_number",
    "is_integer",
]
