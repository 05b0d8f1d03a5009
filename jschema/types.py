"""Core type definitions for jschema.

This module defines the enumerations shared across the validator:
- ValueKind: Semantic type names a runtime value can be classified as
- ErrorCode: Categories of validation findings recorded by the engine

Type names follow JSON Schema draft 03 plus the two opaque kinds this
library adds (``buffer`` and ``date``).
"""

from enum import Enum
from typing import FrozenSet


class ValueKind(str, Enum):
    """Semantic type names recognized in ``type`` and ``disallow`` constraints.

    ``ANY`` is a wildcard that matches every value, including ``None``.
    """
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    NULL = "null"
    BUFFER = "buffer"
    DATE = "date"
    ANY = "any"


# Every name a ``type`` constraint can meaningfully reference
KNOWN_TYPE_NAMES: FrozenSet[str] = frozenset(kind.value for kind in ValueKind)


class ErrorCode(str, Enum):
    """Validation finding codes.

    Each code maps to one constraint category. Findings are data, never
    exceptions: the engine records them and keeps going.
    """
    INVALID_TYPE = "invalid_type"
    INVALID_SCHEMA_TYPE = "invalid_schema_type"
    DISALLOWED_TYPE = "disallowed_type"
    DISALLOWED_SCHEMA_TYPE = "disallowed_schema_type"
    NOT_IN_ENUM = "not_in_enum"
    MINIMUM = "minimum"
    EXCLUSIVE_MINIMUM = "exclusive_minimum"
    MAXIMUM = "maximum"
    EXCLUSIVE_MAXIMUM = "exclusive_maximum"
    DIVISIBLE_BY = "divisible_by"
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    PATTERN = "pattern"
    REQUIRED = "required"
    DEPENDENCY = "dependency"
    ADDITIONAL_PROPERTY = "additional_property"
    UNIQUE_ITEMS = "unique_items"
    MIN_ITEMS = "min_items"
    MAX_ITEMS = "max_items"
    NESTING_DEPTH = "nesting_depth"


# Human-readable message for each finding, used as the head of the error string
ERROR_MESSAGES = {
    ErrorCode.INVALID_TYPE: "invalid type",
    ErrorCode.INVALID_SCHEMA_TYPE: "invalid schema type",
    ErrorCode.DISALLOWED_TYPE: "disallowed type",
    ErrorCode.DISALLOWED_SCHEMA_TYPE: "disallowed schema type",
    ErrorCode.NOT_IN_ENUM: "value not in enum",
    ErrorCode.MINIMUM: "minimum value exceeded",
    ErrorCode.EXCLUSIVE_MINIMUM: "exclusive minimum value exceeded",
    ErrorCode.MAXIMUM: "maximum value exceeded",
    ErrorCode.EXCLUSIVE_MAXIMUM: "exclusive maximum value exceeded",
    ErrorCode.DIVISIBLE_BY: "value does not match divisibleBy",
    ErrorCode.MIN_LENGTH: "minimum string length exceeded",
    ErrorCode.MAX_LENGTH: "maximum string length exceeded",
    ErrorCode.PATTERN: "string does not match pattern",
    ErrorCode.REQUIRED: "missing required value",
    ErrorCode.DEPENDENCY: "missing dependency of",
    ErrorCode.ADDITIONAL_PROPERTY: "invalid extra properties present",
    ErrorCode.UNIQUE_ITEMS: "duplicate array items found",
    ErrorCode.MIN_ITEMS: "minimum items exceeded",
    ErrorCode.MAX_ITEMS: "maximum items exceeded",
    ErrorCode.NESTING_DEPTH: "maximum nesting depth exceeded",
}


__all__ = [
    "ValueKind",
    "KNOWN_TYPE_NAMES",
    "ErrorCode",
    "ERROR_MESSAGES",
]
