"""Recursive validation engine for jschema.

This module provides the ValidationEngine that walks a value against a parsed
SchemaNode tree and records every violation in an ErrorSink. For each node the
engine evaluates, in order:

1. dependencies
2. patternProperties
3. additionalProperties
4. presence (``required``)
5. array shape (type, disallow, enum, minItems, maxItems, uniqueItems, items)
6. per-value checks (disallow, type, enum, numeric and string constraints)
7. declared child properties

All categories run; a failing category never stops the next one.
"""

import decimal
import logging
import numbers
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Dict, List, Optional

from jschema.classify import is_array, is_number, is_object, kind_of, matches_type_name
from jschema.equality import all_unique, structurally_equal
from jschema.errors import ErrorSink, Violation
from jschema.paths import extend_path
from jschema.schema import Nested, OneOf, SchemaNode, TypeConstraint, resolve_schema
from jschema.types import ErrorCode

logger = logging.getLogger(__name__)

EMPTY_SCHEMA = SchemaNode()


def _as_fraction(number) -> Fraction:
    if isinstance(number, (numbers.Integral, decimal.Decimal)):
        return Fraction(number)
    # shortest repr: 0.07 is 7/100, not the nearest binary float
    return Fraction(str(number))


def _divides(divisor, value) -> bool:
    try:
        dividend = _as_fraction(value)
    except (ValueError, OverflowError):
        # nan and infinities are multiples of nothing
        return False
    return dividend % _as_fraction(divisor) == 0


@dataclass(frozen=True)
class ValidatorOptions:
    """Tunable behaviour of a Validator.

    Attributes:
        check_schema: Check the raw schema against META_SCHEMA before parsing
        index_item_paths: Label array elements validated through ``items`` as
            ``path.<index>``; when False every element shares the array's path
    """
    check_schema: bool = True
    index_item_paths: bool = True


@dataclass(frozen=True)
class ValidationResult:
    """Result of one validation run.

    Attributes:
        valid: Whether the value conformed (no errors at all)
        error_count: Number of errors recorded
        errors: Formatted error strings, in emission order
        violations: Structured records behind ``errors``

    Examples:
        >>> from jschema.schema import parse_schema
        >>> engine = ValidationEngine(parse_schema({"type": "string"}))
        >>> result = engine.run(5)
        >>> result.valid
        False
        >>> result.errors
        ['invalid type, expected: string, received: integer']
    """
    valid: bool
    error_count: int
    errors: List[str]
    violations: List[Violation]

    @classmethod
    def from_sink(cls, sink: ErrorSink) -> "ValidationResult":
        return cls(
            valid=sink.count == 0,
            error_count=sink.count,
            errors=sink.messages(),
            violations=list(sink.violations),
        )

    def outcome(self) -> Optional[Dict[str, Any]]:
        """None on success, else ``{"count": n, "errors": [...]}``."""
        if self.valid:
            return None
        return {"count": self.error_count, "errors": list(self.errors)}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for serialization."""
        return {
            "valid": self.valid,
            "errorCount": self.error_count,
            "errors": list(self.errors),
            "violations": [v.to_dict() for v in self.violations],
        }


class ValidationEngine:
    """Recursive-descent evaluator of a SchemaNode tree.

    The engine holds only the root schema and options; every run gets its own
    ErrorSink, so one engine can serve any number of sequential runs.

    Attributes:
        schema: Root SchemaNode
        index_item_paths: See ValidatorOptions
    """

    def __init__(self, schema: SchemaNode, index_item_paths: bool = True) -> None:
        self.schema = schema
        self.index_item_paths = index_item_paths

    def run(self, value: Any) -> ValidationResult:
        """Validate a value from the root schema with a fresh error sink."""
        sink = ErrorSink()
        try:
            self.validate_node(value, "", self.schema, sink)
        except RecursionError:
            logger.warning("Value nesting exceeded the recursion limit")
            sink.add("", ErrorCode.NESTING_DEPTH)
        logger.debug("Validation finished with %d error(s)", sink.count)
        return ValidationResult.from_sink(sink)

    def validate_node(
        self,
        value: Any,
        path: str,
        schema: Optional[SchemaNode],
        sink: ErrorSink,
    ) -> bool:
        """Validate one value against one schema node and its subtree.

        Args:
            value: The value at ``path``
            path: Dotted path of the value ("" for the root)
            schema: Node to apply; None resolves it from the root by ``path``
            sink: Where violations are recorded

        Returns:
            True if no violation was recorded for this node or its
            children. Pattern-property findings are recorded but do not
            affect the returned flag.
        """
        if schema is None:
            schema = resolve_schema(self.schema, path) or EMPTY_SCHEMA

        ok = True
        if is_object(value):
            ok &= self._check_dependencies(value, path, schema, sink)
            self._check_pattern_properties(value, path, schema, sink)
            ok &= self._check_additional_properties(value, path, schema, sink)

        if value is None:
            if schema.required:
                sink.add(path, ErrorCode.REQUIRED)
                ok = False
        elif is_array(value):
            ok &= self._check_array(value, path, schema, sink)
        else:
            ok &= self._check_value(value, path, schema, sink)

        if schema.properties is not None:
            ok &= self._check_properties(value, path, schema, sink)
        return ok

    def matches(self, constraint: TypeConstraint, value: Any, path: str = "") -> bool:
        """Check a ``type``/``disallow`` constraint against a value.

        Nested schemas are probed with a scratch sink, so their findings
        never reach the run's error log.
        """
        if isinstance(constraint, Nested):
            return self._conforms(value, path, constraint.schema)
        if isinstance(constraint, OneOf):
            for option in constraint.options:
                if isinstance(option, str):
                    if matches_type_name(option, value):
                        return True
                elif self._conforms(value, path, option):
                    return True
            return False
        return matches_type_name(constraint.name, value)

    def _conforms(self, value: Any, path: str, schema: SchemaNode) -> bool:
        scratch = ErrorSink()
        self.validate_node(value, path, schema, scratch)
        return scratch.count == 0

    def _check_dependencies(self, value, path, schema, sink) -> bool:
        if schema.dependencies is None:
            return True
        ok = True
        for name, required_names in schema.dependencies.items():
            if name not in value:
                continue
            for required_name in required_names:
                if required_name not in value:
                    sink.add(
                        path,
                        ErrorCode.DEPENDENCY,
                        expected=required_name,
                        message=f"missing dependency of {name}",
                    )
                    ok = False
        return ok

    def _check_pattern_properties(self, value, path, schema, sink) -> None:
        if schema.pattern_properties is None:
            return
        for key in value:
            for pattern, child in schema.pattern_properties:
                if pattern.search(str(key)):
                    self.validate_node(value[key], extend_path(path, key), child, sink)

    def _check_additional_properties(self, value, path, schema, sink) -> bool:
        if schema.additional_properties is None or schema.properties is None:
            return True
        patterns = schema.pattern_properties or ()
        ok = True
        for key in value:
            if key in schema.properties:
                continue
            if any(pattern.search(str(key)) for pattern, _ in patterns):
                continue
            if schema.additional_properties is False:
                sink.add(path, ErrorCode.ADDITIONAL_PROPERTY, received=key)
                ok = False
            else:
                ok &= self.validate_node(
                    value[key], extend_path(path, key), schema.additional_properties, sink
                )
        return ok

    def _check_type_constraints(self, value, path, schema, sink) -> bool:
        ok = True
        if schema.disallow is not None and self.matches(schema.disallow, value, path):
            if isinstance(schema.disallow, Nested):
                sink.add(path, ErrorCode.DISALLOWED_SCHEMA_TYPE, schema.disallow.describe(), value)
            else:
                sink.add(path, ErrorCode.DISALLOWED_TYPE, schema.disallow.describe(), kind_of(value))
            ok = False
        if schema.type is not None and not self.matches(schema.type, value, path):
            if isinstance(schema.type, Nested):
                sink.add(path, ErrorCode.INVALID_SCHEMA_TYPE, schema.type.describe(), value)
            else:
                sink.add(path, ErrorCode.INVALID_TYPE, schema.type.describe(), kind_of(value))
            ok = False
        return ok

    def _check_enum(self, value, path, schema, sink) -> bool:
        if schema.enum is None:
            return True
        if any(structurally_equal(option, value) for option in schema.enum):
            return True
        sink.add(path, ErrorCode.NOT_IN_ENUM, list(schema.enum), value)
        return False

    def _check_array(self, value, path, schema, sink) -> bool:
        ok = self._check_type_constraints(value, path, schema, sink)
        ok &= self._check_enum(value, path, schema, sink)
        if schema.min_items is not None and len(value) < schema.min_items:
            sink.add(path, ErrorCode.MIN_ITEMS, schema.min_items, len(value))
            ok = False
        if schema.max_items is not None and len(value) > schema.max_items:
            sink.add(path, ErrorCode.MAX_ITEMS, schema.max_items, len(value))
            ok = False
        if schema.unique_items and not all_unique(value):
            sink.add(path, ErrorCode.UNIQUE_ITEMS)
            ok = False
        if schema.items is not None:
            for index, item in enumerate(value):
                item_path = extend_path(path, index) if self.index_item_paths else path
                ok &= self.validate_node(item, item_path, schema.items, sink)
        return ok

    def _check_value(self, value, path, schema, sink) -> bool:
        ok = self._check_type_constraints(value, path, schema, sink)
        ok &= self._check_enum(value, path, schema, sink)
        if is_number(value):
            ok &= self._check_number(value, path, schema, sink)
        elif isinstance(value, str):
            ok &= self._check_string(value, path, schema, sink)
        return ok

    def _check_number(self, value, path, schema, sink) -> bool:
        ok = True
        if schema.minimum is not None:
            if schema.exclusive_minimum:
                if value <= schema.minimum:
                    # reported as the smallest integer that would pass
                    sink.add(path, ErrorCode.EXCLUSIVE_MINIMUM, schema.minimum + 1, value)
                    ok = False
            elif value < schema.minimum:
                sink.add(path, ErrorCode.MINIMUM, schema.minimum, value)
                ok = False
        if schema.maximum is not None:
            if schema.exclusive_maximum:
                if value >= schema.maximum:
                    sink.add(path, ErrorCode.EXCLUSIVE_MAXIMUM, schema.maximum - 1, value)
                    ok = False
            elif value > schema.maximum:
                sink.add(path, ErrorCode.MAXIMUM, schema.maximum, value)
                ok = False
        if schema.divisible_by and not _divides(schema.divisible_by, value):
            sink.add(path, ErrorCode.DIVISIBLE_BY, schema.divisible_by, value)
            ok = False
        return ok

    def _check_string(self, value, path, schema, sink) -> bool:
        ok = True
        if schema.min_length is not None and len(value) < schema.min_length:
            sink.add(path, ErrorCode.MIN_LENGTH, schema.min_length, len(value))
            ok = False
        if schema.max_length is not None and len(value) > schema.max_length:
            sink.add(path, ErrorCode.MAX_LENGTH, schema.max_length, len(value))
            ok = False
        if schema.pattern is not None and not schema.pattern.search(value):
            sink.add(path, ErrorCode.PATTERN, schema.pattern.pattern, value)
            ok = False
        return ok

    def _check_properties(self, value, path, schema, sink) -> bool:
        ok = True
        for name, child in schema.properties.items():
            child_path = extend_path(path, name)
            if is_object(value) and name in value:
                ok &= self.validate_node(value[name], child_path, child, sink)
            else:
                ok &= self.validate_node(None, child_path, child, sink)
        return ok


__all__ = [
    "EMPTY_SCHEMA",
    "ValidatorOptions",
    "ValidationResult",
    "ValidationEngine",
]
