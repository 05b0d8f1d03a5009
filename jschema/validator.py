"""Validator handle for jschema.

A Validator binds one schema to a reusable handle. The schema is checked and
parsed once at construction; each call to ``validate`` then runs the engine
with its own error sink, so results never leak between calls.

Usage:
    >>> from jschema.validator import Validator
    >>> schema = {
    ...     "type": "object",
    ...     "properties": {"name": {"type": "string", "required": True}},
    ... }
    >>> validator = Validator(schema)
    >>> validator.validate({"name": "Ada"}).valid
    True
    >>> validator.validate({}).errors
    ['missing required value at name']
"""

import logging
from typing import Any, Dict, Optional

from jschema.schema import SchemaNode, parse_schema
from jschema.validation import ValidationEngine, ValidationResult, ValidatorOptions

logger = logging.getLogger(__name__)


class Validator:
    """Reusable validator bound to one schema.

    Sequential calls are independent. Concurrent calls on one instance are
    safe as well, since no per-run state is stored on the handle. A value
    nested past the interpreter recursion limit is reported as a single
    "maximum nesting depth exceeded" finding rather than raised.

    Attributes:
        schema: The raw schema mapping
        options: Behaviour switches (see ValidatorOptions)
        node: The parsed schema tree
    """

    def __init__(self, schema: Dict[str, Any], options: Optional[ValidatorOptions] = None):
        """Initialize the Validator.

        Args:
            schema: Raw schema mapping (draft 03 dialect)
            options: Optional behaviour switches

        Raises:
            InvalidSchemaError: If the schema is malformed
        """
        self.schema = schema
        self.options = options or ValidatorOptions()
        self.node: SchemaNode = parse_schema(schema, check=self.options.check_schema)
        self._engine = ValidationEngine(
            self.node, index_item_paths=self.options.index_item_paths
        )

    def validate(self, value: Any) -> ValidationResult:
        """Validate a value against the bound schema.

        Args:
            value: Any JSON-like value; it is never modified

        Returns:
            ValidationResult with the pass/fail flag, error count and
            formatted errors in emission order
        """
        result = self._engine.run(value)
        if not result.valid:
            logger.debug("Value rejected with %d error(s)", result.error_count)
        return result

    def is_valid(self, value: Any) -> bool:
        return self.validate(value).valid


def new_validator(schema: Dict[str, Any], **options: Any) -> Validator:
    """Construct a Validator; keyword arguments become ValidatorOptions."""
    return Validator(schema, ValidatorOptions(**options))


def validate(schema: Dict[str, Any], value: Any, **options: Any) -> ValidationResult:
    """One-shot validation of a value against a raw schema.

    Examples:
        >>> validate({"minimum": 0}, -1).errors
        ['minimum value exceeded, expected: 0, received: -1']
    """
    return new_validator(schema, **options).validate(value)


__all__ = [
    "Validator",
    "new_validator",
    "validate",
]
