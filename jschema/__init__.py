"""jschema: structural validation of JSON-like values.

jschema checks a value against a declarative schema in the JSON Schema
draft 03 dialect and reports every point of non-conformance:
- Type and disallow checks (names, unions and nested schemas)
- Numeric range and divisibility, string length and pattern
- Array cardinality, uniqueness and item schemas
- Object properties, patternProperties, additionalProperties, dependencies
- Enumerations compared structurally (object key order ignored)

Findings are returned, never raised. Only a malformed schema raises
(InvalidSchemaError).

Basic usage:
    >>> from jschema import Validator
    >>> validator = Validator({"type": "integer", "minimum": 1})
    >>> result = validator.validate(0)
    >>> result.valid, result.error_count
    (False, 1)
    >>> result.errors[0]
    'minimum value exceeded, expected: 1, received: 0'
"""

__version__ = "0.1.0"
__author__ = "jschema contributors"

# Version info
VERSION = (0, 1, 0)

# Core exports
from jschema.errors import InvalidSchemaError, Violation
from jschema.validation import ValidationResult, ValidatorOptions
from jschema.validator import Validator, new_validator, validate

# Package metadata
__all__ = [
    "__version__",
    "VERSION",
    "InvalidSchemaError",
    "Violation",
    "ValidationResult",
    "ValidatorOptions",
    "Validator",
    "new_validator",
    "validate",
]
