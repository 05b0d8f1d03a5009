"""Schema parsing for jschema.

Raw schemas are JSON-like dicts in the JSON Schema draft 03 dialect. Before
use they are checked against a bundled meta-schema (run through jsonschema's
Draft7Validator) and then parsed into immutable SchemaNode trees, where every
"one or many" field has already been normalized:

- ``type``/``disallow`` become a TypeConstraint (Primitive, OneOf or Nested)
- ``dependencies`` values become tuples of property names
- ``pattern`` and ``patternProperties`` keys are compiled once

Usage:
    >>> node = parse_schema({"type": "object", "properties": {"age": {"type": "integer"}}})
    >>> node.type
    Primitive(name='object')
    >>> resolve_schema(node, "age").type
    Primitive(name='integer')
"""

import logging
import re
from dataclasses import dataclass, field
from re import Pattern
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from jsonschema import Draft7Validator
from typing_extensions import TypeAlias

from jschema.errors import InvalidSchemaError
from jschema.paths import split_path
from jschema.types import KNOWN_TYPE_NAMES

logger = logging.getLogger(__name__)


_TYPE_CONSTRAINT = {
    "anyOf": [
        {"type": "string"},
        {"$ref": "#"},
        {
            "type": "array",
            "items": {"anyOf": [{"type": "string"}, {"$ref": "#"}]},
        },
    ]
}

_NON_NEGATIVE_INTEGER = {"type": "integer", "minimum": 0}

# Describes the schema dialect the engine understands. Unknown keys are
# allowed and ignored (title, description, default, format, ...).
META_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "jschema schema node",
    "type": "object",
    "properties": {
        "type": _TYPE_CONSTRAINT,
        "disallow": _TYPE_CONSTRAINT,
        "enum": {"type": "array"},
        "properties": {"type": "object", "additionalProperties": {"$ref": "#"}},
        "patternProperties": {
            "type": "object",
            "additionalProperties": {"$ref": "#"},
        },
        "additionalProperties": {"anyOf": [{"type": "boolean"}, {"$ref": "#"}]},
        "dependencies": {
            "type": "object",
            "additionalProperties": {
                "anyOf": [
                    {"type": "string"},
                    {"type": "array", "items": {"type": "string"}},
                ]
            },
        },
        "required": {"type": "boolean"},
        "minItems": _NON_NEGATIVE_INTEGER,
        "maxItems": _NON_NEGATIVE_INTEGER,
        "uniqueItems": {"type": "boolean"},
        "items": {"$ref": "#"},
        "minimum": {"type": "number"},
        "maximum": {"type": "number"},
        "exclusiveMinimum": {"type": "boolean"},
        "exclusiveMaximum": {"type": "boolean"},
        "divisibleBy": {"type": "number", "minimum": 0},
        "minLength": _NON_NEGATIVE_INTEGER,
        "maxLength": _NON_NEGATIVE_INTEGER,
        "pattern": {"type": "string"},
    },
}

_META_VALIDATOR = Draft7Validator(META_SCHEMA)


@dataclass(frozen=True)
class Primitive:
    """A single type name, e.g. ``{"type": "string"}``."""
    name: str

    def describe(self) -> Any:
        return self.name


@dataclass(frozen=True)
class OneOf:
    """A union of type names and/or nested schemas; any match suffices."""
    options: Tuple[Union[str, "SchemaNode"], ...]

    def describe(self) -> Any:
        return [
            option if isinstance(option, str) else option.raw
            for option in self.options
        ]


@dataclass(frozen=True)
class Nested:
    """A schema used as a type: the value must fully validate against it."""
    schema: "SchemaNode"

    def describe(self) -> Any:
        return self.schema.raw


TypeConstraint: TypeAlias = Union[Primitive, OneOf, Nested]


@dataclass(frozen=True)
class SchemaNode:
    """One parsed schema node.

    Attributes mirror the draft 03 keywords. ``None`` means the keyword was
    not declared. ``raw`` keeps the original mapping for error reporting.
    """
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)
    type: Optional[TypeConstraint] = None
    disallow: Optional[TypeConstraint] = None
    enum: Optional[Tuple[Any, ...]] = None
    properties: Optional[Mapping[str, "SchemaNode"]] = None
    pattern_properties: Optional[Tuple[Tuple[Pattern, "SchemaNode"], ...]] = None
    additional_properties: Union[bool, "SchemaNode", None] = None
    dependencies: Optional[Mapping[str, Tuple[str, ...]]] = None
    required: bool = False
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    unique_items: bool = False
    items: Optional["SchemaNode"] = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    exclusive_minimum: bool = False
    exclusive_maximum: bool = False
    divisible_by: Optional[float] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[Pattern] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SchemaNode":
        """Parse a raw schema mapping without running the meta-schema check.

        Raises:
            InvalidSchemaError: If a keyword has a shape that cannot be parsed
        """
        if not isinstance(data, Mapping):
            raise InvalidSchemaError([f"schema node must be an object, got {data!r}"])

        properties = None
        if "properties" in data:
            properties = {
                name: cls.from_dict(child)
                for name, child in _expect_mapping(data, "properties").items()
            }

        pattern_properties = None
        if "patternProperties" in data:
            pattern_properties = tuple(
                (_compile(source), cls.from_dict(child))
                for source, child in _expect_mapping(data, "patternProperties").items()
            )

        additional_properties = None
        if "additionalProperties" in data:
            extra = data["additionalProperties"]
            if extra is False:
                additional_properties = False
            elif extra is True:
                additional_properties = cls()
            else:
                additional_properties = cls.from_dict(extra)

        dependencies = None
        if "dependencies" in data:
            dependencies = {
                name: _as_tuple(required_names)
                for name, required_names in _expect_mapping(data, "dependencies").items()
            }

        return cls(
            raw=data,
            type=_parse_type_constraint(data["type"]) if "type" in data else None,
            disallow=_parse_type_constraint(data["disallow"]) if "disallow" in data else None,
            enum=tuple(data["enum"]) if "enum" in data else None,
            properties=properties,
            pattern_properties=pattern_properties,
            additional_properties=additional_properties,
            dependencies=dependencies,
            required=bool(data.get("required", False)),
            min_items=data.get("minItems"),
            max_items=data.get("maxItems"),
            unique_items=bool(data.get("uniqueItems", False)),
            items=cls.from_dict(data["items"]) if "items" in data else None,
            minimum=data.get("minimum"),
            maximum=data.get("maximum"),
            exclusive_minimum=bool(data.get("exclusiveMinimum", False)),
            exclusive_maximum=bool(data.get("exclusiveMaximum", False)),
            divisible_by=data.get("divisibleBy"),
            min_length=data.get("minLength"),
            max_length=data.get("maxLength"),
            pattern=_compile(data["pattern"]) if "pattern" in data else None,
        )


def _expect_mapping(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data[key]
    if not isinstance(value, Mapping):
        raise InvalidSchemaError([f"'{key}' must be an object, got {value!r}"])
    return value


def _as_tuple(value: Any) -> Tuple[Any, ...]:
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return (value,)


def _compile(source: str) -> Pattern:
    try:
        return re.compile(source)
    except (re.error, TypeError) as exc:
        raise InvalidSchemaError([f"invalid regular expression {source!r}: {exc}"]) from exc


def _parse_type_option(option: Any) -> Union[str, SchemaNode]:
    if isinstance(option, str):
        if option.lower() not in KNOWN_TYPE_NAMES:
            logger.debug("Unknown type name %r will never match", option)
        return option.lower()
    return SchemaNode.from_dict(option)


def _parse_type_constraint(value: Any) -> TypeConstraint:
    if isinstance(value, str):
        return Primitive(_parse_type_option(value))
    if isinstance(value, Mapping):
        return Nested(SchemaNode.from_dict(value))
    if isinstance(value, (list, tuple)):
        return OneOf(tuple(_parse_type_option(option) for option in value))
    raise InvalidSchemaError([f"type constraint must be a name, list or schema, got {value!r}"])


def check_schema(schema: Any) -> None:
    """Check a raw schema against META_SCHEMA.

    Raises:
        InvalidSchemaError: With one problem string per meta-schema error
    """
    problems = []
    for error in _META_VALIDATOR.iter_errors(schema):
        location = "/".join(str(part) for part in error.absolute_path) or "<root>"
        problems.append(f"{location}: {error.message}")
    if problems:
        raise InvalidSchemaError(problems)


def parse_schema(schema: Any, check: bool = True) -> SchemaNode:
    """Check (optionally) and parse a raw schema into a SchemaNode tree.

    Args:
        schema: Raw schema mapping
        check: Run the meta-schema check first

    Raises:
        InvalidSchemaError: If the schema is malformed
    """
    if check:
        check_schema(schema)
    node = SchemaNode.from_dict(schema)
    logger.debug("Parsed schema with %d top-level keywords", len(schema))
    return node


def resolve_schema(root: SchemaNode, path: str) -> Optional[SchemaNode]:
    """Find the sub-schema for a dotted path by walking ``properties``.

    Returns None when a segment is not a declared property.

    Examples:
        >>> root = parse_schema({"properties": {"a": {"properties": {"b": {"type": "string"}}}}})
        >>> resolve_schema(root, "a.b").type
        Primitive(name='string')
        >>> resolve_schema(root, "a.missing") is None
        True
    """
    node: Optional[SchemaNode] = root
    for segment in split_path(path):
        if node is None or node.properties is None:
            return None
        node = node.properties.get(segment)
    return node


__all__ = [
    "META_SCHEMA",
    "Primitive",
    "OneOf",
    "Nested",
    "TypeConstraint",
    "SchemaNode",
    "check_schema",
    "parse_schema",
    "resolve_schema",
]
