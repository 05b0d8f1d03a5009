"""Unit tests for schema parsing, the meta-schema check and navigation."""

import pytest
from jsonschema import Draft7Validator

from jschema.errors import InvalidSchemaError
from jschema.paths import extend_path, split_path
from jschema.schema import (
    META_SCHEMA,
    Nested,
    OneOf,
    Primitive,
    SchemaNode,
    check_schema,
    parse_schema,
    resolve_schema,
)


class TestMetaSchema:
    """Test the bundled meta-schema and the schema check."""

    def test_meta_schema_is_valid_draft7(self):
        Draft7Validator.check_schema(META_SCHEMA)

    def test_accepts_full_keyword_set(self):
        check_schema({
            "title": "ignored",
            "type": ["string", {"type": "number"}],
            "disallow": "null",
            "enum": [1, "a"],
            "properties": {"a": {"required": True}},
            "patternProperties": {"^x_": {"type": "string"}},
            "additionalProperties": {"type": "integer"},
            "dependencies": {"a": "b", "c": ["d", "e"]},
            "minItems": 0,
            "maxItems": 3,
            "uniqueItems": True,
            "items": {"type": "string"},
            "minimum": 0,
            "maximum": 10.5,
            "exclusiveMinimum": True,
            "exclusiveMaximum": False,
            "divisibleBy": 0,
            "minLength": 1,
            "maxLength": 5,
            "pattern": "^a",
        })

    def test_rejects_non_object_schema(self):
        with pytest.raises(InvalidSchemaError):
            check_schema(["string"])

    def test_collects_every_problem(self):
        with pytest.raises(InvalidSchemaError) as exc_info:
            check_schema({"required": "yes", "minItems": -1, "type": 5})
        assert len(exc_info.value.problems) == 3

    def test_problem_names_location(self):
        with pytest.raises(InvalidSchemaError) as exc_info:
            check_schema({"properties": {"age": {"minimum": "zero"}}})
        assert exc_info.value.problems[0].startswith("properties/age/minimum:")

    def test_rejects_tuple_items(self):
        with pytest.raises(InvalidSchemaError):
            check_schema({"items": [{"type": "string"}]})


class TestParseSchema:
    """Test normalization of keywords into a SchemaNode."""

    def test_type_name_becomes_primitive(self):
        assert parse_schema({"type": "String"}).type == Primitive("string")

    def test_type_list_becomes_one_of(self):
        node = parse_schema({"type": ["string", {"type": "integer"}]})
        assert isinstance(node.type, OneOf)
        assert node.type.options[0] == "string"
        assert isinstance(node.type.options[1], SchemaNode)

    def test_type_schema_becomes_nested(self):
        node = parse_schema({"type": {"properties": {"a": {"required": True}}}})
        assert isinstance(node.type, Nested)
        assert "a" in node.type.schema.properties

    def test_single_dependency_becomes_tuple(self):
        node = parse_schema({"dependencies": {"a": "b", "c": ["d", "e"]}})
        assert node.dependencies == {"a": ("b",), "c": ("d", "e")}

    def test_patterns_are_compiled(self):
        node = parse_schema({"pattern": "^a+$", "patternProperties": {"x$": {}}})
        assert node.pattern.search("aaa")
        pattern, child = node.pattern_properties[0]
        assert pattern.search("box")
        assert isinstance(child, SchemaNode)

    def test_additional_properties_forms(self):
        assert parse_schema({"additionalProperties": False}).additional_properties is False
        assert isinstance(
            parse_schema({"additionalProperties": True}).additional_properties, SchemaNode
        )
        assert parse_schema({}).additional_properties is None

    def test_describe_returns_raw_forms(self):
        node = parse_schema({"type": ["string", {"minimum": 1}]})
        assert node.type.describe() == ["string", {"minimum": 1}]
        assert parse_schema({"type": {"minimum": 1}}).type.describe() == {"minimum": 1}

    def test_invalid_regex_raises(self):
        with pytest.raises(InvalidSchemaError):
            parse_schema({"pattern": "("})

    def test_unparseable_type_raises_without_check(self):
        with pytest.raises(InvalidSchemaError):
            parse_schema({"type": 5}, check=False)

    def test_parse_does_not_mutate_schema(self):
        raw = {"type": "object", "properties": {"a": {"type": ["string"]}}}
        parse_schema(raw)
        assert raw == {"type": "object", "properties": {"a": {"type": ["string"]}}}


class TestResolveSchema:
    """Test dotted-path navigation through declared properties."""

    def test_empty_path_returns_root(self):
        root = parse_schema({"type": "object"})
        assert resolve_schema(root, "") is root

    def test_nested_path(self):
        root = parse_schema({
            "properties": {"user": {"properties": {"email": {"type": "string"}}}}
        })
        assert resolve_schema(root, "user.email").type == Primitive("string")

    def test_undeclared_segment_returns_none(self):
        root = parse_schema({"properties": {"user": {}}})
        assert resolve_schema(root, "user.email") is None
        assert resolve_schema(root, "other") is None


class TestPaths:
    """Test the dotted path builder."""

    def test_extend_empty_path(self):
        assert extend_path("", "name") == "name"

    def test_extend_nested_path(self):
        assert extend_path("a.b", "c") == "a.b.c"

    def test_integer_segment(self):
        assert extend_path("items", 2) == "items.2"

    def test_separator_is_not_escaped(self):
        assert split_path(extend_path("a", "b.c")) == ["a", "b", "c"]

    def test_split_empty(self):
        assert split_path("") == []
