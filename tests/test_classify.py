"""Unit tests for value classification."""

import datetime
from decimal import Decimal

import pytest

from jschema.classify import classify, is_integer, kind_of, matches_type_name


class TestClassify:
    """Test the set of type names assigned to values."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("text", {"string"}),
            (1.5, {"number"}),
            (3, {"number", "integer"}),
            (2.0, {"number", "integer"}),
            (False, {"boolean"}),
            (None, {"null"}),
            ([1, 2], {"array"}),
            ((1, 2), {"array"}),
            ({"one": "item"}, {"object"}),
            (b"buffer", {"buffer"}),
            (bytearray(b"buffer"), {"buffer"}),
            (datetime.date(2024, 1, 1), {"date"}),
            (datetime.datetime(2024, 1, 1, 12, 0), {"date"}),
        ],
    )
    def test_classification(self, value, expected):
        assert classify(value) == frozenset(expected | {"any"})

    def test_bool_is_not_a_number(self):
        assert not matches_type_name("number", True)
        assert not matches_type_name("integer", False)

    def test_non_finite_floats_are_not_integers(self):
        assert not is_integer(float("inf"))
        assert not is_integer(float("nan"))
        assert matches_type_name("number", float("inf"))


class TestMatchesTypeName:
    """Test single type-name matching."""

    def test_case_insensitive(self):
        assert matches_type_name("String", "x")
        assert matches_type_name("OBJECT", {})

    def test_any_matches_everything(self):
        for value in ("x", 1, None, [], {}, b"", datetime.date.today()):
            assert matches_type_name("any", value)

    def test_unknown_name_never_matches(self):
        assert not matches_type_name("uuid", "x")
        assert not matches_type_name("", None)

    def test_object_excludes_other_composites(self):
        assert not matches_type_name("object", [])
        assert not matches_type_name("object", b"")
        assert not matches_type_name("object", datetime.date.today())
        assert not matches_type_name("object", None)


class TestKindOf:
    """Test the received-kind label used in error messages."""

    def test_most_specific_kind(self):
        assert kind_of(1) == "integer"
        assert kind_of(1.5) == "number"
        assert kind_of(True) == "boolean"
        assert kind_of(None) == "null"
        assert kind_of([]) == "array"
        assert kind_of({}) == "object"
        assert kind_of(b"") == "buffer"

    def test_unclassified_value_uses_python_type(self):
        assert kind_of({1, 2}) == "set"


class TestDecimalValues:
    """Decimals, as produced by json.loads(..., parse_float=Decimal)."""

    def test_decimal_is_a_number(self):
        assert classify(Decimal("1.5")) == frozenset({"any", "number"})
        assert kind_of(Decimal("1.5")) == "number"

    def test_integral_decimal_is_an_integer(self):
        assert is_integer(Decimal("2.00"))
        assert kind_of(Decimal("3")) == "integer"

    def test_non_finite_decimal_is_not_an_integer(self):
        assert not is_integer(Decimal("Infinity"))
        assert not is_integer(Decimal("NaN"))
