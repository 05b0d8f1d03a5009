"""Unit tests for structural equality and uniqueness."""

from decimal import Decimal

from jschema.equality import all_unique, canonicalize, structurally_equal


class TestStructuralEquality:
    """Test order-independent comparison of values."""

    def test_object_key_order_is_ignored(self):
        assert structurally_equal({"a": 1, "b": 2}, {"b": 2, "a": 1})

    def test_nested_object_key_order_is_ignored(self):
        left = {"outer": {"x": [1, {"p": 1, "q": 2}], "y": None}}
        right = {"outer": {"y": None, "x": [1, {"q": 2, "p": 1}]}}
        assert structurally_equal(left, right)

    def test_array_order_matters(self):
        assert not structurally_equal([1, 2], [2, 1])

    def test_bool_and_number_differ(self):
        assert not structurally_equal(True, 1)
        assert not structurally_equal(False, 0)

    def test_integral_float_equals_int(self):
        assert structurally_equal(1, 1.0)

    def test_string_and_number_differ(self):
        assert not structurally_equal("1", 1)

    def test_tuple_and_list_are_both_arrays(self):
        assert structurally_equal((1, 2), [1, 2])

    def test_blobs_compare_by_content(self):
        assert structurally_equal(b"abc", bytearray(b"abc"))

    def test_canonical_form_is_hashable(self):
        hash(canonicalize({"a": [1, {"b": b"x"}]}))


class TestAllUnique:
    """Test duplicate detection in sequences."""

    def test_unique_scalars(self):
        assert all_unique([1, 2, "1", True])

    def test_duplicate_scalars(self):
        assert not all_unique([1, 2, 1])

    def test_duplicate_objects_with_different_key_order(self):
        assert not all_unique([{"a": 1, "b": 2}, {"b": 2, "a": 1}])

    def test_arrays_with_different_order_are_unique(self):
        assert all_unique([[1, 2], [2, 1]])

    def test_empty_sequence(self):
        assert all_unique([])

    def test_non_string_keys(self):
        assert not all_unique([{1: "a", "b": 2}, {"b": 2, 1: "a"}])


class TestDecimalEquality:
    """Decimals compare as numbers."""

    def test_decimal_equals_float(self):
        assert structurally_equal(Decimal("1.5"), 1.5)
        assert structurally_equal(Decimal("2"), 2)

    def test_decimal_is_not_a_string(self):
        assert not structurally_equal(Decimal("1.5"), "1.5")
