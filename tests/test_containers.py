"""Tests for mapping lookup, numeric key coercion and sequence indexing."""

from collections import OrderedDict
from decimal import Decimal

import pytest
from builders import attribute, lenient_context, strict_context

from attribute_resolver import AttributeNotFoundError, UnsupportedKeyCoercionError
from attribute_resolver.resolution.coercion import as_index, coerce_numeric_key


class TestMappingLookup:
    def test_string_key(self) -> None:
        expr = attribute("data", "title")
        assert expr.evaluate(lenient_context(data={"title": "Intro"})) == "Intro"

    def test_missing_key_is_none_even_in_strict_mode(self) -> None:
        """Mappings always resolve; a missing entry is None, not an error."""
        expr = attribute("data", "absent")
        assert expr.evaluate(strict_context(data={"title": "Intro"})) is None

    def test_empty_mapping_returns_none_for_any_key(self) -> None:
        # no key sampling happens, so no coercion error either
        assert attribute("data", 1).evaluate(strict_context(data={})) is None

    def test_mapping_entry_shadows_methods(self) -> None:
        expr = attribute("data", "keys")
        assert expr.evaluate(lenient_context(data={"keys": "entry"})) == "entry"


class TestNumericKeyCoercion:
    def test_float_literal_finds_int_key(self) -> None:
        expr = attribute("data", 2.0)
        assert expr.evaluate(lenient_context(data={1: "one", 2: "two"})) == "two"

    def test_int_literal_finds_float_key(self) -> None:
        expr = attribute("data", 1)
        assert expr.evaluate(lenient_context(data={1.0: "one"})) == "one"

    def test_coerced_key_takes_sampled_shape(self) -> None:
        key = coerce_numeric_key(2.9, int)
        assert key == 2
        assert type(key) is int
        assert type(coerce_numeric_key(3, float)) is float

    def test_key_shape_sampled_from_first_entry(self) -> None:
        data = OrderedDict([(1, "int-one"), (2.5, "float")])
        assert attribute("data", 1.7).evaluate(lenient_context(data=data)) == "int-one"

    @pytest.mark.parametrize(
        ("data", "key_shape"),
        [
            ({"1": "string key"}, "str"),
            ({Decimal(1): "decimal key"}, "decimal.Decimal"),
            ({(1,): "tuple key"}, "tuple"),
        ],
    )
    def test_unsupported_key_shape(self, data: dict, key_shape: str) -> None:
        expr = attribute("data", 1, line_number=4)
        with pytest.raises(UnsupportedKeyCoercionError) as exc_info:
            expr.evaluate(lenient_context(data=data))
        error = exc_info.value
        assert error.key_shape == key_shape
        assert error.filename == "test.html"
        assert error.line_number == 4
        assert "not supported for key" in str(error)

    @pytest.mark.parametrize(
        ("number", "cause"),
        [(float("inf"), OverflowError), (float("-inf"), OverflowError), (float("nan"), ValueError)],
    )
    def test_non_finite_key_against_int_keys(self, number: float, cause: type) -> None:
        expr = attribute("data", number, line_number=6)
        with pytest.raises(UnsupportedKeyCoercionError) as exc_info:
            expr.evaluate(lenient_context(data={1: "a"}))
        error = exc_info.value
        assert isinstance(error.__cause__, cause)
        assert error.key_shape == "int"
        assert error.line_number == 6
        assert "cannot be converted to int" in str(error)

    def test_non_finite_key_against_float_keys_is_a_miss(self) -> None:
        expr = attribute("data", float("inf"))
        assert expr.evaluate(lenient_context(data={1.0: "a"})) is None

    def test_bool_key_is_not_numeric(self) -> None:
        expr = attribute("data", True)
        assert expr.evaluate(lenient_context(data={"x": 1, True: "yes"})) == "yes"


class TestSequenceIndexing:
    @pytest.mark.parametrize("items", [["a", "b", "c"], ("a", "b", "c")])
    def test_last_element(self, items: list | tuple) -> None:
        expr = attribute("items", str(len(items) - 1))
        assert expr.evaluate(strict_context(items=items)) == "c"

    @pytest.mark.parametrize("items", [["a", "b", "c"], ("a", "b", "c")])
    @pytest.mark.parametrize("index", [3, -1])
    def test_out_of_bounds_lenient_returns_none(self, items: list | tuple, index: int) -> None:
        expr = attribute("items", index)
        assert expr.evaluate(lenient_context(items=items)) is None

    @pytest.mark.parametrize("items", [["a", "b", "c"], ("a", "b", "c")])
    @pytest.mark.parametrize("index", [3, -1])
    def test_out_of_bounds_strict_raises(self, items: list | tuple, index: int) -> None:
        expr = attribute("items", index, line_number=8)
        with pytest.raises(AttributeNotFoundError) as exc_info:
            expr.evaluate(strict_context(items=items))
        error = exc_info.value
        assert error.attribute_name == str(index)
        assert error.line_number == 8
        assert "Index out of bounds" in str(error)

    def test_integer_literal_index(self) -> None:
        assert attribute("items", 0).evaluate(lenient_context(items=[10, 20])) == 10

    def test_non_integer_name_falls_through_to_members(self) -> None:
        expr = attribute("items", "copy")
        items = [1, 2]
        assert expr.evaluate(lenient_context(items=items)) == [1, 2]

    @pytest.mark.parametrize("name", ["1.0", " 1", "1_0", "first"])
    def test_unparsable_index_is_not_an_error(self, name: str) -> None:
        expr = attribute("items", name)
        assert expr.evaluate(lenient_context(items=[1, 2])) is None

    def test_strings_are_not_indexed(self) -> None:
        assert attribute("text", 0).evaluate(lenient_context(text="abc")) is None


class TestAsIndex:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("0", 0),
            ("42", 42),
            ("-1", -1),
            ("+3", 3),
            ("007", 7),
            ("1.0", None),
            ("", None),
            (" 1", None),
            ("1_000", None),
            ("٣", None),
            ("None", None),
        ],
    )
    def test_parsing(self, text: str, expected: int | None) -> None:
        assert as_index(text) == expected
