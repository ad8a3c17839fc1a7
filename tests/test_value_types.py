# tests/test_value_types.py

"""Tests for attribute value type checks and write-time conversion."""

import pytest

from listing_attributes.errors import MalformedValueError
from listing_attributes.schemas.attribute import AttributeDefinitionResponse, AttributeType
from listing_attributes.services.value_types import check_value, coerce_value


def _definition(attr_type: AttributeType, options: list[str] | None = None):
    return AttributeDefinitionResponse(
        id="a1", category_id="c1", name="Attr", type=attr_type, options=options
    )


class TestCheckValue:
    @pytest.mark.parametrize(
        "attr_type, value",
        [
            (AttributeType.STRING, "blue"),
            (AttributeType.NUMBER, 0),
            (AttributeType.NUMBER, 12.5),
            (AttributeType.BOOLEAN, False),
            (AttributeType.BOOLEAN, True),
        ],
    )
    def test_matching_values_pass(self, attr_type, value):
        assert check_value(_definition(attr_type), value) == value

    @pytest.mark.parametrize(
        "attr_type, value",
        [
            (AttributeType.STRING, 3),
            (AttributeType.NUMBER, "12"),
            (AttributeType.NUMBER, True),
            (AttributeType.BOOLEAN, "true"),
            (AttributeType.BOOLEAN, 1),
        ],
    )
    def test_mismatched_values_raise(self, attr_type, value):
        with pytest.raises(MalformedValueError) as exc:
            check_value(_definition(attr_type), value)
        assert exc.value.attribute_id == "a1"

    def test_select_requires_known_option(self):
        definition = _definition(AttributeType.SELECT, ["new", "used"])
        assert check_value(definition, "used") == "used"
        with pytest.raises(MalformedValueError):
            check_value(definition, "broken")


class TestCoerceValue:
    def test_number_from_string(self):
        definition = _definition(AttributeType.NUMBER)
        assert coerce_value(definition, "120000") == 120000
        assert coerce_value(definition, " 2.5 ") == 2.5
        assert coerce_value(definition, 0) == 0

    def test_integral_float_becomes_int(self):
        value = coerce_value(_definition(AttributeType.NUMBER), "42.0")
        assert value == 42
        assert isinstance(value, int)

    @pytest.mark.parametrize("raw", ["abc", True, "nan", "inf", [1]])
    def test_invalid_number_raises(self, raw):
        with pytest.raises(MalformedValueError):
            coerce_value(_definition(AttributeType.NUMBER), raw)

    @pytest.mark.parametrize(
        "raw, expected",
        [(True, True), ("true", True), ("1", True), (1, True), (False, False), ("no", False), (0, False)],
    )
    def test_boolean(self, raw, expected):
        assert coerce_value(_definition(AttributeType.BOOLEAN), raw) is expected

    def test_select_rejects_unknown_option(self):
        definition = _definition(AttributeType.SELECT, ["new", "used"])
        assert coerce_value(definition, "new") == "new"
        with pytest.raises(MalformedValueError, match="available options"):
            coerce_value(definition, "mint")

    def test_string_is_stringified(self):
        assert coerce_value(_definition(AttributeType.STRING), 7) == "7"
        assert coerce_value(_definition(AttributeType.STRING), "red") == "red"

    @pytest.mark.parametrize("raw", [{"a": 1}, ["red", "blue"]])
    def test_string_rejects_structured_input(self, raw):
        with pytest.raises(MalformedValueError, match="single value"):
            coerce_value(_definition(AttributeType.STRING), raw)
