"""Type checks and write-time conversion for attribute values."""

import math
from typing import Any

from listing_attributes.errors import MalformedValueError
from listing_attributes.schemas.attribute import AttributeDefinitionResponse, AttributeType

TRUTHY_STRINGS = ("true", "1")


def is_number(value: Any) -> bool:
    """Check for a real number; bool is excluded even though it subclasses int."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def check_value(definition: AttributeDefinitionResponse, value: Any) -> Any:
    """Verify a stored value against its definition's declared type.

    Returns the value unchanged.

    Raises:
        MalformedValueError: If the value's runtime type disagrees with the
            definition, or a select value is not one of its options.
    """
    attr_type = definition.type

    if attr_type == AttributeType.BOOLEAN:
        ok = isinstance(value, bool)
    elif attr_type == AttributeType.NUMBER:
        ok = is_number(value)
    elif attr_type == AttributeType.SELECT:
        ok = isinstance(value, str) and value in (definition.options or [])
    else:
        ok = isinstance(value, str)

    if not ok:
        raise MalformedValueError(
            definition.id,
            f"expected {attr_type.value}, got {value!r}",
            attribute_name=definition.name,
        )
    return value


def coerce_value(definition: AttributeDefinitionResponse, raw: Any) -> Any:
    """Convert a submitted value to the definition's type before storing.

    Raises:
        MalformedValueError: If the value cannot be converted.
    """
    attr_type = definition.type

    if attr_type == AttributeType.NUMBER:
        if isinstance(raw, bool):
            raise MalformedValueError(definition.id, "must be a number", definition.name)
        try:
            number = float(raw.strip() if isinstance(raw, str) else raw)
        except (TypeError, ValueError):
            raise MalformedValueError(definition.id, "must be a number", definition.name)
        if not math.isfinite(number):
            raise MalformedValueError(definition.id, "must be a finite number", definition.name)
        return int(number) if number.is_integer() else number

    if attr_type == AttributeType.BOOLEAN:
        if isinstance(raw, bool):
            return raw
        if is_number(raw):
            return raw == 1
        if isinstance(raw, str):
            return raw.strip().lower() in TRUTHY_STRINGS
        return False

    if attr_type == AttributeType.SELECT:
        if not isinstance(raw, str) or raw not in (definition.options or []):
            raise MalformedValueError(
                definition.id,
                "must be one of the available options",
                definition.name,
            )
        return raw

    if isinstance(raw, (dict, list)):
        raise MalformedValueError(definition.id, "must be a single value", definition.name)
    return raw if isinstance(raw, str) else str(raw)
