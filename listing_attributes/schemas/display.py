"""Pydantic schemas for resolved and presented attributes."""

from enum import Enum
from typing import Any

from pydantic import BaseModel

from listing_attributes.schemas.attribute import AttributeDefinitionResponse, AttributeType


class ResolvedAttribute(BaseModel):
    """Read-time join of a definition with its listing value."""

    definition: AttributeDefinitionResponse
    value: Any = None
    has_value: bool = False


class DisplayStyle(str, Enum):
    """Semantic style hint attached to a formatted value."""

    PLAIN = "plain"
    POSITIVE = "positive"
    NEGATIVE = "negative"
    CHOICE = "choice"
    PLACEHOLDER = "placeholder"


class DisplayValue(BaseModel):
    """Formatted value ready for display."""

    text: str
    style: DisplayStyle = DisplayStyle.PLAIN


class LayoutVariant(str, Enum):
    """How a panel of attributes is arranged."""

    DEFAULT = "default"
    COMPACT = "compact"
    TABLE = "table"

    @classmethod
    def parse(cls, raw: str | None) -> "LayoutVariant":
        """Map a caller-supplied name to a variant, falling back to default."""
        if raw:
            try:
                return cls(raw.strip().lower())
            except ValueError:
                pass
        return cls.DEFAULT


class AttributeRow(BaseModel):
    """One formatted attribute in resolver order."""

    id: str
    name: str
    type: AttributeType
    icon: str
    value: Any
    display: DisplayValue
    description: str | None = None


class AttributeNote(BaseModel):
    """Description shown under the default layout."""

    name: str
    description: str


class AttributePanel(BaseModel):
    """Formatted attributes arranged for one layout variant."""

    variant: LayoutVariant
    title: str
    rows: list[AttributeRow]
    badges: list[str] | None = None  # compact
    table: list[list[str]] | None = None  # table
    notes: list[AttributeNote] | None = None  # default

    @property
    def is_empty(self) -> bool:
        return not self.rows
