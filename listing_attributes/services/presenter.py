"""Attribute presenter: formats resolved attributes for display."""

from typing import Any

from listing_attributes.schemas.attribute import AttributeDefinitionResponse, AttributeType
from listing_attributes.schemas.display import (
    AttributeNote,
    AttributePanel,
    AttributeRow,
    DisplayStyle,
    DisplayValue,
    LayoutVariant,
    ResolvedAttribute,
)
from listing_attributes.services.value_types import is_number

PLACEHOLDER = "—"
YES_LABEL = "Yes"
NO_LABEL = "No"
DEFAULT_TITLE = "Specifications"

TYPE_ICONS = {
    AttributeType.STRING: "📝",
    AttributeType.NUMBER: "🔢",
    AttributeType.BOOLEAN: "☑️",
    AttributeType.SELECT: "📋",
}


def icon_for(attr_type: AttributeType) -> str:
    """Get the display icon of an attribute type."""
    return TYPE_ICONS.get(attr_type, TYPE_ICONS[AttributeType.STRING])


def format_value(definition: AttributeDefinitionResponse, value: Any) -> DisplayValue:
    """Format one value according to its definition's type.

    Unset values format to a placeholder even though the resolver never
    passes them, since this function can be called directly.
    """
    if value is None or value == "":
        return DisplayValue(text=PLACEHOLDER, style=DisplayStyle.PLACEHOLDER)

    if definition.type == AttributeType.BOOLEAN:
        if value:
            return DisplayValue(text=YES_LABEL, style=DisplayStyle.POSITIVE)
        return DisplayValue(text=NO_LABEL, style=DisplayStyle.NEGATIVE)

    if definition.type == AttributeType.NUMBER:
        if is_number(value):
            return DisplayValue(text=f"{value:,}")
        return DisplayValue(text=str(value))

    if definition.type == AttributeType.SELECT:
        return DisplayValue(text=str(value), style=DisplayStyle.CHOICE)

    return DisplayValue(text=str(value))


class AttributePresenter:
    """Arrange formatted attributes under a layout variant.

    The variant only changes the arrangement; ``rows`` always holds every
    resolved attribute in resolver order.
    """

    def __init__(self, title: str = DEFAULT_TITLE):
        self.title = title

    def build_rows(self, resolved: list[ResolvedAttribute]) -> list[AttributeRow]:
        """Format each resolved attribute."""
        return [
            AttributeRow(
                id=item.definition.id,
                name=item.definition.name,
                type=item.definition.type,
                icon=icon_for(item.definition.type),
                value=item.value,
                display=format_value(item.definition, item.value),
                description=item.definition.description,
            )
            for item in resolved
        ]

    def present(
        self,
        resolved: list[ResolvedAttribute],
        variant: "LayoutVariant | str | None" = None,
    ) -> AttributePanel:
        """Build the display panel for a resolved attribute sequence."""
        if not isinstance(variant, LayoutVariant):
            variant = LayoutVariant.parse(variant)

        rows = self.build_rows(resolved)
        panel = AttributePanel(variant=variant, title=self.title, rows=rows)

        if variant == LayoutVariant.COMPACT:
            panel.badges = [f"{row.icon} {row.name}: {row.display.text}" for row in rows]
        elif variant == LayoutVariant.TABLE:
            panel.table = [[row.name, row.display.text] for row in rows]
        else:
            panel.notes = [
                AttributeNote(name=row.name, description=row.description)
                for row in rows
                if row.description
            ]

        return panel
