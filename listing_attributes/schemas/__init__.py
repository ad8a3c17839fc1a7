"""Pydantic schemas for request/response validation."""

from listing_attributes.schemas.category import CategoryCreate, CategoryResponse
from listing_attributes.schemas.attribute import (
    AttributeType,
    AttributeDefinitionCreate,
    AttributeDefinitionUpdate,
    AttributeDefinitionResponse,
    AttributeValueEntry,
    SaveValuesRequest,
    SaveValuesResponse,
)
from listing_attributes.schemas.display import (
    ResolvedAttribute,
    DisplayStyle,
    DisplayValue,
    LayoutVariant,
    AttributePanel,
)

__all__ = [
    "CategoryCreate",
    "CategoryResponse",
    "AttributeType",
    "AttributeDefinitionCreate",
    "AttributeDefinitionUpdate",
    "AttributeDefinitionResponse",
    "AttributeValueEntry",
    "SaveValuesRequest",
    "SaveValuesResponse",
    "ResolvedAttribute",
    "DisplayStyle",
    "DisplayValue",
    "LayoutVariant",
    "AttributePanel",
]
