"""Business logic services."""

from listing_attributes.services.definition_store import AttributeDefinitionStore
from listing_attributes.services.value_store import AttributeValueStore
from listing_attributes.services.resolver import AttributeResolver, DatabaseAttributeSource
from listing_attributes.services.presenter import AttributePresenter
from listing_attributes.services.attribute_service import AttributeService

__all__ = [
    "AttributeDefinitionStore",
    "AttributeValueStore",
    "AttributeResolver",
    "DatabaseAttributeSource",
    "AttributePresenter",
    "AttributeService",
]
