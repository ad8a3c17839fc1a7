"""Database models."""

from listing_attributes.models.database import Base, engine, get_db
from listing_attributes.models.category import Category
from listing_attributes.models.attribute import AttributeDefinition
from listing_attributes.models.attribute_value import AttributeValue

__all__ = ["Base", "engine", "get_db", "Category", "AttributeDefinition", "AttributeValue"]
