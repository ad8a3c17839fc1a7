"""Seed data for categories and attributes."""

from listing_attributes.data.default_schema import DEFAULT_CATEGORIES, ensure_default_categories

__all__ = ["DEFAULT_CATEGORIES", "ensure_default_categories"]
