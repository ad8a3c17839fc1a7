"""API routers."""

from listing_attributes.api import attributes, categories

__all__ = ["attributes", "categories"]
