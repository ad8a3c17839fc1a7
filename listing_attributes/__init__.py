"""Listing attributes service: category-scoped typed attributes for listings."""

__version__ = "1.0.0"
