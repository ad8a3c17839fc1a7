"""Clients for remote attribute sources."""

from listing_attributes.clients.http_source import HttpAttributeSource

__all__ = ["HttpAttributeSource"]
