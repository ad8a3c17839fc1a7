"""Remote attribute source backed by the attribute service HTTP endpoints."""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from listing_attributes.config import settings
from listing_attributes.errors import TransportFailure
from listing_attributes.schemas.attribute import (
    AttributeDefinitionResponse,
    AttributeValueEntry,
)

logger = logging.getLogger(__name__)


class HttpAttributeSource:
    """Read definitions and values from a running attribute service.

    Serves as both the definition source and the value source of an
    ``AttributeResolver``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.attribute_service_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.store_timeout_seconds
        self._transport = transport

    async def _get_json(self, source: str, path: str) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(path)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as e:
            logger.warning(f"Attribute service request {path} failed: {e}")
            raise TransportFailure(source, str(e))
        except ValueError as e:
            logger.warning(f"Attribute service returned invalid JSON for {path}: {e}")
            raise TransportFailure(source, "invalid JSON response")

    async def definitions_for_category(
        self, category_id: str
    ) -> list[AttributeDefinitionResponse]:
        """Fetch the ordered definitions of a category."""
        data = await self._get_json(
            "definitions", f"/attributes/by-category/{quote(category_id, safe='')}"
        )
        if not isinstance(data, list):
            raise TransportFailure("definitions", "expected a JSON array")
        try:
            return [AttributeDefinitionResponse.model_validate(item) for item in data]
        except ValidationError as e:
            raise TransportFailure("definitions", f"invalid definition payload: {e}")

    async def values_for_listing(self, listing_id: str) -> dict[str, AttributeValueEntry]:
        """Fetch the stored values of a listing keyed by attribute ID."""
        data = await self._get_json(
            "values", f"/attributes/values/{quote(listing_id, safe='')}"
        )
        if not isinstance(data, dict):
            raise TransportFailure("values", "expected a JSON object")
        try:
            return {
                str(key): AttributeValueEntry.model_validate(item)
                for key, item in data.items()
            }
        except ValidationError as e:
            raise TransportFailure("values", f"invalid value payload: {e}")
