"""Attribute resolver: joins category definitions with listing values.

The two reads are independent, so they run concurrently and the join only
starts once both have finished. Failed or timed-out reads count as empty
results; nothing is raised to the caller.
"""

import asyncio
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from sqlalchemy.orm import Session

from listing_attributes.errors import MalformedValueError
from listing_attributes.schemas.attribute import (
    AttributeDefinitionResponse,
    AttributeValueEntry,
)
from listing_attributes.schemas.display import ResolvedAttribute
from listing_attributes.services.definition_store import AttributeDefinitionStore
from listing_attributes.services.value_store import AttributeValueStore
from listing_attributes.services.value_types import check_value

logger = logging.getLogger(__name__)

DEFINITIONS_SOURCE = "definitions"
VALUES_SOURCE = "values"


class DefinitionSource(Protocol):
    """Anything that can serve the definitions of a category."""

    async def definitions_for_category(
        self, category_id: str
    ) -> list[AttributeDefinitionResponse]: ...


class ValueSource(Protocol):
    """Anything that can serve the stored values of a listing."""

    async def values_for_listing(
        self, listing_id: str
    ) -> Mapping[str, AttributeValueEntry]: ...


class DegradeMode(str, Enum):
    """What a single failed read does to the resolved result."""

    ATOMIC = "atomic"  # either read failing empties the result
    PARTIAL = "partial"  # fall back to definitions embedded in the values

    @classmethod
    def parse(cls, raw: "str | DegradeMode | None") -> "DegradeMode":
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            logger.warning(f"Unknown degrade mode '{raw}', using 'atomic'")
            return cls.ATOMIC


@dataclass
class ResolveReport:
    """Resolved attributes plus what went wrong while resolving them."""

    attributes: list[ResolvedAttribute] = field(
        default_factory=lambda: list[ResolvedAttribute]()
    )
    failed_sources: list[str] = field(default_factory=lambda: list[str]())
    malformed: list[str] = field(default_factory=lambda: list[str]())


def has_value(value: Any) -> bool:
    """Whether a stored value counts as set.

    Only None and the empty string are unset; 0 and False are real values.
    """
    return value is not None and value != ""


def join_attributes(
    definitions: list[AttributeDefinitionResponse],
    values: Mapping[str, Any],
    malformed: list[str] | None = None,
) -> list[ResolvedAttribute]:
    """Join definitions with values, keeping definition order.

    Definitions without a value are dropped. A value that does not match
    its definition's type drops that row only; its ID is appended to
    ``malformed`` when a list is given.
    """
    resolved = []
    for definition in definitions:
        value = values.get(definition.id)
        if not has_value(value):
            continue
        try:
            check_value(definition, value)
        except MalformedValueError as e:
            logger.warning(f"Dropping malformed attribute value: {e}")
            if malformed is not None:
                malformed.append(definition.id)
            continue
        resolved.append(ResolvedAttribute(definition=definition, value=value, has_value=True))
    return resolved


def embedded_definitions(
    category_id: str, entries: Mapping[str, AttributeValueEntry]
) -> list[AttributeDefinitionResponse]:
    """Rebuild a category's definitions from the ones embedded in values."""
    definitions = [
        entry.attribute
        for entry in entries.values()
        if entry.attribute is not None
        and entry.attribute.category_id == category_id
        and entry.attribute.is_active
    ]
    return sorted(definitions, key=lambda d: d.position)


class AttributeResolver:
    """Resolve the displayable attributes of a listing."""

    def __init__(
        self,
        definition_source: DefinitionSource,
        value_source: ValueSource,
        timeout: float | None = None,
        degrade: "DegradeMode | str" = DegradeMode.ATOMIC,
    ):
        self.definition_source = definition_source
        self.value_source = value_source
        self.timeout = timeout
        self.degrade = DegradeMode.parse(degrade)

    async def _fetch(
        self, source: str, call: Callable[[str], Any], key: str
    ) -> tuple[Any, bool]:
        """Run one read; returns (result, succeeded)."""
        try:
            if self.timeout:
                result = await asyncio.wait_for(call(key), self.timeout)
            else:
                result = await call(key)
        except asyncio.TimeoutError:
            logger.warning(f"Timed out reading attribute {source} for '{key}'")
            return None, False
        except Exception as e:
            logger.error(f"Failed reading attribute {source} for '{key}': {e}", exc_info=e)
            return None, False
        return result, True

    async def resolve_report(self, category_id: str, listing_id: str) -> ResolveReport:
        """Resolve and report failed sources and malformed values."""
        report = ResolveReport()
        if not category_id or not listing_id:
            return report

        (definitions, definitions_ok), (entries, values_ok) = await asyncio.gather(
            self._fetch(
                DEFINITIONS_SOURCE,
                self.definition_source.definitions_for_category,
                category_id,
            ),
            self._fetch(VALUES_SOURCE, self.value_source.values_for_listing, listing_id),
        )

        if not definitions_ok:
            report.failed_sources.append(DEFINITIONS_SOURCE)
        if not values_ok:
            report.failed_sources.append(VALUES_SOURCE)

        if report.failed_sources and self.degrade == DegradeMode.ATOMIC:
            return report

        entries = entries or {}
        if not definitions_ok:
            definitions = embedded_definitions(category_id, entries)

        values = {key: entry.value for key, entry in entries.items()}
        report.attributes = join_attributes(definitions or [], values, report.malformed)
        return report

    async def resolve(self, category_id: str, listing_id: str) -> list[ResolvedAttribute]:
        """Resolve the set attributes of a listing in definition order."""
        report = await self.resolve_report(category_id, listing_id)
        return report.attributes


class DatabaseAttributeSource:
    """Serve both reads from the database, one session per read."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def _read_definitions(self, category_id: str) -> list[AttributeDefinitionResponse]:
        with self.session_factory() as db:
            return AttributeDefinitionStore(db).definitions_for_category(
                category_id, raise_errors=True
            )

    def _read_values(self, listing_id: str) -> dict[str, AttributeValueEntry]:
        with self.session_factory() as db:
            return AttributeValueStore(db).entries_for_listing(listing_id, raise_errors=True)

    async def definitions_for_category(
        self, category_id: str
    ) -> list[AttributeDefinitionResponse]:
        return await asyncio.to_thread(self._read_definitions, category_id)

    async def values_for_listing(self, listing_id: str) -> dict[str, AttributeValueEntry]:
        return await asyncio.to_thread(self._read_values, listing_id)
