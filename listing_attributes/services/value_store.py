"""Attribute value store: listing-scoped sparse attribute values."""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from listing_attributes.errors import MissingRequiredValueError
from listing_attributes.models.attribute import AttributeDefinition
from listing_attributes.models.attribute_value import AttributeValue
from listing_attributes.schemas.attribute import (
    AttributeDefinitionResponse,
    AttributeValueEntry,
)
from listing_attributes.services.definition_store import AttributeDefinitionStore
from listing_attributes.services.value_types import coerce_value

logger = logging.getLogger(__name__)


def is_blank(value: Any) -> bool:
    """A submitted value that means "leave unset"."""
    return value is None or value == ""


class AttributeValueStore:
    """Service for reading and writing listing attribute values."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def _rows_for_listing(self, listing_id: str, raise_errors: bool) -> list[AttributeValue]:
        try:
            return (
                self.db.query(AttributeValue)
                .options(joinedload(AttributeValue.attribute))
                .filter(AttributeValue.listing_id == listing_id)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to load attribute values for listing '{listing_id}': {e}")
            if raise_errors:
                raise
            return []

    def _decoded(self, rows: list[AttributeValue]) -> list[tuple[AttributeValue, Any]]:
        """Pair rows with their decoded values, skipping undecodable rows."""
        decoded = []
        for row in rows:
            try:
                value = row.value
            except ValueError as e:
                logger.warning(
                    f"Skipping undecodable value of attribute '{row.attribute_id}' "
                    f"on listing '{row.listing_id}': {e}"
                )
                continue
            decoded.append((row, value))
        return decoded

    def values_for_listing(self, listing_id: str) -> dict[str, Any]:
        """Get the stored values of a listing keyed by attribute ID.

        Only attributes that are set appear. Unknown listings and database
        errors yield an empty mapping; a row that cannot be decoded is left out.
        """
        rows = self._rows_for_listing(listing_id, raise_errors=False)
        return {row.attribute_id: value for row, value in self._decoded(rows)}

    def entries_for_listing(
        self, listing_id: str, raise_errors: bool = False
    ) -> dict[str, AttributeValueEntry]:
        """Get the stored values of a listing with their definitions embedded."""
        rows = self._rows_for_listing(listing_id, raise_errors)

        entries = {}
        for row, value in self._decoded(rows):
            attribute = None
            if row.attribute is not None:
                attribute = AttributeDefinitionResponse.model_validate(row.attribute)
            entries[row.attribute_id] = AttributeValueEntry(value=value, attribute=attribute)
        return entries

    def save_values(
        self,
        listing_id: str,
        raw_values: dict[str, Any],
        category_id: str | None = None,
    ) -> dict[str, Any]:
        """Replace all attribute values of a listing.

        Blank values are skipped. Unknown or retired attributes are ignored,
        as are attributes of another category when ``category_id`` is given.
        Nothing is written if any value fails conversion.

        Args:
            listing_id: Listing owning the values
            raw_values: Attribute ID -> submitted value
            category_id: When given, required attributes of this category
                must be present

        Returns:
            The stored mapping of attribute ID to value

        Raises:
            MalformedValueError: If a value does not fit its attribute type
            MissingRequiredValueError: If a required attribute is unset
        """
        definitions = AttributeDefinitionStore(self.db).get_many(list(raw_values.keys()))

        processed: dict[str, Any] = {}
        for attribute_id, raw in raw_values.items():
            if is_blank(raw):
                continue
            definition = definitions.get(attribute_id)
            if definition is None:
                logger.warning(
                    f"Ignoring value for unknown attribute '{attribute_id}' "
                    f"on listing '{listing_id}'"
                )
                continue
            if not definition.is_active:
                logger.warning(
                    f"Ignoring value for retired attribute '{definition.name}' "
                    f"on listing '{listing_id}'"
                )
                continue
            if category_id is not None and definition.category_id != category_id:
                logger.warning(
                    f"Ignoring value for attribute '{definition.name}' of category "
                    f"'{definition.category_id}' on listing '{listing_id}' in '{category_id}'"
                )
                continue
            schema = AttributeDefinitionResponse.model_validate(definition)
            processed[attribute_id] = coerce_value(schema, raw)

        if category_id is not None:
            self._check_required(category_id, processed)

        try:
            self.db.query(AttributeValue).filter(
                AttributeValue.listing_id == listing_id
            ).delete(synchronize_session=False)
            for attribute_id, value in processed.items():
                row = AttributeValue(listing_id=listing_id, attribute_id=attribute_id)
                row.value = value
                self.db.add(row)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.info(f"Saved {len(processed)} attribute values for listing '{listing_id}'")
        return processed

    def clear_value(self, listing_id: str, attribute_id: str) -> bool:
        """Remove one value of a listing. Returns whether a value existed."""
        deleted = (
            self.db.query(AttributeValue)
            .filter(
                AttributeValue.listing_id == listing_id,
                AttributeValue.attribute_id == attribute_id,
            )
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted > 0

    def delete_for_listing(self, listing_id: str) -> int:
        """Remove every value of a listing, e.g. when the listing is deleted."""
        deleted = (
            self.db.query(AttributeValue)
            .filter(AttributeValue.listing_id == listing_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if deleted:
            logger.info(f"Deleted {deleted} attribute values for listing '{listing_id}'")
        return deleted

    def _check_required(self, category_id: str, processed: dict[str, Any]) -> None:
        required = (
            self.db.query(AttributeDefinition)
            .filter(
                AttributeDefinition.category_id == category_id,
                AttributeDefinition.is_active.is_(True),
                AttributeDefinition.required.is_(True),
            )
            .order_by(AttributeDefinition.position.asc())
            .all()
        )
        missing = [d.name for d in required if d.id not in processed]
        if missing:
            raise MissingRequiredValueError(missing)
