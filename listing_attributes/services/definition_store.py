"""Attribute definition store: category-scoped attribute schemas."""

import logging

from pydantic import ValidationError
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from listing_attributes.errors import (
    CategoryNotFoundError,
    DefinitionInUseError,
    InvalidDefinitionError,
)
from listing_attributes.models.attribute import AttributeDefinition
from listing_attributes.models.attribute_value import AttributeValue
from listing_attributes.models.category import Category
from listing_attributes.schemas.attribute import (
    AttributeDefinitionBase,
    AttributeDefinitionCreate,
    AttributeDefinitionResponse,
    AttributeDefinitionUpdate,
)

logger = logging.getLogger(__name__)


class AttributeDefinitionStore:
    """Service for reading and authoring attribute definitions."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def definitions_for_category(
        self, category_id: str, raise_errors: bool = False
    ) -> list[AttributeDefinitionResponse]:
        """Get the active definitions of a category in authored order.

        Unknown categories yield an empty list. Database errors are logged
        and also yield an empty list, unless ``raise_errors`` is set.
        """
        try:
            rows = (
                self.db.query(AttributeDefinition)
                .filter(
                    AttributeDefinition.category_id == category_id,
                    AttributeDefinition.is_active.is_(True),
                )
                .order_by(
                    AttributeDefinition.position.asc(),
                    AttributeDefinition.created_at.asc(),
                    AttributeDefinition.id.asc(),
                )
                .all()
            )
        except SQLAlchemyError as e:
            logger.error(f"Failed to load attributes for category '{category_id}': {e}")
            if raise_errors:
                raise
            return []

        return [AttributeDefinitionResponse.model_validate(row) for row in rows]

    def get(self, attribute_id: str) -> AttributeDefinition | None:
        """Get a definition by ID."""
        return (
            self.db.query(AttributeDefinition)
            .filter(AttributeDefinition.id == attribute_id)
            .first()
        )

    def get_many(self, attribute_ids: list[str]) -> dict[str, AttributeDefinition]:
        """Get definitions by ID, keyed by ID."""
        if not attribute_ids:
            return {}
        rows = (
            self.db.query(AttributeDefinition)
            .filter(AttributeDefinition.id.in_(attribute_ids))
            .all()
        )
        return {row.id: row for row in rows}

    def list_all(self) -> list[AttributeDefinition]:
        """List every definition, grouped by category in authored order."""
        return (
            self.db.query(AttributeDefinition)
            .order_by(
                AttributeDefinition.category_id.asc(),
                AttributeDefinition.position.asc(),
                AttributeDefinition.created_at.asc(),
            )
            .all()
        )

    def create(self, attribute_in: AttributeDefinitionCreate) -> AttributeDefinition:
        """Create a new definition at the end of its category's order.

        Raises:
            CategoryNotFoundError: If the category does not exist
            InvalidDefinitionError: If the name is already used in the category
        """
        category = (
            self.db.query(Category).filter(Category.id == attribute_in.category_id).first()
        )
        if category is None:
            raise CategoryNotFoundError(attribute_in.category_id)

        self._ensure_unique_name(attribute_in.category_id, attribute_in.name)

        position = attribute_in.position
        if position is None:
            position = self._next_position(attribute_in.category_id)

        attribute = AttributeDefinition(
            category_id=attribute_in.category_id,
            name=attribute_in.name,
            type=attribute_in.type.value,
            required=attribute_in.required,
            position=position,
            placeholder=attribute_in.placeholder,
            description=attribute_in.description,
        )
        attribute.options = attribute_in.options

        self.db.add(attribute)
        self.db.commit()
        self.db.refresh(attribute)

        logger.info(
            f"Created attribute '{attribute.name}' ({attribute.type}) "
            f"for category '{attribute.category_id}'"
        )
        return attribute

    def update(
        self, attribute: AttributeDefinition, attribute_in: AttributeDefinitionUpdate
    ) -> AttributeDefinition:
        """Update an existing definition.

        The merged result is validated the same way as a new definition.

        Raises:
            InvalidDefinitionError: If the merged definition is invalid
        """
        update_data = attribute_in.model_dump(exclude_unset=True)

        merged = {
            "name": attribute.name,
            "type": attribute.type,
            "options": attribute.options,
            "required": attribute.required,
            "placeholder": attribute.placeholder,
            "description": attribute.description,
        }
        # Only fields sent in the request apply; an explicit null clears it
        merged.update({k: v for k, v in update_data.items() if k in merged})
        try:
            validated = AttributeDefinitionBase.model_validate(merged)
        except ValidationError as e:
            raise InvalidDefinitionError(str(e))

        if validated.name != attribute.name:
            self._ensure_unique_name(attribute.category_id, validated.name)

        attribute.name = validated.name
        attribute.type = validated.type.value
        attribute.options = validated.options
        attribute.required = validated.required
        attribute.placeholder = validated.placeholder
        attribute.description = validated.description
        if update_data.get("position") is not None:
            attribute.position = update_data["position"]
        if update_data.get("is_active") is not None:
            attribute.is_active = update_data["is_active"]

        self.db.commit()
        self.db.refresh(attribute)
        return attribute

    def retire(self, attribute: AttributeDefinition) -> AttributeDefinition:
        """Soft-deactivate a definition; stored values are kept."""
        attribute.is_active = False
        self.db.commit()
        self.db.refresh(attribute)
        logger.info(f"Retired attribute '{attribute.name}' ({attribute.id})")
        return attribute

    def delete(self, attribute: AttributeDefinition) -> None:
        """Delete a definition that no value references.

        Raises:
            DefinitionInUseError: If any listing still stores a value for it
        """
        value_count = (
            self.db.query(AttributeValue)
            .filter(AttributeValue.attribute_id == attribute.id)
            .count()
        )
        if value_count:
            raise DefinitionInUseError(attribute.id, value_count)

        self.db.delete(attribute)
        self.db.commit()

    def _ensure_unique_name(self, category_id: str, name: str) -> None:
        existing = (
            self.db.query(AttributeDefinition)
            .filter(
                AttributeDefinition.category_id == category_id,
                AttributeDefinition.name == name,
            )
            .first()
        )
        if existing:
            raise InvalidDefinitionError(
                f"Attribute '{name}' already exists in category '{category_id}'"
            )

    def _next_position(self, category_id: str) -> int:
        current = (
            self.db.query(func.max(AttributeDefinition.position))
            .filter(AttributeDefinition.category_id == category_id)
            .scalar()
        )
        return 0 if current is None else current + 1
