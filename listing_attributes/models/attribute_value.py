"""Attribute value database model."""

import json
from datetime import datetime
from typing import Any

from sqlalchemy import Column, DateTime, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from listing_attributes.models.attribute import generate_uuid
from listing_attributes.models.database import Base


class AttributeValue(Base):
    """Value stored by one listing for one attribute definition.

    Storage is sparse: a missing row means the attribute is unset.
    """

    __tablename__ = "attribute_values"
    __table_args__ = (
        UniqueConstraint("listing_id", "attribute_id", name="uq_value_listing_attribute"),
    )

    id = Column(String, primary_key=True, default=generate_uuid)
    listing_id = Column(String, nullable=False, index=True)
    attribute_id = Column(
        String, ForeignKey("attribute_definitions.id"), nullable=False, index=True
    )
    # Store JSON scalar as text so str/number/bool survive the round trip
    _value = Column("value", Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    attribute = relationship("AttributeDefinition", back_populates="values")

    @property
    def value(self) -> Any:
        """Get the decoded value."""
        return json.loads(self._value)

    @value.setter
    def value(self, value: Any):
        """Set the value, JSON-encoded."""
        self._value = json.dumps(value)

    def __repr__(self):
        return (
            f"<AttributeValue(listing_id='{self.listing_id}', "
            f"attribute_id='{self.attribute_id}')>"
        )
