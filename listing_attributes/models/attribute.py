"""Attribute definition database model."""

import json
import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from listing_attributes.models.database import Base


def generate_uuid():
    """Generate a UUID string."""
    return str(uuid.uuid4())


class AttributeDefinition(Base):
    """Typed attribute declared by a category for its listings."""

    __tablename__ = "attribute_definitions"
    __table_args__ = (
        UniqueConstraint("category_id", "name", name="uq_attribute_category_name"),
    )

    id = Column(String, primary_key=True, default=generate_uuid, index=True)
    category_id = Column(String, ForeignKey("categories.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False, default="string")  # string, number, boolean, select
    # Store JSON options as text for SQLite compatibility
    _options = Column("options", Text, nullable=True)
    required = Column(Boolean, default=False)
    position = Column(Integer, default=0, index=True)
    placeholder = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    category = relationship("Category", back_populates="attributes")
    values = relationship("AttributeValue", back_populates="attribute")

    @property
    def options(self) -> list[str] | None:
        """Get select options as list."""
        if self._options:
            return json.loads(self._options)
        return None

    @options.setter
    def options(self, value: list[str] | None):
        """Set select options from list."""
        if value:
            self._options = json.dumps(list(value))
        else:
            self._options = None

    def __repr__(self):
        return f"<AttributeDefinition(id='{self.id}', name='{self.name}', type='{self.type}')>"
