"""Category database model."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from listing_attributes.models.database import Base


class Category(Base):
    """Category or subcategory of the listing taxonomy.

    A subcategory points at its parent through ``parent_id``; only one
    level of nesting is allowed.
    """

    __tablename__ = "categories"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    icon = Column(String, default="📁")
    parent_id = Column(String, ForeignKey("categories.id"), nullable=True, index=True)
    position = Column(Integer, default=0)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    parent = relationship("Category", remote_side=[id], back_populates="subcategories")
    subcategories = relationship(
        "Category", back_populates="parent", order_by="Category.position"
    )
    attributes = relationship("AttributeDefinition", back_populates="category")

    @property
    def is_subcategory(self) -> bool:
        return self.parent_id is not None

    def __repr__(self):
        return f"<Category(id='{self.id}', name='{self.name}')>"
