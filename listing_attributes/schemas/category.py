"""Pydantic schemas for Category."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CategoryBase(BaseModel):
    """Base category schema with common fields."""

    name: str
    icon: str = "📁"
    position: int = 0


class CategoryCreate(CategoryBase):
    """Schema for creating a category or subcategory."""

    id: str
    parent_id: str | None = None


class SubcategoryResponse(CategoryBase):
    """Schema for a nested subcategory."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    parent_id: str | None = None
    is_active: bool


class CategoryResponse(CategoryBase):
    """Schema for category response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    parent_id: str | None = None
    is_active: bool
    created_at: datetime
    subcategories: list[SubcategoryResponse] = []
