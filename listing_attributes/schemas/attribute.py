"""Pydantic schemas for attribute definitions and values."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AttributeType(str, Enum):
    """Closed set of attribute value types."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    SELECT = "select"


class AttributeDefinitionBase(BaseModel):
    """Base attribute definition schema with common fields."""

    name: str = Field(min_length=1)
    type: AttributeType = AttributeType.STRING
    options: list[str] | None = None  # For select types
    required: bool = False
    placeholder: str | None = None
    description: str | None = None

    @model_validator(mode="after")
    def validate_options(self):
        """Select attributes need options; other types carry none."""
        if self.type == AttributeType.SELECT:
            options = [o.strip() for o in self.options or [] if o and o.strip()]
            if not options:
                raise ValueError("Options are required for select attributes")
            self.options = options
        else:
            self.options = None
        return self


class AttributeDefinitionCreate(AttributeDefinitionBase):
    """Schema for creating an attribute definition."""

    category_id: str
    position: int | None = None  # Appended after existing attributes when omitted


class AttributeDefinitionUpdate(BaseModel):
    """Schema for updating an attribute definition."""

    name: str | None = None
    type: AttributeType | None = None
    options: list[str] | None = None
    required: bool | None = None
    position: int | None = None
    placeholder: str | None = None
    description: str | None = None
    is_active: bool | None = None


class AttributeDefinitionResponse(BaseModel):
    """Schema for attribute definition response.

    Also the definition shape the resolver and presenter work on.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    category_id: str
    name: str
    type: AttributeType
    options: list[str] | None = None
    required: bool = False
    position: int = 0
    placeholder: str | None = None
    description: str | None = None
    is_active: bool = True


class AttributeValueEntry(BaseModel):
    """One stored value, with its definition embedded when available."""

    value: Any
    attribute: AttributeDefinitionResponse | None = None


class SaveValuesRequest(BaseModel):
    """Schema for replacing the attribute values of a listing."""

    attributes: dict[str, Any]
    # When given, required attributes of this category are enforced
    category_id: str | None = None


class SaveValuesResponse(BaseModel):
    """Schema for the values stored after a save."""

    listing_id: str
    values: dict[str, Any]
    saved: int


class AttributeAdminResponse(AttributeDefinitionResponse):
    """Attribute definition with timestamps for admin listings."""

    created_at: datetime
    updated_at: datetime
