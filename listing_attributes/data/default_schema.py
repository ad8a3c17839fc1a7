"""Default categories and their attribute definitions."""

import logging

from sqlalchemy.orm import Session

from listing_attributes.models.attribute import AttributeDefinition
from listing_attributes.models.category import Category

logger = logging.getLogger(__name__)

# Categories in display order; subcategories nest under "subcategories".
# Attributes are listed in authored order.
DEFAULT_CATEGORIES = [
    {
        "id": "vehicles",
        "name": "Vehicles",
        "icon": "🚗",
        "attributes": [
            {"name": "Brand", "type": "string", "required": True, "placeholder": "e.g. Renault"},
            {"name": "Model", "type": "string", "placeholder": "e.g. Clio"},
            {"name": "Year", "type": "number", "required": True},
            {
                "name": "Mileage",
                "type": "number",
                "placeholder": "Distance in km",
                "description": "Total distance driven, in kilometres",
            },
            {"name": "Fuel", "type": "select", "options": ["Petrol", "Diesel", "Hybrid", "Electric"]},
            {"name": "Gearbox", "type": "select", "options": ["Manual", "Automatic"]},
            {"name": "Condition", "type": "select", "options": ["new", "used"]},
            {"name": "Warranty", "type": "boolean", "description": "Sold with a dealer warranty"},
        ],
        "subcategories": [
            {"id": "cars", "name": "Cars", "icon": "🚙"},
            {"id": "motorcycles", "name": "Motorcycles", "icon": "🏍️"},
        ],
    },
    {
        "id": "real-estate",
        "name": "Real Estate",
        "icon": "🏠",
        "attributes": [
            {
                "name": "Surface",
                "type": "number",
                "required": True,
                "placeholder": "Surface in m²",
                "description": "Living area in square metres",
            },
            {"name": "Rooms", "type": "number", "required": True},
            {
                "name": "Property type",
                "type": "select",
                "required": True,
                "options": ["Apartment", "Villa", "House", "Studio", "Duplex"],
            },
            {"name": "Floor", "type": "number"},
            {"name": "Elevator", "type": "boolean"},
            {"name": "Parking", "type": "boolean"},
        ],
        "subcategories": [
            {"id": "apartments", "name": "Apartments", "icon": "🏢"},
        ],
    },
]


def _ensure_category(db: Session, data: dict, parent_id: str | None, position: int) -> Category:
    category = db.query(Category).filter(Category.id == data["id"]).first()
    if category is None:
        category = Category(
            id=data["id"],
            name=data["name"],
            icon=data.get("icon", "📁"),
            parent_id=parent_id,
            position=position,
        )
        db.add(category)
        db.flush()
        logger.info(f"Created category '{category.id}'")
    return category


def _ensure_attributes(db: Session, category: Category, attributes: list[dict]) -> None:
    existing = {
        a.name
        for a in db.query(AttributeDefinition)
        .filter(AttributeDefinition.category_id == category.id)
        .all()
    }
    for position, attr in enumerate(attributes):
        if attr["name"] in existing:
            continue
        definition = AttributeDefinition(
            category_id=category.id,
            name=attr["name"],
            type=attr["type"],
            required=attr.get("required", False),
            position=position,
            placeholder=attr.get("placeholder"),
            description=attr.get("description"),
        )
        definition.options = attr.get("options")
        db.add(definition)


def ensure_default_categories(db: Session) -> list[Category]:
    """Ensure the default categories and their attributes exist.

    Missing categories and attributes are created; existing ones are left
    untouched.

    Args:
        db: Database session

    Returns:
        The top-level default categories
    """
    categories = []
    for position, data in enumerate(DEFAULT_CATEGORIES):
        category = _ensure_category(db, data, None, position)
        _ensure_attributes(db, category, data.get("attributes", []))
        for sub_position, sub in enumerate(data.get("subcategories", [])):
            _ensure_category(db, sub, category.id, sub_position)
        categories.append(category)

    db.commit()
    return categories
