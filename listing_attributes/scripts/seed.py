"""Seed data export and import utilities.

Usage:
    # Export categories, attributes and values to the seed file
    python -m listing_attributes.scripts.seed export

    # Load seed data into database
    python -m listing_attributes.scripts.seed load

    # Load seed data (clear existing first)
    python -m listing_attributes.scripts.seed load --clear
"""

import json
import sys
from datetime import datetime, timezone
from pathlib import Path

from listing_attributes.models.attribute import AttributeDefinition
from listing_attributes.models.attribute_value import AttributeValue
from listing_attributes.models.category import Category
from listing_attributes.models.database import SessionLocal, create_tables

SEED_FILE = Path.cwd() / "seed_data.json"


def export_seed_data(output_path: Path = SEED_FILE, session_factory=SessionLocal) -> dict:
    """Export all categories, attribute definitions and values to JSON."""
    with session_factory() as db:
        # Parents first so a load can recreate the hierarchy in order
        categories = []
        for c in db.query(Category).order_by(Category.parent_id.isnot(None), Category.position).all():
            categories.append({
                "id": c.id,
                "name": c.name,
                "icon": c.icon,
                "parent_id": c.parent_id,
                "position": c.position,
                "is_active": c.is_active,
            })

        attributes = []
        for a in db.query(AttributeDefinition).order_by(
            AttributeDefinition.category_id, AttributeDefinition.position
        ).all():
            attributes.append({
                "id": a.id,
                "category_id": a.category_id,
                "name": a.name,
                "type": a.type,
                "options": a.options,
                "required": a.required,
                "position": a.position,
                "placeholder": a.placeholder,
                "description": a.description,
                "is_active": a.is_active,
            })

        values = []
        for v in db.query(AttributeValue).order_by(AttributeValue.listing_id).all():
            values.append({
                "listing_id": v.listing_id,
                "attribute_id": v.attribute_id,
                "value": v.value,
            })

    seed_data = {
        "exported_at": datetime.now(timezone.utc).isoformat(),
        "version": "1.0",
        "categories": categories,
        "attributes": attributes,
        "values": values,
    }

    with open(output_path, "w") as f:
        json.dump(seed_data, f, indent=2, ensure_ascii=False)

    print(f"Exported seed data to {output_path}")
    print(f"  Categories: {len(categories)}")
    print(f"  Attributes: {len(attributes)}")
    print(f"  Values: {len(values)}")

    return seed_data


def load_seed_data(
    input_path: Path = SEED_FILE,
    clear_existing: bool = False,
    session_factory=SessionLocal,
) -> dict:
    """Load seed data from JSON into database.

    Existing rows are kept; only missing ones are added.

    Args:
        input_path: Path to seed JSON file
        clear_existing: If True, delete all existing data first
        session_factory: Factory for the database session

    Returns:
        Dict with counts of loaded items
    """
    with open(input_path) as f:
        seed_data = json.load(f)

    with session_factory() as db:
        if clear_existing:
            print("Clearing existing data...")
            db.query(AttributeValue).delete()
            db.query(AttributeDefinition).delete()
            db.query(Category).filter(Category.parent_id.isnot(None)).delete()
            db.query(Category).delete()
            db.commit()

        stats = {"categories": 0, "attributes": 0, "values": 0, "skipped": 0}

        existing_category_ids = {c.id for c in db.query(Category).all()}
        for c_data in seed_data.get("categories", []):
            if c_data["id"] not in existing_category_ids:
                db.add(Category(
                    id=c_data["id"],
                    name=c_data["name"],
                    icon=c_data.get("icon", "📁"),
                    parent_id=c_data.get("parent_id"),
                    position=c_data.get("position", 0),
                    is_active=c_data.get("is_active", True),
                ))
                stats["categories"] += 1
        db.commit()

        existing_attributes = {
            (a.category_id, a.name) for a in db.query(AttributeDefinition).all()
        }
        for a_data in seed_data.get("attributes", []):
            key = (a_data["category_id"], a_data["name"])
            if key in existing_attributes:
                stats["skipped"] += 1
                continue
            attribute = AttributeDefinition(
                id=a_data["id"],
                category_id=a_data["category_id"],
                name=a_data["name"],
                type=a_data.get("type", "string"),
                required=a_data.get("required", False),
                position=a_data.get("position", 0),
                placeholder=a_data.get("placeholder"),
                description=a_data.get("description"),
                is_active=a_data.get("is_active", True),
            )
            attribute.options = a_data.get("options")
            db.add(attribute)
            stats["attributes"] += 1
        db.commit()

        known_attribute_ids = {a.id for a in db.query(AttributeDefinition).all()}
        existing_values = {
            (v.listing_id, v.attribute_id) for v in db.query(AttributeValue).all()
        }
        for v_data in seed_data.get("values", []):
            key = (v_data["listing_id"], v_data["attribute_id"])
            if key in existing_values or v_data["attribute_id"] not in known_attribute_ids:
                stats["skipped"] += 1
                continue
            value = AttributeValue(
                listing_id=v_data["listing_id"],
                attribute_id=v_data["attribute_id"],
            )
            value.value = v_data["value"]
            db.add(value)
            stats["values"] += 1
        db.commit()

    print(f"Loaded seed data from {input_path}")
    print(f"  Categories: {stats['categories']} new")
    print(f"  Attributes: {stats['attributes']} new")
    print(f"  Values: {stats['values']} new, {stats['skipped']} rows skipped")

    return stats


def main():
    """CLI entry point."""
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    command = sys.argv[1]

    if command == "export":
        export_seed_data()
    elif command == "load":
        if not SEED_FILE.exists():
            print(f"Error: Seed file not found: {SEED_FILE}")
            sys.exit(1)
        create_tables()
        load_seed_data(clear_existing="--clear" in sys.argv)
    else:
        print(f"Unknown command: {command}")
        print(__doc__)
        sys.exit(1)


if __name__ == "__main__":
    main()
