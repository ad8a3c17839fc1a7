# tests/conftest.py

"""Shared pytest fixtures: temporary database and API client."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, sessionmaker

import listing_attributes.models  # noqa: F401  (registers tables)
from listing_attributes.main import app
from listing_attributes.models.category import Category
from listing_attributes.models.database import Base, get_db, get_session_factory
from listing_attributes.schemas.attribute import AttributeDefinitionCreate, AttributeType
from listing_attributes.services.definition_store import AttributeDefinitionStore

API_KEY = "test-key"


@pytest.fixture
def session_factory(tmp_path) -> Generator[sessionmaker, None, None]:
    """Session factory bound to a fresh SQLite file per test."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'attributes.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory) -> Generator[Session, None, None]:
    """Database session for direct store tests."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory, monkeypatch) -> Generator[TestClient, None, None]:
    """API client wired to the temporary database."""
    monkeypatch.setenv("API_KEY_TESTER", API_KEY)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def vehicles(db) -> dict[str, str]:
    """Vehicles category with four attributes; returns name -> attribute ID."""
    db.add(Category(id="vehicles", name="Vehicles", icon="🚗"))
    db.add(Category(id="cars", name="Cars", parent_id="vehicles"))
    db.commit()

    store = AttributeDefinitionStore(db)
    specs = [
        ("Warranty", AttributeType.BOOLEAN, None),
        ("Mileage", AttributeType.NUMBER, None),
        ("Condition", AttributeType.SELECT, ["new", "used"]),
        ("Colour", AttributeType.STRING, None),
    ]
    ids = {}
    for name, attr_type, options in specs:
        attribute = store.create(
            AttributeDefinitionCreate(
                category_id="vehicles", name=name, type=attr_type, options=options
            )
        )
        ids[name] = attribute.id
    return ids


def corrupt_value(db: Session, listing_id: str, attribute_id: str) -> None:
    """Overwrite one stored value with text that is not JSON."""
    db.execute(
        text(
            "UPDATE attribute_values SET value = 'not json' "
            "WHERE listing_id = :listing_id AND attribute_id = :attribute_id"
        ),
        {"listing_id": listing_id, "attribute_id": attribute_id},
    )
    db.commit()
