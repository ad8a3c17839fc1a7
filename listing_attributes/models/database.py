"""Database setup and session management."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from listing_attributes.config import settings

# Create engine with SQLite-specific settings
connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(settings.database_url, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory():
    """Dependency that provides the session factory.

    Concurrent readers open one session each from this factory.
    """
    return SessionLocal


def create_tables():
    """Create all database tables."""
    # Import models to ensure they're registered with Base
    from listing_attributes.models import category, attribute, attribute_value  # noqa: F401

    Base.metadata.create_all(bind=engine)
