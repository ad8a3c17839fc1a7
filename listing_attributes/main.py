"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from listing_attributes.config import settings

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
from listing_attributes.models.database import SessionLocal, create_tables
from listing_attributes.data.default_schema import ensure_default_categories
from listing_attributes.api import attributes, categories

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    create_tables()

    if settings.seed_default_categories:
        with SessionLocal() as db:
            ensure_default_categories(db)

    logger.info(f"Attribute service ready (degrade mode: {settings.degrade_mode})")
    yield


app = FastAPI(
    title="Listing Attributes Service",
    description="Category-scoped attribute definitions and listing attribute values",
    version=VERSION,
    lifespan=lifespan,
)

# Include routers
app.include_router(attributes.router, prefix="/attributes", tags=["Attributes"])
app.include_router(categories.router, prefix="/categories", tags=["Categories"])


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Listing Attributes Service",
        "version": VERSION,
        "docs": "/docs",
        "health": "/health",
    }


def run():
    """Run the service with uvicorn."""
    import uvicorn

    uvicorn.run(
        "listing_attributes.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
