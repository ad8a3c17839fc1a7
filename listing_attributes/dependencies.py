"""FastAPI dependencies for dependency injection."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from listing_attributes.models.database import get_db, get_session_factory
from listing_attributes.services.attribute_service import AttributeService
from listing_attributes.utils.auth import get_current_user


def get_attribute_service(
    session_factory: Annotated[Callable[[], Session], Depends(get_session_factory)],
) -> AttributeService:
    """Build a per-request attribute service over the database."""
    return AttributeService(session_factory=session_factory)


# Type aliases for common dependencies
DbSession = Annotated[Session, Depends(get_db)]
CurrentUser = Annotated[str, Depends(get_current_user)]
AttributeServiceDep = Annotated[AttributeService, Depends(get_attribute_service)]
