"""API key authentication for attribute write endpoints."""

import logging

from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

from listing_attributes.config import settings

logger = logging.getLogger(__name__)

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def verify_api_key(api_key: str | None) -> str:
    """Resolve an API key to the username it was issued to.

    Raises:
        HTTPException: 401 if the key is missing or unknown
    """
    if not api_key:
        logger.warning("Rejected write request without API key")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing API key. Provide X-API-Key header.",
        )

    username = settings.get_api_keys().get(api_key)
    if username is None:
        logger.warning(f"Rejected unknown API key {api_key[:4]}...")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key.",
        )

    logger.debug(f"API key accepted for user: {username}")
    return username


async def get_current_user(api_key: str | None = Security(api_key_header)) -> str:
    """FastAPI dependency returning the caller's username."""
    return verify_api_key(api_key)
