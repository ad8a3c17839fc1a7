"""Application configuration using Pydantic settings."""

import os
from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load .env file into os.environ so API_KEY_* vars are accessible
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./listing_attributes.db"

    # Attribute service (base URL used by remote consumers)
    attribute_service_url: str = "http://localhost:8000"
    store_timeout_seconds: float = 5.0
    degrade_mode: str = "atomic"  # atomic, partial

    # Startup
    seed_default_categories: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars like API_KEY_*

    def get_api_keys(self) -> dict[str, str]:
        """Get all API keys from environment variables.

        Returns a dict mapping API key to username.
        Environment variables should be in format: API_KEY_{USERNAME}=key
        """
        api_keys = {}
        for key, value in os.environ.items():
            if key.startswith("API_KEY_"):
                username = key[8:].lower()  # Remove "API_KEY_" prefix
                api_keys[value] = username
        return api_keys


settings = Settings()
