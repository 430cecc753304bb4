"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from mflix_api.configs.api import APISettings
from mflix_api.configs.base import BaseSettings
from mflix_api.configs.database import MongoSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    # Aggregated settings
    database: MongoSettings = MongoSettings()
    api: APISettings = APISettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from mflix_api.configs import get_settings
        settings = get_settings()
    """
    return Settings()
