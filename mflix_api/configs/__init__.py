"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from mflix_api.configs.api import APISettings
from mflix_api.configs.database import MongoSettings
from mflix_api.configs.settings import Settings, get_settings

__all__ = ["APISettings", "MongoSettings", "Settings", "get_settings"]
