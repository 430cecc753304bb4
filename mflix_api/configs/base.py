"""
Shared settings for the mflix API.

MongoSettings and APISettings inherit the .env loading and the
process-wide environment/debug/log level fields from here.

Dependencies: pydantic_settings
System role: Root of the settings hierarchy
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """Settings read from the environment, falling back to .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(
        default="development",
        description="Deployment environment (development, staging, production)",
    )
    debug: bool = Field(
        default=False,
        description="Debug flag for local runs",
    )
    log_level: str = Field(
        default="INFO",
        description="Root level passed to configure_logging()",
    )
