"""
HTTP API configuration settings.

Route prefix, CORS and paging bounds for listing endpoints.

Dependencies: pydantic, pydantic_settings
System role: HTTP surface configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from mflix_api.configs.base import BaseSettings


class APISettings(BaseSettings):
    """HTTP API configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="API_",
        case_sensitive=False,
        extra="ignore",
    )

    prefix: str = Field(default="/api", description="Prefix for all resource routes")
    cors_origins: list[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins")
    max_page_size: int = Field(default=50, description="Upper bound for the limit parameter")
    default_page_size: int = Field(default=10, description="Limit used when none is given")
