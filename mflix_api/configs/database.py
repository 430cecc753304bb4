"""
Database configuration settings.

Manages MongoDB connection parameters for the async pymongo client.
Timeouts here are the only timeouts the service applies to store calls.

Dependencies: pydantic, pydantic_settings
System role: Document store connection configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from mflix_api.configs.base import BaseSettings


class MongoSettings(BaseSettings):
    """MongoDB connection configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MONGODB_",
        case_sensitive=False,
        extra="ignore",
    )

    uri: str = Field(
        default="mongodb://localhost:27017",
        description="MongoDB connection string (may embed credentials)",
    )
    db: str = Field(default="sample_mflix", description="Database name")
    app_name: str = Field(default="films-api", description="Client application name")

    max_pool_size: int = Field(default=10, description="Connection pool size")
    connect_timeout_ms: int = Field(default=30000, description="Connect timeout in milliseconds")
    socket_timeout_ms: int = Field(default=30000, description="Socket timeout in milliseconds")
    server_selection_timeout_ms: int = Field(
        default=30000,
        description="Server selection timeout in milliseconds",
    )
    retry_writes: bool = Field(default=True, description="Driver-level retryable writes")
    server_api_version: str | None = Field(
        default="1",
        description="Stable server API version, None to disable",
    )

    required_collections: list[str] = Field(
        default_factory=lambda: ["theaters"],
        description="Collections created on first connect when missing",
    )

    def client_options(self) -> dict:
        """
        Keyword arguments for AsyncMongoClient.

        Returns:
            dict: Driver options derived from these settings
        """
        return {
            "appname": self.app_name,
            "maxPoolSize": self.max_pool_size,
            "connectTimeoutMS": self.connect_timeout_ms,
            "socketTimeoutMS": self.socket_timeout_ms,
            "serverSelectionTimeoutMS": self.server_selection_timeout_ms,
            "retryWrites": self.retry_writes,
        }
