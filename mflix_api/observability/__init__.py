"""
Observability module.

Provides logging configuration, correlation ID tracking and request
logging middleware.
"""

from mflix_api.observability.correlation import get_correlation_id, set_correlation_id
from mflix_api.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_correlation_id", "get_logger", "set_correlation_id"]
