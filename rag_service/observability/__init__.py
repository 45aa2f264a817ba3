"""
Observability module.

Provides structured logging and correlation ID tracking.
"""

from rag_service.observability.correlation import get_correlation_id, set_correlation_id
from rag_service.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_correlation_id", "get_logger", "set_correlation_id"]
