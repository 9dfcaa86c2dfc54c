"""
Observability Package

Structured JSON logging with correlation IDs.
"""

from src.observability.logging import (
    configure_logging,
    correlation_id_context,
    get_correlation_id,
    get_logger,
    reset_logging,
)

__all__ = [
    "configure_logging",
    "reset_logging",
    "get_logger",
    "get_correlation_id",
    "correlation_id_context",
]
