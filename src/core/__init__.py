"""
Core module for the Anthropic request body package.

This module contains configuration and exceptions.
"""

from src.core.config import Settings, get_settings
from src.core.exceptions import (
    ErrorCode,
    RequestBodyAssertionError,
    RequestBodyEncodingError,
    RequestBodyException,
    RequestConversionError,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "ErrorCode",
    "RequestBodyException",
    "RequestBodyAssertionError",
    "RequestBodyEncodingError",
    "RequestConversionError",
]
