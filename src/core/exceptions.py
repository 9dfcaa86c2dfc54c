"""
Custom exceptions for the Anthropic request body package.

This module provides the exception hierarchy used by the request body
serializer and the OpenAI-format builder. All exceptions inherit from
RequestBodyException and carry an error code for consistent handling
and logging.

None of these errors are transient: they signal a contract violation by
the caller (or a bug in this package) and must not be retried.

Reference:
- GUIDELINES: Specific exceptions, always capture with 'as e'
"""

from enum import Enum
from typing import Any


# =============================================================================
# Error Codes Enum
# =============================================================================


class ErrorCode(str, Enum):
    """
    Error codes for request body exceptions.

    These codes provide a consistent way to identify error types
    across callers and in logging.
    """

    REQUEST_BODY_ERROR = "REQUEST_BODY_ERROR"
    ASSERTION_ERROR = "ASSERTION_ERROR"
    ENCODING_ERROR = "ENCODING_ERROR"
    CONVERSION_ERROR = "CONVERSION_ERROR"


# =============================================================================
# Base Exception
# =============================================================================


class RequestBodyException(Exception):
    """
    Base exception for all request body errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code from ErrorCode enum.
    """

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.REQUEST_BODY_ERROR,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            **kwargs: Additional attributes to set on the exception.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code

        for key, value in kwargs.items():
            setattr(self, key, value)


# =============================================================================
# RequestBodyAssertionError
# =============================================================================


class RequestBodyAssertionError(RequestBodyException):
    """
    Invariant violation inside the serializer.

    Raised when encode_with_tools is reached without tools, when the
    round-tripped JSON is not an object, or when the encoded tool array
    no longer lines up with the original tools.

    Attributes:
        expected: What the serializer expected to find (if applicable).
        actual: What it found instead (if applicable).
    """

    def __init__(
        self,
        message: str,
        expected: Any = None,
        actual: Any = None,
        error_code: str = ErrorCode.ASSERTION_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.expected = expected
        self.actual = actual


# =============================================================================
# RequestBodyEncodingError
# =============================================================================


class RequestBodyEncodingError(RequestBodyException):
    """
    A tool input schema could not be serialized as JSON.

    Attributes:
        tool_name: Name of the tool whose schema was rejected.
    """

    def __init__(
        self,
        message: str,
        tool_name: str | None = None,
        error_code: str = ErrorCode.ENCODING_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.tool_name = tool_name


# =============================================================================
# RequestConversionError
# =============================================================================


class RequestConversionError(RequestBodyException):
    """
    OpenAI-format input that has no Anthropic request body equivalent.

    Note: Raised by the builder in src.adapters.openai_compat, never by
    the serializer.

    Attributes:
        field: Name of the offending request field.
        value: The unsupported value (if safe to include).
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        error_code: str = ErrorCode.CONVERSION_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.field = field
        self.value = value
