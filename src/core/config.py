"""
Core configuration module for the Anthropic request body package.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the ANTHROPIC_BODY_ prefix.

Reference:
- GUIDELINES: Sinha pp. 193-195 - Pydantic BaseSettings pattern
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    """
    Package settings loaded from environment variables.

    All fields use the ANTHROPIC_BODY_ prefix for environment variables.
    Example: ANTHROPIC_BODY_LOG_LEVEL=DEBUG
    """

    # =========================================================================
    # Service Configuration
    # =========================================================================
    service_name: str = Field(
        default="anthropic-request-body",
        description="Service name bound into every log event",
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment, bound into every log event",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level for the structured logger",
    )

    # =========================================================================
    # Request Defaults
    # Used by the OpenAI-format builder when the incoming request omits them
    # =========================================================================
    default_model: str = Field(
        default="claude-3-5-sonnet-20241022",
        description="Model used when the incoming request names none",
    )
    default_max_tokens: int = Field(
        default=1024,
        gt=0,
        description="max_tokens used when the incoming request omits it",
    )

    model_config = {
        "env_prefix": "ANTHROPIC_BODY_",
        "case_sensitive": False,
        "extra": "ignore",
    }

    # =========================================================================
    # Field Validators
    # =========================================================================
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize the log level."""
        level = v.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {sorted(VALID_LOG_LEVELS)}")
        return level


# =============================================================================
# Settings Singleton
# =============================================================================


@lru_cache
def get_settings() -> Settings:
    """
    Get the settings singleton.

    Uses functools.lru_cache to ensure only one Settings instance is created.

    Returns:
        Settings: The settings instance.
    """
    return Settings()
