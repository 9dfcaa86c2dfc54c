"""Adapters Package - builders from foreign request formats."""

from src.adapters.openai_compat import AnthropicBodyBuilder

__all__ = ["AnthropicBodyBuilder"]
