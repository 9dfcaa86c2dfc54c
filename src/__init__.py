"""Anthropic request body - Source Package.

Typed request models for the Anthropic Messages API and their canonical
JSON serializer.
"""

__all__ = ["adapters", "core", "models", "observability", "serialization"]
