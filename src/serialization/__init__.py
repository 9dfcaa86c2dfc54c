"""Serialization Package - canonical JSON encoding of request bodies."""

from src.serialization.request_body import (
    decode_request_body,
    encode_with_tools,
    safe_encode,
    structured_encode,
)

__all__ = [
    "safe_encode",
    "structured_encode",
    "encode_with_tools",
    "decode_request_body",
]
