"""
Request Body Serializer

Canonical JSON encoding of MessageRequestBody.

Output keys are sorted at every depth and separators are compact, so equal
bodies always produce identical bytes (usable as cache keys and in golden
tests).

Tool input schemas are free-form JSON. They never pass through the typed
(pydantic) encoder, whose exclude_none and type coercion would alter them.
Bodies with tools are therefore encoded in two stages:

1. encode a copy whose schemas are blanked to ``{}``;
2. parse the result back into plain JSON, splice each original schema into
   ``tools[i].input_schema`` by position, and dump again.

Position-based splicing relies on the tool array surviving stage 1 with the
same length and order. Both are asserted (order via the tool name at each
index), and any mismatch raises RequestBodyAssertionError.
"""

import json
from typing import Any

from src.core.exceptions import RequestBodyAssertionError, RequestBodyEncodingError
from src.models.anthropic import MessageRequestBody
from src.observability.logging import get_logger

EMPTY_SCHEMA: dict[str, Any] = {}


def _canonical_dumps(value: Any) -> bytes:
    """
    Dump a plain JSON value with sorted keys and compact separators.

    NaN and Infinity have no JSON representation and are rejected.
    """
    try:
        return json.dumps(
            value,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        ).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise RequestBodyEncodingError(f"request body is not valid JSON: {e}") from e


def structured_encode(body: MessageRequestBody) -> bytes:
    """
    Strict encode of the body through its declared field layout.

    Absent optionals are omitted. An empty tool list is omitted as well, so
    it encodes exactly like an absent one.

    Args:
        body: The request body.

    Returns:
        Canonical JSON bytes.

    Raises:
        RequestBodyEncodingError: A field holds NaN or Infinity.
    """
    exclude = None if body.tools else {"tools"}
    payload = body.model_dump(mode="json", exclude_none=True, exclude=exclude)
    return _canonical_dumps(payload)


def safe_encode(body: MessageRequestBody) -> bytes:
    """
    Encode a request body to canonical JSON bytes.

    This is the entry point callers should use. Bodies without tools take
    the single strict encode; bodies with tools go through encode_with_tools.

    Args:
        body: The request body.

    Returns:
        Canonical JSON bytes ready to POST to the Messages endpoint.

    Raises:
        RequestBodyAssertionError: The tool splice found an inconsistency.
        RequestBodyEncodingError: A tool schema or sampling value is not
            valid JSON (e.g. NaN).
    """
    if not body.tools:
        get_logger(__name__).debug("request body encoded", path="structured")
        return structured_encode(body)

    return encode_with_tools(body)


def encode_with_tools(body: MessageRequestBody) -> bytes:
    """
    Two-stage encode for bodies that carry tools.

    Args:
        body: A request body with at least one tool.

    Returns:
        Canonical JSON bytes with every tool's original input_schema.

    Raises:
        RequestBodyAssertionError: Called without tools, the round-tripped
            JSON is not an object, or the encoded tools no longer line up
            with the originals.
        RequestBodyEncodingError: A tool schema or sampling value is not
            valid JSON (e.g. NaN).
    """
    logger = get_logger(__name__)
    original_tools = body.tools
    if not original_tools:
        logger.error("encode_with_tools called without tools")
        raise RequestBodyAssertionError(
            "encode_with_tools requires a request body with tools"
        )

    blanked = [tool.model_copy(update={"input_schema": EMPTY_SCHEMA}) for tool in original_tools]
    working_copy = body.model_copy(update={"tools": blanked})

    json_object = json.loads(structured_encode(working_copy))
    if not isinstance(json_object, dict):
        logger.error("request body is not a JSON object", actual=type(json_object).__name__)
        raise RequestBodyAssertionError(
            "Could not convert request body into a JSON object",
            expected="object",
            actual=type(json_object).__name__,
        )

    json_tools = json_object.get("tools")
    if not isinstance(json_tools, list) or len(json_tools) != len(original_tools):
        actual = len(json_tools) if isinstance(json_tools, list) else json_tools
        logger.error(
            "encoded tool count mismatch",
            expected=len(original_tools),
            actual=actual,
        )
        raise RequestBodyAssertionError(
            "Different number of encoded tools than original tools",
            expected=len(original_tools),
            actual=actual,
        )

    for idx, tool in enumerate(original_tools):
        json_tool = json_tools[idx]
        if not isinstance(json_tool, dict) or json_tool.get("name") != tool.name:
            actual = json_tool.get("name") if isinstance(json_tool, dict) else json_tool
            logger.error("encoded tool order mismatch", index=idx, expected=tool.name, actual=actual)
            raise RequestBodyAssertionError(
                f"Encoded tool at index {idx} does not match original tool {tool.name!r}",
                expected=tool.name,
                actual=actual,
            )
        _check_schema(tool.name, tool.input_schema)
        json_tool["input_schema"] = tool.input_schema

    logger.debug("request body encoded", path="with_tools", tool_count=len(original_tools))
    return _canonical_dumps(json_object)


def _check_schema(tool_name: str, schema: Any) -> None:
    """
    Raise RequestBodyEncodingError unless schema dumps losslessly.

    Mapping keys must be str at every depth: json would coerce other keys
    to strings (or fail to sort mixed keys), changing the schema.
    """
    if _has_non_str_key(schema):
        raise RequestBodyEncodingError(
            f"input_schema of tool {tool_name!r} has a non-string mapping key",
            tool_name=tool_name,
        )
    try:
        json.dumps(schema, sort_keys=True, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise RequestBodyEncodingError(
            f"input_schema of tool {tool_name!r} is not JSON-serializable: {e}",
            tool_name=tool_name,
        ) from e


def _has_non_str_key(value: Any) -> bool:
    """True if any mapping in value, at any depth, has a non-str key."""
    if isinstance(value, dict):
        return any(
            not isinstance(key, str) or _has_non_str_key(item) for key, item in value.items()
        )
    if isinstance(value, (list, tuple)):
        return any(_has_non_str_key(item) for item in value)
    return False


def decode_request_body(data: bytes | str) -> MessageRequestBody:
    """
    Parse JSON produced by safe_encode back into a MessageRequestBody.

    Raises:
        pydantic.ValidationError: The JSON does not describe a request body.
    """
    return MessageRequestBody.model_validate_json(data)
