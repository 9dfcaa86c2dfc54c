"""
OpenAI-format Request Builder

Maps an OpenAI-style ChatCompletionRequest onto an Anthropic
MessageRequestBody.

Format Differences (OpenAI → Anthropic):
- System prompt: leading role="system" messages → top-level system
- Tool definition: function.parameters → input_schema
- Tool choice: "required" → {"type": "any"}, named function → {"type": "tool"}
- Stop: stop (str or list) → stop_sequences
- User: user → metadata.user_id

Tool results (role="tool") and assistant tool_calls have no content block
in MessageRequestBody and are rejected with RequestConversionError.

Pattern: Adapter pattern for format transformation
"""

from typing import Any, Optional

from src.core.config import Settings, get_settings
from src.core.exceptions import RequestConversionError
from src.models.anthropic import (
    AnyToolChoice,
    AutoToolChoice,
    InputMessage,
    InputMessageRole,
    MessageRequestBody,
    NamedToolChoice,
    RequestMetadata,
    TextContent,
    Tool,
    ToolChoice,
)
from src.models.openai import ChatCompletionRequest, ChatMessage, FunctionTool
from src.observability.logging import get_logger

DEFAULT_INPUT_SCHEMA: dict[str, Any] = {"type": "object", "properties": {}}


class AnthropicBodyBuilder:
    """
    Builds MessageRequestBody instances from OpenAI-format requests.

    Args:
        settings: Settings supplying the default model and max_tokens.
            Defaults to the get_settings() singleton.

    Example:
        >>> builder = AnthropicBodyBuilder()
        >>> body = builder.build(request)
        >>> payload = safe_encode(body)
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._logger = get_logger(__name__)

    # =========================================================================
    # Request
    # =========================================================================

    def build(self, request: ChatCompletionRequest) -> MessageRequestBody:
        """
        Build a request body from an OpenAI-format request.

        Raises:
            RequestConversionError: A message, tool or tool_choice has no
                Anthropic equivalent.
        """
        system, messages = self.transform_messages(request.messages)

        stop_sequences: Optional[list[str]] = None
        if isinstance(request.stop, str):
            stop_sequences = [request.stop]
        elif request.stop:
            stop_sequences = list(request.stop)

        tools = self.transform_tools(request.tools) if request.tools else None
        # tool_choice is meaningless without tools
        tool_choice = self.transform_tool_choice(request.tool_choice) if tools else None

        body = MessageRequestBody(
            max_tokens=request.max_tokens or self._settings.default_max_tokens,
            messages=messages,
            model=request.model or self._settings.default_model,
            metadata=RequestMetadata(user_id=request.user) if request.user else None,
            stop_sequences=stop_sequences,
            stream=request.stream,
            system=system,
            temperature=request.temperature,
            tool_choice=tool_choice,
            tools=tools,
            top_p=request.top_p,
        )

        self._logger.debug(
            "built request body",
            model=body.model,
            message_count=len(messages),
            tool_count=len(tools or []),
        )
        return body

    # =========================================================================
    # Messages
    # =========================================================================

    def transform_messages(
        self, messages: list[ChatMessage]
    ) -> tuple[Optional[str], list[InputMessage]]:
        """
        Split OpenAI messages into a system prompt and Anthropic messages.

        Returns:
            Tuple of (system prompt or None, input messages).
        """
        system_parts: list[str] = []
        result: list[InputMessage] = []

        for idx, msg in enumerate(messages):
            if msg.role == "system":
                if result:
                    raise RequestConversionError(
                        "system messages must precede all other messages",
                        field=f"messages[{idx}].role",
                        value=msg.role,
                    )
                if msg.content:
                    system_parts.append(msg.content)
                continue

            if msg.role == "tool" or msg.tool_calls:
                raise RequestConversionError(
                    "tool calls and tool results cannot be expressed as content blocks",
                    field=f"messages[{idx}]",
                    value=msg.role,
                )

            if not msg.content:
                continue

            result.append(
                InputMessage(
                    role=InputMessageRole(msg.role),
                    content=[TextContent(text=msg.content)],
                )
            )

        if not result:
            raise RequestConversionError(
                "request contains no user or assistant content",
                field="messages",
            )

        system = "\n\n".join(system_parts) if system_parts else None
        return system, result

    # =========================================================================
    # Tools
    # =========================================================================

    def transform_tool_definition(self, openai_tool: FunctionTool) -> Tool:
        """
        Transform a single OpenAI tool definition to an Anthropic Tool.

        A missing description becomes an empty string; missing parameters
        become an empty object schema.
        """
        function_def = openai_tool.function
        schema = function_def.parameters
        if schema is None:
            schema = dict(DEFAULT_INPUT_SCHEMA)

        return Tool(
            name=function_def.name,
            description=function_def.description or "",
            input_schema=schema,
        )

    def transform_tools(self, openai_tools: list[FunctionTool]) -> list[Tool]:
        """Transform a list of OpenAI tools to Anthropic tools."""
        return [self.transform_tool_definition(tool) for tool in openai_tools]

    def transform_tool_choice(
        self, tool_choice: Optional[str | dict[str, Any]]
    ) -> Optional[ToolChoice]:
        """
        Transform an OpenAI tool_choice value.

        Returns:
            The Anthropic tool choice, or None for absent/"none".

        Raises:
            RequestConversionError: Unrecognized tool_choice value.
        """
        if tool_choice is None or tool_choice == "none":
            return None
        if tool_choice == "auto":
            return AutoToolChoice()
        if tool_choice in ("required", "any"):
            return AnyToolChoice()

        if isinstance(tool_choice, dict) and tool_choice.get("type") == "function":
            name = (tool_choice.get("function") or {}).get("name")
            if name:
                return NamedToolChoice(name=name)

        raise RequestConversionError(
            "unsupported tool_choice",
            field="tool_choice",
            value=tool_choice,
        )
