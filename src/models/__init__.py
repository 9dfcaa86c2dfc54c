"""Models Package.

Pydantic models for the Anthropic Messages request body and for the
OpenAI-format chat request it can be built from.
"""

from src.models.anthropic import (
    AnyToolChoice,
    AutoToolChoice,
    ImageContent,
    ImageMediaType,
    ImageSource,
    InputContent,
    InputMessage,
    InputMessageRole,
    MessageRequestBody,
    NamedToolChoice,
    RequestMetadata,
    TextContent,
    Tool,
    ToolChoice,
)
from src.models.openai import (
    ChatCompletionRequest,
    ChatMessage,
    FunctionDefinition,
    FunctionTool,
)

__all__ = [
    # Anthropic request body
    "MessageRequestBody",
    "InputMessage",
    "InputMessageRole",
    "InputContent",
    "TextContent",
    "ImageContent",
    "ImageSource",
    "ImageMediaType",
    "Tool",
    "ToolChoice",
    "AnyToolChoice",
    "AutoToolChoice",
    "NamedToolChoice",
    "RequestMetadata",
    # OpenAI format
    "ChatCompletionRequest",
    "ChatMessage",
    "FunctionDefinition",
    "FunctionTool",
]
