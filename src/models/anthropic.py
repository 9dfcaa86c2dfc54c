"""
Anthropic Messages Request Models

This module contains the Pydantic models describing the request body of the
Anthropic Messages API: messages and their content blocks, tool definitions,
tool choice, sampling parameters and request metadata.

All models are frozen value objects. Field names match the snake_case wire
names, so a plain ``model_dump(mode="json", exclude_none=True)`` yields the
wire shape. Encoding to bytes goes through src.serialization.request_body,
which is the only supported way to encode a body that carries tools.

Reference Documents:
- Anthropic API Docs: https://docs.anthropic.com/en/api/messages
- GUIDELINES pp. 276: Domain modeling with Pydantic or @dataclass(frozen=True)
- ANTI_PATTERN_ANALYSIS §1.1: Optional types with explicit None

Note: numeric sampling fields are stored as given. Range checks (e.g.
temperature in [0, 1]) are left to the provider.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================


class ImageMediaType(str, Enum):
    """Media types accepted for base64 image content."""

    JPEG = "image/jpeg"
    PNG = "image/png"
    GIF = "image/gif"
    WEBP = "image/webp"


class InputMessageRole(str, Enum):
    """
    One of ``user`` or ``assistant``.

    A system prompt is not a role; use MessageRequestBody.system instead.
    """

    ASSISTANT = "assistant"
    USER = "user"


# =============================================================================
# Content Blocks
# =============================================================================


class TextContent(BaseModel):
    """Plain text content block."""

    type: Literal["text"] = "text"
    text: str

    model_config = {"frozen": True}


class ImageSource(BaseModel):
    """Base64 image payload of an image content block."""

    type: Literal["base64"] = "base64"
    media_type: ImageMediaType
    data: str = Field(..., description="Base64-encoded image bytes")

    model_config = {"frozen": True}


class ImageContent(BaseModel):
    """
    Image content block.

    Wire shape:
        {"type": "image",
         "source": {"type": "base64", "media_type": "image/png", "data": "..."}}
    """

    type: Literal["image"] = "image"
    source: ImageSource

    model_config = {"frozen": True}

    @classmethod
    def from_base64(cls, media_type: ImageMediaType | str, data: str) -> "ImageContent":
        """Build an image block from a media type and a base64 payload."""
        return cls(source=ImageSource(media_type=ImageMediaType(media_type), data=data))


InputContent = Annotated[
    Union[TextContent, ImageContent],
    Field(discriminator="type"),
]


# =============================================================================
# Messages
# =============================================================================


class InputMessage(BaseModel):
    """
    One conversational turn.

    The first message of a request must use the user role. If the final
    message uses the assistant role, the response continues from it.

    Attributes:
        role: user or assistant
        content: Ordered content blocks (text and images)
    """

    role: InputMessageRole
    content: list[InputContent]

    model_config = {"frozen": True}

    @classmethod
    def user(cls, text: str) -> "InputMessage":
        """Shorthand for a single-text user message."""
        return cls(role=InputMessageRole.USER, content=[TextContent(text=text)])

    @classmethod
    def assistant(cls, text: str) -> "InputMessage":
        """Shorthand for a single-text assistant message."""
        return cls(role=InputMessageRole.ASSISTANT, content=[TextContent(text=text)])


# =============================================================================
# Tool Choice
# =============================================================================


class AnyToolChoice(BaseModel):
    """The model must use one of the provided tools."""

    type: Literal["any"] = "any"

    model_config = {"frozen": True}


class AutoToolChoice(BaseModel):
    """The model decides whether to use a tool."""

    type: Literal["auto"] = "auto"

    model_config = {"frozen": True}


class NamedToolChoice(BaseModel):
    """The model must use the named tool."""

    type: Literal["tool"] = "tool"
    name: str

    model_config = {"frozen": True}


ToolChoice = Annotated[
    Union[AnyToolChoice, AutoToolChoice, NamedToolChoice],
    Field(discriminator="type"),
]


# =============================================================================
# Tools
# =============================================================================


class Tool(BaseModel):
    """
    Definition of a tool the model may use.

    Pattern: JSON Schema for parameters (OpenAI/Anthropic compatible)

    Attributes:
        name: The tool name.
        description: What the tool does. The more detail, the better the
            model performs.
        input_schema: JSON schema for the tool input. Opaque to this layer:
            any JSON value is accepted and emitted verbatim.

    Example:
        >>> Tool(
        ...     name="get_stock_price",
        ...     description="Get the current stock price for a given ticker symbol.",
        ...     input_schema={
        ...         "type": "object",
        ...         "properties": {"ticker": {"type": "string"}},
        ...         "required": ["ticker"],
        ...     },
        ... )
    """

    name: str
    description: str
    input_schema: Any = Field(..., description="JSON schema for the tool input")

    model_config = {"frozen": True}


# =============================================================================
# Metadata
# =============================================================================


class RequestMetadata(BaseModel):
    """
    Metadata about the request.

    Attributes:
        user_id: External, opaque identifier of the end user (uuid or hash).
            Never put names, emails or phone numbers here.
    """

    user_id: Optional[str] = None

    model_config = {"frozen": True}


# =============================================================================
# MessageRequestBody
# =============================================================================


class MessageRequestBody(BaseModel):
    """
    Request body for the Anthropic Messages API.

    Required Fields:
        max_tokens: Maximum number of tokens to generate before stopping
        messages: Input messages, alternating user and assistant turns
        model: The model that will complete the prompt

    Optional Fields (omitted from the wire when None):
        metadata: Request metadata
        stop_sequences: Custom strings that stop generation
        stream: Stream the response using server-sent events
        system: System prompt
        temperature: Randomness, 0.0 to 1.0 (not enforced here)
        tool_choice: How the model should use the provided tools
        tools: Tools the model may use
        top_k: Only sample from the top K options
        top_p: Nucleus sampling cutoff

    Encode with src.serialization.safe_encode; input schemas of tools are
    spliced into the output outside of the typed encoder.
    """

    # Required fields
    max_tokens: int
    messages: list[InputMessage]
    model: str

    # Optional fields - Pattern: Optional[T] with None (ANTI_PATTERN §1.1)
    metadata: Optional[RequestMetadata] = None
    stop_sequences: Optional[list[str]] = None
    stream: Optional[bool] = None
    system: Optional[str] = None
    temperature: Optional[float] = None
    tool_choice: Optional[ToolChoice] = None
    tools: Optional[list[Tool]] = None
    top_k: Optional[int] = None
    top_p: Optional[float] = None

    model_config = {"frozen": True}

    @property
    def has_tools(self) -> bool:
        """True when the body carries at least one tool."""
        return bool(self.tools)

    def with_stream(self, stream: bool = True) -> "MessageRequestBody":
        """Return a copy with the streaming flag set; self is left unchanged."""
        return self.model_copy(update={"stream": stream})
