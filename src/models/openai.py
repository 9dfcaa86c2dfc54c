"""
OpenAI-format Chat Request Models

Pydantic models for the OpenAI chat-completions request shape that gateways
commonly receive. src.adapters.openai_compat maps them onto
MessageRequestBody.

Reference Documents:
- GUIDELINES: FastAPI Pydantic validators (Sinha pp. 193-195)
- GUIDELINES: Tool/function calling (AI Engineering pp. 1463-1587)
- ANTI_PATTERN_ANALYSIS: §1.1 Optional types with explicit None
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class ChatMessage(BaseModel):
    """
    Chat message in OpenAI format.

    Attributes:
        role: Message role (system, user, assistant, tool)
        content: Message content (can be None for tool calls)
        name: Optional name for the message author
        tool_calls: Optional list of tool calls (for assistant messages)
        tool_call_id: Optional tool call ID (for tool messages)
    """

    role: Literal["system", "user", "assistant", "tool"]
    content: Optional[str] = None
    name: Optional[str] = None
    tool_calls: Optional[list[dict[str, Any]]] = None
    tool_call_id: Optional[str] = None


class FunctionDefinition(BaseModel):
    """Function definition for tool calling."""

    name: str
    description: Optional[str] = None
    parameters: Optional[dict[str, Any]] = None


class FunctionTool(BaseModel):
    """Tool definition for function calling."""

    type: Literal["function"] = "function"
    function: FunctionDefinition


class ChatCompletionRequest(BaseModel):
    """
    OpenAI chat completion request.

    Only the fields with an Anthropic counterpart are modelled; extra
    fields are ignored.
    """

    model: Optional[str] = Field(default=None, description="Model identifier")
    messages: list[ChatMessage] = Field(..., description="Conversation messages")

    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    stream: Optional[bool] = None
    stop: Optional[list[str] | str] = None
    tools: Optional[list[FunctionTool]] = None
    tool_choice: Optional[str | dict[str, Any]] = None
    user: Optional[str] = Field(default=None, description="End-user identifier")

    model_config = {"extra": "ignore"}

    @field_validator("messages")
    @classmethod
    def messages_not_empty(cls, v: list[ChatMessage]) -> list[ChatMessage]:
        """Validate that messages list is not empty."""
        if not v:
            raise ValueError("messages must not be empty")
        return v
