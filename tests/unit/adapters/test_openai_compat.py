"""
Tests for the OpenAI-format request builder.

Format Differences (OpenAI → Anthropic):
- System prompt: leading role="system" messages → top-level system
- Tool definition: function.parameters → input_schema
- Tool choice: "required" → any, named function → tool
"""

import json

import pytest

from src.adapters.openai_compat import AnthropicBodyBuilder
from src.core.exceptions import ErrorCode, RequestConversionError
from src.models.anthropic import (
    AnyToolChoice,
    AutoToolChoice,
    InputMessageRole,
    NamedToolChoice,
    TextContent,
)
from src.models.openai import ChatCompletionRequest, FunctionTool
from src.serialization.request_body import safe_encode


@pytest.fixture
def builder(test_settings) -> AnthropicBodyBuilder:
    return AnthropicBodyBuilder(settings=test_settings)


def _request(**kwargs) -> ChatCompletionRequest:
    kwargs.setdefault("messages", [{"role": "user", "content": "Hello"}])
    return ChatCompletionRequest.model_validate(kwargs)


class TestBuildRequest:
    """Tests for top-level field mapping."""

    def test_defaults_from_settings(self, builder: AnthropicBodyBuilder) -> None:
        """Missing model and max_tokens fall back to settings."""
        body = builder.build(_request())

        assert body.model == "claude-3-haiku-20240307"
        assert body.max_tokens == 256
        assert body.tools is None
        assert body.system is None

    def test_default_settings_singleton(self) -> None:
        """Without explicit settings the get_settings() defaults apply."""
        body = AnthropicBodyBuilder().build(_request())

        assert body.max_tokens == 1024

    def test_sampling_fields_copied(self, builder: AnthropicBodyBuilder) -> None:
        body = builder.build(
            _request(
                model="claude-3-opus-20240229",
                max_tokens=50,
                temperature=0.3,
                top_p=0.8,
                stream=True,
                user="hash-42",
            )
        )

        assert body.model == "claude-3-opus-20240229"
        assert body.max_tokens == 50
        assert body.temperature == 0.3
        assert body.top_p == 0.8
        assert body.stream is True
        assert body.metadata.user_id == "hash-42"

    @pytest.mark.parametrize(
        "stop, expected",
        [("END", ["END"]), (["a", "b"], ["a", "b"]), (None, None), ([], None)],
    )
    def test_stop_to_stop_sequences(self, builder: AnthropicBodyBuilder, stop, expected) -> None:
        assert builder.build(_request(stop=stop)).stop_sequences == expected

    def test_built_body_encodes(self, builder: AnthropicBodyBuilder) -> None:
        """A converted request serializes with its tool schema intact."""
        parameters = {"type": "object", "properties": {"q": {"type": "string"}}, "required": ["q"]}
        body = builder.build(
            _request(
                tools=[{"type": "function", "function": {"name": "search", "parameters": parameters}}],
                tool_choice="required",
            )
        )

        payload = json.loads(safe_encode(body))

        assert payload["tools"] == [{"description": "", "input_schema": parameters, "name": "search"}]
        assert payload["tool_choice"] == {"type": "any"}


class TestTransformMessages:
    """Tests for message conversion."""

    def test_leading_system_messages_joined(self, builder: AnthropicBodyBuilder) -> None:
        system, messages = builder.transform_messages(
            _request(
                messages=[
                    {"role": "system", "content": "Be brief."},
                    {"role": "system", "content": "Answer in French."},
                    {"role": "user", "content": "Hello"},
                ]
            ).messages
        )

        assert system == "Be brief.\n\nAnswer in French."
        assert len(messages) == 1

    def test_roles_and_text_preserved(self, builder: AnthropicBodyBuilder) -> None:
        _, messages = builder.transform_messages(
            _request(
                messages=[
                    {"role": "user", "content": "Hi"},
                    {"role": "assistant", "content": "Hello!"},
                    {"role": "user", "content": "How are you?"},
                ]
            ).messages
        )

        assert [m.role for m in messages] == [
            InputMessageRole.USER,
            InputMessageRole.ASSISTANT,
            InputMessageRole.USER,
        ]
        assert messages[1].content == [TextContent(text="Hello!")]

    def test_empty_content_skipped(self, builder: AnthropicBodyBuilder) -> None:
        _, messages = builder.transform_messages(
            _request(
                messages=[
                    {"role": "user", "content": "Hi"},
                    {"role": "assistant", "content": ""},
                ]
            ).messages
        )

        assert len(messages) == 1

    def test_late_system_message_rejected(self, builder: AnthropicBodyBuilder) -> None:
        with pytest.raises(RequestConversionError) as exc_info:
            builder.build(
                _request(
                    messages=[
                        {"role": "user", "content": "Hi"},
                        {"role": "system", "content": "late"},
                    ]
                )
            )

        assert exc_info.value.field == "messages[1].role"
        assert exc_info.value.error_code == ErrorCode.CONVERSION_ERROR

    def test_tool_result_rejected(self, builder: AnthropicBodyBuilder) -> None:
        with pytest.raises(RequestConversionError):
            builder.build(
                _request(
                    messages=[
                        {"role": "user", "content": "Hi"},
                        {"role": "tool", "tool_call_id": "call_1", "content": "42"},
                    ]
                )
            )

    def test_assistant_tool_calls_rejected(self, builder: AnthropicBodyBuilder) -> None:
        with pytest.raises(RequestConversionError):
            builder.build(
                _request(
                    messages=[
                        {"role": "user", "content": "Hi"},
                        {
                            "role": "assistant",
                            "tool_calls": [
                                {"id": "call_1", "type": "function", "function": {"name": "f", "arguments": "{}"}}
                            ],
                        },
                    ]
                )
            )

    def test_system_only_rejected(self, builder: AnthropicBodyBuilder) -> None:
        with pytest.raises(RequestConversionError) as exc_info:
            builder.build(_request(messages=[{"role": "system", "content": "only"}]))

        assert exc_info.value.field == "messages"


class TestTransformTools:
    """Tests for tool definition conversion."""

    def test_parameters_become_input_schema(self, builder: AnthropicBodyBuilder) -> None:
        parameters = {
            "type": "object",
            "properties": {"location": {"type": "string", "description": "City name"}},
            "required": ["location"],
        }
        tool = builder.transform_tool_definition(
            FunctionTool.model_validate(
                {
                    "type": "function",
                    "function": {
                        "name": "get_weather",
                        "description": "Get weather for a location",
                        "parameters": parameters,
                    },
                }
            )
        )

        assert tool.name == "get_weather"
        assert tool.description == "Get weather for a location"
        assert tool.input_schema == parameters

    def test_missing_description_and_parameters(self, builder: AnthropicBodyBuilder) -> None:
        tool = builder.transform_tool_definition(
            FunctionTool.model_validate({"type": "function", "function": {"name": "get_time"}})
        )

        assert tool.description == ""
        assert tool.input_schema == {"type": "object", "properties": {}}

    def test_transform_multiple_tools_keeps_order(self, builder: AnthropicBodyBuilder) -> None:
        tools = builder.transform_tools(
            [
                FunctionTool.model_validate({"function": {"name": "tool_a"}}),
                FunctionTool.model_validate({"function": {"name": "tool_b"}}),
            ]
        )

        assert [t.name for t in tools] == ["tool_a", "tool_b"]


class TestTransformToolChoice:
    """Tests for tool_choice conversion."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, None),
            ("none", None),
            ("auto", AutoToolChoice()),
            ("required", AnyToolChoice()),
            ("any", AnyToolChoice()),
            ({"type": "function", "function": {"name": "search"}}, NamedToolChoice(name="search")),
        ],
    )
    def test_supported_values(self, builder: AnthropicBodyBuilder, value, expected) -> None:
        assert builder.transform_tool_choice(value) == expected

    @pytest.mark.parametrize("value", ["sometimes", {"type": "function", "function": {}}, {"type": "x"}])
    def test_unsupported_values(self, builder: AnthropicBodyBuilder, value) -> None:
        with pytest.raises(RequestConversionError) as exc_info:
            builder.transform_tool_choice(value)

        assert exc_info.value.field == "tool_choice"

    def test_tool_choice_dropped_without_tools(self, builder: AnthropicBodyBuilder) -> None:
        assert builder.build(_request(tool_choice="auto")).tool_choice is None
