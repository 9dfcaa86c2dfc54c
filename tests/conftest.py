"""
Pytest configuration and shared fixtures.

This configuration sets up:
- Test discovery paths
- Test markers for categorization
- Sample request bodies and tools
- Settings and logging isolation
"""

import sys
from pathlib import Path

import pytest

# Add project root to Python path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")


# =============================================================================
# Settings / Logging Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _isolate_settings():
    """Clear the cached settings singleton around every test."""
    from src.core.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings():
    """Settings with explicit, test-friendly values."""
    from src.core.config import Settings

    return Settings(
        service_name="anthropic-request-body-test",
        environment="development",
        log_level="DEBUG",
        default_model="claude-3-haiku-20240307",
        default_max_tokens=256,
    )


@pytest.fixture
def log_stream():
    """Route structured logs into a StringIO for the duration of a test."""
    import io

    from src.observability.logging import configure_logging, reset_logging

    stream = io.StringIO()
    configure_logging(level="DEBUG", stream=stream, force=True)
    yield stream
    reset_logging()


# =============================================================================
# Sample Models
# =============================================================================


@pytest.fixture
def stock_price_schema():
    """JSON schema of the get_stock_price tool."""
    return {
        "type": "object",
        "properties": {
            "ticker": {
                "type": "string",
                "description": "The stock ticker symbol, e.g. AAPL for Apple Inc.",
            }
        },
        "required": ["ticker"],
    }


@pytest.fixture
def stock_price_tool(stock_price_schema):
    """The get_stock_price tool."""
    from src.models.anthropic import Tool

    return Tool(
        name="get_stock_price",
        description="Get the current stock price for a given ticker symbol.",
        input_schema=stock_price_schema,
    )


@pytest.fixture
def weather_tool():
    """A second tool with a nested schema."""
    from src.models.anthropic import Tool

    return Tool(
        name="get_weather",
        description="Get the weather for a location.",
        input_schema={
            "type": "object",
            "properties": {
                "location": {"type": "string"},
                "unit": {"type": "string", "enum": ["celsius", "fahrenheit"]},
                "days": {"type": ["integer", "null"], "default": None},
            },
            "required": ["location"],
        },
    )


@pytest.fixture
def sample_body():
    """A request body without tools."""
    from src.models.anthropic import InputMessage, MessageRequestBody

    return MessageRequestBody(
        max_tokens=1024,
        messages=[InputMessage.user("Hello, Claude")],
        model="claude-3-5-sonnet-20241022",
    )


@pytest.fixture
def sample_body_with_tools(stock_price_tool, weather_tool):
    """A request body carrying two tools and a tool choice."""
    from src.models.anthropic import AutoToolChoice, InputMessage, MessageRequestBody

    return MessageRequestBody(
        max_tokens=512,
        messages=[InputMessage.user("What's the S&P 500 at today?")],
        model="claude-3-5-sonnet-20241022",
        tool_choice=AutoToolChoice(),
        tools=[stock_price_tool, weather_tool],
    )
