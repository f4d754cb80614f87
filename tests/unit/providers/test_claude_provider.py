"""Unit tests for Claude provider adapter."""

import json

import httpx
import pytest

import constants
from errors import ProviderError, TransportError
from models.requests import Language, Message
from providers.base import ProviderSettings
from providers.claude import ClaudeProvider
from utils.prompts import SamplingParams


def make_adapter(handler) -> ClaudeProvider:
    """Create Claude adapter that uses mock transport with given handler."""
    adapter = ClaudeProvider()
    adapter.initialize(
        ProviderSettings(
            api_key="sk-ant-test",
            api_url="https://ignored.example.com",
            transport=httpx.MockTransport(handler),
        )
    )
    return adapter


@pytest.mark.asyncio
async def test_call_api() -> None:
    """Test the request sent to Messages API and response parsing."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200, json={"content": [{"type": "text", "text": "Claude summary"}]}
        )

    adapter = make_adapter(handler)
    response = await adapter.call_api("Cats are mammals.", Language.ENGLISH)
    assert response.summary == "Claude summary"

    request = requests[0]
    # endpoint can't be overridden for Claude
    assert str(request.url) == constants.CLAUDE_ENDPOINT
    assert request.headers["x-api-key"] == "sk-ant-test"
    assert request.headers["anthropic-version"] == "2023-06-01"
    assert "authorization" not in request.headers

    payload = json.loads(request.content)
    assert payload["model"] == "claude-sonnet-4-20250514"
    assert payload["system"] == constants.DEFAULT_PROMPTS["english"]["system_prompt"]
    assert [m["role"] for m in payload["messages"]] == ["user"]
    assert payload["max_tokens"] == 1000


@pytest.mark.asyncio
async def test_call_api_without_system_message() -> None:
    """Test that system field is omitted when there is no system message."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"content": [{"text": "Answer"}]})

    adapter = make_adapter(handler)
    await adapter.call_api([Message(role="user", content="Hi")])

    payload = json.loads(requests[0].content)
    assert "system" not in payload
    assert payload["messages"] == [{"role": "user", "content": "Hi"}]


def test_build_payload_joins_system_messages() -> None:
    """Test that all system messages are moved into system field."""
    adapter = ClaudeProvider()
    messages = [
        Message(role="system", content="First"),
        Message(role="user", content="Hi"),
        Message(role="system", content="Second"),
    ]
    payload = adapter.build_payload(messages, SamplingParams())
    assert payload["system"] == "First\n\nSecond"
    assert payload["messages"] == [{"role": "user", "content": "Hi"}]


def test_parse_summary_empty_content() -> None:
    """Test that missing content block is replaced by placeholder text."""
    adapter = ClaudeProvider()
    assert adapter.parse_summary({"content": []}) == constants.NO_RESPONSE_GENERATED
    assert adapter.parse_summary({"content": [{"text": ""}]}) == (
        constants.NO_RESPONSE_GENERATED
    )


@pytest.mark.asyncio
async def test_call_api_invalid_key() -> None:
    """Test that HTTP 401 is reported with Claude specific hint."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            401, json={"type": "error", "error": {"message": "invalid x-api-key"}}
        )

    adapter = make_adapter(handler)
    with pytest.raises(ProviderError) as e:
        await adapter.call_api("text")

    assert str(e.value).startswith(
        "Claude API request failed (401 Unauthorized): invalid x-api-key"
    )
    assert "Check if your Claude API key is valid and active." in str(e.value)


@pytest.mark.asyncio
async def test_call_api_rate_limited() -> None:
    """Test that HTTP 429 is reported with rate limit hint."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"error": {"message": "rate limited"}})

    adapter = make_adapter(handler)
    with pytest.raises(ProviderError) as e:
        await adapter.call_api("text")
    assert e.value.rate_limited is True
    assert "You have hit rate limits." in str(e.value)


@pytest.mark.asyncio
async def test_call_api_network_error() -> None:
    """Test that unreachable endpoint is reported as transport error."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    adapter = make_adapter(handler)
    with pytest.raises(
        TransportError, match="Network error: Unable to connect to Claude API."
    ):
        await adapter.call_api("text")
