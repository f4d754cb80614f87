"""Unit tests for the /chat REST API endpoint."""

import pytest

from app.endpoints.chat import chat_endpoint_handler
from cache.in_memory_cache import InMemoryCache
from models.requests import ChatRequest, Language, Message
from services.orchestrator import RequestOrchestrator
from tests.unit.utils.provider_stubs import StubProvider, StubProviderFactory


@pytest.fixture(name="orchestrator")
def orchestrator_fixture(
    summary_cache: InMemoryCache, stub_factory: StubProviderFactory
) -> RequestOrchestrator:
    """Orchestrator with stub provider."""
    return RequestOrchestrator(cache=summary_cache, provider_factory=stub_factory)


CONVERSATION = [
    Message(role="user", content="What is this page about?"),
    Message(role="assistant", content="It is about cats."),
    Message(role="user", content="Which breeds are mentioned?"),
]


@pytest.mark.asyncio
async def test_chat(
    orchestrator: RequestOrchestrator, stub_provider: StubProvider
) -> None:
    """Test that conversation is sent to provider unchanged."""
    stub_provider.replies = ["Siamese and Persian."]
    request = ChatRequest(messages=CONVERSATION, provider="openai", api_key="k")

    response = await chat_endpoint_handler(
        chat_request=request,
        orchestrator=orchestrator,
        default_language=Language.ENGLISH,
    )

    assert response.summary == "Siamese and Persian."
    assert response.error is None
    assert stub_provider.calls == [("call_api", CONVERSATION)]


@pytest.mark.asyncio
async def test_chat_stores_context(orchestrator: RequestOrchestrator) -> None:
    """Test that conversation is stored as context of the target."""
    request = ChatRequest(
        messages=CONVERSATION, provider="openai", api_key="k", target_id="42"
    )

    await chat_endpoint_handler(
        chat_request=request,
        orchestrator=orchestrator,
        default_language=Language.ENGLISH,
    )

    assert orchestrator.get_context("42") == CONVERSATION


@pytest.mark.asyncio
async def test_chat_failure(summary_cache: InMemoryCache) -> None:
    """Test that missing API key is reported in error field."""
    orchestrator = RequestOrchestrator(cache=summary_cache)
    request = ChatRequest(messages=CONVERSATION, provider="claude")

    response = await chat_endpoint_handler(
        chat_request=request,
        orchestrator=orchestrator,
        default_language=Language.ENGLISH,
    )

    assert response.summary == ""
    assert response.error == "API key is required"
