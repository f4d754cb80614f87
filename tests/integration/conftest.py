"""Shared fixtures for integration tests."""

from pathlib import Path
from typing import Any, Generator

import httpx
import pytest

from configuration import configuration

OPENAI_REPLY = {
    "id": "chatcmpl-1",
    "object": "chat.completion",
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "Cats are small mammals."},
            "finish_reason": "stop",
        }
    ],
}


@pytest.fixture(autouse=True)
def reset_configuration_state() -> Generator:
    """Reset configuration state before each integration test.

    This autouse fixture ensures test independence by resetting the
    singleton configuration state before each test runs. Configuration
    used by other test suites is restored afterwards.
    """
    # pylint: disable=protected-access
    original = configuration._configuration
    configuration._configuration = None
    yield
    configuration._configuration = original


@pytest.fixture(name="test_config", scope="function")
def test_config_fixture() -> Generator:
    """Load real configuration for integration tests.

    This fixture loads the actual configuration file used in testing,
    demonstrating integration with the configuration system.
    """
    config_path = (
        Path(__file__).parent.parent / "configuration" / "summarizer-stack.yaml"
    )
    assert config_path.exists(), f"Config file not found: {config_path}"

    # Load configuration
    configuration.load_configuration(str(config_path))

    yield configuration
    # Note: Cleanup is handled by the autouse reset_configuration_state fixture


class ProviderServer:
    """Fake LLM provider answering chat completion calls."""

    def __init__(self, status_code: int = 200, body: Any = None) -> None:
        self.status_code = status_code
        self.body = OPENAI_REPLY if body is None else body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        """Transport that routes provider calls to this server."""
        return httpx.MockTransport(self)


@pytest.fixture(name="provider_server")
def provider_server_fixture() -> ProviderServer:
    """Fake provider with successful replies."""
    return ProviderServer()

