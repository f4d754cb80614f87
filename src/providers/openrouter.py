"""Adapter for OpenRouter, OpenAI compatible routing service."""

from typing import Any

import constants
from models.requests import Message, ProviderType
from providers.base import (
    RATE_LIMIT_HINT,
    BaseProvider,
    ProviderSettings,
    chat_completion_payload,
    chat_completion_summary,
)
from utils.prompts import SamplingParams


class OpenRouterProvider(BaseProvider):
    """OpenRouter provider adapter.

    Model identifiers use provider/model format, like `openai/gpt-4` or
    `anthropic/claude-3-5-sonnet`.
    """

    provider_type = ProviderType.OPENROUTER
    default_endpoint = constants.OPENROUTER_ENDPOINT
    allow_endpoint_override = True

    status_hints = {
        401: "Check if your API key is valid and active.",
        429: RATE_LIMIT_HINT,
    }
    server_error_hint = (
        "This is a server error. The API service may be temporarily unavailable."
    )

    def headers(self, settings: ProviderSettings) -> dict[str, str]:
        """Return bearer authorization and application attribution headers."""
        return {
            "Authorization": f"Bearer {settings.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": constants.APPLICATION_REFERER,
            "X-Title": constants.APPLICATION_TITLE,
        }

    def build_payload(
        self, messages: list[Message], params: SamplingParams
    ) -> dict[str, Any]:
        """Build chat completion request body."""
        return chat_completion_payload(self.model, messages, params)

    def parse_summary(self, data: Any) -> str:
        """Extract text of the first choice."""
        return chat_completion_summary(data)
