"""Adapter for Anthropic Messages API."""

from typing import Any

import constants
from models.requests import Message, ProviderType, Role
from providers.base import RATE_LIMIT_HINT, BaseProvider, ProviderSettings
from utils.prompts import SamplingParams


class ClaudeProvider(BaseProvider):
    """Claude provider adapter.

    Messages API accepts only user and assistant turns, so system messages
    are moved into the top-level `system` field.
    """

    provider_type = ProviderType.CLAUDE
    display_name = "Claude API"
    default_endpoint = constants.CLAUDE_ENDPOINT

    status_hints = {
        401: "Check if your Claude API key is valid and active.",
        429: RATE_LIMIT_HINT,
    }
    server_error_hint = (
        "This is a server error. The Claude service may be temporarily unavailable."
    )

    def headers(self, settings: ProviderSettings) -> dict[str, str]:
        """Return Anthropic specific headers."""
        return {
            "x-api-key": settings.api_key or "",
            "content-type": "application/json",
            "anthropic-version": constants.CLAUDE_API_VERSION,
        }

    def build_payload(
        self, messages: list[Message], params: SamplingParams
    ) -> dict[str, Any]:
        """Build Messages API request body."""
        system = "\n\n".join(m.content for m in messages if m.role == Role.SYSTEM)
        payload: dict[str, Any] = {
            "model": self.model,
            "max_tokens": params.max_tokens,
            "temperature": params.temperature,
            "messages": [
                m.model_dump(mode="json") for m in messages if m.role != Role.SYSTEM
            ],
        }
        if system:
            payload["system"] = system
        return payload

    def parse_summary(self, data: Any) -> str:
        """Extract text of the first content block."""
        try:
            text = data["content"][0]["text"]
        except (KeyError, IndexError, TypeError):
            return constants.NO_RESPONSE_GENERATED
        return text or constants.NO_RESPONSE_GENERATED

    def network_error_message(self, endpoint: str) -> str:
        """Return message used when Anthropic API can not be reached."""
        return (
            "Network error: Unable to connect to Claude API. "
            "Check your internet connection."
        )
