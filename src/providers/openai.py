"""Adapter for OpenAI chat completions API."""

from typing import Any

import constants
from models.requests import Message, ProviderType
from providers.base import (
    BaseProvider,
    ProviderSettings,
    chat_completion_payload,
    chat_completion_summary,
)
from utils.prompts import SamplingParams


class OpenAIProvider(BaseProvider):
    """OpenAI provider adapter."""

    provider_type = ProviderType.OPENAI
    display_name = "OpenAI API"
    default_endpoint = constants.OPENAI_ENDPOINT

    status_hints = {
        401: (
            "Check if your OpenAI API key is valid. "
            "Get one from https://platform.openai.com/"
        ),
        404: (
            "The model may not be available. "
            "Check available models at https://platform.openai.com/docs/models"
        ),
        429: (
            "Rate limit exceeded. Please wait before trying again "
            "or check your usage limits."
        ),
    }
    server_error_hint = (
        "OpenAI service error. The service may be temporarily unavailable."
    )

    def headers(self, settings: ProviderSettings) -> dict[str, str]:
        """Return bearer authorization header."""
        return {
            "Authorization": f"Bearer {settings.api_key}",
            "Content-Type": "application/json",
        }

    def build_payload(
        self, messages: list[Message], params: SamplingParams
    ) -> dict[str, Any]:
        """Build chat completion request body."""
        return chat_completion_payload(self.model, messages, params)

    def parse_summary(self, data: Any) -> str:
        """Extract text of the first choice."""
        return chat_completion_summary(data)

    def network_error_message(self, endpoint: str) -> str:
        """Return message used when OpenAI API can not be reached."""
        return (
            "Network error: Unable to connect to OpenAI API. "
            "Check your internet connection."
        )
