"""Adapter for Portkey AI gateway."""

from typing import Any, Optional, Sequence

import constants
from log import get_logger
from models.requests import CustomPrompts, Language, Message, ProviderType, Role
from models.responses import LLMResponse
from providers.base import (
    RATE_LIMIT_HINT,
    BaseProvider,
    ProviderSettings,
    chat_completion_payload,
    chat_completion_summary,
)
from utils.prompts import SamplingParams, estimate_tokens, sampling_params

logger = get_logger(__name__)

TRUNCATION_MARK = "..."


class PortkeyProvider(BaseProvider):
    """Portkey provider adapter.

    Requests are routed to the upstream LLM by virtual key sent in
    `x-portkey-virtual-key` header.
    """

    provider_type = ProviderType.PORTKEY
    display_name = "Portkey API"
    default_endpoint = constants.PORTKEY_ENDPOINT
    allow_endpoint_override = True
    supports_large_context = True

    status_hints = {
        401: "Check if your Portkey API key is valid and active.",
        403: "Check if your virtual key is valid and has the required permissions.",
        429: RATE_LIMIT_HINT,
    }
    server_error_hint = (
        "This is a server error. The Portkey service may be temporarily unavailable."
    )

    def headers(self, settings: ProviderSettings) -> dict[str, str]:
        """Return bearer authorization and routing headers."""
        headers = {
            "Authorization": f"Bearer {settings.api_key}",
            "Content-Type": "application/json",
            "X-Title": constants.APPLICATION_TITLE,
        }
        if settings.virtual_key:
            headers["x-portkey-virtual-key"] = settings.virtual_key
        return headers

    def build_payload(
        self, messages: list[Message], params: SamplingParams
    ) -> dict[str, Any]:
        """Build chat completion request body."""
        return chat_completion_payload(self.model, messages, params)

    def parse_summary(self, data: Any) -> str:
        """Extract text of the first choice."""
        return chat_completion_summary(data)

    def network_error_message(self, endpoint: str) -> str:
        """Return message used when Portkey gateway can not be reached."""
        return (
            "Network error: Unable to connect to Portkey API endpoint. "
            f"Check your internet connection and URL: {endpoint}"
        )

    async def call_large_context_api(
        self,
        messages: Sequence[Message],
        language: Language = Language.CHINESE,
        custom_prompts: Optional[CustomPrompts] = None,
    ) -> LLMResponse:
        """Trim conversation to fit the token budget and send it."""
        params = sampling_params(language, custom_prompts)
        trimmed = process_large_context(messages, params.max_tokens)
        if len(trimmed) != len(messages):
            logger.info(
                "Conversation trimmed from %d to %d messages", len(messages), len(trimmed)
            )
        return await self.call_api(trimmed, language, custom_prompts)


def process_large_context(
    messages: Sequence[Message],
    max_tokens: int,
    chars_per_token: int = constants.DEFAULT_CHARS_PER_TOKEN,
) -> list[Message]:
    """Keep leading system message and the newest messages that fit.

    One third of `max_tokens` is reserved for the response. The oldest message
    that does not fit completely is truncated and marked with "...", older
    messages are dropped.
    """
    available = max_tokens - max_tokens // 3
    used = 0
    head: list[Message] = []
    rest = list(messages)
    if rest and rest[0].role == Role.SYSTEM:
        head.append(rest.pop(0))
        used += estimate_tokens(head[0].content, chars_per_token)

    kept: list[Message] = []
    for message in reversed(rest):
        tokens = estimate_tokens(message.content, chars_per_token)
        if used + tokens <= available:
            kept.append(message)
            used += tokens
            continue
        remaining_chars = max(available - used, 0) * chars_per_token
        kept.append(
            Message(
                role=message.role,
                content=message.content[:remaining_chars] + TRUNCATION_MARK,
            )
        )
        break

    kept.reverse()
    return head + kept
