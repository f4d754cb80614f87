"""Abstract LLM provider adapter shared by all vendors.

Every adapter turns normalized messages into one vendor specific HTTP call and
converts the reply back into `LLMResponse`. Failures are raised as one of:

- `ConfigurationError` when the adapter is used before `initialize`, without
  API key or with malformed endpoint URL,
- `TransportError` when the endpoint can not be reached,
- `ProviderError` for non-2xx status codes and malformed payloads.

Adapters are cheap to construct; a fresh instance is used for each request so
no state is shared between concurrent calls.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence, Union

import httpx
from pydantic import BaseModel, ConfigDict

import constants
import metrics
from errors import ConfigurationError, ProviderError, TransportError
from log import get_logger
from models.requests import CustomPrompts, Language, Message, ProviderType
from models.responses import LLMResponse
from utils.prompts import SamplingParams, get_model_identifier, resolve

logger = get_logger(__name__)

RATE_LIMIT_HINT = "You have hit rate limits. Please wait before trying again."


class ProviderSettings(BaseModel):
    """Credentials and transport options used by one provider call."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    api_key: Optional[str] = None
    api_url: Optional[str] = None
    virtual_key: Optional[str] = None
    model_identifier: Optional[str] = None
    # None disables the transport timeout
    timeout: Optional[float] = constants.DEFAULT_PROVIDER_TIMEOUT_SECONDS
    # used by tests to replace network with mock transport
    transport: Optional[httpx.AsyncBaseTransport] = None


class BaseProvider(ABC):
    """Base class for LLM provider adapters."""

    provider_type: ProviderType
    display_name: str = "API"
    default_endpoint: str
    allow_endpoint_override: bool = False
    supports_large_context: bool = False

    # Tip appended to error message for given HTTP status code
    status_hints: dict[int, str] = {429: RATE_LIMIT_HINT}
    server_error_hint: Optional[str] = None

    def __init__(self) -> None:
        """Create uninitialized adapter."""
        self.settings: Optional[ProviderSettings] = None

    def initialize(self, settings: ProviderSettings) -> None:
        """Initialize the adapter with credentials and options."""
        self.settings = settings

    def validate_config(self) -> ProviderSettings:
        """Check that the adapter was initialized with an API key."""
        if self.settings is None:
            raise ConfigurationError(
                "API provider not initialized. Call initialize() first."
            )
        if not self.settings.api_key:
            raise ConfigurationError("API key is required")
        return self.settings

    @property
    def endpoint(self) -> str:
        """Return URL the request is sent to."""
        if (
            self.allow_endpoint_override
            and self.settings is not None
            and self.settings.api_url
        ):
            return self.settings.api_url
        return self.default_endpoint

    @property
    def model(self) -> str:
        """Return model identifier, provider default when not configured."""
        model_identifier = self.settings.model_identifier if self.settings else None
        return get_model_identifier(self.provider_type, model_identifier)

    async def call_api(
        self,
        messages_or_text: Union[str, Sequence[Message]],
        language: Language = Language.CHINESE,
        custom_prompts: Optional[CustomPrompts] = None,
    ) -> LLMResponse:
        """Send conversation (or text to summarize) to the provider.

        Args:
            messages_or_text: Prebuilt conversation or raw text.
            language: Language of the default prompts.
            custom_prompts: Optional prompt templates overriding defaults.

        Returns:
            Normalized provider response.

        Raises:
            ConfigurationError: Adapter not initialized or API key missing.
            TransportError: Endpoint can not be reached.
            ProviderError: Provider returned error or malformed payload.
        """
        settings = self.validate_config()
        messages, params = resolve(messages_or_text, language, custom_prompts)
        payload = self.build_payload(messages, params)
        metrics.llm_calls_total.labels(self.provider_type.value, self.model).inc()
        try:
            data = await self.post(settings, payload)
        except (ConfigurationError, TransportError, ProviderError):
            metrics.llm_calls_failures_total.labels(self.provider_type.value).inc()
            raise
        return LLMResponse(summary=self.parse_summary(data))

    async def call_large_context_api(
        self,
        messages: Sequence[Message],
        language: Language = Language.CHINESE,
        custom_prompts: Optional[CustomPrompts] = None,
    ) -> LLMResponse:
        """Send conversation that might not fit into model context window."""
        raise NotImplementedError(
            f"{self.display_name} does not support large context calls"
        )

    async def post(self, settings: ProviderSettings, payload: dict[str, Any]) -> Any:
        """Make single HTTP POST call and return decoded JSON body."""
        endpoint = self.endpoint
        logger.debug("Calling %s model %s at %s", self.display_name, self.model, endpoint)
        try:
            async with httpx.AsyncClient(
                timeout=settings.timeout, transport=settings.transport
            ) as client:
                response = await client.post(
                    endpoint, headers=self.headers(settings), json=payload
                )
        except httpx.InvalidURL as e:
            logger.error("Invalid %s endpoint %s: %s", self.display_name, endpoint, e)
            raise ConfigurationError(f"Invalid API endpoint URL: {endpoint}") from e
        except httpx.TransportError as e:
            logger.error("Unable to reach %s: %s", endpoint, e)
            raise TransportError(endpoint, self.network_error_message(endpoint)) from e

        if response.is_error:
            raise self.status_error(response)

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(
                f"{self.display_name} returned malformed response",
                status_code=response.status_code,
                details=response.text[:200],
            ) from e

    def status_error(self, response: httpx.Response) -> ProviderError:
        """Convert non-2xx response into ProviderError with actionable hint."""
        status_code = response.status_code
        details = error_details(response)
        message = (
            f"{self.display_name} request failed "
            f"({status_code} {response.reason_phrase}): {details}"
        )
        hint = self.status_hints.get(status_code)
        if hint is None and status_code >= 500:
            hint = self.server_error_hint
        if hint is not None:
            message += f"\n\nTip: {hint}"
        logger.warning("%s returned status %d: %s", self.display_name, status_code, details)
        return ProviderError(message, status_code=status_code, details=details)

    def network_error_message(self, endpoint: str) -> str:
        """Return message used when endpoint can not be reached."""
        return (
            "Network error: Unable to connect to API endpoint. "
            f"Check your internet connection and URL: {endpoint}"
        )

    @abstractmethod
    def headers(self, settings: ProviderSettings) -> dict[str, str]:
        """Return HTTP headers with credentials."""

    @abstractmethod
    def build_payload(
        self, messages: list[Message], params: SamplingParams
    ) -> dict[str, Any]:
        """Build vendor specific request body."""

    @abstractmethod
    def parse_summary(self, data: Any) -> str:
        """Extract generated text from vendor specific response body."""


def error_details(response: httpx.Response) -> str:
    """Extract vendor error message from response body."""
    try:
        data = response.json()
    except ValueError:
        return "Unknown error"
    if not isinstance(data, dict):
        return "Unknown error"
    error = data.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, str) and error:
        return error
    return str(data.get("message") or "Unknown error")


def chat_completion_payload(
    model: str, messages: list[Message], params: SamplingParams
) -> dict[str, Any]:
    """Build OpenAI compatible chat completion request body."""
    return {
        "model": model,
        "messages": [message.model_dump(mode="json") for message in messages],
        "max_tokens": params.max_tokens,
        "temperature": params.temperature,
    }


def chat_completion_summary(data: Any) -> str:
    """Extract text from OpenAI compatible chat completion response."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return constants.NO_RESPONSE_GENERATED
    return str(content) if content else constants.NO_RESPONSE_GENERATED
