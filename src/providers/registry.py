"""Mapping from provider type to adapter class."""

from errors import ConfigurationError
from models.requests import ProviderType
from providers.base import BaseProvider, ProviderSettings
from providers.claude import ClaudeProvider
from providers.openai import OpenAIProvider
from providers.openrouter import OpenRouterProvider
from providers.portkey import PortkeyProvider

PROVIDERS: dict[ProviderType, type[BaseProvider]] = {
    ProviderType.CLAUDE: ClaudeProvider,
    ProviderType.OPENAI: OpenAIProvider,
    ProviderType.OPENROUTER: OpenRouterProvider,
    ProviderType.PORTKEY: PortkeyProvider,
}


def create_provider(
    provider: ProviderType, settings: ProviderSettings
) -> BaseProvider:
    """Create new initialized adapter for given provider."""
    try:
        provider_class = PROVIDERS[ProviderType(provider)]
    except (KeyError, ValueError) as e:
        raise ConfigurationError(f"Unknown API provider: {provider}") from e
    adapter = provider_class()
    adapter.initialize(settings)
    return adapter
