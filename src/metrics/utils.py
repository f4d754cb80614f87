"""Utility functions for metrics handling."""

import metrics
from log import get_logger
from models.config import ProvidersConfiguration
from models.requests import ProviderType
from utils.prompts import get_model_identifier

logger = get_logger(__name__)


def setup_provider_metrics(providers: ProvidersConfiguration) -> None:
    """Publish which provider/model combinations are configured.

    Providers with operator supplied credentials get value 1, the others 0.
    """
    logger.info("Setting up provider metrics")
    for provider in ProviderType:
        defaults = providers.for_provider(provider.value)
        model = get_model_identifier(provider, defaults.model)
        configured = 1 if defaults.api_key is not None else 0
        metrics.provider_model_configuration.labels(provider.value, model).set(
            configured
        )
    logger.info("Provider metrics setup complete")
