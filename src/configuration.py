"""Configuration loader."""

import logging
from typing import Any, Optional

import yaml
from models.config import (
    Configuration,
    ContextConfiguration,
    OrchestratorConfiguration,
    ProvidersConfiguration,
    ServiceConfiguration,
    SummaryCacheConfiguration,
    TargetConfiguration,
)


logger = logging.getLogger(__name__)


class LogicError(Exception):
    """Error in application logic."""


class AppConfig:
    """Singleton class to load and store the configuration."""

    _instance = None

    def __new__(cls, *args: Any, **kwargs: Any) -> "AppConfig":
        """Create a new instance of the class."""
        if not isinstance(cls._instance, cls):
            cls._instance = super().__new__(cls, *args, **kwargs)
        return cls._instance

    def __init__(self) -> None:
        """Initialize the class instance."""
        self._configuration: Optional[Configuration] = None

    def load_configuration(self, filename: str) -> None:
        """Load configuration from YAML file."""
        with open(filename, encoding="utf-8") as fin:
            config_dict = yaml.safe_load(fin)
            logger.info("Loaded configuration from %s", filename)
            self.init_from_dict(config_dict)

    def init_from_dict(self, config_dict: dict[Any, Any]) -> None:
        """Initialize configuration from a dictionary."""
        self._configuration = Configuration(**config_dict)

    def is_loaded(self) -> bool:
        """Check if configuration has been loaded."""
        return self._configuration is not None

    @property
    def configuration(self) -> Configuration:
        """Return the whole configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration

    @property
    def service_configuration(self) -> ServiceConfiguration:
        """Return service configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.service

    @property
    def summary_cache_configuration(self) -> SummaryCacheConfiguration:
        """Return summary cache configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.summary_cache

    @property
    def orchestrator_configuration(self) -> OrchestratorConfiguration:
        """Return request orchestrator configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.orchestrator

    @property
    def context_configuration(self) -> ContextConfiguration:
        """Return large context handling configuration."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.context

    @property
    def providers_configuration(self) -> ProvidersConfiguration:
        """Return per-provider defaults."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.providers

    @property
    def targets(self) -> list[TargetConfiguration]:
        """Return configured content sources."""
        if self._configuration is None:
            raise LogicError("logic error: configuration is not loaded")
        return self._configuration.targets


configuration: AppConfig = AppConfig()
