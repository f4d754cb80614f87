"""Cache factory class."""

from typing import Any

import constants
from models.config import SummaryCacheConfiguration
from cache.cache import Cache
from cache.noop_cache import NoopCache
from cache.in_memory_cache import InMemoryCache
from cache.sqlite_cache import SQLiteCache
from log import get_logger

logger = get_logger("cache.cache_factory")


# pylint: disable=R0903
class CacheFactory:
    """Cache factory class."""

    @staticmethod
    def summary_cache(config: SummaryCacheConfiguration, **kwargs: Any) -> Cache:
        """Create an instance of Cache based on loaded configuration.

        Returns:
            An instance of `Cache` (either `SQLiteCache`, `InMemoryCache` or `NoopCache`).
        """
        logger.info("Creating cache instance of type %s", config.type)
        match config.type:
            case constants.CACHE_TYPE_NOOP:
                return NoopCache(config, **kwargs)
            case constants.CACHE_TYPE_MEMORY:
                return InMemoryCache(config, **kwargs)
            case constants.CACHE_TYPE_SQLITE:
                if config.sqlite is not None:
                    return SQLiteCache(config, **kwargs)
                raise ValueError("Expecting configuration for SQLite cache")
            case None:
                raise ValueError("Cache type must be set")
            case _:
                raise ValueError(
                    f"Invalid cache type: {config.type}. "
                    f"Use '{constants.CACHE_TYPE_SQLITE}', "
                    f"'{constants.CACHE_TYPE_MEMORY}' or '{constants.CACHE_TYPE_NOOP}' options."
                )
