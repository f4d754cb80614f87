"""No-operation cache implementation."""

from typing import Optional

from cache.cache import Cache
from models.cache_entry import CacheEntry
from models.config import SummaryCacheConfiguration
from log import get_logger

logger = get_logger("cache.noop_cache")


class NoopCache(Cache):
    """No-operation cache implementation, nothing is ever stored."""

    def __init__(self, config: SummaryCacheConfiguration, **kwargs) -> None:
        """Create a new instance of no-op cache."""
        super().__init__(config.max_entries, config.expiry_days, **kwargs)

    def connect(self) -> None:
        """Initialize connection to storage."""
        logger.info("Connecting to storage")

    def connected(self) -> bool:
        """Check if connection to cache is alive."""
        return True

    def initialize_cache(self) -> None:
        """Initialize cache."""

    def ready(self) -> bool:
        """Check if the cache is ready.

        Returns:
            True in all cases.
        """
        return True

    def _load(self, key: str) -> Optional[CacheEntry]:
        return None

    def _store(self, key: str, entry: CacheEntry) -> None:
        logger.debug("Not storing summary for %s", key)

    def _contains(self, key: str) -> bool:
        return False

    def _count(self) -> int:
        return 0

    def _entries(self) -> list[tuple[str, CacheEntry]]:
        return []

    def _purge_older_than(self, cutoff: float) -> int:
        return 0

    def _evict_oldest(self, count: int) -> None:
        """Nothing to evict."""

    def _clear(self) -> None:
        """Nothing to clear."""

    def _load_settings(self) -> Optional[tuple[int, float]]:
        return None

    def _store_settings(self, max_entries: int, expiry_days: float) -> None:
        """Settings are not persisted."""
