"""In-memory cache implementation."""

from typing import Optional

from cache.cache import Cache
from models.cache_entry import CacheEntry
from models.config import SummaryCacheConfiguration
from log import get_logger

logger = get_logger("cache.in_memory_cache")


class InMemoryCache(Cache):
    """In-memory cache implementation.

    Content is lost when the process ends.
    """

    def __init__(self, config: SummaryCacheConfiguration, **kwargs) -> None:
        """Create a new instance of in-memory cache."""
        super().__init__(config.max_entries, config.expiry_days, **kwargs)
        self.cache_config = config
        self._data: dict[str, CacheEntry] = {}
        self._settings: Optional[tuple[int, float]] = None
        self.connect()

    def connect(self) -> None:
        """Initialize connection to storage."""
        logger.info("Connecting to storage")
        self.initialize_cache()

    def connected(self) -> bool:
        """Check if connection to cache is alive."""
        return True

    def initialize_cache(self) -> None:
        """Initialize cache."""
        self.restore_settings()

    def ready(self) -> bool:
        """Check if the cache is ready.

        Returns:
            True in all cases.
        """
        return True

    def _load(self, key: str) -> Optional[CacheEntry]:
        return self._data.get(key)

    def _store(self, key: str, entry: CacheEntry) -> None:
        self._data[key] = entry

    def _contains(self, key: str) -> bool:
        return key in self._data

    def _count(self) -> int:
        return len(self._data)

    def _entries(self) -> list[tuple[str, CacheEntry]]:
        return list(self._data.items())

    def _purge_older_than(self, cutoff: float) -> int:
        expired = [key for key, entry in self._data.items() if entry.timestamp < cutoff]
        for key in expired:
            del self._data[key]
        return len(expired)

    def _evict_oldest(self, count: int) -> None:
        ordered = sorted(
            self._data.items(), key=lambda item: (item[1].timestamp, item[0])
        )
        for key, _ in ordered[:count]:
            logger.debug("Evicting cache entry %s", key)
            del self._data[key]

    def _clear(self) -> None:
        self._data.clear()

    def _load_settings(self) -> Optional[tuple[int, float]]:
        return self._settings

    def _store_settings(self, max_entries: int, expiry_days: float) -> None:
        self._settings = (max_entries, expiry_days)
