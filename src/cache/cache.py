"""Abstract class that is parent for all summary cache implementations.

Cache entries are stored under key "<content-key>|<language>". Eviction and
expiry policy is shared by all implementations:

- an entry older than configured expiry is treated as absent by `get`
  (entry exactly `expiry` seconds old is still valid)
- `set` first purges expired entries, then evicts the oldest entries
  (ordered by timestamp, ties broken by key) until a new entry fits
- `set` is serialized, so the entry count never exceeds the maximum
"""

import json
import threading
from abc import ABC, abstractmethod
from time import time
from typing import Callable, Optional

import constants
from log import get_logger
from models.cache_entry import CacheEntry
from models.responses import CacheSettingsResponse, CacheStatsResponse

logger = get_logger("cache.cache")


class Cache(ABC):
    """Abstract class that is parent for all summary cache implementations."""

    def __init__(
        self,
        max_entries: int,
        expiry_days: float,
        clock: Callable[[], float] = time,
    ) -> None:
        """Initialize shared cache settings."""
        self.max_entries = max_entries
        self.expiry_days = expiry_days
        self.clock = clock
        self._lock = threading.RLock()

    @staticmethod
    def construct_key(content_key: str, language: str) -> str:
        """Construct key to cache."""
        if not content_key:
            raise ValueError("Content key can not be empty")
        return f"{content_key}{constants.CACHE_KEY_SEPARATOR}{language}"

    @property
    def expiry_seconds(self) -> float:
        """Return entry expiry in seconds."""
        return self.expiry_days * constants.SECONDS_PER_DAY

    def is_expired(self, entry: CacheEntry, now: float) -> bool:
        """Check if entry is too old to be returned."""
        return now - entry.timestamp > self.expiry_seconds

    def get(self, content_key: str, language: str) -> Optional[CacheEntry]:
        """Get the entry associated with the given content key and language.

        Args:
            content_key: Content identification, usually URL.
            language: Language of the summary.

        Returns:
            The entry, or None if not found or expired.
        """
        key = Cache.construct_key(content_key, language)
        with self._lock:
            entry = self._load(key)
        if entry is None:
            return None
        if self.is_expired(entry, self.clock()):
            logger.debug("Cache entry for %s is expired", key)
            return None
        return entry

    def set(
        self, content_key: str, language: str, summary: str, provider: str
    ) -> None:
        """Set the summary associated with the given content key and language.

        Args:
            content_key: Content identification, usually URL.
            language: Language of the summary.
            summary: The summary to store.
            provider: Provider that produced the summary.
        """
        key = Cache.construct_key(content_key, language)
        with self._lock:
            now = self.clock()
            purged = self._purge_older_than(now - self.expiry_seconds)
            if purged:
                logger.info("Purged %d expired cache entries", purged)

            if not self._contains(key):
                overflow = self._count() - self.max_entries + 1
                if overflow > 0:
                    logger.info("Evicting %d oldest cache entries", overflow)
                    self._evict_oldest(overflow)

            entry = CacheEntry(summary=summary, provider=provider, timestamp=now)
            self._store(key, entry)

    def stats(self) -> CacheStatsResponse:
        """Return number of entries and approximate storage size in bytes."""
        with self._lock:
            entries = self._entries()
        size = sum(
            len(json.dumps({key: entry.model_dump()}, ensure_ascii=False).encode())
            for key, entry in entries
        )
        return CacheStatsResponse(count=len(entries), size=size)

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._clear()
        logger.info("Summary cache cleared")

    def settings(self) -> CacheSettingsResponse:
        """Return current cache settings."""
        return CacheSettingsResponse(
            max_entries=self.max_entries, expiry_days=self.expiry_days
        )

    def update_settings(
        self, max_entries: Optional[int] = None, expiry_days: Optional[float] = None
    ) -> CacheSettingsResponse:
        """Change cache settings and persist them.

        Lowering the maximum entry count evicts the oldest entries right away.
        """
        with self._lock:
            if max_entries is not None:
                self.max_entries = max_entries
            if expiry_days is not None:
                self.expiry_days = expiry_days
            self._store_settings(self.max_entries, self.expiry_days)
            overflow = self._count() - self.max_entries
            if overflow > 0:
                self._evict_oldest(overflow)
        logger.info(
            "Cache settings changed: max entries %d, expiry %s days",
            self.max_entries,
            self.expiry_days,
        )
        return self.settings()

    def restore_settings(self) -> None:
        """Use settings persisted in storage, or persist current ones."""
        with self._lock:
            stored = self._load_settings()
            if stored is None:
                self._store_settings(self.max_entries, self.expiry_days)
                return
            self.max_entries, self.expiry_days = stored
        logger.info(
            "Using persisted cache settings: max entries %d, expiry %s days",
            self.max_entries,
            self.expiry_days,
        )

    @abstractmethod
    def connect(self) -> None:
        """Initialize connection to storage."""

    @abstractmethod
    def connected(self) -> bool:
        """Check if connection to storage is alive."""

    @abstractmethod
    def initialize_cache(self) -> None:
        """Initialize cache."""

    @abstractmethod
    def ready(self) -> bool:
        """Check if the cache is ready."""

    @abstractmethod
    def _load(self, key: str) -> Optional[CacheEntry]:
        """Read one entry regardless of its age."""

    @abstractmethod
    def _store(self, key: str, entry: CacheEntry) -> None:
        """Insert or overwrite one entry."""

    @abstractmethod
    def _contains(self, key: str) -> bool:
        """Check if entry exists regardless of its age."""

    @abstractmethod
    def _count(self) -> int:
        """Return number of stored entries."""

    @abstractmethod
    def _entries(self) -> list[tuple[str, CacheEntry]]:
        """Return all stored entries."""

    @abstractmethod
    def _purge_older_than(self, cutoff: float) -> int:
        """Delete entries with timestamp before cutoff, return their count."""

    @abstractmethod
    def _evict_oldest(self, count: int) -> None:
        """Delete given number of entries, oldest first, ties broken by key."""

    @abstractmethod
    def _clear(self) -> None:
        """Delete all entries."""

    @abstractmethod
    def _load_settings(self) -> Optional[tuple[int, float]]:
        """Read persisted max entries and expiry days, if any."""

    @abstractmethod
    def _store_settings(self, max_entries: int, expiry_days: float) -> None:
        """Persist max entries and expiry days."""
