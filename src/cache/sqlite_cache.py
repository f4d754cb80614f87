"""Cache that uses SQLite to store cached summaries."""

from typing import Optional

import sqlite3

from cache.cache import Cache
from cache.cache_error import CacheError
from models.cache_entry import CacheEntry
from models.config import SummaryCacheConfiguration
from log import get_logger
from utils.connection_decorator import connection

logger = get_logger("cache.sqlite_cache")


class SQLiteCache(Cache):
    """Cache that uses SQLite to store cached summaries.

    The cache itself is stored in following table:

    ```
         Column      |            Type             | Nullable |
    -----------------+-----------------------------+----------+
     key             | text                        | not null |
     summary         | text                        |          |
     provider        | text                        |          |
     timestamp       | real                        | not null |
    Indexes:
        "summary_cache_pkey" PRIMARY KEY, btree (key)
        "summary_timestamps" btree (timestamp, key)
    ```

    Operator tunable settings (max entries, expiry days) are stored in
    `cache_settings` table as name/value pairs.
    """

    CREATE_CACHE_TABLE = """
        CREATE TABLE IF NOT EXISTS summary_cache (
            key             text NOT NULL,
            summary         text,
            provider        text,
            timestamp       real NOT NULL,
            PRIMARY KEY(key)
        );
        """

    CREATE_SETTINGS_TABLE = """
        CREATE TABLE IF NOT EXISTS cache_settings (
            name            text NOT NULL,
            value           text NOT NULL,
            PRIMARY KEY(name)
        );
        """

    CREATE_INDEX = """
        CREATE INDEX IF NOT EXISTS summary_timestamps
            ON summary_cache (timestamp, key)
        """

    SELECT_ENTRY_STATEMENT = """
        SELECT summary, provider, timestamp
          FROM summary_cache
         WHERE key=?
        """

    SELECT_ALL_ENTRIES_STATEMENT = """
        SELECT key, summary, provider, timestamp
          FROM summary_cache
         ORDER BY timestamp, key
        """

    UPSERT_ENTRY_STATEMENT = """
        INSERT INTO summary_cache(key, summary, provider, timestamp)
        VALUES (?, ?, ?, ?)
        ON CONFLICT (key)
        DO UPDATE SET summary = excluded.summary,
                      provider = excluded.provider,
                      timestamp = excluded.timestamp
        """

    QUERY_CACHE_SIZE = """
        SELECT count(*) FROM summary_cache;
        """

    DELETE_EXPIRED_STATEMENT = """
        DELETE FROM summary_cache
         WHERE timestamp < ?
        """

    DELETE_OLDEST_STATEMENT = """
        DELETE FROM summary_cache
         WHERE key IN (
            SELECT key FROM summary_cache
             ORDER BY timestamp, key
             LIMIT ?
         )
        """

    DELETE_ALL_STATEMENT = """
        DELETE FROM summary_cache
        """

    SELECT_SETTINGS_STATEMENT = """
        SELECT name, value FROM cache_settings
        """

    UPSERT_SETTING_STATEMENT = """
        INSERT OR REPLACE INTO cache_settings(name, value)
        VALUES (?, ?)
        """

    def __init__(self, config: SummaryCacheConfiguration, **kwargs) -> None:
        """Create a new instance of SQLite cache."""
        super().__init__(config.max_entries, config.expiry_days, **kwargs)
        if config.sqlite is None:
            raise ValueError("Expecting configuration for SQLite cache")
        self.sqlite_config = config.sqlite

        # initialize connection to DB
        self.connect()

    # pylint: disable=W0201
    def connect(self) -> None:
        """Initialize connection to database."""
        logger.info("Connecting to storage")
        # make sure the connection will have known state
        # even if SQLite is not alive
        self.connection = None
        config = self.sqlite_config
        try:
            # the connection is guarded by cache lock, so it can be used from
            # event loop thread as well as from worker threads
            self.connection = sqlite3.connect(
                database=config.db_path, check_same_thread=False
            )
            self.initialize_cache()
        except sqlite3.Error as e:
            if self.connection is not None:
                self.connection.close()
            logger.exception("Error initializing SQLite cache:\n%s", e)
            raise
        self.connection.autocommit = True

    def connected(self) -> bool:
        """Check if connection to cache is alive."""
        if self.connection is None:
            logger.warning("Not connected, need to reconnect later")
            return False
        cursor = None
        try:
            cursor = self.connection.cursor()
            cursor.execute("SELECT 1")
            return True
        except sqlite3.Error as e:
            logger.error("Disconnected from storage: %s", e)
            return False
        finally:
            if cursor is not None:
                try:
                    cursor.close()
                except Exception:  # pylint: disable=broad-exception-caught
                    logger.warning("Unable to close cursor")

    def initialize_cache(self) -> None:
        """Initialize cache - create tables and read persisted settings."""
        if self.connection is None:
            logger.error("Cache is disconnected")
            raise CacheError("Initialize_cache: cache is disconnected")

        cursor = self.connection.cursor()

        logger.info("Initializing table for cache")
        cursor.execute(SQLiteCache.CREATE_CACHE_TABLE)

        logger.info("Initializing table for cache settings")
        cursor.execute(SQLiteCache.CREATE_SETTINGS_TABLE)

        logger.info("Initializing index for cache")
        cursor.execute(SQLiteCache.CREATE_INDEX)

        cursor.close()
        self.connection.commit()

        self.restore_settings()

    def ready(self) -> bool:
        """Check if the cache is ready.

        Returns:
            True if the cache is connected, False otherwise.
        """
        return self.connected()

    def _cursor(self, operation: str) -> sqlite3.Cursor:
        """Return new cursor, raise CacheError when disconnected."""
        if self.connection is None:
            logger.error("Cache is disconnected")
            raise CacheError(f"{operation}: cache is disconnected")
        return self.connection.cursor()

    @connection
    def _load(self, key: str) -> Optional[CacheEntry]:
        cursor = self._cursor("get")
        cursor.execute(self.SELECT_ENTRY_STATEMENT, (key,))
        row = cursor.fetchone()
        cursor.close()
        if row is None:
            return None
        return CacheEntry(summary=row[0], provider=row[1], timestamp=row[2])

    @connection
    def _store(self, key: str, entry: CacheEntry) -> None:
        cursor = self._cursor("set")
        cursor.execute(
            self.UPSERT_ENTRY_STATEMENT,
            (key, entry.summary, entry.provider, entry.timestamp),
        )
        cursor.close()
        self.connection.commit()  # type: ignore[union-attr]

    @connection
    def _contains(self, key: str) -> bool:
        return self._load(key) is not None

    @connection
    def _count(self) -> int:
        cursor = self._cursor("count")
        cursor.execute(self.QUERY_CACHE_SIZE)
        count = cursor.fetchone()[0]
        cursor.close()
        return count

    @connection
    def _entries(self) -> list[tuple[str, CacheEntry]]:
        cursor = self._cursor("stats")
        cursor.execute(self.SELECT_ALL_ENTRIES_STATEMENT)
        rows = cursor.fetchall()
        cursor.close()
        return [
            (row[0], CacheEntry(summary=row[1], provider=row[2], timestamp=row[3]))
            for row in rows
        ]

    @connection
    def _purge_older_than(self, cutoff: float) -> int:
        cursor = self._cursor("purge")
        cursor.execute(self.DELETE_EXPIRED_STATEMENT, (cutoff,))
        deleted = cursor.rowcount
        cursor.close()
        self.connection.commit()  # type: ignore[union-attr]
        return deleted

    @connection
    def _evict_oldest(self, count: int) -> None:
        cursor = self._cursor("evict")
        cursor.execute(self.DELETE_OLDEST_STATEMENT, (count,))
        logger.debug("Evicted %d cache entries", cursor.rowcount)
        cursor.close()
        self.connection.commit()  # type: ignore[union-attr]

    @connection
    def _clear(self) -> None:
        cursor = self._cursor("clear")
        cursor.execute(self.DELETE_ALL_STATEMENT)
        cursor.close()
        self.connection.commit()  # type: ignore[union-attr]

    def _load_settings(self) -> Optional[tuple[int, float]]:
        cursor = self._cursor("load_settings")
        cursor.execute(self.SELECT_SETTINGS_STATEMENT)
        settings = dict(cursor.fetchall())
        cursor.close()
        if "max_entries" not in settings or "expiry_days" not in settings:
            return None
        return int(settings["max_entries"]), float(settings["expiry_days"])

    def _store_settings(self, max_entries: int, expiry_days: float) -> None:
        cursor = self._cursor("store_settings")
        cursor.execute(self.UPSERT_SETTING_STATEMENT, ("max_entries", str(max_entries)))
        cursor.execute(self.UPSERT_SETTING_STATEMENT, ("expiry_days", str(expiry_days)))
        cursor.close()
        self.connection.commit()  # type: ignore[union-attr]
