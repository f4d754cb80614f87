"""Unit tests for NoopCache class."""

import pytest

from cache.noop_cache import NoopCache
from models.config import SummaryCacheConfiguration

URL = "https://example.com/article"


@pytest.fixture(name="cache_fixture")
def cache() -> NoopCache:
    """Fixture with constucted and initialized no-op cache object."""
    c = NoopCache(SummaryCacheConfiguration(type="noop"))
    c.initialize_cache()
    return c


def test_connect(cache_fixture: NoopCache) -> None:
    """Test the behavior of connect method."""
    cache_fixture.connect()
    assert cache_fixture.connected() is True


def test_set(cache_fixture: NoopCache) -> None:
    """Test the behavior of set method."""
    cache_fixture.set(URL, "english", "summary", "openai")


def test_get_after_set(cache_fixture: NoopCache) -> None:
    """Test that nothing is ever returned."""
    cache_fixture.set(URL, "english", "summary", "openai")
    assert cache_fixture.get(URL, "english") is None


def test_get_improper_key(cache_fixture: NoopCache) -> None:
    """Test that empty content key is refused."""
    with pytest.raises(ValueError, match="Content key can not be empty"):
        cache_fixture.get("", "english")


def test_stats(cache_fixture: NoopCache) -> None:
    """Test the behavior of stats method."""
    cache_fixture.set(URL, "english", "summary", "openai")
    stats = cache_fixture.stats()
    assert stats.count == 0
    assert stats.size == 0


def test_clear(cache_fixture: NoopCache) -> None:
    """Test the behavior of clear method."""
    cache_fixture.clear()
    assert cache_fixture.stats().count == 0


def test_update_settings(cache_fixture: NoopCache) -> None:
    """Test that settings are changed for the running instance."""
    settings = cache_fixture.update_settings(max_entries=5, expiry_days=2)
    assert settings.max_entries == 5
    assert settings.expiry_days == 2


def test_ready(cache_fixture: NoopCache) -> None:
    """Test if in memory cache always report ready."""
    assert cache_fixture.ready() is True
