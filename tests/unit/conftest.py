"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

import pytest

from cache.in_memory_cache import InMemoryCache
from models.config import SummaryCacheConfiguration
from tests.unit.utils.provider_stubs import StubProvider, StubProviderFactory


@pytest.fixture(name="summary_cache")
def summary_cache_fixture() -> InMemoryCache:
    """In-memory summary cache with default settings."""
    return InMemoryCache(SummaryCacheConfiguration(type="memory"))


@pytest.fixture(name="stub_provider")
def stub_provider_fixture() -> StubProvider:
    """Provider adapter stub that answers "X" to every call."""
    return StubProvider()


@pytest.fixture(name="stub_factory")
def stub_factory_fixture(stub_provider: StubProvider) -> StubProviderFactory:
    """Provider factory returning the stub adapter."""
    return StubProviderFactory(stub_provider)
