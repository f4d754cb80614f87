"""Unit tests for the /readiness and /liveness REST API endpoints."""

from types import SimpleNamespace
from typing import Any

import pytest
from pytest_mock import MockerFixture

from app.endpoints.health import (
    check_readiness,
    liveness_probe_get_method,
    readiness_probe_get_method,
)
from cache.cache_error import CacheError
from cache.in_memory_cache import InMemoryCache
from services.orchestrator import RequestOrchestrator


def make_request(**state: Any) -> Any:
    """Construct object looking like FastAPI request with given app state."""
    return SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(**state)))


@pytest.mark.asyncio
async def test_readiness_probe_success(
    mocker: MockerFixture, summary_cache: InMemoryCache
) -> None:
    """Test that readiness probe succeeds when summary cache is usable."""
    mocker.patch("app.endpoints.health.configuration.is_loaded", return_value=True)
    request = make_request(orchestrator=RequestOrchestrator(cache=summary_cache))
    mock_response = mocker.Mock()

    response = await readiness_probe_get_method(
        request=request, response=mock_response
    )

    assert response.ready is True
    assert response.reason == "Service is ready"
    # status code is not touched for successful probe
    assert not isinstance(mock_response.status_code, int)


@pytest.mark.asyncio
async def test_readiness_probe_fails_without_orchestrator(
    mocker: MockerFixture,
) -> None:
    """Test that readiness probe fails before application startup."""
    mocker.patch("app.endpoints.health.configuration.is_loaded", return_value=True)
    mock_response = mocker.Mock()

    response = await readiness_probe_get_method(
        request=make_request(), response=mock_response
    )

    assert response.ready is False
    assert response.reason == "Request orchestrator is not initialized"
    assert mock_response.status_code == 503


def test_readiness_configuration_not_loaded(mocker: MockerFixture) -> None:
    """Test that service without configuration is not ready."""
    mocker.patch("app.endpoints.health.configuration.is_loaded", return_value=False)
    assert check_readiness(make_request()) == (False, "Configuration not loaded")


def test_readiness_cache_not_ready(
    mocker: MockerFixture, summary_cache: InMemoryCache
) -> None:
    """Test that disconnected summary cache makes service not ready."""
    mocker.patch("app.endpoints.health.configuration.is_loaded", return_value=True)
    mocker.patch.object(summary_cache, "ready", return_value=False)
    request = make_request(orchestrator=RequestOrchestrator(cache=summary_cache))

    assert check_readiness(request) == (False, "Summary cache is not ready")


def test_readiness_cache_check_failed(
    mocker: MockerFixture, summary_cache: InMemoryCache
) -> None:
    """Test that failing summary cache check makes service not ready."""
    mocker.patch("app.endpoints.health.configuration.is_loaded", return_value=True)
    mocker.patch.object(summary_cache, "ready", side_effect=CacheError("boom"))
    request = make_request(orchestrator=RequestOrchestrator(cache=summary_cache))

    assert check_readiness(request) == (False, "Summary cache check failed: boom")


@pytest.mark.asyncio
async def test_liveness_probe() -> None:
    """Test the liveness endpoint handler."""
    response = await liveness_probe_get_method()
    assert response is not None
    assert response.alive is True
