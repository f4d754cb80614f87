"""Unit tests for the app/main.py application and its lifespan."""

from fastapi.testclient import TestClient

import metrics
from app.main import app, app_routes_paths
from services.orchestrator import RequestOrchestrator


def test_app_routes_paths() -> None:
    """Test that REST API routes are registered."""
    for path in (
        "/",
        "/v1/info",
        "/v1/targets",
        "/v1/summaries",
        "/v1/summaries/{request_id}",
        "/v1/summarize",
        "/v1/chat",
        "/v1/cache/stats",
        "/v1/cache/settings",
        "/v1/contexts/{target_id}",
        "/v1/actions",
        "/readiness",
        "/liveness",
        "/metrics",
    ):
        assert path in app_routes_paths


def test_lifespan() -> None:
    """Test that lifespan creates orchestrator and stops it on shutdown."""
    with TestClient(app) as client:
        orchestrator = app.state.orchestrator
        assert isinstance(orchestrator, RequestOrchestrator)
        # periodic cleanup is running
        assert orchestrator._cleanup_task is not None  # pylint: disable=W0212

        response = client.get("/readiness")
        assert response.status_code == 200
        assert response.json() == {"ready": True, "reason": "Service is ready"}

        response = client.get("/v1/targets")
        assert response.status_code == 200
        assert response.json()["targets"][0]["url"] == "https://example.com"

        response = client.get("/v1/cache/settings")
        assert response.status_code == 200
        assert response.json() == {"max_entries": 10, "expiry_days": 1}

    assert orchestrator._cleanup_task is None  # pylint: disable=W0212


def test_unknown_request() -> None:
    """Test that unknown request ID results in HTTP 404."""
    with TestClient(app) as client:
        response = client.get("/v1/summaries/123")
    assert response.status_code == 404
    assert response.json() == {
        "detail": {
            "response": "Request not found",
            "cause": "Request with ID 123 does not exist.",
        }
    }


def test_invalid_request_body() -> None:
    """Test that malformed request body results in HTTP 422."""
    with TestClient(app) as client:
        response = client.post("/v1/summaries", json={"text": "x"})
    assert response.status_code == 422


def test_rest_api_metrics() -> None:
    """Test that REST API calls are counted by middleware."""
    counter = metrics.rest_api_calls_total.labels("/liveness", 200)
    before = counter._value.get()  # pylint: disable=W0212

    with TestClient(app) as client:
        response = client.get("/liveness")
    assert response.status_code == 200

    assert counter._value.get() == before + 1  # pylint: disable=W0212
