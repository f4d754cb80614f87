"""Unit tests for the /metrics REST API endpoint."""

import pytest
from fastapi import Request

from app.endpoints.metrics import metrics_endpoint_handler


@pytest.mark.asyncio
async def test_metrics_endpoint() -> None:
    """Test the metrics endpoint handler."""
    request = Request(
        scope={
            "type": "http",
        }
    )

    response = await metrics_endpoint_handler(request=request)
    assert response is not None
    assert response.status_code == 200
    assert "text/plain" in response.headers["Content-Type"]

    response_body = response.body.decode()

    # Check if the response contains Prometheus metrics format
    assert "# TYPE summarizer_rest_api_calls_total counter" in response_body
    assert "# TYPE summarizer_response_duration_seconds histogram" in response_body
    assert "# TYPE summarizer_provider_model_configuration gauge" in response_body
    assert "# TYPE summarizer_llm_calls_total counter" in response_body
    assert "# TYPE summarizer_llm_calls_failures_total counter" in response_body
    assert "# TYPE summarizer_summary_cache_hits_total counter" in response_body
    assert "# TYPE summarizer_summary_cache_misses_total counter" in response_body
    assert "# TYPE summarizer_chunked_requests_total counter" in response_body
    assert "# TYPE summarizer_pending_requests gauge" in response_body
