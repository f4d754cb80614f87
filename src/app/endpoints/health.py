"""Handlers for health REST API endpoints.

These endpoints are used to check if service is live and prepared to accept
requests.
"""

import logging
from typing import Any

from fastapi import APIRouter, Request, Response, status

from cache.cache_error import CacheError
from configuration import configuration
from models.responses import LivenessResponse, ReadinessResponse

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["health"])


def check_readiness(request: Request) -> tuple[bool, str]:
    """Check that configuration is loaded and orchestrator can serve requests.

    Returns:
        tuple[bool, str]: (is_ready, detailed_reason)
    """
    if not configuration.is_loaded():
        return False, "Configuration not loaded"

    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        return False, "Request orchestrator is not initialized"

    try:
        if not orchestrator.ready():
            return False, "Summary cache is not ready"
    except CacheError as e:
        return False, f"Summary cache check failed: {e}"

    return True, "Service is ready"


get_readiness_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Service is ready",
        "model": ReadinessResponse,
    },
    503: {
        "description": "Service is not ready",
        "model": ReadinessResponse,
    },
}


@router.get("/readiness", responses=get_readiness_responses)
async def readiness_probe_get_method(
    request: Request,
    response: Response,
) -> ReadinessResponse:
    """
    Return readiness of the service.

    Returns 200 when configuration is loaded and summary cache is usable,
    503 otherwise.
    """
    logger.info("Response to /readiness endpoint")

    ready, reason = check_readiness(request)
    if not ready:
        logger.warning("Service is not ready: %s", reason)
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return ReadinessResponse(ready=ready, reason=reason)


get_liveness_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Service is alive",
        "model": LivenessResponse,
    },
    # HTTP_503_SERVICE_UNAVAILABLE will never be returned when unreachable
}


@router.get("/liveness", responses=get_liveness_responses)
async def liveness_probe_get_method() -> LivenessResponse:
    """
    Return the liveness status of the service.

    Returns:
        LivenessResponse: Indicates that the service is alive.
    """
    logger.info("Response to /liveness endpoint")

    return LivenessResponse(alive=True)
