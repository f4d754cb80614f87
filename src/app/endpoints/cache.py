"""Handlers for REST API calls to manage summary cache."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from models.requests import CacheSettingsUpdateRequest
from models.responses import (
    CacheSettingsResponse,
    CacheStatsResponse,
    SuccessResponse,
)
from services.orchestrator import RequestOrchestrator
from utils.endpoints import get_orchestrator

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["cache"])


@router.get("/cache/stats")
async def cache_stats_endpoint_handler(
    orchestrator: Annotated[RequestOrchestrator, Depends(get_orchestrator)],
) -> CacheStatsResponse:
    """Return number of cached summaries and approximate storage size."""
    return orchestrator.cache_stats()


@router.delete("/cache")
async def clear_cache_endpoint_handler(
    orchestrator: Annotated[RequestOrchestrator, Depends(get_orchestrator)],
) -> SuccessResponse:
    """Remove all cached summaries."""
    logger.info("Clearing summary cache")
    orchestrator.clear_cache()
    return SuccessResponse()


@router.get("/cache/settings")
async def cache_settings_endpoint_handler(
    orchestrator: Annotated[RequestOrchestrator, Depends(get_orchestrator)],
) -> CacheSettingsResponse:
    """Return maximum number of entries and expiry of the summary cache."""
    return orchestrator.cache_settings()


@router.put("/cache/settings")
async def update_cache_settings_endpoint_handler(
    settings_request: CacheSettingsUpdateRequest,
    orchestrator: Annotated[RequestOrchestrator, Depends(get_orchestrator)],
) -> CacheSettingsResponse:
    """
    Change summary cache settings.

    New settings are persisted together with the cache, lowering the maximum
    number of entries evicts the oldest ones immediately.
    """
    return orchestrator.update_cache_settings(
        max_entries=settings_request.max_entries,
        expiry_days=settings_request.expiry_days,
    )
