"""Handlers for REST API calls to manage conversation contexts."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from models.responses import ContextResponse, SuccessResponse
from services.orchestrator import RequestOrchestrator
from utils.endpoints import get_orchestrator

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["contexts"])


@router.get("/contexts/{target_id}")
async def get_context_endpoint_handler(
    target_id: str,
    orchestrator: Annotated[RequestOrchestrator, Depends(get_orchestrator)],
) -> ContextResponse:
    """Return the last conversation sent for given target, null if none."""
    return ContextResponse(context=orchestrator.get_context(target_id))


@router.delete("/contexts/{target_id}")
async def clear_context_endpoint_handler(
    target_id: str,
    orchestrator: Annotated[RequestOrchestrator, Depends(get_orchestrator)],
) -> SuccessResponse:
    """Forget conversation of given target."""
    logger.info("Clearing conversation context for target %s", target_id)
    orchestrator.clear_context(target_id)
    return SuccessResponse()


@router.delete("/contexts")
async def clear_all_contexts_endpoint_handler(
    orchestrator: Annotated[RequestOrchestrator, Depends(get_orchestrator)],
) -> SuccessResponse:
    """Forget conversations of all targets."""
    logger.info("Clearing all conversation contexts")
    orchestrator.clear_all_contexts()
    return SuccessResponse()
