"""Handlers for REST API calls to list content sources and read their text."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends

from models.responses import ExtractTextResponse, NotFoundResponse, TargetsResponse
from services.targets import TargetSource
from utils.endpoints import get_target_source, raise_not_found

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["targets"])


extract_text_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Visible text of the target, empty when it can not be read",
        "model": ExtractTextResponse,
    },
    404: {
        "description": "Unknown target",
        "model": NotFoundResponse,
    },
}


@router.get("/targets")
async def targets_endpoint_handler(
    target_source: Annotated[TargetSource, Depends(get_target_source)],
) -> TargetsResponse:
    """Return content sources that can be summarized."""
    return TargetsResponse(targets=await target_source.list_targets())


@router.get("/targets/{target_id}/text", responses=extract_text_responses)
async def extract_text_endpoint_handler(
    target_id: str,
    target_source: Annotated[TargetSource, Depends(get_target_source)],
) -> ExtractTextResponse:
    """Return visible text of given target."""
    if await target_source.get_target(target_id) is None:
        raise_not_found("target", target_id)
    text = await target_source.extract_text(target_id)
    return ExtractTextResponse(target_id=target_id, text=text)
