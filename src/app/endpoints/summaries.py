"""Handlers for REST API calls to summarize text."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, status

from models.requests import Language, SummarizeRequest
from models.responses import (
    LLMResponse,
    NotFoundResponse,
    PendingRequest,
    SubmitResponse,
)
from services.orchestrator import RequestOrchestrator
from utils.endpoints import (
    get_default_language,
    get_orchestrator,
    raise_not_found,
    summarize_to_chat,
)

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["summaries"])


submit_responses: dict[int | str, dict[str, Any]] = {
    202: {
        "description": "Summarization request accepted",
        "model": SubmitResponse,
    },
}

status_responses: dict[int | str, dict[str, Any]] = {
    200: {
        "description": "Current state of summarization request",
        "model": PendingRequest,
    },
    404: {
        "description": "Unknown request ID",
        "model": NotFoundResponse,
    },
}


@router.post(
    "/summaries",
    status_code=status.HTTP_202_ACCEPTED,
    responses=submit_responses,
)
async def submit_summary_endpoint_handler(
    summarize_request: SummarizeRequest,
    orchestrator: Annotated[RequestOrchestrator, Depends(get_orchestrator)],
    default_language: Annotated[Language, Depends(get_default_language)],
) -> SubmitResponse:
    """
    Handle request to start asynchronous summarization.

    The request is processed in background, returned request ID is used to
    poll the result via `GET /v1/summaries/{request_id}`.
    """
    chat_request = summarize_to_chat(summarize_request, default_language)
    request_id = orchestrator.submit(chat_request, summarize_request.request_id)
    return SubmitResponse(request_id=request_id)


@router.get("/summaries/{request_id}", responses=status_responses)
async def summary_status_endpoint_handler(
    request_id: str,
    orchestrator: Annotated[RequestOrchestrator, Depends(get_orchestrator)],
) -> PendingRequest:
    """
    Handle request to retrieve state of asynchronous summarization.

    Raises:
        HTTPException: 404 when the request is unknown or already expired.
    """
    pending = orchestrator.status(request_id)
    if pending is None:
        raise_not_found("request", request_id)
    return pending


@router.post("/summarize", responses={200: {"model": LLMResponse}})
async def summarize_endpoint_handler(
    summarize_request: SummarizeRequest,
    orchestrator: Annotated[RequestOrchestrator, Depends(get_orchestrator)],
    default_language: Annotated[Language, Depends(get_default_language)],
) -> LLMResponse:
    """
    Handle legacy synchronous summarization request.

    Failures are reported in `error` field of the response.
    """
    chat_request = summarize_to_chat(summarize_request, default_language)
    return await orchestrator.call_llm(chat_request)
