"""Handler for REST API call to chat about summarized content."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from models.requests import ChatRequest, Language
from models.responses import LLMResponse
from services.orchestrator import RequestOrchestrator
from utils.endpoints import get_default_language, get_orchestrator, with_default_language

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["chat"])


@router.post("/chat", responses={200: {"model": LLMResponse}})
async def chat_endpoint_handler(
    chat_request: ChatRequest,
    orchestrator: Annotated[RequestOrchestrator, Depends(get_orchestrator)],
    default_language: Annotated[Language, Depends(get_default_language)],
) -> LLMResponse:
    """
    Handle chat request and wait for the answer.

    When `target_id` is set, the conversation is stored as context of that
    target and can be read back via `GET /v1/contexts/{target_id}`.
    """
    logger.debug("Chat request with %d messages", len(chat_request.messages))
    chat_request = with_default_language(chat_request, default_language)
    return await orchestrator.call_llm(chat_request)
