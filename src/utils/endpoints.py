"""Utility functions for endpoint handlers."""

from typing import NoReturn

from fastapi import HTTPException, Request, status

import constants
from log import get_logger
from models.requests import ChatRequest, Language, SummarizeRequest
from models.responses import NotFoundResponse
from services.orchestrator import RequestOrchestrator
from services.targets import TargetSource
from utils.prompts import text_to_messages

logger = get_logger(__name__)


def get_orchestrator(request: Request) -> RequestOrchestrator:
    """Return orchestrator created by application lifespan."""
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        logger.error("Request orchestrator is not initialized")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "response": "Service is not ready",
                "cause": "Request orchestrator is not initialized",
            },
        )
    return orchestrator


def get_target_source(request: Request) -> TargetSource:
    """Return target source created by application lifespan."""
    target_source = getattr(request.app.state, "target_source", None)
    if target_source is None:
        logger.error("Target source is not initialized")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "response": "Service is not ready",
                "cause": "Target source is not initialized",
            },
        )
    return target_source


def get_default_language(request: Request) -> Language:
    """Return language used for requests that do not specify one."""
    return Language(
        getattr(request.app.state, "default_language", constants.DEFAULT_LANGUAGE)
    )


def with_default_language(
    request: ChatRequest, default_language: Language
) -> ChatRequest:
    """Apply configured default language when request does not set any."""
    if "language" in request.model_fields_set:
        return request
    return request.model_copy(update={"language": default_language})


def summarize_to_chat(
    request: SummarizeRequest, default_language: Language
) -> ChatRequest:
    """Convert text summarization request into single message chat request."""
    language = (
        request.language
        if "language" in request.model_fields_set
        else default_language
    )
    fields = request.model_dump(
        exclude={"text", "request_id", "language"}, exclude_unset=True
    )
    return ChatRequest(
        messages=text_to_messages(request.text, language, request.custom_prompts),
        language=language,
        **fields,
    )


def raise_not_found(resource: str, resource_id: str) -> NoReturn:
    """Raise HTTP 404 for unknown resource."""
    logger.warning("%s %s not found", resource.title(), resource_id)
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=NotFoundResponse(resource=resource, resource_id=resource_id).dump_detail(),
    )
