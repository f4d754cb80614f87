"""Handler for message based API where the operation is selected by action tag.

Every action maps to one of the REST endpoints; the payload of the action is
the body the REST endpoint would receive. Action tags used by the browser
extension client are accepted as aliases, together with its envelope fields
(`requestId`, `tabId`, `url`, `forceFresh`).
"""

import logging
from typing import Annotated, Any, Awaitable, Callable, NamedTuple, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError

from models.requests import (
    ActionRequest,
    CacheSettingsUpdateRequest,
    ChatRequest,
    Language,
    SummarizeRequest,
)
from models.responses import (
    BadRequestResponse,
    ContextResponse,
    ExtractTextResponse,
    SubmitResponse,
    SuccessResponse,
    TargetsResponse,
)
from services.orchestrator import RequestOrchestrator
from services.targets import TargetSource
from utils.endpoints import (
    get_default_language,
    get_orchestrator,
    get_target_source,
    raise_not_found,
    summarize_to_chat,
    with_default_language,
)

logger = logging.getLogger("app.endpoints.handlers")
router = APIRouter(tags=["actions"])


class ActionContext(NamedTuple):
    """Collaborators available to action handlers."""

    orchestrator: RequestOrchestrator
    target_source: TargetSource
    default_language: Language


ActionHandler = Callable[[ActionRequest, ActionContext], Awaitable[Any]]


def bad_request(response: str, cause: str) -> HTTPException:
    """Construct HTTP 400 exception with standard error body."""
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=BadRequestResponse(response=response, cause=cause).dump_detail(),
    )


def require(value: Optional[str], field: str, action: ActionRequest) -> str:
    """Return mandatory action field or fail with HTTP 400."""
    if not value:
        raise bad_request(
            "Missing action field", f"Action '{action.action}' requires '{field}'"
        )
    return value


def summarize_payload(action: ActionRequest) -> SummarizeRequest:
    """Build summarization request from payload and envelope fields."""
    data = dict(action.data or {})
    if action.url is not None:
        data.setdefault("url", action.url)
    if action.force_refresh is not None:
        data.setdefault("force_refresh", action.force_refresh)
    return SummarizeRequest(**data)


async def list_targets(_action: ActionRequest, ctx: ActionContext) -> Any:
    """List content sources."""
    return TargetsResponse(targets=await ctx.target_source.list_targets())


async def extract_text(action: ActionRequest, ctx: ActionContext) -> Any:
    """Read visible text of a content source."""
    target_id = require(action.target_id, "target_id", action)
    if await ctx.target_source.get_target(target_id) is None:
        raise_not_found("target", target_id)
    text = await ctx.target_source.extract_text(target_id)
    return ExtractTextResponse(target_id=target_id, text=text)


async def submit_summary(action: ActionRequest, ctx: ActionContext) -> Any:
    """Start asynchronous summarization."""
    summarize_request = summarize_payload(action)
    chat_request = summarize_to_chat(summarize_request, ctx.default_language)
    request_id = ctx.orchestrator.submit(
        chat_request, action.request_id or summarize_request.request_id
    )
    return SubmitResponse(request_id=request_id)


async def request_status(action: ActionRequest, ctx: ActionContext) -> Any:
    """Return state of asynchronous summarization."""
    request_id = require(action.request_id, "request_id", action)
    pending = ctx.orchestrator.status(request_id)
    if pending is None:
        raise_not_found("request", request_id)
    return pending


async def summarize_text(action: ActionRequest, ctx: ActionContext) -> Any:
    """Summarize text and wait for the result."""
    summarize_request = summarize_payload(action)
    chat_request = summarize_to_chat(summarize_request, ctx.default_language)
    return await ctx.orchestrator.call_llm(chat_request)


async def submit_chat(action: ActionRequest, ctx: ActionContext) -> Any:
    """Send chat conversation and wait for the answer."""
    data = dict(action.data or {})
    if action.target_id is not None:
        data.setdefault("target_id", action.target_id)
    chat_request = with_default_language(ChatRequest(**data), ctx.default_language)
    return await ctx.orchestrator.call_llm(chat_request)


async def cache_stats(_action: ActionRequest, ctx: ActionContext) -> Any:
    """Return summary cache statistics."""
    return ctx.orchestrator.cache_stats()


async def clear_cache(_action: ActionRequest, ctx: ActionContext) -> Any:
    """Remove all cached summaries."""
    ctx.orchestrator.clear_cache()
    return SuccessResponse()


async def cache_settings(_action: ActionRequest, ctx: ActionContext) -> Any:
    """Return summary cache settings."""
    return ctx.orchestrator.cache_settings()


async def update_cache_settings(action: ActionRequest, ctx: ActionContext) -> Any:
    """Change summary cache settings."""
    settings_request = CacheSettingsUpdateRequest(**(action.data or {}))
    return ctx.orchestrator.update_cache_settings(
        max_entries=settings_request.max_entries,
        expiry_days=settings_request.expiry_days,
    )


async def get_context(action: ActionRequest, ctx: ActionContext) -> Any:
    """Return stored conversation of a target."""
    target_id = require(action.target_id, "target_id", action)
    return ContextResponse(context=ctx.orchestrator.get_context(target_id))


async def clear_context(action: ActionRequest, ctx: ActionContext) -> Any:
    """Forget stored conversation of a target."""
    target_id = require(action.target_id, "target_id", action)
    ctx.orchestrator.clear_context(target_id)
    return SuccessResponse()


async def clear_all_contexts(_action: ActionRequest, ctx: ActionContext) -> Any:
    """Forget all stored conversations."""
    ctx.orchestrator.clear_all_contexts()
    return SuccessResponse()


ACTION_HANDLERS: dict[str, ActionHandler] = {
    "listTargets": list_targets,
    "extractText": extract_text,
    "submitSummary": submit_summary,
    "status": request_status,
    "summarizeText": summarize_text,
    "submitChat": submit_chat,
    "cacheStats": cache_stats,
    "clearCache": clear_cache,
    "cacheSettings": cache_settings,
    "updateCacheSettings": update_cache_settings,
    "getContext": get_context,
    "clearContext": clear_context,
    "clearAllContexts": clear_all_contexts,
}

ACTION_ALIASES: dict[str, str] = {
    "getAllTabs": "listTargets",
    "extractTabText": "extractText",
    "startSummarize": "submitSummary",
    "getRequestStatus": "status",
    "getCacheStats": "cacheStats",
    "chatMessage": "submitChat",
    "getConversationContext": "getContext",
    "clearConversationContext": "clearContext",
}


action_responses: dict[int | str, dict[str, Any]] = {
    200: {"description": "Response of the selected operation"},
    400: {
        "description": "Unknown action or invalid payload",
        "model": BadRequestResponse,
    },
}


@router.post("/actions", response_model=None, responses=action_responses)
async def actions_endpoint_handler(
    action: ActionRequest,
    orchestrator: Annotated[RequestOrchestrator, Depends(get_orchestrator)],
    target_source: Annotated[TargetSource, Depends(get_target_source)],
    default_language: Annotated[Language, Depends(get_default_language)],
) -> Any:
    """
    Dispatch action to the operation selected by its tag.

    Raises:
        HTTPException: 400 for unknown action tag or invalid payload.
    """
    tag = ACTION_ALIASES.get(action.action, action.action)
    handler = ACTION_HANDLERS.get(tag)
    if handler is None:
        logger.warning("Unknown action %s", action.action)
        raise bad_request(
            "Unknown action", f"Action '{action.action}' is not supported"
        )

    logger.debug("Dispatching action %s", tag)
    ctx = ActionContext(
        orchestrator=orchestrator,
        target_source=target_source,
        default_language=default_language,
    )
    try:
        return await handler(action, ctx)
    except ValidationError as e:
        raise bad_request("Invalid action payload", str(e)) from e
