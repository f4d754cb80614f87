"""Request orchestrator: lifecycle of summarization and chat requests.

One orchestrator is constructed per process by the application lifespan. It
owns the table of pending requests and the conversation contexts, decides
between summary cache and provider call, routes oversized conversations to
the context chunker and writes successful summaries back into the cache.

Request lifecycle::

    pending -> processing -> completed | error

Every asynchronous request reaches exactly one terminal state and is removed
by periodic cleanup once the retention window passes.
"""

import asyncio
import sqlite3
from contextlib import suppress
from time import time
from typing import Callable, Optional

import httpx

import constants
import metrics
from cache.cache import Cache
from cache.cache_error import CacheError
from log import get_logger
from models.config import Configuration, ProvidersConfiguration
from models.requests import ChatRequest, Message, ProviderType
from models.responses import (
    CacheSettingsResponse,
    CacheStatsResponse,
    LLMResponse,
    PendingRequest,
    RequestStatus,
)
from providers.base import BaseProvider, ProviderSettings
from providers.registry import create_provider
from services.chunker import ContextChunker
from utils.prompts import is_text_summarization
from utils.suid import get_suid

logger = get_logger(__name__)

ProviderFactory = Callable[[ProviderType, ProviderSettings], BaseProvider]


class RequestOrchestrator:  # pylint: disable=too-many-instance-attributes
    """Accept, track and execute LLM requests."""

    def __init__(  # pylint: disable=too-many-arguments
        self,
        cache: Cache,
        providers: Optional[ProvidersConfiguration] = None,
        chunker: Optional[ContextChunker] = None,
        retention_seconds: float = constants.DEFAULT_REQUEST_RETENTION_SECONDS,
        cleanup_interval_seconds: float = constants.DEFAULT_CLEANUP_INTERVAL_SECONDS,
        provider_timeout: Optional[float] = constants.DEFAULT_PROVIDER_TIMEOUT_SECONDS,
        provider_factory: ProviderFactory = create_provider,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], float] = time,
    ) -> None:
        """Initialize orchestrator with its collaborators."""
        self.cache = cache
        self.providers = providers or ProvidersConfiguration()
        self.chunker = chunker or ContextChunker()
        self.retention_seconds = retention_seconds
        self.cleanup_interval_seconds = cleanup_interval_seconds
        self.provider_timeout = provider_timeout
        self.provider_factory = provider_factory
        self.transport = transport
        self.clock = clock

        self._requests: dict[str, PendingRequest] = {}
        self._contexts: dict[str, list[Message]] = {}
        self._tasks: set[asyncio.Task] = set()
        self._cleanup_task: Optional[asyncio.Task] = None

    @classmethod
    def from_configuration(
        cls, config: Configuration, cache: Cache, **kwargs
    ) -> "RequestOrchestrator":
        """Create orchestrator from service configuration."""
        return cls(
            cache=cache,
            providers=config.providers,
            chunker=ContextChunker.from_configuration(config.context),
            retention_seconds=config.orchestrator.retention_seconds,
            cleanup_interval_seconds=config.orchestrator.cleanup_interval_seconds,
            provider_timeout=config.orchestrator.provider_timeout,
            **kwargs,
        )

    # Asynchronous request lifecycle

    def submit(self, request: ChatRequest, request_id: Optional[str] = None) -> str:
        """Register request and start processing it in the background.

        Returns immediately with the request ID. When the same ID is submitted
        twice, the second submission overwrites the bookkeeping of the first.
        """
        request_id = request_id or get_suid()
        if request_id in self._requests:
            logger.warning("Request %s submitted again, overwriting", request_id)
        self._requests[request_id] = PendingRequest(
            id=request_id,
            content_key=request.content_key,
            status=RequestStatus.PENDING,
            created_at=self.clock(),
        )
        metrics.pending_requests.set(len(self._requests))

        task = asyncio.create_task(self.process(request_id, request))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.info("Request %s submitted to %s", request_id, request.provider.value)
        return request_id

    def status(self, request_id: str) -> Optional[PendingRequest]:
        """Return snapshot of request state, None for unknown request."""
        pending = self._requests.get(request_id)
        if pending is None:
            return None
        return pending.model_copy()

    async def process(self, request_id: str, request: ChatRequest) -> None:
        """Run the request and record its terminal state.

        Nothing is raised from here, every failure ends in `error` state.
        """
        if not self._transition(request_id, RequestStatus.PROCESSING):
            return
        try:
            result = await self._execute(request)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Request %s failed: %s", request_id, e)
            self._transition(
                request_id, RequestStatus.ERROR, error=str(e) or type(e).__name__
            )
            return
        self._transition(request_id, RequestStatus.COMPLETED, result=result)

    def _transition(
        self,
        request_id: str,
        status: RequestStatus,
        result: Optional[LLMResponse] = None,
        error: Optional[str] = None,
    ) -> bool:
        """Move request to new state, the only place where requests change."""
        pending = self._requests.get(request_id)
        if pending is None:
            logger.warning("Request %s is not tracked anymore", request_id)
            return False
        if pending.status.terminal:
            logger.warning(
                "Request %s already finished with status %s",
                request_id,
                pending.status.value,
            )
            return False
        self._requests[request_id] = pending.model_copy(
            update={"status": status, "result": result, "error": error}
        )
        logger.debug("Request %s is %s", request_id, status.value)
        return True

    async def join(self) -> None:
        """Wait until all submitted requests reach terminal state."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    # Synchronous variant

    async def call_llm(self, request: ChatRequest) -> LLMResponse:
        """Run the request and wait for the result.

        Failures are returned in the `error` field, never raised.
        """
        try:
            return await self._execute(request)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("LLM call failed: %s", e)
            return LLMResponse(summary="", error=str(e) or type(e).__name__)

    async def _execute(self, request: ChatRequest) -> LLMResponse:
        """Serve request from cache or provider, raise on failure."""
        if request.is_cacheable():
            cached = self._cache_lookup(request)
            if cached is not None:
                return cached

        if request.target_id is not None:
            self._contexts[request.target_id] = list(request.messages)

        adapter = self.provider_factory(
            request.provider, self.provider_settings(request)
        )
        messages = list(request.messages)
        language = request.language
        custom_prompts = request.custom_prompts

        if self.chunker.needs_chunking(messages):
            response = await self.chunker.run(adapter, messages, language, custom_prompts)
        elif adapter.supports_large_context:
            response = await adapter.call_large_context_api(
                messages, language, custom_prompts
            )
        else:
            response = await adapter.call_api(messages, language, custom_prompts)

        if request.url and is_text_summarization(messages) and not response.error:
            self._cache_store(request, response.summary)
        return response

    def provider_settings(self, request: ChatRequest) -> ProviderSettings:
        """Merge request credentials with operator configured defaults."""
        defaults = self.providers.for_provider(request.provider.value)
        api_key = request.api_key
        if not api_key and defaults.api_key is not None:
            api_key = defaults.api_key.get_secret_value()
        virtual_key = request.virtual_key
        if not virtual_key and defaults.virtual_key is not None:
            virtual_key = defaults.virtual_key.get_secret_value()
        return ProviderSettings(
            api_key=api_key,
            api_url=request.api_url or defaults.api_url,
            virtual_key=virtual_key,
            model_identifier=request.model_identifier or defaults.model,
            timeout=self.provider_timeout,
            transport=self.transport,
        )

    # Summary cache

    def _cache_lookup(self, request: ChatRequest) -> Optional[LLMResponse]:
        try:
            entry = self.cache.get(request.content_key, request.language.value)
        except (CacheError, sqlite3.Error) as e:
            logger.error("Summary cache read failed, treating as miss: %s", e)
            entry = None
        if entry is None:
            metrics.summary_cache_misses_total.inc()
            logger.debug("Cache miss for %s", request.content_key)
            return None
        metrics.summary_cache_hits_total.inc()
        logger.info("Cache hit for %s", request.content_key)
        return LLMResponse(
            summary=entry.summary, from_cache=True, cached_at=entry.timestamp
        )

    def _cache_store(self, request: ChatRequest, summary: str) -> None:
        if not summary:
            return
        try:
            self.cache.set(
                request.content_key,
                request.language.value,
                summary,
                request.provider.value,
            )
        except (CacheError, sqlite3.Error) as e:
            logger.error("Summary cache write failed: %s", e)

    def cache_stats(self) -> CacheStatsResponse:
        """Return summary cache statistics."""
        return self.cache.stats()

    def clear_cache(self) -> None:
        """Remove all cached summaries."""
        self.cache.clear()

    def cache_settings(self) -> CacheSettingsResponse:
        """Return summary cache settings."""
        return self.cache.settings()

    def update_cache_settings(
        self, max_entries: Optional[int] = None, expiry_days: Optional[float] = None
    ) -> CacheSettingsResponse:
        """Change and persist summary cache settings."""
        return self.cache.update_settings(
            max_entries=max_entries, expiry_days=expiry_days
        )

    # Conversation contexts

    def get_context(self, target_id: str) -> Optional[list[Message]]:
        """Return last conversation sent from given target."""
        context = self._contexts.get(target_id)
        return list(context) if context is not None else None

    def clear_context(self, target_id: str) -> None:
        """Forget conversation of given target."""
        self._contexts.pop(target_id, None)

    def clear_all_contexts(self) -> None:
        """Forget all conversations."""
        self._contexts.clear()

    # Maintenance

    def clear_expired(self) -> int:
        """Remove requests older than retention window, return their count."""
        now = self.clock()
        expired = [
            request_id
            for request_id, pending in self._requests.items()
            if now - pending.created_at > self.retention_seconds
        ]
        for request_id in expired:
            del self._requests[request_id]
        metrics.pending_requests.set(len(self._requests))
        if expired:
            logger.info("Removed %d expired requests", len(expired))
        return len(expired)

    async def _cleanup_loop(self) -> None:
        while True:
            await asyncio.sleep(self.cleanup_interval_seconds)
            self.clear_expired()

    def start(self) -> None:
        """Start periodic cleanup of expired requests."""
        if self._cleanup_task is None:
            logger.info(
                "Starting request cleanup every %s seconds",
                self.cleanup_interval_seconds,
            )
            self._cleanup_task = asyncio.create_task(self._cleanup_loop())

    async def stop(self) -> None:
        """Stop periodic cleanup, running requests are not cancelled."""
        if self._cleanup_task is None:
            return
        self._cleanup_task.cancel()
        with suppress(asyncio.CancelledError):
            await self._cleanup_task
        self._cleanup_task = None
        logger.info("Request cleanup stopped")

    def ready(self) -> bool:
        """Check if orchestrator can serve requests."""
        return self.cache.ready()
