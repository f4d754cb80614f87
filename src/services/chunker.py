"""Processing of conversations that are too large for one provider call.

The conversation is split into ordered chunks that fit into a token budget.
Chunks are sent one by one; before every chunk except the first one the
provider is asked to condense the previous synopsis together with the
chunks processed since it into a new synopsis. The synopsis is prepended to the chunk
as a system message. The reply to the final chunk is the overall result, so
`n` chunks cost `2 * n - 1` provider calls.
"""

from typing import Optional, Sequence

import constants
import metrics
from errors import ChunkingFailure, SummarizerError
from log import get_logger
from models.config import ContextConfiguration
from models.requests import CustomPrompts, Language, Message, Role
from models.responses import LLMResponse
from providers.base import BaseProvider
from utils.prompts import estimate_messages_tokens, estimate_tokens

logger = get_logger(__name__)


class ContextChunker:
    """Split oversized conversations and process them chunk by chunk."""

    def __init__(
        self,
        chars_per_token: int = constants.DEFAULT_CHARS_PER_TOKEN,
        direct_threshold_tokens: int = constants.DEFAULT_DIRECT_THRESHOLD_TOKENS,
        chunk_budget_tokens: int = constants.DEFAULT_CHUNK_BUDGET_TOKENS,
    ) -> None:
        """Initialize chunker with size thresholds."""
        self.chars_per_token = chars_per_token
        self.direct_threshold_tokens = direct_threshold_tokens
        self.chunk_budget_tokens = chunk_budget_tokens

    @classmethod
    def from_configuration(cls, config: ContextConfiguration) -> "ContextChunker":
        """Create chunker from context configuration."""
        return cls(
            chars_per_token=config.chars_per_token,
            direct_threshold_tokens=config.direct_threshold_tokens,
            chunk_budget_tokens=config.chunk_budget_tokens,
        )

    def estimate_tokens(self, messages: Sequence[Message]) -> int:
        """Estimate size of the whole conversation in tokens."""
        return estimate_messages_tokens(messages, self.chars_per_token)

    def needs_chunking(self, messages: Sequence[Message]) -> bool:
        """Check if conversation is too large to be sent in one call."""
        return self.estimate_tokens(messages) > self.direct_threshold_tokens

    def chunk_messages(self, messages: Sequence[Message]) -> list[list[Message]]:
        """Partition messages into ordered chunks that fit into chunk budget.

        Messages are never split nor reordered. Message larger than the budget
        forms its own chunk.
        """
        chunks: list[list[Message]] = []
        current: list[Message] = []
        current_tokens = 0
        for message in messages:
            tokens = estimate_tokens(message.content, self.chars_per_token)
            if current and current_tokens + tokens > self.chunk_budget_tokens:
                chunks.append(current)
                current = []
                current_tokens = 0
            current.append(message)
            current_tokens += tokens
        if current:
            chunks.append(current)
        return chunks

    @staticmethod
    def integrate_synopsis(
        chunk: Sequence[Message], synopsis: str, language: Language
    ) -> list[Message]:
        """Prepend synopsis of already processed chunks as system message."""
        if not synopsis:
            return list(chunk)
        template = constants.SYNOPSIS_TEMPLATES[Language(language).value]
        summary_message = Message(
            role=Role.SYSTEM, content=template.format(summary=synopsis)
        )
        return [summary_message, *chunk]

    @staticmethod
    def transcript(chunk: Sequence[Message]) -> str:
        """Render chunk as plain text transcript."""
        return "\n".join(f"{m.role.value}: {m.content}" for m in chunk)

    async def run(
        self,
        adapter: BaseProvider,
        messages: Sequence[Message],
        language: Language = Language.CHINESE,
        custom_prompts: Optional[CustomPrompts] = None,
    ) -> LLMResponse:
        """Process conversation chunk by chunk and return reply to the last one.

        Raises:
            ChunkingFailure: Any chunk call failed, no partial result is returned.
        """
        chunks = self.chunk_messages(messages)
        total = len(chunks)
        logger.info(
            "Processing %d messages in %d chunks (%d estimated tokens)",
            len(messages),
            total,
            self.estimate_tokens(messages),
        )
        metrics.chunked_requests_total.inc()

        synopsis = ""
        # transcripts of processed chunks not yet condensed into synopsis
        uncondensed: list[str] = []
        response: Optional[LLMResponse] = None
        for index, chunk in enumerate(chunks):
            if index > 0:
                uncondensed.append(self.transcript(chunks[index - 1]))
                updated = await self._update_synopsis(
                    adapter, synopsis, uncondensed, language, custom_prompts
                )
                if updated is not None:
                    synopsis = updated
                    uncondensed.clear()
            prepared = self.integrate_synopsis(chunk, synopsis, language)
            try:
                if adapter.supports_large_context:
                    response = await adapter.call_large_context_api(
                        prepared, language, custom_prompts
                    )
                else:
                    response = await adapter.call_api(prepared, language, custom_prompts)
            except SummarizerError as e:
                logger.error("Chunk %d/%d failed: %s", index + 1, total, e)
                raise ChunkingFailure(index, total, e) from e
            logger.debug("Chunk %d/%d processed", index + 1, total)

        if response is None:
            raise ValueError("Conversation to process is empty")
        return response

    async def _update_synopsis(
        self,
        adapter: BaseProvider,
        synopsis: str,
        transcripts: Sequence[str],
        language: Language,
        custom_prompts: Optional[CustomPrompts],
    ) -> Optional[str]:
        """Condense synopsis with transcripts of chunks processed since it.

        Returns None when the provider call failed.
        """
        text = "\n\n".join(transcripts)
        if synopsis:
            text = f"{synopsis}\n\n{text}"
        try:
            response = await adapter.call_api(text, language, custom_prompts)
        except SummarizerError as e:
            logger.warning("Failed to create conversation synopsis: %s", e)
            return None
        return response.summary
