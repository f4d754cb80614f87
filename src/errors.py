"""Errors raised while serving summarization and chat requests."""

from typing import Optional


class SummarizerError(Exception):
    """Base class for all errors raised by providers and the orchestrator."""


class ConfigurationError(SummarizerError):
    """Provider used before initialization or without required credentials."""


class TransportError(SummarizerError):
    """Provider endpoint could not be reached."""

    def __init__(self, endpoint: str, message: str) -> None:
        """Initialize transport error with the endpoint that failed."""
        super().__init__(message)
        self.endpoint = endpoint


class ProviderError(SummarizerError):
    """Provider returned non-2xx status code or malformed payload.

    Attributes:
        status_code: HTTP status code returned by provider, None for
            malformed payloads received with 2xx code.
        details: Message reported by the vendor.
    """

    def __init__(
        self, message: str, status_code: Optional[int] = None, details: str = ""
    ) -> None:
        """Initialize provider error."""
        super().__init__(message)
        self.status_code = status_code
        self.details = details

    @property
    def rate_limited(self) -> bool:
        """Check if the provider refused the call because of rate limits."""
        return self.status_code == 429


class ChunkingFailure(SummarizerError):
    """One chunk of large context could not be processed."""

    def __init__(self, chunk_index: int, total_chunks: int, cause: Exception) -> None:
        """Initialize chunking failure with the chunk that failed."""
        super().__init__(
            f"Processing of chunk {chunk_index + 1}/{total_chunks} failed: {cause}"
        )
        self.chunk_index = chunk_index
        self.total_chunks = total_chunks
