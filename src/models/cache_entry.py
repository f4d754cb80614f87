"""Model for summary cache entry."""

from pydantic import BaseModel


class CacheEntry(BaseModel):
    """Model representing a summary cache entry.

    Attributes:
        summary: The summary text
        provider: Provider that produced the summary
        timestamp: When the entry was written (Unix timestamp)
    """

    summary: str
    provider: str
    timestamp: float
