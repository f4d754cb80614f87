"""Models for REST API responses."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

import constants
from models.requests import Message


class RequestStatus(str, Enum):
    """Lifecycle state of a pending request."""

    PENDING = constants.REQUEST_STATUS_PENDING
    PROCESSING = constants.REQUEST_STATUS_PROCESSING
    COMPLETED = constants.REQUEST_STATUS_COMPLETED
    ERROR = constants.REQUEST_STATUS_ERROR

    @property
    def terminal(self) -> bool:
        """Check if no other transition is possible from this state."""
        return self in (RequestStatus.COMPLETED, RequestStatus.ERROR)


class LLMResponse(BaseModel):
    """Model representing normalized response from LLM provider or cache.

    Attributes:
        summary: The generated text.
        error: Error message, set only when the call failed.
        from_cache: Whether the summary was read from the summary cache.
        cached_at: Unix timestamp of the cache entry, for cached summaries.
    """

    summary: str = Field(
        description="Generated summary or chat answer",
        examples=["The page describes ..."],
    )
    error: Optional[str] = Field(
        None,
        description="Error message when the request failed",
        examples=["API request failed (429 Too Many Requests): slow down"],
    )
    from_cache: bool = Field(False, description="Summary was read from cache")
    cached_at: Optional[float] = Field(
        None, description="When the cached summary was stored (Unix timestamp)"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"summary": "The page describes ...", "from_cache": False},
                {
                    "summary": "The page describes ...",
                    "from_cache": True,
                    "cached_at": 1760000000.0,
                },
                {
                    "summary": "",
                    "error": "Network error: Unable to connect to Claude API.",
                },
            ]
        }
    }


class PendingRequest(BaseModel):
    """Model representing the lifecycle of an asynchronous LLM request.

    Exactly one of `result` and `error` is set once the request reaches
    terminal state (`completed` or `error`).
    """

    id: str = Field(
        description="Request ID", examples=["c5260aec-4d82-4370-9fdf-05cf908b3f16"]
    )
    content_key: str = Field(
        "", description="Content key (URL), may be empty", examples=["https://a.b"]
    )
    status: RequestStatus = Field(
        RequestStatus.PENDING, description="Request status", examples=["completed"]
    )
    result: Optional[LLMResponse] = None
    error: Optional[str] = None
    created_at: float = Field(description="Unix timestamp of submission")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "c5260aec-4d82-4370-9fdf-05cf908b3f16",
                    "content_key": "https://example.com",
                    "status": "completed",
                    "result": {"summary": "The page describes ...", "from_cache": False},
                    "created_at": 1760000000.0,
                }
            ]
        }
    }


class SubmitResponse(BaseModel):
    """Model representing a response to summarization submit request."""

    request_id: str = Field(
        description="ID used to poll request status",
        examples=["c5260aec-4d82-4370-9fdf-05cf908b3f16"],
    )


class CacheStatsResponse(BaseModel):
    """Model representing summary cache statistics."""

    count: int = Field(description="Number of cached summaries", examples=[42])
    size: int = Field(
        description="Approximate storage size in bytes", examples=[123456]
    )


class CacheSettingsResponse(BaseModel):
    """Model representing operator tunable summary cache settings."""

    max_entries: int = Field(description="Maximum number of entries", examples=[100])
    expiry_days: float = Field(description="Entry expiry in days", examples=[7])


class ContextResponse(BaseModel):
    """Model representing stored conversation context for a target."""

    context: Optional[list[Message]] = Field(
        None, description="Stored conversation, null when there is none"
    )


class SuccessResponse(BaseModel):
    """Model representing acknowledgement of an operation."""

    success: bool = Field(True, examples=[True])


class TargetInfo(BaseModel):
    """Model representing content source (tab, page) that can be summarized."""

    id: str = Field(examples=["42"])
    url: str = Field(examples=["https://example.com"])
    title: str = Field("Untitled", examples=["Example Domain"])


class TargetsResponse(BaseModel):
    """Model representing list of content sources."""

    targets: list[TargetInfo]


class ExtractTextResponse(BaseModel):
    """Model representing visible text extracted from a target."""

    target_id: str = Field(examples=["42"])
    text: str = Field(examples=["Example Domain This domain is for use ..."])


class InfoResponse(BaseModel):
    """Model representing a response to an info request.

    Example:
        ```python
        info_response = InfoResponse(
            name="Summarizer Stack",
            service_version="1.0.0",
            providers=["claude", "openai"],
        )
        ```
    """

    name: str = Field(description="Service name", examples=["Summarizer Stack"])
    service_version: str = Field(description="Service version", examples=["0.3.0"])
    providers: list[str] = Field(
        description="Supported LLM providers", examples=[["claude", "openai"]]
    )


class ReadinessResponse(BaseModel):
    """Model representing response to a readiness request."""

    ready: bool = Field(description="Flag indicating if service is ready")
    reason: str = Field(examples=["Service is ready"])


class LivenessResponse(BaseModel):
    """Model representing a response to a liveness request."""

    alive: bool = Field(description="Flag indicating that the app is alive")


class DetailModel(BaseModel):
    """Nested detail model for error responses."""

    response: str = Field(..., description="Short summary of the error")
    cause: str = Field(..., description="Detailed explanation of what caused the error")


class AbstractErrorResponse(BaseModel):
    """Base class for all error responses.

    Contains a nested `detail` field.
    """

    detail: DetailModel

    def dump_detail(self) -> dict:
        """Return dict in FastAPI HTTPException format."""
        return self.detail.model_dump()


class BadRequestResponse(AbstractErrorResponse):
    """400 Bad Request - Unsupported action or malformed payload."""

    def __init__(self, response: str, cause: str):
        """Initialize a BadRequestResponse."""
        super().__init__(detail=DetailModel(response=response, cause=cause))

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "detail": {
                        "response": "Unknown action",
                        "cause": "Action 'foo' is not supported",
                    }
                }
            ]
        }
    }


class NotFoundResponse(AbstractErrorResponse):
    """404 Not Found - Resource does not exist."""

    def __init__(self, resource: str, resource_id: str):
        """Initialize a NotFoundResponse when a resource cannot be located."""
        super().__init__(
            detail=DetailModel(
                response=f"{resource.title()} not found",
                cause=f"{resource.title()} with ID {resource_id} does not exist.",
            )
        )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "detail": {
                        "response": "Request not found",
                        "cause": "Request with ID 123e4567-e89b-12d3-a456-426614174000 does not exist.",  # pylint: disable=line-too-long
                    }
                }
            ]
        }
    }
