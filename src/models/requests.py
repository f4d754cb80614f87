"""Models for REST API requests."""

from enum import Enum
from typing import Any, Optional, Self

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

import constants
from log import get_logger

logger = get_logger(__name__)


class Role(str, Enum):
    """Role of the message author in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Language(str, Enum):
    """Languages supported by default prompts."""

    CHINESE = constants.LANGUAGE_CHINESE
    ENGLISH = constants.LANGUAGE_ENGLISH


class ProviderType(str, Enum):
    """Supported LLM providers."""

    CLAUDE = constants.PROVIDER_CLAUDE
    OPENAI = constants.PROVIDER_OPENAI
    OPENROUTER = constants.PROVIDER_OPENROUTER
    PORTKEY = constants.PROVIDER_PORTKEY


class Message(BaseModel):
    """Model representing one message in a conversation.

    Attributes:
        role: The author of the message (system, user or assistant).
        content: The message text.
    """

    role: Role = Field(description="Message author", examples=["user"])
    content: str = Field(
        description="Message text", examples=["What is this page about?"]
    )

    model_config = {"extra": "forbid", "frozen": True}


class PromptConfig(BaseModel):
    """Prompt templates and sampling parameters for one language.

    The user prompt must contain the `{text}` placeholder that is replaced by
    the text to summarize.
    """

    system_prompt: str = Field(
        description="System prompt sent before the user prompt",
        examples=["You are a helpful assistant that summarizes web page content."],
    )
    user_prompt: str = Field(
        description="User prompt template with {text} placeholder",
        examples=["Summarize this:\n\n{text}"],
    )
    temperature: float = Field(
        constants.DEFAULT_TEMPERATURE, ge=0.0, le=2.0, examples=[0.5]
    )
    max_tokens: int = Field(constants.DEFAULT_MAX_TOKENS, gt=0, examples=[1000])

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("user_prompt")
    @classmethod
    def check_placeholder(cls, value: str) -> str:
        """Check that the user prompt template contains text placeholder."""
        if constants.TEXT_PLACEHOLDER not in value:
            raise ValueError(
                f"User prompt template must contain {constants.TEXT_PLACEHOLDER} placeholder"
            )
        return value


class CustomPrompts(BaseModel):
    """Custom prompt configuration, possibly only for some languages."""

    chinese: Optional[PromptConfig] = None
    english: Optional[PromptConfig] = None

    model_config = {"extra": "forbid", "frozen": True}

    def for_language(self, language: Language) -> Optional[PromptConfig]:
        """Return custom prompt configuration for given language, if any."""
        return getattr(self, language.value)


class LLMRequestBase(BaseModel):
    """Fields shared by summarization and chat requests."""

    provider: ProviderType = Field(
        description="LLM provider to use", examples=["openai", "claude"]
    )
    api_key: Optional[str] = Field(
        None,
        description="Provider API key, configured default is used when omitted",
        examples=["sk-..."],
    )
    api_url: Optional[str] = Field(
        None,
        description="Optional provider endpoint override",
        examples=["https://openrouter.ai/api/v1/chat/completions"],
    )
    virtual_key: Optional[str] = Field(
        None,
        description="Optional routing key (Portkey virtual key)",
    )
    model_identifier: Optional[str] = Field(
        None,
        description="Optional model identifier",
        examples=["gpt-4", "anthropic/claude-3-5-sonnet"],
    )
    language: Language = Field(
        Language.CHINESE, description="Language of the summary", examples=["english"]
    )
    custom_prompts: Optional[CustomPrompts] = Field(
        None, description="Optional custom prompt templates"
    )
    url: Optional[str] = Field(
        None,
        description="Content key used for summary cache lookups",
        examples=["https://example.com"],
    )
    force_refresh: bool = Field(
        False, description="Skip summary cache lookup", examples=[False]
    )
    target_id: Optional[str] = Field(
        None,
        description="Originating context (tab) used to store conversation context",
        examples=["42"],
    )


class ChatRequest(LLMRequestBase):
    """Model representing a request for the LLM, immutable once submitted.

    Example:
        ```python
        chat_request = ChatRequest(
            messages=[Message(role="user", content="Hello")],
            provider="openai",
            api_key="sk-...",
        )
        ```
    """

    messages: list[Message] = Field(
        description="Conversation in chronological order", min_length=1
    )

    model_config = {
        "extra": "forbid",
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "messages": [
                        {"role": "user", "content": "What is this page about?"},
                        {"role": "assistant", "content": "It is about cats."},
                        {"role": "user", "content": "Which breeds are mentioned?"},
                    ],
                    "provider": "openai",
                    "api_key": "sk-...",
                    "language": "english",
                    "target_id": "42",
                }
            ]
        },
    }

    @property
    def content_key(self) -> str:
        """Return content key, empty string when not provided."""
        return self.url or ""

    def is_cacheable(self) -> bool:
        """Check if response to this request can be read from or stored into cache.

        Only plain summarization (single user message) identified by content
        key is cached, multi-turn chat never is.
        """
        return (
            bool(self.url)
            and not self.force_refresh
            and len(self.messages) == 1
            and self.messages[0].role == Role.USER
        )


class SummarizeRequest(LLMRequestBase):
    """Model representing a request to summarize text.

    The text is converted to a single user message using prompt templates.
    """

    text: str = Field(
        description="Text to summarize", examples=["Cats are small mammals ..."]
    )
    request_id: Optional[str] = Field(
        None,
        description="Optional caller supplied request ID, must be unique",
        examples=["c5260aec-4d82-4370-9fdf-05cf908b3f16"],
    )

    model_config = {
        "extra": "forbid",
        "json_schema_extra": {
            "examples": [
                {
                    "text": "Cats are small, carnivorous mammals ...",
                    "provider": "claude",
                    "api_key": "sk-ant-...",
                    "language": "english",
                    "url": "https://example.com",
                    "force_refresh": False,
                }
            ]
        },
    }

    @model_validator(mode="after")
    def check_text(self) -> Self:
        """Log summarization of empty text, which is allowed but suspicious."""
        if not self.text.strip():
            logger.warning("Summarization of empty text requested")
        return self


class CacheSettingsUpdateRequest(BaseModel):
    """Model representing a request to change summary cache settings."""

    max_entries: Optional[int] = Field(None, gt=0, examples=[100])
    expiry_days: Optional[float] = Field(None, gt=0, examples=[7])

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def check_any_setting(self) -> Self:
        """Ensure that at least one setting is changed."""
        if self.max_entries is None and self.expiry_days is None:
            raise ValueError(
                "At least one of 'max_entries' or 'expiry_days' must be provided"
            )
        return self


class ActionRequest(BaseModel):
    """Message based request selected by an action tag.

    Attributes:
        action: The action tag, like "submitSummary" or "status".
        data: Action payload.
        request_id: Request ID for "status" and "submitSummary" actions.
        target_id: Target ID for "extractText", "getContext" and "clearContext".
        url: Content key of the summarized text.
        force_refresh: Do not use cached summary.

    Envelope fields are accepted in camelCase too ("requestId", "tabId",
    "forceFresh"), the payload in `data` uses field names of the REST models.
    """

    action: str = Field(description="Action tag", examples=["cacheStats"])
    data: Optional[dict[str, Any]] = Field(None, description="Action payload")
    request_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("request_id", "requestId")
    )
    target_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("target_id", "targetId", "tabId")
    )
    url: Optional[str] = None
    force_refresh: Optional[bool] = Field(
        None, validation_alias=AliasChoices("force_refresh", "forceFresh")
    )

    model_config = {"extra": "forbid"}

    @field_validator("target_id", mode="before")
    @classmethod
    def check_target_id(cls, value: Any) -> Any:
        """Accept numeric target IDs."""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value
