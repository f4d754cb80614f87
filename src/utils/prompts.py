"""Prompt resolution: raw text and language to messages and sampling parameters.

All functions are pure, the only inputs are the arguments and built-in default
prompts from `constants.DEFAULT_PROMPTS`.
"""

from typing import Optional, Sequence, Union

from pydantic import BaseModel, Field

import constants
from models.requests import (
    CustomPrompts,
    Language,
    Message,
    PromptConfig,
    ProviderType,
    Role,
)


class SamplingParams(BaseModel):
    """Sampling parameters passed to LLM provider."""

    temperature: float = Field(constants.DEFAULT_TEMPERATURE, ge=0.0, le=2.0)
    max_tokens: int = Field(constants.DEFAULT_MAX_TOKENS, gt=0)

    model_config = {"frozen": True}


def get_prompt_config(
    language: Language, custom_prompts: Optional[CustomPrompts] = None
) -> PromptConfig:
    """Return prompt configuration for given language.

    Custom prompts take precedence, built-in defaults are used for languages
    without custom configuration.
    """
    if custom_prompts is not None:
        custom = custom_prompts.for_language(language)
        if custom is not None:
            return custom
    return PromptConfig(**constants.DEFAULT_PROMPTS[Language(language).value])


def create_prompt(
    text: str, language: Language, custom_prompts: Optional[CustomPrompts] = None
) -> str:
    """Interpolate text into user prompt template."""
    prompt_config = get_prompt_config(language, custom_prompts)
    return prompt_config.user_prompt.replace(constants.TEXT_PLACEHOLDER, text, 1)


def text_to_messages(
    text: str,
    language: Language = Language.CHINESE,
    custom_prompts: Optional[CustomPrompts] = None,
) -> list[Message]:
    """Convert text to summarize into single user message.

    Single user message makes the request eligible for summary cache.
    """
    return [
        Message(role=Role.USER, content=create_prompt(text, language, custom_prompts))
    ]


def sampling_params(
    language: Language, custom_prompts: Optional[CustomPrompts] = None
) -> SamplingParams:
    """Return temperature and max tokens for given language."""
    prompt_config = get_prompt_config(language, custom_prompts)
    return SamplingParams(
        temperature=prompt_config.temperature, max_tokens=prompt_config.max_tokens
    )


def resolve(
    text_or_messages: Union[str, Sequence[Message]],
    language: Language = Language.CHINESE,
    custom_prompts: Optional[CustomPrompts] = None,
) -> tuple[list[Message], SamplingParams]:
    """Resolve text or prebuilt conversation into messages and sampling params.

    Raw text produces system and user message pair, prebuilt message list is
    passed through without any change.
    """
    params = sampling_params(language, custom_prompts)
    if isinstance(text_or_messages, str):
        prompt_config = get_prompt_config(language, custom_prompts)
        messages = [
            Message(role=Role.SYSTEM, content=prompt_config.system_prompt),
            Message(
                role=Role.USER,
                content=create_prompt(text_or_messages, language, custom_prompts),
            ),
        ]
        return messages, params
    return list(text_or_messages), params


def is_text_summarization(messages: Sequence[Message]) -> bool:
    """Check if messages represent plain summarization (single user message)."""
    return len(messages) == 1 and messages[0].role == Role.USER


def get_model_identifier(
    provider: ProviderType, model_identifier: Optional[str] = None
) -> str:
    """Return model identifier, or the default one for given provider."""
    return model_identifier or constants.DEFAULT_MODEL_IDENTIFIERS[
        ProviderType(provider).value
    ]


def estimate_tokens(text: str, chars_per_token: int) -> int:
    """Estimate number of tokens using fixed characters per token ratio."""
    return -(-len(text) // chars_per_token)


def estimate_messages_tokens(
    messages: Sequence[Message], chars_per_token: int
) -> int:
    """Estimate number of tokens of the whole conversation."""
    return estimate_tokens(
        "".join(message.content for message in messages), chars_per_token
    )
