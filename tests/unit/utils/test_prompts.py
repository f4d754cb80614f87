"""Unit tests for functions defined in utils/prompts module."""

import pytest

import constants
from models.requests import (
    CustomPrompts,
    Language,
    Message,
    PromptConfig,
    ProviderType,
    Role,
)
from utils import prompts

CUSTOM_ENGLISH = PromptConfig(
    system_prompt="You are a pirate.",
    user_prompt="Arr, summarize {text} and then {text}",
    temperature=0.1,
    max_tokens=50,
)


def test_get_prompt_config_defaults() -> None:
    """Test that built-in prompts are used without custom ones."""
    config = prompts.get_prompt_config(Language.ENGLISH)
    assert config.system_prompt == constants.DEFAULT_PROMPTS["english"]["system_prompt"]
    assert config.temperature == 0.5
    assert config.max_tokens == 1000


def test_get_prompt_config_custom() -> None:
    """Test that custom prompts take precedence for configured language only."""
    custom = CustomPrompts(english=CUSTOM_ENGLISH)
    assert prompts.get_prompt_config(Language.ENGLISH, custom) == CUSTOM_ENGLISH

    chinese = prompts.get_prompt_config(Language.CHINESE, custom)
    assert chinese.system_prompt == constants.DEFAULT_PROMPTS["chinese"]["system_prompt"]


def test_create_prompt() -> None:
    """Test that text is interpolated into user prompt."""
    prompt = prompts.create_prompt("Cats are mammals.", Language.ENGLISH)
    assert prompt.endswith("key information:\n\nCats are mammals.")
    assert constants.TEXT_PLACEHOLDER not in prompt


def test_create_prompt_first_placeholder_only() -> None:
    """Test that only the first placeholder is replaced."""
    custom = CustomPrompts(english=CUSTOM_ENGLISH)
    prompt = prompts.create_prompt("cats", Language.ENGLISH, custom)
    assert prompt == "Arr, summarize cats and then {text}"


def test_create_prompt_text_with_placeholder() -> None:
    """Test that placeholder inside summarized text is kept untouched."""
    prompt = prompts.create_prompt("literal {text} here", Language.ENGLISH)
    assert prompt.endswith("literal {text} here")


def test_text_to_messages() -> None:
    """Test that text is converted into single user message."""
    messages = prompts.text_to_messages("Cats are mammals.", Language.CHINESE)
    assert len(messages) == 1
    assert messages[0].role == Role.USER
    assert messages[0].content.endswith("Cats are mammals.")
    assert prompts.is_text_summarization(messages) is True


def test_sampling_params() -> None:
    """Test the sampling parameters resolution."""
    params = prompts.sampling_params(Language.ENGLISH)
    assert params == prompts.SamplingParams(temperature=0.5, max_tokens=1000)

    custom = CustomPrompts(english=CUSTOM_ENGLISH)
    params = prompts.sampling_params(Language.ENGLISH, custom)
    assert params == prompts.SamplingParams(temperature=0.1, max_tokens=50)


def test_resolve_text() -> None:
    """Test that raw text is resolved into system and user message."""
    messages, params = prompts.resolve("Cats are mammals.", Language.ENGLISH)
    assert [m.role for m in messages] == [Role.SYSTEM, Role.USER]
    assert messages[0].content == constants.DEFAULT_PROMPTS["english"]["system_prompt"]
    assert messages[1].content.endswith("Cats are mammals.")
    assert params.max_tokens == 1000


def test_resolve_messages() -> None:
    """Test that prebuilt conversation is passed without any change."""
    conversation = (
        Message(role=Role.USER, content="Hi"),
        Message(role=Role.ASSISTANT, content="Hello"),
    )
    messages, params = prompts.resolve(conversation, Language.ENGLISH)
    assert messages == list(conversation)
    assert params.temperature == 0.5


def test_is_text_summarization(subtests) -> None:
    """Test the plain summarization detection."""
    user = Message(role=Role.USER, content="Hi")
    system = Message(role=Role.SYSTEM, content="Be nice")
    cases = [
        ("single user message", [user], True),
        ("single system message", [system], False),
        ("two messages", [system, user], False),
        ("no messages", [], False),
    ]
    for name, messages, expected in cases:
        with subtests.test(msg=name):
            assert prompts.is_text_summarization(messages) is expected


def test_get_model_identifier() -> None:
    """Test the model identifier resolution."""
    assert prompts.get_model_identifier(ProviderType.OPENAI) == "gpt-4"
    assert prompts.get_model_identifier(ProviderType.OPENROUTER) == "openai/gpt-4"
    assert prompts.get_model_identifier(ProviderType.CLAUDE, "claude-3") == "claude-3"


@pytest.mark.parametrize(
    "text,expected",
    [
        ("", 0),
        ("a", 1),
        ("abcd", 1),
        ("abcde", 2),
        ("x" * 400, 100),
    ],
)
def test_estimate_tokens(text: str, expected: int) -> None:
    """Test the token count estimation."""
    assert prompts.estimate_tokens(text, 4) == expected


def test_estimate_messages_tokens() -> None:
    """Test the token count estimation of whole conversation."""
    messages = [
        Message(role=Role.USER, content="abc"),
        Message(role=Role.ASSISTANT, content="defgh"),
    ]
    assert prompts.estimate_messages_tokens(messages, 4) == 2
