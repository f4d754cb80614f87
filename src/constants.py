"""Constants used in business logic."""

# Supported languages; the first one is the primary language used when the
# request does not specify any
LANGUAGE_CHINESE = "chinese"
LANGUAGE_ENGLISH = "english"
DEFAULT_LANGUAGE = LANGUAGE_CHINESE

# Supported LLM providers
PROVIDER_CLAUDE = "claude"
PROVIDER_OPENAI = "openai"
PROVIDER_OPENROUTER = "openrouter"
PROVIDER_PORTKEY = "portkey"
SUPPORTED_PROVIDERS = frozenset(
    {
        PROVIDER_CLAUDE,
        PROVIDER_OPENAI,
        PROVIDER_OPENROUTER,
        PROVIDER_PORTKEY,
    }
)

# Model used when the request does not specify any
# OpenRouter uses provider/model format
DEFAULT_MODEL_IDENTIFIERS = {
    PROVIDER_CLAUDE: "claude-sonnet-4-20250514",
    PROVIDER_OPENAI: "gpt-4",
    PROVIDER_OPENROUTER: "openai/gpt-4",
    PROVIDER_PORTKEY: "gpt-4",
}

# Provider endpoints
CLAUDE_ENDPOINT = "https://api.anthropic.com/v1/messages"
CLAUDE_API_VERSION = "2023-06-01"
OPENAI_ENDPOINT = "https://api.openai.com/v1/chat/completions"
OPENROUTER_ENDPOINT = "https://openrouter.ai/api/v1/chat/completions"
PORTKEY_ENDPOINT = "https://api.portkey.ai/v1/chat/completions"

# Value of X-Title header sent to routing providers
APPLICATION_TITLE = "AI Page Summarizer"
APPLICATION_REFERER = "https://github.com/summarizer-stack/summarizer-stack"

# Text returned when provider answered, but without any content
NO_RESPONSE_GENERATED = "No response generated"

# Placeholder in user prompt template replaced by the text to summarize
TEXT_PLACEHOLDER = "{text}"

DEFAULT_TEMPERATURE = 0.5
DEFAULT_MAX_TOKENS = 1000

DEFAULT_PROMPTS = {
    LANGUAGE_CHINESE: {
        "system_prompt": (
            "你是一个有用的助手，专门总结网页内容。"
            "请提供简洁、结构清晰的摘要，突出主要观点和关键信息。"
        ),
        "user_prompt": (
            "请为以下网页内容提供一个简洁、结构清晰的中文摘要，"
            "突出主要观点和关键信息：\n\n{text}"
        ),
        "temperature": DEFAULT_TEMPERATURE,
        "max_tokens": DEFAULT_MAX_TOKENS,
    },
    LANGUAGE_ENGLISH: {
        "system_prompt": (
            "You are a helpful assistant that summarizes web page content. "
            "Provide a concise, well-structured summary highlighting the main "
            "points and key information."
        ),
        "user_prompt": (
            "Please provide a concise, well-structured summary of this webpage "
            "content, highlighting the main points and key information:\n\n{text}"
        ),
        "temperature": DEFAULT_TEMPERATURE,
        "max_tokens": DEFAULT_MAX_TOKENS,
    },
}

# Synopsis of already processed chunks, injected as system message
SYNOPSIS_TEMPLATES = {
    LANGUAGE_CHINESE: "之前的对话摘要：{summary}\n\n请基于这个摘要和当前对话继续回答。",
    LANGUAGE_ENGLISH: (
        "Previous conversation summary: {summary}\n\n"
        "Please continue the conversation based on this summary and the current dialogue."
    ),
}

# Context size heuristics (see services/chunker.py)
DEFAULT_CHARS_PER_TOKEN = 4
DEFAULT_DIRECT_THRESHOLD_TOKENS = 100_000
DEFAULT_CHUNK_BUDGET_TOKENS = 50_000

# Pending requests bookkeeping
DEFAULT_REQUEST_RETENTION_SECONDS = 30 * 60
DEFAULT_CLEANUP_INTERVAL_SECONDS = 5 * 60
DEFAULT_PROVIDER_TIMEOUT_SECONDS = 60.0

# Request status values
REQUEST_STATUS_PENDING = "pending"
REQUEST_STATUS_PROCESSING = "processing"
REQUEST_STATUS_COMPLETED = "completed"
REQUEST_STATUS_ERROR = "error"

# cache constants
CACHE_TYPE_MEMORY = "memory"
CACHE_TYPE_SQLITE = "sqlite"
CACHE_TYPE_NOOP = "noop"
DEFAULT_CACHE_MAX_ENTRIES = 100
DEFAULT_CACHE_EXPIRY_DAYS = 7
CACHE_KEY_SEPARATOR = "|"
SECONDS_PER_DAY = 24 * 60 * 60

# Environment variable with path to configuration file, read by uvicorn worker
CONFIG_PATH_ENV_VARIABLE = "SUMMARIZER_STACK_CONFIG_PATH"
DEFAULT_CONFIG_PATH = "summarizer-stack.yaml"
