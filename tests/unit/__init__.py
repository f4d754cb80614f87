"""Unit tests."""

from configuration import configuration  # noqa: F401

config_dict = {
    "name": "test",
    "service": {
        "host": "localhost",
        "port": 8080,
        "workers": 1,
        "color_log": True,
        "access_log": True,
    },
    "default_language": "english",
    "summary_cache": {
        "type": "memory",
        "max_entries": 10,
        "expiry_days": 1,
    },
    "orchestrator": {
        "retention_seconds": 60,
        "cleanup_interval_seconds": 30,
        "provider_timeout": 5,
    },
    "context": {
        "chars_per_token": 4,
        "direct_threshold_tokens": 1000,
        "chunk_budget_tokens": 500,
    },
    "providers": {
        "openai": {
            "api_key": "sk-test-key",
            "model": "gpt-4o-mini",
        },
    },
    "targets": [
        {"id": "1", "url": "https://example.com", "title": "Example Domain"},
    ],
}

# Configuration must be initialized before importing app.main, since the
# application module reads it during import time
configuration.init_from_dict(config_dict)
