"""Metrics module for Summarizer Stack."""

from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
)

# Counter to track REST API calls
# This will be used to count how many times each API endpoint is called
# and the status code of the response
rest_api_calls_total = Counter(
    "summarizer_rest_api_calls_total",
    "REST API calls counter",
    ["path", "status_code"],
)

# Histogram to measure response durations
# This will be used to track how long it takes to handle requests
response_duration_seconds = Histogram(
    "summarizer_response_duration_seconds", "Response durations", ["path"]
)

# Metric that indicates which provider + default model combinations are
# configured by operator
provider_model_configuration = Gauge(
    "summarizer_provider_model_configuration",
    "LLM provider/models combinations defined in configuration",
    ["provider", "model"],
)

# Metric that counts how many LLM calls were made for each provider + model
llm_calls_total = Counter(
    "summarizer_llm_calls_total", "LLM calls counter", ["provider", "model"]
)

# Metric that counts how many LLM calls failed
llm_calls_failures_total = Counter(
    "summarizer_llm_calls_failures_total", "LLM calls failures", ["provider"]
)

# Summary cache efficiency
summary_cache_hits_total = Counter(
    "summarizer_summary_cache_hits_total", "Summary cache hits"
)
summary_cache_misses_total = Counter(
    "summarizer_summary_cache_misses_total", "Summary cache misses"
)

# Requests that had to be split into chunks
chunked_requests_total = Counter(
    "summarizer_chunked_requests_total", "Requests processed in chunks"
)

# Number of asynchronous requests that were not garbage-collected yet
pending_requests = Gauge(
    "summarizer_pending_requests", "Tracked asynchronous requests"
)
