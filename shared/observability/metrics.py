from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)
from fastapi import Response


llm_tokens = Counter(
    "llm_tokens_total",
    "Estimated LLM tokens consumed",
    ["service", "direction"],
)

llm_cost_usd = Counter(
    "llm_cost_usd_total",
    "Estimated LLM spend in USD (chars/4 heuristic, not billing data)",
    ["service", "model"],
)

llm_generation_attempts = Counter(
    "llm_generation_attempts_total",
    "Generation attempts against the model provider",
    ["task", "outcome"],
)

analysis_requests = Counter(
    "analysis_requests_total",
    "Analysis invocations by outcome",
    ["task", "outcome"],
)

analysis_duration = Histogram(
    "analysis_duration_seconds",
    "Wall-clock time of analyses that reached the model",
    ["task"],
    buckets=(0.1, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0),
)

weather_fallbacks = Counter(
    "weather_fallbacks_total",
    "Static forecasts substituted for the weather provider",
    ["reason"],
)


def metrics_response() -> Response:
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
