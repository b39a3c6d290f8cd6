from __future__ import annotations

import os
from dataclasses import dataclass


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes")


def _env_float(name: str) -> float | None:
    raw = os.environ.get(name, "").strip()
    return float(raw) if raw else None


@dataclass(frozen=True)
class AnalysisConfig:
    llm_provider: str
    llm_api_key: str
    llm_model: str
    llm_base_url: str | None
    llm_request_timeout: float
    llm_max_retries: int
    llm_retry_delay_seconds: float
    llm_prompt_price_per_1m: float | None
    llm_completion_price_per_1m: float | None
    force_demo_mode: bool
    openweather_api_key: str
    weather_timeout: float
    cache_max_entries: int
    cache_ttl_seconds: float
    log_level: str
    cors_origin: str
    sentry_dsn: str = ""
    sentry_environment: str = "development"
    sentry_traces_sample_rate: float = 0.1

    @classmethod
    def from_env(cls) -> AnalysisConfig:
        return cls(
            llm_provider=os.environ.get("LLM_PROVIDER", "gemini"),
            llm_api_key=(
                os.environ.get("GOOGLE_API_KEY", "")
                or os.environ.get("LLM_API_KEY", "")
            ),
            llm_model=(
                os.environ.get("GEMINI_MODEL", "")
                or os.environ.get("LLM_MODEL", "")
                or "gemini-2.5-flash"
            ),
            llm_base_url=os.environ.get("LLM_BASE_URL") or None,
            llm_request_timeout=float(os.environ.get("LLM_REQUEST_TIMEOUT", "60")),
            llm_max_retries=int(os.environ.get("LLM_MAX_RETRIES", "2")),
            llm_retry_delay_seconds=float(os.environ.get("LLM_RETRY_DELAY_SECONDS", "0.5")),
            llm_prompt_price_per_1m=_env_float("LLM_PROMPT_PRICE_PER_1M"),
            llm_completion_price_per_1m=_env_float("LLM_COMPLETION_PRICE_PER_1M"),
            force_demo_mode=_env_flag("FORCE_DEMO_MODE"),
            openweather_api_key=os.environ.get("OPENWEATHER_API_KEY", ""),
            weather_timeout=float(os.environ.get("WEATHER_TIMEOUT", "10")),
            cache_max_entries=int(os.environ.get("CACHE_MAX_ENTRIES", "256")),
            cache_ttl_seconds=float(os.environ.get("CACHE_TTL_SECONDS", "600")),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            cors_origin=os.environ.get("CORS_ORIGIN", "http://localhost:5173"),
            sentry_dsn=os.environ.get("SENTRY_DSN", ""),
            sentry_environment=(
                os.environ.get("SENTRY_ENVIRONMENT", "")
                or os.environ.get("ENVIRONMENT", "")
                or "development"
            ),
            sentry_traces_sample_rate=float(os.environ.get("SENTRY_TRACES_SAMPLE_RATE", "0.1")),
        )
