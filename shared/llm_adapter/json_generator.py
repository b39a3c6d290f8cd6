"""
Structured-output generation with a bounded repair loop.

JSONGenerator sends a task payload to the provider and parses the reply as
JSON. A failed attempt (transport error, timeout, empty or non-JSON body)
is logged and, while attempts remain, retried with a user prompt that
carries an explicit correction notice. Exhaustion raises
ModelUnavailableError. Schema conformance is not checked here.

Token and cost figures are estimates: character counts divided by
CHARS_PER_TOKEN, priced with a per-model table. They are useful for
dashboards, not for billing.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
import time
from dataclasses import dataclass
from typing import Any

from shared.errors import ConfigurationError, ModelUnavailableError
from shared.llm_adapter.base import LLMProvider
from shared.llm_adapter.exceptions import LLMProviderError, LLMResponseParseError
from shared.llm_adapter.models import LLMRequest, LLMResponse
from shared.logging.logger import log_performance
from shared.observability.metrics import llm_cost_usd, llm_generation_attempts, llm_tokens

logger = logging.getLogger(__name__)

SERVICE_NAME = "analysis_service"

CHARS_PER_TOKEN = 4

CORRECTION_NOTICE = (
    "ERROR: the previous response was not valid JSON.\n\n"
    "STRICTLY follow the JSON schema defined in the instructions.\n\n"
)


@dataclass(frozen=True)
class ModelPricing:
    """USD per one million tokens."""

    input_per_million: float
    output_per_million: float


MODEL_PRICING: dict[str, ModelPricing] = {
    "gemini-2.5-flash": ModelPricing(0.075, 0.30),
    "gemini-2.0-flash": ModelPricing(0.10, 0.40),
    "gpt-4o-mini": ModelPricing(0.15, 0.60),
}
DEFAULT_PRICING = MODEL_PRICING["gemini-2.5-flash"]

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")


@dataclass(frozen=True)
class GenerationMetrics:
    duration_ms: int
    task: str
    prompt_tokens_estimated: int
    completion_tokens_estimated: int
    cost_usd_estimated: float

    @property
    def tokens_estimated(self) -> int:
        return self.prompt_tokens_estimated + self.completion_tokens_estimated


def estimate_tokens(text_length: int) -> int:
    return -(-text_length // CHARS_PER_TOKEN)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` (or bare ```) wrapper."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", cleaned, count=1))
    return cleaned.strip()


def parse_json_reply(text: str) -> Any:
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise LLMResponseParseError("LLM returned empty response")
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise LLMResponseParseError(f"LLM returned non-JSON response: {exc}") from exc


def build_user_prompt(task: str, payload: Any) -> str:
    data = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
    return (
        f"TASK: {task}\n\nDATA:\n{data}\n\n"
        "Respond with strict JSON that follows the defined schema."
    )


class JSONGenerator:
    """Generative model client that returns parsed JSON."""

    def __init__(
        self,
        provider: LLMProvider | None,
        model: str = "",
        pricing: ModelPricing | None = None,
        timeout_s: float = 60.0,
        retry_delay_s: float = 0.5,
    ) -> None:
        self._provider = provider
        self._model = model
        self._pricing = pricing or MODEL_PRICING.get(model, DEFAULT_PRICING)
        self._timeout_s = timeout_s
        self._retry_delay_s = retry_delay_s

    @property
    def configured(self) -> bool:
        return self._provider is not None

    async def generate(
        self,
        task: str,
        system_prompt: str,
        payload: Any,
        temperature: float = 0.2,
        max_retries: int = 2,
    ) -> Any:
        if self._provider is None:
            raise ConfigurationError(
                "Generative model client not initialized: no model credential configured"
            )
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")

        started = time.monotonic()
        base_prompt = build_user_prompt(task, payload)
        user_prompt = base_prompt
        attempt = 0
        last_error: Exception | None = None

        while attempt < max_retries:
            attempt += 1
            request = LLMRequest(
                system_prompt=system_prompt,
                prompt=user_prompt,
                temperature=temperature,
                model=self._model,
                json_mode=True,
            )
            try:
                response = await asyncio.wait_for(
                    self._provider.generate(request),
                    timeout=self._timeout_s if self._timeout_s > 0 else None,
                )
                logger.debug(
                    "Model raw response",
                    extra={"_extra": {"task": task, "text": response.content[:200]}},
                )
                parsed = parse_json_reply(response.content)
            except (LLMProviderError, LLMResponseParseError, asyncio.TimeoutError) as exc:
                last_error = exc
                llm_generation_attempts.labels(task=task, outcome="failed").inc()
                logger.warning(
                    "Model generation attempt %d/%d failed for %s: %s",
                    attempt, max_retries, task, _describe(exc),
                )
                if attempt < max_retries:
                    user_prompt = CORRECTION_NOTICE + base_prompt
                    if self._retry_delay_s > 0:
                        await asyncio.sleep(self._retry_delay_s)
                continue

            llm_generation_attempts.labels(task=task, outcome="ok").inc()
            self._record_metrics(task, started, len(system_prompt) + len(user_prompt), response)
            return parsed

        logger.error("Model generation failed after %d attempt(s) for %s", max_retries, task)
        raise ModelUnavailableError(
            f"LLM_UNAVAILABLE: {_describe(last_error) if last_error else 'Unknown error'}",
            attempts=max_retries,
        )

    def _record_metrics(
        self, task: str, started: float, prompt_chars: int, response: LLMResponse
    ) -> GenerationMetrics:
        prompt_tokens = estimate_tokens(prompt_chars)
        completion_tokens = estimate_tokens(len(response.content))
        cost = (
            prompt_tokens * self._pricing.input_per_million
            + completion_tokens * self._pricing.output_per_million
        ) / 1_000_000
        metrics = GenerationMetrics(
            duration_ms=int((time.monotonic() - started) * 1000),
            task=task,
            prompt_tokens_estimated=prompt_tokens,
            completion_tokens_estimated=completion_tokens,
            cost_usd_estimated=round(cost, 6),
        )

        llm_tokens.labels(service=SERVICE_NAME, direction="prompt").inc(prompt_tokens)
        llm_tokens.labels(service=SERVICE_NAME, direction="completion").inc(completion_tokens)
        llm_cost_usd.labels(service=SERVICE_NAME, model=self._model or "default").inc(cost)
        # Provider usage is reported as-is; 0 means the provider sent none.
        log_performance(
            logger,
            "LLM generation completed",
            duration_ms=metrics.duration_ms,
            task=task,
            tokens_estimated=metrics.tokens_estimated,
            cost_usd_estimated=metrics.cost_usd_estimated,
            provider_model=response.model,
            provider_prompt_tokens=response.prompt_tokens,
            provider_completion_tokens=response.completion_tokens,
            provider_total_tokens=response.total_tokens,
        )
        return metrics


def _describe(exc: BaseException) -> str:
    if isinstance(exc, asyncio.TimeoutError):
        return "model request timed out"
    return str(exc)
