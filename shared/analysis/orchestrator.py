"""
Per-task analysis orchestrators.

Every invocation walks the same path:

  demo check -> cache lookup -> (hit: return)
             -> enrich -> generate -> validate -> cache store -> return

Demo mode is decided at construction and short-circuits to the canned
response without touching the cache or the network. Once a live request
has been attempted, failures propagate: ModelUnavailableError from the
generator and SchemaError from the validator are never replaced with mock
data, and schema failures are not retried. Only validated responses are
cached.
"""

from __future__ import annotations

import logging
import time
from abc import ABC
from typing import Any, ClassVar

from pydantic import BaseModel

from shared.analysis.cache import ResultCache
from shared.analysis.fingerprint import fingerprint
from shared.analysis.mocks import MOCK_RESPONSES
from shared.analysis.prompts import PROMPT_VERSION, SYSTEM_PROMPTS
from shared.analysis.validator import validate_response
from shared.analysis.weather import WeatherClient
from shared.contracts.analysis import (
    BaseAnalysisRequest,
    BusinessRequest,
    ClimateRequest,
    Constraints,
    CyberRequest,
    Mode,
    Task,
)
from shared.errors import AnalysisError
from shared.llm_adapter.json_generator import JSONGenerator
from shared.observability.metrics import analysis_duration, analysis_requests

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.2
EXPLORATORY_TEMPERATURE = 0.3


def temperature_for(constraints: Constraints) -> float:
    if constraints.cost_mode in ("quality", "premium"):
        return EXPLORATORY_TEMPERATURE
    return DEFAULT_TEMPERATURE


class AnalysisOrchestrator(ABC):
    """Shared flow; subclasses pick the task and may enrich the payload."""

    task: ClassVar[Task]
    request_model: ClassVar[type[BaseAnalysisRequest]]

    def __init__(
        self,
        mode: Mode,
        cache: ResultCache,
        generator: JSONGenerator,
        max_retries: int = 2,
    ) -> None:
        self._mode = mode
        self._cache = cache
        self._generator = generator
        self._max_retries = max_retries

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def task_name(self) -> str:
        return self.task.internal_name

    def cache_key(self, request: BaseAnalysisRequest) -> str:
        return fingerprint({
            "task": self.task_name,
            "inputs": request.inputs,
            "constraints": request.constraints,
            "locale": request.locale,
        })

    async def analyze(self, request: BaseAnalysisRequest) -> BaseModel:
        if not isinstance(request, self.request_model):
            raise TypeError(
                f"{type(self).__name__} expects {self.request_model.__name__}, "
                f"got {type(request).__name__}"
            )

        if self._mode is Mode.DEMO:
            logger.info("%s analysis in DEMO mode", self.task_name)
            analysis_requests.labels(task=self.task_name, outcome="demo").inc()
            return MOCK_RESPONSES[self.task]

        key = self.cache_key(request)
        cached = self._cache.get(key)
        if cached is not None:
            logger.info(
                "%s analysis cache hit",
                self.task_name,
                extra={"_extra": {"cache_key": key[:16]}},
            )
            analysis_requests.labels(task=self.task_name, outcome="cache_hit").inc()
            return cached

        started = time.monotonic()
        try:
            payload = await self.build_payload(request)
            raw = await self._generator.generate(
                task=self.task_name,
                system_prompt=SYSTEM_PROMPTS[self.task],
                payload=payload,
                temperature=temperature_for(request.constraints),
                max_retries=self._max_retries,
            )
            validated = validate_response(self.task, raw)
        except AnalysisError as exc:
            analysis_requests.labels(task=self.task_name, outcome="failed").inc()
            logger.error(
                "%s analysis failed: %s",
                self.task_name,
                exc.code,
                extra={"_extra": {"error": exc.message}},
            )
            raise

        self._cache.set(key, validated)
        analysis_duration.labels(task=self.task_name).observe(time.monotonic() - started)
        analysis_requests.labels(task=self.task_name, outcome="generated").inc()
        logger.info(
            "%s analysis completed",
            self.task_name,
            extra={"_extra": {**self.describe(validated), "prompt_version": PROMPT_VERSION}},
        )
        return validated

    async def build_payload(self, request: BaseAnalysisRequest) -> dict[str, Any]:
        return {
            **request.inputs.model_dump(mode="json"),
            "constraints": request.constraints.model_dump(mode="json"),
            "locale": request.locale or "en",
        }

    def describe(self, response: BaseModel) -> dict[str, Any]:
        """Small summary of a response for the completion log line."""
        return {}


class ClimateOrchestrator(AnalysisOrchestrator):
    task = Task.CLIMATE
    request_model = ClimateRequest

    def __init__(
        self,
        mode: Mode,
        cache: ResultCache,
        generator: JSONGenerator,
        weather: WeatherClient,
        max_retries: int = 2,
    ) -> None:
        super().__init__(mode, cache, generator, max_retries=max_retries)
        self._weather = weather

    async def build_payload(self, request: ClimateRequest) -> dict[str, Any]:
        inputs = request.inputs
        forecast = await self._weather.get_forecast(inputs.lat, inputs.lon, inputs.horizonDays)
        payload = await super().build_payload(request)
        payload["forecast"] = forecast.model_dump(mode="json")
        return payload

    def describe(self, response: BaseModel) -> dict[str, Any]:
        return {"risk_level": response.risk_level, "findings": len(response.findings)}


class BusinessOrchestrator(AnalysisOrchestrator):
    task = Task.BUSINESS
    request_model = BusinessRequest

    def describe(self, response: BaseModel) -> dict[str, Any]:
        return {"score": response.score, "risk_level": response.risk_level}


class CyberOrchestrator(AnalysisOrchestrator):
    task = Task.CYBER
    request_model = CyberRequest

    def describe(self, response: BaseModel) -> dict[str, Any]:
        return {"actions": len(response.actions)}
