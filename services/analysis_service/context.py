"""
Process-wide service context.

Owns the single ResultCache, the model provider and the weather client,
and hands them to the orchestrators by reference. Built once in the app
lifespan; nothing here is reachable as a module global.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from shared.analysis.cache import ResultCache
from shared.analysis.orchestrator import (
    AnalysisOrchestrator,
    BusinessOrchestrator,
    ClimateOrchestrator,
    CyberOrchestrator,
)
from shared.analysis.weather import WeatherClient
from shared.contracts.analysis import Mode, Task
from shared.errors import ConfigurationError
from shared.llm_adapter import JSONGenerator, LLMProvider, ModelPricing, build_llm_provider
from shared.llm_adapter.json_generator import MODEL_PRICING, DEFAULT_PRICING
from services.analysis_service.config import AnalysisConfig

logger = logging.getLogger(__name__)


@dataclass
class ServiceContext:
    mode: Mode
    cache: ResultCache
    provider: LLMProvider | None
    generator: JSONGenerator
    weather: WeatherClient
    orchestrators: dict[Task, AnalysisOrchestrator]

    def orchestrator(self, task: Task) -> AnalysisOrchestrator:
        return self.orchestrators[task]

    async def aclose(self) -> None:
        await self.weather.aclose()
        if self.provider is not None:
            await self.provider.aclose()


def _pricing(cfg: AnalysisConfig) -> ModelPricing:
    base = MODEL_PRICING.get(cfg.llm_model, DEFAULT_PRICING)
    return ModelPricing(
        input_per_million=(
            cfg.llm_prompt_price_per_1m
            if cfg.llm_prompt_price_per_1m is not None
            else base.input_per_million
        ),
        output_per_million=(
            cfg.llm_completion_price_per_1m
            if cfg.llm_completion_price_per_1m is not None
            else base.output_per_million
        ),
    )


def build_context(
    cfg: AnalysisConfig,
    provider: LLMProvider | None = None,
    weather: WeatherClient | None = None,
    cache: ResultCache | None = None,
) -> ServiceContext:
    """
    Wire the core components. Explicit arguments override config.

    The mode follows the provider actually built: without one the service
    runs in demo mode. The scripted mock provider is only available when
    injected, never from configuration.
    """
    mode = Mode.DEMO if cfg.force_demo_mode else Mode.LIVE
    if provider is None and mode is Mode.LIVE:
        if cfg.llm_provider.lower() == "mock":
            raise ConfigurationError(
                "LLM_PROVIDER=mock has no scripted replies; use FORCE_DEMO_MODE instead"
            )
        provider = build_llm_provider(
            cfg.llm_provider,
            api_key=cfg.llm_api_key,
            model=cfg.llm_model,
            base_url=cfg.llm_base_url,
            timeout=cfg.llm_request_timeout,
        )
        if provider is None:
            mode = Mode.DEMO

    if cache is None:
        cache = ResultCache(
            max_entries=cfg.cache_max_entries,
            ttl_seconds=cfg.cache_ttl_seconds,
        )
    if weather is None:
        weather = WeatherClient(
            api_key=cfg.openweather_api_key,
            timeout=cfg.weather_timeout,
        )
    generator = JSONGenerator(
        provider,
        model=cfg.llm_model,
        pricing=_pricing(cfg),
        timeout_s=cfg.llm_request_timeout,
        retry_delay_s=cfg.llm_retry_delay_seconds,
    )

    retries = cfg.llm_max_retries
    orchestrators: dict[Task, AnalysisOrchestrator] = {
        Task.CLIMATE: ClimateOrchestrator(mode, cache, generator, weather, max_retries=retries),
        Task.BUSINESS: BusinessOrchestrator(mode, cache, generator, max_retries=retries),
        Task.CYBER: CyberOrchestrator(mode, cache, generator, max_retries=retries),
    }

    if mode is Mode.DEMO:
        logger.warning("No model provider available or FORCE_DEMO_MODE set - running in DEMO mode with mock data")
    if not weather.configured:
        logger.warning("OPENWEATHER_API_KEY not set - using static weather data")
    logger.info(
        "Service context ready",
        extra={"_extra": {
            "mode": mode.value,
            "model": cfg.llm_model,
            "cache_max_entries": cache.max_entries,
            "cache_ttl_seconds": cache.ttl_seconds,
        }},
    )
    return ServiceContext(
        mode=mode,
        cache=cache,
        provider=provider,
        generator=generator,
        weather=weather,
        orchestrators=orchestrators,
    )
