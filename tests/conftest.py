"""
PyTest configuration and fixtures.
"""

import pytest

from shared.analysis.cache import ResultCache
from shared.analysis.weather import WeatherClient
from shared.contracts.analysis import BusinessRequest, ClimateRequest, CyberRequest
from shared.llm_adapter import JSONGenerator, MockProvider
from services.analysis_service.config import AnalysisConfig


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


CLIMATE_REPLY = {
    "ok": True,
    "task": "climate_guard",
    "risk_level": "high",
    "findings": [
        {"title": "Heatwave", "evidence": "4 days above 35C", "confidence": 0.8},
    ],
    "recommendations": [
        {"action": "Irrigate early", "impact": "Protect yield", "est_saving_usd": 900},
    ],
    "notes": "Prepare now.",
}

BUSINESS_REPLY = {
    "ok": True,
    "task": "business_shield",
    "score": 71,
    "risk_level": "low",
    "findings": [
        {"title": "Single supplier", "evidence": "One supplier covers 80%", "confidence": 0.7},
    ],
    "recommendations": [
        {"action": "Add a second supplier", "impact": "Less stock-out risk", "est_saving_usd": 1500.5},
    ],
}

CYBER_REPLY = {
    "ok": True,
    "task": "cyberprotect",
    "actions": [
        {"type": "block", "reason": "Phishing", "event_id": "evt_1", "classification": "malicious"},
    ],
    "findings": [
        {"title": "Phishing attempt", "evidence": "Typosquatted sender", "confidence": 0.95},
    ],
}


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ResultCache(max_entries=8, ttl_seconds=600, clock=clock)


@pytest.fixture
def make_generator():
    """Build a JSONGenerator around a scripted provider, without retry delay."""

    def _make(replies):
        provider = MockProvider(replies)
        return JSONGenerator(provider, model="gemini-2.5-flash", retry_delay_s=0), provider

    return _make


@pytest.fixture
def offline_weather():
    return WeatherClient(api_key="")


@pytest.fixture
def climate_request():
    return ClimateRequest.model_validate({
        "inputs": {"lat": 14.7167, "lon": -17.4677, "horizonDays": 10, "sector": "agri"},
        "locale": "fr-TN",
        "constraints": {"max_recos": 5, "tone": "concise", "cost_mode": "cheap_fast"},
    })


@pytest.fixture
def business_request():
    return BusinessRequest.model_validate({
        "inputs": {
            "sales": [{"date": "2025-01-01", "qty": 100, "revenue": 5000}],
            "stock": [{"sku": "PROD-001", "qty": 50, "leadDays": 14}],
            "suppliers": [{"name": "Supplier A", "onTimeRate": 0.9, "region": "Dakar"}],
        },
    })


@pytest.fixture
def cyber_request():
    return CyberRequest.model_validate({
        "inputs": {
            "events": [
                {
                    "id": "evt_1",
                    "type": "email",
                    "content": "URGENT: verify your PayPal account at http://paypa1.com/login",
                    "metadata": {"from": "security@paypa1.com"},
                },
            ],
        },
    })


def make_config(
    api_key: str = "", force_demo: bool = False, provider: str = "gemini"
) -> AnalysisConfig:
    return AnalysisConfig(
        llm_provider=provider,
        llm_api_key=api_key,
        llm_model="gemini-2.5-flash",
        llm_base_url=None,
        llm_request_timeout=5.0,
        llm_max_retries=2,
        llm_retry_delay_seconds=0.0,
        llm_prompt_price_per_1m=None,
        llm_completion_price_per_1m=None,
        force_demo_mode=force_demo,
        openweather_api_key="",
        weather_timeout=1.0,
        cache_max_entries=16,
        cache_ttl_seconds=600.0,
        log_level="INFO",
        cors_origin="http://localhost:5173",
    )
