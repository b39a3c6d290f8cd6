from shared.analysis.cache import CacheEntry, ResultCache
from shared.analysis.fingerprint import fingerprint, normalize
from shared.analysis.orchestrator import (
    AnalysisOrchestrator,
    BusinessOrchestrator,
    ClimateOrchestrator,
    CyberOrchestrator,
)
from shared.analysis.validator import validate_response
from shared.analysis.weather import WeatherClient

__all__ = [
    "AnalysisOrchestrator",
    "BusinessOrchestrator",
    "CacheEntry",
    "ClimateOrchestrator",
    "CyberOrchestrator",
    "ResultCache",
    "WeatherClient",
    "fingerprint",
    "normalize",
    "validate_response",
]
