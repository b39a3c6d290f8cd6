"""
Request and response contracts for the GaiaShield analysis tasks.

Requests are validated once, at the HTTP boundary, and are immutable from
then on. Responses are validated by ``shared.analysis.validator`` before
they are cached or returned, so their scalar fields are strict: no
coercion of strings to numbers or floats to ints.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr


class Task(str, Enum):
    CLIMATE = "climate"
    BUSINESS = "business"
    CYBER = "cyber"

    @property
    def internal_name(self) -> str:
        return TASK_NAMES[self]


TASK_NAMES: dict[Task, str] = {
    Task.CLIMATE: "climate_guard",
    Task.BUSINESS: "business_shield",
    Task.CYBER: "cyberprotect",
}


class Mode(str, Enum):
    """Operating mode, decided once at startup."""

    DEMO = "demo"
    LIVE = "live"


Tone = Literal["concise", "detailed", "technical"]
CostMode = Literal["cheap_fast", "balanced", "quality", "premium"]
RiskLevel = Literal["low", "medium", "high", "critical", "unknown"]
ActionType = Literal["block", "quarantine", "ignore", "optimize", "alert"]
Classification = Literal["safe", "suspicious", "malicious"]

DEFAULT_LOCALE = "fr-TN"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class Constraints(_FrozenModel):
    max_recos: int = Field(default=5, ge=1, le=10)
    tone: Tone = "concise"
    cost_mode: CostMode = "cheap_fast"


class ClimateInputs(_FrozenModel):
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    horizonDays: int = Field(ge=1, le=10)
    sector: Literal["retail", "agri", "logistics", "manufacturing", "services"]
    context: str | None = None


class SalesEntry(_FrozenModel):
    date: str = Field(pattern=r"^\d{4}-\d{2}-\d{2}$")
    qty: int = Field(ge=0)
    revenue: float = Field(ge=0)


class StockEntry(_FrozenModel):
    sku: str
    qty: int = Field(ge=0)
    leadDays: int = Field(ge=0)


class SupplierEntry(_FrozenModel):
    name: str
    onTimeRate: float = Field(ge=0, le=1)
    region: str


class BusinessInputs(_FrozenModel):
    sales: list[SalesEntry] = Field(min_length=1)
    stock: list[StockEntry] = Field(min_length=1)
    suppliers: list[SupplierEntry] = Field(min_length=1)
    energyCostPerKwh: float | None = Field(default=None, ge=0)
    cashOnHand: float | None = Field(default=None, ge=0)


class CyberEvent(_FrozenModel):
    id: str
    type: Literal["email", "url", "log"]
    content: str
    metadata: dict[str, Any] | None = None


class CyberInputs(_FrozenModel):
    events: list[CyberEvent] = Field(min_length=1)


class BaseAnalysisRequest(_FrozenModel):
    locale: str = DEFAULT_LOCALE
    constraints: Constraints = Field(default_factory=Constraints)


class ClimateRequest(BaseAnalysisRequest):
    task: Literal["climate"] = "climate"
    inputs: ClimateInputs


class BusinessRequest(BaseAnalysisRequest):
    task: Literal["business"] = "business"
    inputs: BusinessInputs


class CyberRequest(BaseAnalysisRequest):
    task: Literal["cyber"] = "cyber"
    inputs: CyberInputs


AnalysisRequest = Union[ClimateRequest, BusinessRequest, CyberRequest]


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class Finding(_FrozenModel):
    title: StrictStr
    evidence: StrictStr
    confidence: float = Field(ge=0, le=1, strict=True)


class Recommendation(_FrozenModel):
    action: StrictStr
    impact: StrictStr
    est_saving_usd: float = Field(ge=0, strict=True)


class Action(_FrozenModel):
    type: ActionType
    reason: StrictStr
    event_id: StrictStr | None = None
    classification: Classification | None = None


class BaseAnalysisResponse(_FrozenModel):
    ok: StrictBool
    task: StrictStr
    risk_level: RiskLevel | None = None
    findings: list[Finding] | None = None
    recommendations: list[Recommendation] | None = None
    score: StrictInt | None = Field(default=None, ge=0, le=100)
    actions: list[Action] | None = None
    notes: StrictStr | None = None


class ClimateResponse(BaseAnalysisResponse):
    task: Literal["climate_guard"]
    risk_level: RiskLevel
    findings: list[Finding]
    recommendations: list[Recommendation]


class BusinessResponse(BaseAnalysisResponse):
    task: Literal["business_shield"]
    score: StrictInt = Field(ge=0, le=100)
    risk_level: RiskLevel
    findings: list[Finding]
    recommendations: list[Recommendation]


class CyberResponse(BaseAnalysisResponse):
    task: Literal["cyberprotect"]
    actions: list[Action]
    findings: list[Finding]


AnalysisResponse = Union[ClimateResponse, BusinessResponse, CyberResponse]


class WeatherForecast(_FrozenModel):
    lat: float
    lon: float
    horizonDays: int
    summary: str
    maxTemp: float
    minTemp: float
    totalPrecipitation: float
    heatwaveDays: int
    extremeWeatherAlerts: list[str] = Field(default_factory=list)
