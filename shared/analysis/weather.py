"""
Weather forecast enrichment for climate analyses.

Calls the OpenWeather One Call 3.0 API and reduces the daily forecast to a
WeatherForecast. Enrichment is never fatal: without an API key, or on any
failure of the remote call, a static forecast is returned instead.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from shared.contracts.analysis import WeatherForecast
from shared.observability.metrics import weather_fallbacks

logger = logging.getLogger(__name__)

ONECALL_URL = "https://api.openweathermap.org/data/3.0/onecall"
HEATWAVE_THRESHOLD_C = 35.0

_DAKAR = (14.7167, -17.4677)

_STATIC_FORECASTS: dict[str, dict[str, Any]] = {
    "dakar": {
        "summary": (
            "Conditions chaudes et sèches avec températures élevées. "
            "Risque de vague de chaleur J+3 à J+6."
        ),
        "maxTemp": 38,
        "minTemp": 24,
        "totalPrecipitation": 2,
        "heatwaveDays": 4,
        "extremeWeatherAlerts": ["Vague de chaleur J+3 à J+6", "Vent de sable possible J+8"],
    },
    "default": {
        "summary": "Conditions météo stables avec températures modérées.",
        "maxTemp": 28,
        "minTemp": 18,
        "totalPrecipitation": 15,
        "heatwaveDays": 0,
        "extremeWeatherAlerts": [],
    },
}


def static_forecast(lat: float, lon: float, horizon_days: int) -> WeatherForecast:
    """Canned forecast; the Dakar region gets its own hot and dry profile."""
    near_dakar = abs(lat - _DAKAR[0]) < 1 and abs(lon - _DAKAR[1]) < 1
    profile = _STATIC_FORECASTS["dakar" if near_dakar else "default"]
    return WeatherForecast(lat=lat, lon=lon, horizonDays=horizon_days, **profile)


def summarize_forecast(
    data: dict[str, Any], lat: float, lon: float, horizon_days: int
) -> WeatherForecast:
    """Reduce a One Call response to the horizon-bounded summary."""
    daily = data["daily"][:horizon_days]
    if not daily:
        raise ValueError("forecast contains no daily entries")

    max_temp = max(day["temp"]["max"] for day in daily)
    min_temp = min(day["temp"]["min"] for day in daily)
    total_precipitation = sum(day.get("rain") or 0 for day in daily)
    heatwave_days = sum(1 for day in daily if day["temp"]["max"] > HEATWAVE_THRESHOLD_C)
    alerts = [alert["event"] for alert in data.get("alerts") or []]

    return WeatherForecast(
        lat=lat,
        lon=lon,
        horizonDays=horizon_days,
        summary=(
            f"Prévisions {horizon_days} jours: {max_temp}°C max, {min_temp}°C min, "
            f"{total_precipitation}mm précipitations."
        ),
        maxTemp=max_temp,
        minTemp=min_temp,
        totalPrecipitation=total_precipitation,
        heatwaveDays=heatwave_days,
        extremeWeatherAlerts=alerts,
    )


class WeatherClient:

    def __init__(
        self,
        api_key: str = "",
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
        base_url: str = ONECALL_URL,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    async def get_forecast(self, lat: float, lon: float, horizon_days: int) -> WeatherForecast:
        if not self._api_key:
            logger.info("Using static weather data (OPENWEATHER_API_KEY not set)")
            weather_fallbacks.labels(reason="no_api_key").inc()
            return static_forecast(lat, lon, horizon_days)

        params = {
            "lat": lat,
            "lon": lon,
            "exclude": "minutely,hourly",
            "units": "metric",
            "appid": self._api_key,
        }
        try:
            resp = await self._http.get(self._base_url, params=params)
            resp.raise_for_status()
            return summarize_forecast(resp.json(), lat, lon, horizon_days)
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            logger.warning(
                "OpenWeather call failed, using static forecast: %s",
                type(exc).__name__,
                extra={"_extra": {"lat": lat, "lon": lon}},
            )
            weather_fallbacks.labels(reason="upstream_error").inc()
            return static_forecast(lat, lon, horizon_days)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()
