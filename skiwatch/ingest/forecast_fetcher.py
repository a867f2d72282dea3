"""Forecast fetcher: retrieves and parses Open-Meteo forecasts per location."""

import logging

from skiwatch.config.schema import LocationConfig
from skiwatch.errors import MissingCurrentConditions
from skiwatch.ingest.openmeteo_client import OpenMeteoClient
from skiwatch.models.common import utc_now_iso
from skiwatch.models.forecast import (
    CurrentConditions,
    DailyBlock,
    ForecastPayload,
    HourlyBlock,
)

logger = logging.getLogger(__name__)


class ForecastFetcher:
    def __init__(self, client: OpenMeteoClient, detail: bool = False):
        self.client = client
        self.detail = detail

    def fetch(self, location: LocationConfig) -> ForecastPayload:
        """Fetch and parse the forecast for a location.

        Errors propagate; the fleet aggregator isolates them per location.
        """
        raw = self.client.get_forecast(location, detail=self.detail)
        payload = parse_payload(raw)
        if payload.current is None:
            raise MissingCurrentConditions(
                f"{location.name}: response has no current_weather block"
            )
        return payload

    __call__ = fetch


def parse_payload(raw: dict) -> ForecastPayload:
    """Map an Open-Meteo response onto a ForecastPayload.

    Absent blocks and series become None; a missing ``current_weather``
    yields ``current=None`` and is left for the caller to reject.
    """
    return ForecastPayload(
        current=_parse_current(raw.get("current_weather")),
        hourly=_parse_hourly(raw.get("hourly")),
        daily=_parse_daily(raw.get("daily")),
        fetched_at=utc_now_iso(),
    )


def _parse_current(cw: dict | None) -> CurrentConditions | None:
    if not cw or cw.get("weathercode") is None:
        return None
    return CurrentConditions(
        weather_code=int(cw["weathercode"]),
        temperature_c=float(cw.get("temperature", 0.0)),
        wind_kmh=float(cw.get("windspeed", 0.0)),
    )


def _parse_hourly(hourly: dict | None) -> HourlyBlock | None:
    if not hourly or not hourly.get("time"):
        return None
    return HourlyBlock(
        timestamps=list(hourly["time"]),
        snow_depth_m=hourly.get("snow_depth"),
        snowfall_cm=hourly.get("snowfall"),
        temperature_c=hourly.get("temperature_2m"),
        wind_kmh=hourly.get("windspeed_10m"),
        weather_code=hourly.get("weathercode"),
    )


def _parse_daily(daily: dict | None) -> DailyBlock | None:
    if not daily or not daily.get("time"):
        return None
    return DailyBlock(
        dates=list(daily["time"]),
        weather_code=daily.get("weathercode") or [],
        temp_min_c=daily.get("temperature_2m_min"),
        temp_max_c=daily.get("temperature_2m_max"),
        snowfall_sum_cm=daily.get("snowfall_sum"),
        wind_max_kmh=daily.get("windspeed_10m_max"),
    )
