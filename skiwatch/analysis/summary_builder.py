"""Location summary builder: one ForecastPayload -> one LocationSummary."""

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import TypeVar

from skiwatch.analysis.rating import classify, describe
from skiwatch.analysis.sampler import current_snow_depth_cm, nearest_index
from skiwatch.config.schema import LocationConfig
from skiwatch.errors import EmptySeries, MissingCurrentConditions
from skiwatch.models.common import round_half_away
from skiwatch.models.conditions import DaySummary, HourlySlot, LocationSummary
from skiwatch.models.forecast import DailyBlock, ForecastPayload, HourlyBlock

logger = logging.getLogger(__name__)

MAX_FORECAST_DAYS = 7

T = TypeVar("T")


class LocationSummaryBuilder:
    def __init__(self, max_days: int = MAX_FORECAST_DAYS):
        self.max_days = min(max_days, MAX_FORECAST_DAYS)

    def build(
        self,
        location: LocationConfig,
        payload: ForecastPayload,
        now: datetime,
        forecast_days: int | None = None,
        hourly_hours: int | None = None,
    ) -> LocationSummary:
        """Derive the summary for one location at reference time ``now``.

        Optional daily/hourly arrays degrade to None or 0; only a missing
        instantaneous block is fatal for the location.

        Raises:
            MissingCurrentConditions: if ``payload.current`` is absent.
        """
        current = payload.current
        if current is None:
            raise MissingCurrentConditions(
                f"{location.name}: forecast has no current conditions"
            )

        snow_cm = current_snow_depth_cm(payload.hourly, now)
        wind_kmh = round_half_away(current.wind_kmh)
        # Unknown depth is displayed as unknown but rated as bare ground
        tier = classify(current.weather_code, wind_kmh, snow_cm or 0)

        temp_min, temp_max = _today_min_max(payload.daily)
        snowfall_today = _round_or(_first(payload.daily, "snowfall_sum_cm"), 0)

        days: tuple[DaySummary, ...] = ()
        if forecast_days is not None and payload.daily is not None:
            days = self._build_days(payload.daily, forecast_days, snow_cm)

        hourly: tuple[HourlySlot, ...] = ()
        if hourly_hours is not None and payload.hourly is not None:
            hourly = _build_hourly(payload.hourly, now, hourly_hours)

        logger.debug(
            "%s: code=%d wind=%d snow=%s tier=%s",
            location.name, current.weather_code, wind_kmh, snow_cm, tier.value,
        )
        return LocationSummary(
            location=location,
            weather_code=current.weather_code,
            weather=describe(current.weather_code),
            temperature_c=round_half_away(current.temperature_c),
            wind_kmh=wind_kmh,
            snow_depth_cm=snow_cm,
            temp_min_c=temp_min,
            temp_max_c=temp_max,
            snowfall_today_cm=snowfall_today,
            tier=tier,
            days=days,
            hourly=hourly,
        )

    def _build_days(
        self, daily: DailyBlock, forecast_days: int, snow_cm: int | None
    ) -> tuple[DaySummary, ...]:
        """One DaySummary per forecast date.

        There is no per-day snow depth forecast, so every day is rated
        against today's resolved snowpack.
        """
        count = min(forecast_days, self.max_days, len(daily.dates))
        snowpack = snow_cm or 0
        days = []
        for i in range(count):
            code = _at(daily.weather_code, i)
            wind_max = _round_or(_at(daily.wind_max_kmh, i), 0)
            days.append(
                DaySummary(
                    date=daily.dates[i],
                    weather_code=code,
                    tier=classify(code, wind_max, snowpack),
                    temp_min_c=_round_or(_at(daily.temp_min_c, i), None),
                    temp_max_c=_round_or(_at(daily.temp_max_c, i), None),
                    snowfall_cm=_round_or(_at(daily.snowfall_sum_cm, i), 0),
                    wind_max_kmh=wind_max,
                )
            )
        return tuple(days)


def _build_hourly(hourly: HourlyBlock, now: datetime, hours: int) -> tuple[HourlySlot, ...]:
    try:
        start = nearest_index(hourly.timestamps, now)
    except EmptySeries:
        return ()
    end = min(start + hours, len(hourly.timestamps))
    return tuple(
        HourlySlot(
            time=hourly.timestamps[i],
            weather_code=_at(hourly.weather_code, i),
            temperature_c=_round_or(_at(hourly.temperature_c, i), None),
            snow_depth_cm=round_half_away((_at(hourly.snow_depth_m, i) or 0) * 100),
            snowfall_cm=_round_or(_at(hourly.snowfall_cm, i), 0),
        )
        for i in range(start, end)
    )


def _today_min_max(daily: DailyBlock | None) -> tuple[int | None, int | None]:
    if daily is None or not daily.temp_min_c or not daily.temp_max_c:
        return None, None
    return (
        _round_or(_first(daily, "temp_min_c"), None),
        _round_or(_first(daily, "temp_max_c"), None),
    )


def _first(daily: DailyBlock | None, attr: str) -> float | None:
    if daily is None:
        return None
    return _at(getattr(daily, attr), 0)


def _at(values: Sequence[T | None] | None, i: int) -> T | None:
    if not values or i >= len(values):
        return None
    return values[i]


def _round_or(value: float | None, default: T) -> int | T:
    return default if value is None else round_half_away(value)
