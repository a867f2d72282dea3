"""Forecast payload models: one per-location snapshot from the weather API."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CurrentConditions:
    weather_code: int
    temperature_c: float
    wind_kmh: float


@dataclass(frozen=True)
class HourlyBlock:
    """Index-aligned hourly series. Timestamps are ISO strings, strictly increasing."""

    timestamps: list[str]
    snow_depth_m: list[float | None] | None = None
    snowfall_cm: list[float | None] | None = None
    temperature_c: list[float | None] | None = None
    wind_kmh: list[float | None] | None = None
    weather_code: list[int | None] | None = None


@dataclass(frozen=True)
class DailyBlock:
    """Index-aligned daily series, one entry per forecast date (YYYY-MM-DD)."""

    dates: list[str]
    weather_code: list[int | None] = field(default_factory=list)
    temp_min_c: list[float | None] | None = None
    temp_max_c: list[float | None] | None = None
    snowfall_sum_cm: list[float | None] | None = None
    wind_max_kmh: list[float | None] | None = None


@dataclass(frozen=True)
class ForecastPayload:
    current: CurrentConditions | None
    hourly: HourlyBlock | None = None
    daily: DailyBlock | None = None
    fetched_at: str = ""
