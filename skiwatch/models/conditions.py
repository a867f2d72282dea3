"""Ski-condition tiers and derived per-location summary records."""

from dataclasses import dataclass, field
from enum import StrEnum

from skiwatch.config.schema import LocationConfig

HIGH_WIND_KMH = 60


class ConditionTier(StrEnum):
    """Ski-condition tier, ordered by desirability (EXCELLENT > GOOD > FAIR > POOR)."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def style(self) -> str:
        return f"rating-{self.value}"

    def __lt__(self, other):
        if not isinstance(other, ConditionTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, ConditionTier):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, ConditionTier):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, ConditionTier):
            return NotImplemented
        return self.rank >= other.rank


_RANKS = {
    ConditionTier.POOR: 0,
    ConditionTier.FAIR: 1,
    ConditionTier.GOOD: 2,
    ConditionTier.EXCELLENT: 3,
}

_LABELS = {
    ConditionTier.EXCELLENT: "⭐ Excellent",
    ConditionTier.GOOD: "✅ Good",
    ConditionTier.FAIR: "⚠️ Fair",
    ConditionTier.POOR: "❌ Poor",
}


@dataclass(frozen=True)
class WeatherDescription:
    icon: str
    description: str

    def __str__(self) -> str:
        return f"{self.icon} {self.description}"


@dataclass(frozen=True)
class DaySummary:
    date: str  # YYYY-MM-DD
    weather_code: int | None
    tier: ConditionTier
    temp_min_c: int | None
    temp_max_c: int | None
    snowfall_cm: int
    wind_max_kmh: int


@dataclass(frozen=True)
class HourlySlot:
    time: str  # ISO local time, e.g. 2026-01-15T14:00
    weather_code: int | None
    temperature_c: int | None
    snow_depth_cm: int
    snowfall_cm: int


@dataclass(frozen=True)
class LocationSummary:
    location: LocationConfig
    weather_code: int
    weather: WeatherDescription
    temperature_c: int
    wind_kmh: int
    snow_depth_cm: int | None
    temp_min_c: int | None
    temp_max_c: int | None
    snowfall_today_cm: int
    tier: ConditionTier
    days: tuple[DaySummary, ...] = field(default_factory=tuple)
    hourly: tuple[HourlySlot, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return self.location.name

    @property
    def high_wind(self) -> bool:
        return self.wind_kmh > HIGH_WIND_KMH
