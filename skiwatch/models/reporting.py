"""Reporting models for refresh cycles."""

from dataclasses import dataclass, field

from skiwatch.models.common import CycleId


@dataclass
class CycleSummary:
    cycle_id: CycleId
    locations_configured: int = 0
    locations_ok: int = 0
    locations_failed: int = 0
    tier_counts: dict[str, int] = field(default_factory=dict)
    best_location: str = ""
    best_tier: str = ""
    deepest_snow_location: str = ""
    deepest_snow_cm: int | None = None
    duration_seconds: float = 0.0
    errors: list[str] = field(default_factory=list)
