"""Cycle summarizer: aggregates a FleetResult into a CycleSummary."""

from skiwatch.models.fleet import FleetResult
from skiwatch.models.reporting import CycleSummary


class CycleSummarizer:
    def __init__(self, cycle_id: str):
        self.summary = CycleSummary(cycle_id=cycle_id)

    def record_fleet(self, fleet: FleetResult) -> None:
        self.summary.locations_configured = len(fleet)
        self.summary.locations_ok = len(fleet.summaries)
        self.summary.locations_failed = fleet.failure_count

        for s in fleet.summaries:
            key = s.tier.value
            self.summary.tier_counts[key] = self.summary.tier_counts.get(key, 0) + 1

        if fleet.summaries:
            # max() keeps the first of equal tiers, so configured order breaks ties
            best = max(fleet.summaries, key=lambda s: s.tier.rank)
            self.summary.best_location = best.name
            self.summary.best_tier = best.tier.value

        with_depth = [s for s in fleet.summaries if s.snow_depth_cm is not None]
        if with_depth:
            deepest = max(with_depth, key=lambda s: s.snow_depth_cm)
            self.summary.deepest_snow_location = deepest.name
            self.summary.deepest_snow_cm = deepest.snow_depth_cm

        for failure in fleet.failures:
            self.record_error(f"{failure.name}: {failure.cause}")

    def record_duration(self, seconds: float) -> None:
        self.summary.duration_seconds = seconds

    def record_error(self, error: str) -> None:
        self.summary.errors.append(error)

    def finalize(self) -> CycleSummary:
        return self.summary
