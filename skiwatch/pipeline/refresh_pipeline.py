"""Refresh pipeline: one fetch-and-summarize cycle over the configured fleet."""

import logging
import time
from dataclasses import dataclass
from datetime import datetime

from skiwatch.config.schema import SkiwatchConfig
from skiwatch.ingest.forecast_fetcher import ForecastFetcher
from skiwatch.ingest.openmeteo_client import OpenMeteoClient
from skiwatch.models.fleet import FleetResult
from skiwatch.models.reporting import CycleSummary
from skiwatch.pipeline.fleet_aggregator import FleetAggregator
from skiwatch.reporting.cycle_summarizer import CycleSummarizer
from skiwatch.reporting.formatters import format_summary_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CycleOutcome:
    fleet: FleetResult
    summary: CycleSummary


class RefreshPipeline:
    def __init__(
        self,
        config: SkiwatchConfig,
        client: OpenMeteoClient | None = None,
        detail: bool = False,
    ):
        self.config = config
        self.client = client or OpenMeteoClient(config.api)
        self.detail = detail

    def run(self, now: datetime | None = None) -> CycleOutcome:
        """Execute a full refresh cycle. Per-location failures are reported, not raised."""
        start_time = time.monotonic()
        locations = self.config.enabled_locations()

        fetcher = ForecastFetcher(self.client, detail=self.detail)
        aggregator = FleetAggregator(
            max_workers=self.config.ops.max_workers,
            timezone=self.config.api.timezone,
            forecast_days=(
                self.config.api.detail_forecast_days
                if self.detail
                else self.config.api.list_forecast_days
            ),
            hourly_hours=self.config.ops.hourly_overview_hours if self.detail else None,
        )
        fleet = aggregator.aggregate(locations, fetcher, now=now)

        summarizer = CycleSummarizer(fleet.cycle_id)
        summarizer.record_fleet(fleet)
        summarizer.record_duration(time.monotonic() - start_time)
        summary = summarizer.finalize()

        logger.info("\n%s", format_summary_text(summary))
        return CycleOutcome(fleet=fleet, summary=summary)
