"""Fleet aggregator: one refresh cycle across all configured locations."""

import logging
import uuid
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor, wait
from datetime import datetime

from skiwatch.analysis.summary_builder import LocationSummaryBuilder
from skiwatch.config.schema import LocationConfig
from skiwatch.errors import FetchFailure
from skiwatch.models.common import local_now, utc_now_iso
from skiwatch.models.fleet import FleetEntry, FleetResult, LocationFailure
from skiwatch.models.forecast import ForecastPayload

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8
DEFAULT_TIMEZONE = "Europe/Paris"

Fetch = Callable[[LocationConfig], ForecastPayload]


class FleetAggregator:
    def __init__(
        self,
        builder: LocationSummaryBuilder | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        timezone: str = DEFAULT_TIMEZONE,
        forecast_days: int | None = None,
        hourly_hours: int | None = None,
    ):
        self.builder = builder or LocationSummaryBuilder()
        self.max_workers = max_workers
        self.timezone = timezone
        self.forecast_days = forecast_days
        self.hourly_hours = hourly_hours

    def aggregate(
        self,
        locations: Sequence[LocationConfig],
        fetch: Fetch,
        now: datetime | None = None,
    ) -> FleetResult:
        """Fetch and summarize every location concurrently.

        Returns only once every fetch has settled. Entries follow the
        order of ``locations``; a failing location becomes a
        LocationFailure and never affects the others.
        """
        if now is None:
            now = local_now(self.timezone)
        cycle_id = str(uuid.uuid4())

        entries: dict[str, FleetEntry] = {}
        if locations:
            workers = min(self.max_workers, len(locations))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                futures = [
                    executor.submit(self._process, location, fetch, now)
                    for location in locations
                ]
                wait(futures)
            for location, future in zip(locations, futures):
                entries[location.name] = future.result()

        result = FleetResult(
            cycle_id=cycle_id, entries=entries, completed_at=utc_now_iso()
        )
        logger.info(
            "Cycle %s: %d locations, %d failed",
            cycle_id[:8], len(result), result.failure_count,
        )
        return result

    def _process(
        self, location: LocationConfig, fetch: Fetch, now: datetime
    ) -> FleetEntry:
        try:
            payload = fetch(location)
            return self.builder.build(
                location,
                payload,
                now,
                forecast_days=self.forecast_days,
                hourly_hours=self.hourly_hours,
            )
        except FetchFailure as e:
            logger.warning("Fetch failed for %s: %s", location.name, e.cause)
            return LocationFailure(location=location, cause=e.cause)
        except Exception as e:
            logger.warning("Summary failed for %s: %s", location.name, e)
            return LocationFailure(location=location, cause=_describe_error(e))


def _describe_error(e: Exception) -> str:
    message = str(e)
    return f"{type(e).__name__}: {message}" if message else type(e).__name__
