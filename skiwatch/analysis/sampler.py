"""Nearest-sample resolution inside timestamped series."""

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import TypeVar

from skiwatch.errors import EmptySeries
from skiwatch.models.common import round_half_away
from skiwatch.models.forecast import HourlyBlock

T = TypeVar("T")


def nearest_index(timestamps: Sequence[str | datetime], reference: datetime) -> int:
    """Index of the sample closest in time to ``reference``.

    Single pass over the series; on equal distances the earliest sample
    is kept. Naive timestamps are read in the reference's timezone, which
    matches how the forecast API reports local wall-clock hours.

    Raises:
        EmptySeries: if there are no samples.
    """
    if not timestamps:
        raise EmptySeries("cannot resolve nearest sample of an empty series")

    best_idx = 0
    best_diff: float | None = None
    for i, ts in enumerate(timestamps):
        diff = abs((_align(ts, reference) - reference).total_seconds())
        if best_diff is None or diff < best_diff:
            best_idx, best_diff = i, diff
    return best_idx


def sample_nearest(
    timestamps: Sequence[str | datetime],
    values: Sequence[T | None] | None,
    reference: datetime,
) -> T | None:
    """Value of the sample nearest to ``reference``; None when absent or missing."""
    if not values:
        return None
    try:
        idx = nearest_index(timestamps, reference)
    except EmptySeries:
        return None
    return values[idx] if idx < len(values) else None


def current_snow_depth_cm(hourly: HourlyBlock | None, now: datetime) -> int | None:
    """Snow depth (cm) at the hourly sample nearest to ``now``."""
    if hourly is None or not hourly.snow_depth_m:
        return None
    depth_m = sample_nearest(hourly.timestamps, hourly.snow_depth_m, now)
    if depth_m is None:
        return None
    return round_half_away(depth_m * 100)


def _align(ts: str | datetime, reference: datetime) -> datetime:
    dt = ts if isinstance(ts, datetime) else datetime.fromisoformat(ts)
    if dt.tzinfo is None and reference.tzinfo is not None:
        return dt.replace(tzinfo=reference.tzinfo)
    if dt.tzinfo is not None and reference.tzinfo is None:
        return dt.astimezone(UTC).replace(tzinfo=None)
    return dt
