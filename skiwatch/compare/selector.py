"""Comparison selector: a bounded selection of locations and their side-by-side table."""

import logging
from collections.abc import Callable

from skiwatch.models.common import PLACEHOLDER
from skiwatch.models.conditions import LocationSummary
from skiwatch.models.fleet import (
    MAX_COMPARED,
    ComparisonRow,
    ComparisonSet,
    ComparisonTable,
    FleetResult,
)

logger = logging.getLogger(__name__)


def toggle(selection: ComparisonSet, name: str) -> ComparisonSet:
    """Remove ``name`` if selected, otherwise append it unless the set is full.

    Adding to a full selection is a silent no-op.
    """
    if name in selection:
        return ComparisonSet(tuple(n for n in selection.names if n != name))
    if len(selection) >= MAX_COMPARED:
        logger.debug("Comparison full, ignoring %s", name)
        return selection
    return ComparisonSet(selection.names + (name,))


def reset() -> ComparisonSet:
    return ComparisonSet()


def _min_max(s: LocationSummary) -> str:
    if s.temp_min_c is None or s.temp_max_c is None:
        return PLACEHOLDER
    return f"{s.temp_min_c}° / {s.temp_max_c}°C"


def _snow_depth(s: LocationSummary) -> str:
    return PLACEHOLDER if s.snow_depth_cm is None else f"{s.snow_depth_cm} cm"


ROWS: tuple[tuple[str, str, Callable[[LocationSummary], str]], ...] = (
    ("weather", "Current weather", lambda s: str(s.weather)),
    ("temperature", "Temperature", lambda s: f"{s.temperature_c}°C"),
    ("snow_depth", "Snow depth", _snow_depth),
    ("wind", "Wind", lambda s: f"{s.wind_kmh} km/h"),
    ("min_max", "Min / Max", _min_max),
    ("snowfall", "Expected snowfall", lambda s: f"{s.snowfall_today_cm} cm"),
    ("conditions", "Ski conditions", lambda s: s.tier.label),
)


def build_comparison(selection: ComparisonSet, fleet: FleetResult) -> ComparisonTable:
    """One row per attribute, one column per selected location in selection order.

    Locations that failed this cycle (or are unknown to it) show the
    placeholder in every row.
    """
    summaries: list[LocationSummary | None] = []
    for name in selection:
        entry = fleet.get(name)
        summaries.append(entry if isinstance(entry, LocationSummary) else None)

    rows = tuple(
        ComparisonRow(
            key=key,
            label=label,
            cells=tuple(PLACEHOLDER if s is None else render(s) for s in summaries),
        )
        for key, label, render in ROWS
    )
    return ComparisonTable(columns=selection.names, rows=rows)
