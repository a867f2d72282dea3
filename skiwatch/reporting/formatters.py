"""Plain-text and JSON formatters for cycle summaries, resort cards and comparisons."""

import json
from datetime import date

from skiwatch.analysis.rating import describe
from skiwatch.models.common import PLACEHOLDER
from skiwatch.models.conditions import HIGH_WIND_KMH, LocationSummary
from skiwatch.models.fleet import ComparisonTable, FleetResult, LocationFailure
from skiwatch.models.reporting import CycleSummary

CARD_FORECAST_DAYS = 3


def format_summary_text(s: CycleSummary) -> str:
    """Plain text summary for logging."""
    lines = [
        f"=== Refresh Complete | Cycle {s.cycle_id[:8]} ===",
        f"Locations: {s.locations_configured} configured, "
        f"{s.locations_ok} ok, {s.locations_failed} failed",
    ]
    if s.tier_counts:
        tiers = ", ".join(f"{v} {k}" for k, v in s.tier_counts.items())
        lines.append(f"Conditions: {tiers}")
    if s.best_location:
        lines.append(f"Best: {s.best_location} ({s.best_tier})")
    if s.deepest_snow_location:
        lines.append(
            f"Deepest snow: {s.deepest_snow_location} ({s.deepest_snow_cm} cm)"
        )
    if s.errors:
        lines.append(f"Errors: {len(s.errors)}")
    lines.append(f"Duration: {s.duration_seconds:.1f}s")
    return "\n".join(lines)


def format_summary_json(s: CycleSummary) -> str:
    """JSON summary for programmatic consumption."""
    data = {
        "cycle_id": s.cycle_id,
        "locations_configured": s.locations_configured,
        "locations_ok": s.locations_ok,
        "locations_failed": s.locations_failed,
        "tier_counts": s.tier_counts,
        "best_location": s.best_location,
        "best_tier": s.best_tier,
        "deepest_snow_location": s.deepest_snow_location,
        "deepest_snow_cm": s.deepest_snow_cm,
        "duration_seconds": s.duration_seconds,
        "errors": s.errors,
    }
    return json.dumps(data, indent=2)


def _cm(value: int | None) -> str:
    return PLACEHOLDER if value is None else f"{value} cm"


def _min_max(lo: int | None, hi: int | None) -> str:
    lo_s = PLACEHOLDER if lo is None else str(lo)
    hi_s = PLACEHOLDER if hi is None else str(hi)
    return f"{lo_s}° / {hi_s}°"


def short_day(date_str: str) -> str:
    return date.fromisoformat(date_str).strftime("%a")


def format_card(s: LocationSummary) -> str:
    """Resort card: current conditions plus a short forecast strip."""
    loc = s.location
    wind_flag = " (high)" if s.high_wind else ""
    lines = [
        f"{loc.name} ({loc.country}, {loc.altitude_m} m)",
        f"  {s.weather}  {s.temperature_c}°C",
        f"  Snow depth: {_cm(s.snow_depth_cm)} | Wind: {s.wind_kmh} km/h{wind_flag}",
    ]
    if s.temp_min_c is not None and s.temp_max_c is not None:
        lines.append(
            f"  Min / Max: {s.temp_min_c}° / {s.temp_max_c}°C | "
            f"Expected snowfall: {s.snowfall_today_cm} cm"
        )
    lines.append(f"  Ski conditions: {s.tier.label}")
    if len(s.days) >= CARD_FORECAST_DAYS:
        strip = []
        for d in s.days[:CARD_FORECAST_DAYS]:
            cell = f"{short_day(d.date)} {describe(d.weather_code).icon} "
            cell += _min_max(d.temp_min_c, d.temp_max_c)
            if d.snowfall_cm > 0:
                cell += f" ❄ {d.snowfall_cm} cm"
            strip.append(cell)
        lines.append("  " + " | ".join(strip))
    return "\n".join(lines)


def format_failure_card(f: LocationFailure) -> str:
    return f"{f.name}\n  ⚠ Data unavailable ({f.cause})"


def format_fleet(fleet: FleetResult, country: str | None = None) -> str:
    """All cards in configured order, optionally filtered by country."""
    blocks = []
    for entry in fleet:
        if country is not None and entry.location.country != country:
            continue
        if isinstance(entry, LocationFailure):
            blocks.append(format_failure_card(entry))
        else:
            blocks.append(format_card(entry))
    if fleet.failure_count:
        blocks.append(
            f"⚠ Could not load data for {fleet.failure_count} location(s)."
        )
    return "\n\n".join(blocks)


def format_detail(s: LocationSummary) -> str:
    """Resort detail: current card, extended forecast and hourly overview."""
    lines = [format_card(s)]
    if s.days:
        lines.append("")
        lines.append(f"{len(s.days)}-day forecast")
        for d in s.days:
            wind_flag = " (high)" if d.wind_max_kmh > HIGH_WIND_KMH else ""
            lines.append(
                f"  {short_day(d.date)} {d.date[8:10]}/{d.date[5:7]} "
                f"{describe(d.weather_code).icon} {_min_max(d.temp_min_c, d.temp_max_c)} "
                f"snowfall {d.snowfall_cm} cm, wind max {d.wind_max_kmh} km/h{wind_flag} "
                f"{d.tier.label}"
            )
    if s.hourly:
        lines.append("")
        lines.append(f"Hourly overview ({len(s.hourly)} h)")
        lines.append(f"  {'Time':<6}{'Weather':<8}{'Temp':>6}{'Depth':>9}{'Fall':>8}")
        for h in s.hourly:
            temp = PLACEHOLDER if h.temperature_c is None else f"{h.temperature_c}°C"
            fall = f"{h.snowfall_cm} cm" if h.snowfall_cm > 0 else PLACEHOLDER
            lines.append(
                f"  {h.time[11:16]:<6}{describe(h.weather_code).icon:<8}"
                f"{temp:>6}{h.snow_depth_cm:>6} cm{fall:>8}"
            )
    return "\n".join(lines)


def format_comparison(table: ComparisonTable) -> str:
    """Criteria down the side, selected locations across the top."""
    label_w = max((len(r.label) for r in table.rows), default=8)
    widths = [
        max([len(name)] + [len(r.cells[i]) for r in table.rows])
        for i, name in enumerate(table.columns)
    ]
    header = "Criterion".ljust(label_w) + "".join(
        "  " + name.ljust(w) for name, w in zip(table.columns, widths)
    )
    lines = [header, "-" * len(header)]
    for r in table.rows:
        lines.append(
            r.label.ljust(label_w)
            + "".join("  " + cell.ljust(w) for cell, w in zip(r.cells, widths))
        )
    return "\n".join(lines)
