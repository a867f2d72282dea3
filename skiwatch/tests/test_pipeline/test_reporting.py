"""Tests for reporting: cycle summarizer, formatters."""

import json

import pytest

from skiwatch.analysis.summary_builder import LocationSummaryBuilder
from skiwatch.compare.selector import build_comparison
from skiwatch.config.defaults import DEFAULT_LOCATIONS
from skiwatch.models.fleet import ComparisonSet, FleetResult, LocationFailure
from skiwatch.models.reporting import CycleSummary
from skiwatch.reporting.cycle_summarizer import CycleSummarizer
from skiwatch.reporting.formatters import (
    format_card,
    format_comparison,
    format_detail,
    format_failure_card,
    format_fleet,
    format_summary_json,
    format_summary_text,
    short_day,
)
from skiwatch.tests.factories import make_daily, make_payload

CHAMONIX, VERBIER, ZERMATT = DEFAULT_LOCATIONS[:3]


@pytest.fixture
def builder():
    return LocationSummaryBuilder()


@pytest.fixture
def fleet(builder, now) -> FleetResult:
    entries = {
        CHAMONIX.name: builder.build(
            CHAMONIX, make_payload(daily=make_daily(days=3)), now, forecast_days=3
        ),
        VERBIER.name: LocationFailure(location=VERBIER, cause="HTTP 500"),
        ZERMATT.name: builder.build(
            ZERMATT, make_payload(weather_code=61, snow_depth_m=[1.2] * 6), now
        ),
    }
    return FleetResult(cycle_id="abcdef1234567890", entries=entries)


class TestCycleSummarizer:
    def test_record_fleet(self, fleet):
        s = CycleSummarizer("abcdef1234567890")
        s.record_fleet(fleet)
        s.record_duration(1.5)

        summary = s.finalize()
        assert summary.locations_configured == 3
        assert summary.locations_ok == 2
        assert summary.locations_failed == 1
        assert summary.tier_counts == {"excellent": 1, "poor": 1}
        assert summary.best_location == "Chamonix"
        assert summary.best_tier == "excellent"
        assert summary.deepest_snow_location == "Zermatt"
        assert summary.deepest_snow_cm == 120
        assert summary.errors == ["Verbier: HTTP 500"]
        assert summary.duration_seconds == 1.5

    def test_best_tie_keeps_configured_order(self, builder, now):
        entries = {
            loc.name: builder.build(loc, make_payload(), now)
            for loc in (ZERMATT, CHAMONIX)
        }
        s = CycleSummarizer("c1")
        s.record_fleet(FleetResult(cycle_id="c1", entries=entries))
        assert s.finalize().best_location == "Zermatt"

    def test_all_failed(self):
        entries = {
            loc.name: LocationFailure(location=loc, cause="request error: timeout")
            for loc in (CHAMONIX, VERBIER)
        }
        s = CycleSummarizer("c1")
        s.record_fleet(FleetResult(cycle_id="c1", entries=entries))
        summary = s.finalize()
        assert summary.locations_ok == 0
        assert summary.locations_failed == 2
        assert summary.best_location == ""
        assert summary.deepest_snow_cm is None
        assert len(summary.errors) == 2


class TestSummaryFormatters:
    def _summary(self) -> CycleSummary:
        return CycleSummary(
            cycle_id="abcdef1234567890",
            locations_configured=3,
            locations_ok=2,
            locations_failed=1,
            tier_counts={"excellent": 1, "poor": 1},
            best_location="Chamonix",
            best_tier="excellent",
            deepest_snow_location="Zermatt",
            deepest_snow_cm=120,
            duration_seconds=1.5,
            errors=["Verbier: HTTP 500"],
        )

    def test_text_format(self):
        text = format_summary_text(self._summary())
        assert "Cycle abcdef12" in text
        assert "3 configured, 2 ok, 1 failed" in text
        assert "Best: Chamonix (excellent)" in text
        assert "Deepest snow: Zermatt (120 cm)" in text
        assert "Errors: 1" in text
        assert "Duration: 1.5s" in text

    def test_json_format(self):
        data = json.loads(format_summary_json(self._summary()))
        assert data["locations_ok"] == 2
        assert data["tier_counts"] == {"excellent": 1, "poor": 1}
        assert data["errors"] == ["Verbier: HTTP 500"]


class TestCards:
    def test_short_day(self):
        assert short_day("2026-01-15") == "Thu"

    def test_card(self, fleet):
        card = format_card(fleet.get("Chamonix"))
        lines = card.splitlines()
        assert lines[0] == "Chamonix (France, 1035 m)"
        assert "Moderate snow" in lines[1]
        assert "-5°C" in lines[1]
        assert "Snow depth: 80 cm | Wind: 13 km/h" in card
        assert "(high)" not in card
        assert "Min / Max: -8° / -2°C | Expected snowfall: 3 cm" in card
        assert "Ski conditions: ⭐ Excellent" in card
        assert lines[-1].startswith("  Thu")
        assert "Fri" in lines[-1] and "Sat" in lines[-1]

    def test_card_without_daily(self, fleet):
        card = format_card(fleet.get("Zermatt"))
        assert "Min / Max" not in card
        assert card.splitlines()[-1] == "  Ski conditions: ❌ Poor"

    def test_card_high_wind(self, builder, now):
        summary = builder.build(CHAMONIX, make_payload(wind_kmh=75.0), now)
        assert "Wind: 75 km/h (high)" in format_card(summary)

    def test_card_unknown_depth(self, builder, now):
        summary = builder.build(CHAMONIX, make_payload(snow_depth_m=[None] * 6), now)
        assert "Snow depth: – |" in format_card(summary)

    def test_failure_card(self):
        card = format_failure_card(LocationFailure(location=VERBIER, cause="HTTP 500"))
        assert card == "Verbier\n  ⚠ Data unavailable (HTTP 500)"

    def test_fleet(self, fleet):
        text = format_fleet(fleet)
        assert text.index("Chamonix") < text.index("Verbier") < text.index("Zermatt")
        assert text.endswith("⚠ Could not load data for 1 location(s).")

    def test_fleet_country_filter(self, fleet):
        text = format_fleet(fleet, country="France")
        assert "Chamonix" in text
        assert "Zermatt" not in text

    def test_fleet_all_ok(self, builder, now):
        fleet = FleetResult(
            cycle_id="c1",
            entries={CHAMONIX.name: builder.build(CHAMONIX, make_payload(), now)},
        )
        assert "Could not load" not in format_fleet(fleet)


class TestDetail:
    def test_detail(self, builder, now):
        summary = builder.build(
            CHAMONIX,
            make_payload(daily=make_daily(days=7, wind_max=72.0)),
            now,
            forecast_days=7,
            hourly_hours=24,
        )
        text = format_detail(summary)
        assert "7-day forecast" in text
        assert "Thu 15/01" in text
        assert "wind max 72 km/h (high)" in text
        # Samples start at the one nearest 02:10 and run to the end of the series
        assert "Hourly overview (4 h)" in text
        assert "  02:00" in text
        assert "  01:00" not in text

    def test_detail_without_extras(self, builder, now):
        summary = builder.build(CHAMONIX, make_payload(), now)
        text = format_detail(summary)
        assert "forecast" not in text
        assert "Hourly overview" not in text


class TestComparison:
    def test_table_layout(self, fleet):
        table = build_comparison(ComparisonSet(("Zermatt", "Verbier")), fleet)
        lines = format_comparison(table).splitlines()
        assert lines[0].startswith("Criterion")
        assert lines[0].index("Zermatt") < lines[0].index("Verbier")
        assert set(lines[1]) == {"-"}
        conditions = next(line for line in lines if line.startswith("Ski conditions"))
        assert "❌ Poor" in conditions
        assert "–" in conditions
        assert len(lines) == 2 + len(table.rows)
