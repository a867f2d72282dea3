"""Tests for the bounded comparison selection and comparison table."""

import pytest

from skiwatch.analysis.summary_builder import LocationSummaryBuilder
from skiwatch.compare.selector import build_comparison, reset, toggle
from skiwatch.config.defaults import DEFAULT_LOCATIONS
from skiwatch.models.common import PLACEHOLDER
from skiwatch.models.fleet import ComparisonSet, FleetResult, LocationFailure
from skiwatch.tests.factories import make_payload


@pytest.fixture
def fleet(now) -> FleetResult:
    builder = LocationSummaryBuilder()
    chamonix, verbier, zermatt = DEFAULT_LOCATIONS[:3]
    entries = {
        chamonix.name: builder.build(chamonix, make_payload(), now),
        verbier.name: LocationFailure(location=verbier, cause="HTTP 500"),
        zermatt.name: builder.build(
            zermatt, make_payload(weather_code=0, snow_depth_m=[None] * 6), now
        ),
    }
    return FleetResult(cycle_id="cycle-1", entries=entries)


class TestToggle:
    def test_add_preserves_order(self):
        s = toggle(toggle(ComparisonSet(), "Zermatt"), "Chamonix")
        assert s.names == ("Zermatt", "Chamonix")

    def test_remove(self):
        s = ComparisonSet(("Zermatt", "Chamonix", "Flaine"))
        assert toggle(s, "Chamonix").names == ("Zermatt", "Flaine")

    def test_double_toggle_round_trip(self):
        s = toggle(toggle(ComparisonSet(), "Verbier"), "Verbier")
        assert s == ComparisonSet()

    def test_saturation_is_noop(self):
        full = ComparisonSet(("Chamonix", "Verbier", "Zermatt"))
        assert toggle(full, "Flaine") == full
        assert full.is_full

    def test_remove_when_full_is_allowed(self):
        full = ComparisonSet(("Chamonix", "Verbier", "Zermatt"))
        s = toggle(full, "Verbier")
        assert s.names == ("Chamonix", "Zermatt")
        assert toggle(s, "Flaine").names == ("Chamonix", "Zermatt", "Flaine")

    def test_never_exceeds_three(self):
        s = ComparisonSet()
        for loc in DEFAULT_LOCATIONS:
            s = toggle(s, loc.name)
            assert len(s) <= 3
        assert s.names == ("Chamonix", "Verbier", "Zermatt")

    def test_toggle_does_not_mutate_input(self):
        s = ComparisonSet(("Chamonix",))
        toggle(s, "Verbier")
        assert s.names == ("Chamonix",)

    def test_reset(self):
        assert len(reset()) == 0


class TestBuildComparison:
    def test_shape(self, fleet):
        selection = ComparisonSet(("Zermatt", "Chamonix"))
        table = build_comparison(selection, fleet)
        assert table.columns == ("Zermatt", "Chamonix")
        assert [r.key for r in table.rows] == [
            "weather", "temperature", "snow_depth", "wind",
            "min_max", "snowfall", "conditions",
        ]
        assert all(len(r.cells) == 2 for r in table.rows)

    def test_values(self, fleet):
        table = build_comparison(ComparisonSet(("Chamonix",)), fleet)
        col = dict(zip([r.key for r in table.rows], table.column("Chamonix")))
        assert col["weather"] == "❄️ Moderate snow"
        assert col["temperature"] == "-5°C"
        assert col["snow_depth"] == "80 cm"
        assert col["wind"] == "13 km/h"
        assert col["min_max"] == PLACEHOLDER
        assert col["snowfall"] == "0 cm"
        assert col["conditions"] == "⭐ Excellent"

    def test_failed_location_only_affects_its_column(self, fleet):
        table = build_comparison(ComparisonSet(("Chamonix", "Verbier", "Zermatt")), fleet)
        assert set(table.column("Verbier")) == {PLACEHOLDER}
        assert table.row("temperature").cells[0] == "-5°C"
        assert table.row("temperature").cells[2] == "-5°C"
        assert table.row("conditions").cells[0] == "⭐ Excellent"

    def test_unknown_depth_shows_placeholder(self, fleet):
        table = build_comparison(ComparisonSet(("Zermatt",)), fleet)
        assert table.row("snow_depth").cells == (PLACEHOLDER,)
        assert table.row("conditions").cells == ("❌ Poor",)

    def test_location_missing_from_fleet(self, fleet):
        table = build_comparison(ComparisonSet(("Flaine",)), fleet)
        assert set(table.column("Flaine")) == {PLACEHOLDER}

    def test_empty_selection(self, fleet):
        table = build_comparison(ComparisonSet(), fleet)
        assert table.columns == ()
        assert all(r.cells == () for r in table.rows)

    def test_unknown_row(self, fleet):
        table = build_comparison(ComparisonSet(), fleet)
        with pytest.raises(KeyError):
            table.row("humidity")
