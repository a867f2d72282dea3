"""Ski conditions dashboard: FastAPI backend serving resort cards and comparisons."""

import os
import threading
from datetime import UTC, datetime

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from skiwatch.compare.selector import build_comparison, reset, toggle
from skiwatch.config.loader import load_config
from skiwatch.models.conditions import LocationSummary
from skiwatch.models.fleet import ComparisonSet, FleetResult, LocationFailure
from skiwatch.pipeline.refresh_pipeline import RefreshPipeline

CONFIG_PATH = os.environ.get("SKIWATCH_CONFIG", "skiwatch.yaml")

app = FastAPI(title="Ski Conditions Dashboard", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.state.config = load_config(CONFIG_PATH)
app.state.pipeline_factory = RefreshPipeline
app.state.fleet = None
app.state.selection = ComparisonSet()
app.state.lock = threading.Lock()


def _summary_json(s: LocationSummary) -> dict:
    return {
        "name": s.name,
        "country": s.location.country,
        "altitude_m": s.location.altitude_m,
        "ok": True,
        "weather_code": s.weather_code,
        "weather": {"icon": s.weather.icon, "description": s.weather.description},
        "temperature_c": s.temperature_c,
        "wind_kmh": s.wind_kmh,
        "high_wind": s.high_wind,
        "snow_depth_cm": s.snow_depth_cm,
        "temp_min_c": s.temp_min_c,
        "temp_max_c": s.temp_max_c,
        "snowfall_today_cm": s.snowfall_today_cm,
        "tier": {"value": s.tier.value, "label": s.tier.label, "style": s.tier.style},
        "days": [
            {
                "date": d.date, "weather_code": d.weather_code,
                "tier": d.tier.value, "temp_min_c": d.temp_min_c,
                "temp_max_c": d.temp_max_c, "snowfall_cm": d.snowfall_cm,
                "wind_max_kmh": d.wind_max_kmh,
            }
            for d in s.days
        ],
        "hourly": [
            {
                "time": h.time, "weather_code": h.weather_code,
                "temperature_c": h.temperature_c,
                "snow_depth_cm": h.snow_depth_cm, "snowfall_cm": h.snowfall_cm,
            }
            for h in s.hourly
        ],
    }


def _failure_json(f: LocationFailure) -> dict:
    return {
        "name": f.name,
        "country": f.location.country,
        "altitude_m": f.location.altitude_m,
        "ok": False,
        "error": f.cause,
    }


def _entry_json(entry: LocationSummary | LocationFailure) -> dict:
    if isinstance(entry, LocationFailure):
        return _failure_json(entry)
    return _summary_json(entry)


def _current_fleet() -> FleetResult:
    fleet = app.state.fleet
    if fleet is None:
        raise HTTPException(503, "No data yet, refresh first")
    return fleet


def _selection_json() -> dict:
    selection: ComparisonSet = app.state.selection
    return {"selected": list(selection.names), "full": selection.is_full}


# ── Fleet endpoints ─────────────────────────────────────────────


@app.post("/api/refresh")
def refresh():
    """Run one refresh cycle and swap in its result."""
    pipeline = app.state.pipeline_factory(app.state.config)
    outcome = pipeline.run()
    with app.state.lock:
        app.state.fleet = outcome.fleet
    s = outcome.summary
    return {
        "cycle_id": s.cycle_id,
        "locations_ok": s.locations_ok,
        "locations_failed": s.locations_failed,
        "errors": s.errors,
    }


@app.get("/api/fleet")
def get_fleet(country: str | None = None):
    """All resort cards in configured order."""
    fleet = _current_fleet()
    return {
        "cycle_id": fleet.cycle_id,
        "completed_at": fleet.completed_at,
        "failure_count": fleet.failure_count,
        "resorts": [
            _entry_json(e)
            for e in fleet
            if country is None or e.location.country == country
        ],
    }


@app.get("/api/resorts/{name}")
def get_resort(name: str):
    """Extended forecast and hourly overview for one resort."""
    config = app.state.config
    location = config.find_location(name)
    if location is None:
        raise HTTPException(404, f"Unknown resort: {name}")
    single = config.model_copy(update={"locations": [location]})
    outcome = app.state.pipeline_factory(single, detail=True).run()
    entry = outcome.fleet.get(location.name)
    if isinstance(entry, LocationFailure):
        raise HTTPException(502, f"Could not load data for {name}: {entry.cause}")
    return _summary_json(entry)


# ── Comparison endpoints ────────────────────────────────────────


@app.get("/api/compare")
def get_comparison():
    fleet = _current_fleet()
    table = build_comparison(app.state.selection, fleet)
    return {
        "columns": list(table.columns),
        "rows": [
            {"key": r.key, "label": r.label, "cells": list(r.cells)}
            for r in table.rows
        ],
    }


@app.post("/api/compare/{name}")
def toggle_comparison(name: str):
    if app.state.config.find_location(name) is None:
        raise HTTPException(404, f"Unknown resort: {name}")
    with app.state.lock:
        app.state.selection = toggle(app.state.selection, name)
        return _selection_json()


@app.delete("/api/compare")
def clear_comparison():
    with app.state.lock:
        app.state.selection = reset()
        return _selection_json()


@app.get("/api/health")
def get_health():
    fleet = app.state.fleet
    age_minutes = None
    if fleet is not None and fleet.completed_at:
        completed = datetime.fromisoformat(fleet.completed_at)
        age_minutes = round((datetime.now(UTC) - completed).total_seconds() / 60, 1)
    return {
        "has_data": fleet is not None,
        "last_cycle_age_minutes": age_minutes,
        "failure_count": fleet.failure_count if fleet is not None else None,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8777)
