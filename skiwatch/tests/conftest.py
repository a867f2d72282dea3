"""Shared test fixtures."""

import json
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
import yaml

from skiwatch.config.defaults import DEFAULT_LOCATIONS
from skiwatch.config.schema import LocationConfig, SkiwatchConfig

PARIS = ZoneInfo("Europe/Paris")


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def chamonix_raw(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "openmeteo_chamonix.json") as f:
        return json.load(f)


@pytest.fixture
def now() -> datetime:
    """Reference instant inside the fixture's hourly window (local time)."""
    return datetime(2026, 1, 15, 2, 10, tzinfo=PARIS)


@pytest.fixture
def chamonix() -> LocationConfig:
    return DEFAULT_LOCATIONS[0]


@pytest.fixture
def default_config() -> SkiwatchConfig:
    """Return default SkiwatchConfig with default locations."""
    return SkiwatchConfig(locations=DEFAULT_LOCATIONS)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "api": {"timezone": "Europe/Zurich"},
        "ops": {"refresh_interval_minutes": 15},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
