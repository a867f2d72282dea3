"""Pydantic v2 configuration schema with strict validation."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    name: str
    country: str
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    altitude_m: int = Field(ge=0)
    enabled: bool = True


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://api.open-meteo.com/v1/forecast"
    timezone: str = "Europe/Paris"
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    list_forecast_days: int = Field(default=3, ge=1, le=16)
    detail_forecast_days: int = Field(default=7, ge=1, le=16)

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, v: str) -> str:
        # Naive forecast timestamps are read in this zone, so it must resolve locally
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"unknown IANA timezone: {v!r}") from None
        return v


class OpsConfig(BaseModel):
    model_config = {"extra": "forbid"}

    refresh_interval_minutes: int = Field(default=30, ge=1)
    max_workers: int = Field(default=8, ge=1)
    hourly_overview_hours: int = Field(default=24, ge=1, le=168)


class SkiwatchConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    ops: OpsConfig = OpsConfig()
    locations: list[LocationConfig] = []

    def enabled_locations(self) -> list[LocationConfig]:
        return [loc for loc in self.locations if loc.enabled]

    def find_location(self, name: str) -> LocationConfig | None:
        for loc in self.locations:
            if loc.name == name:
                return loc
        return None

    @field_validator("locations")
    @classmethod
    def _unique_names(cls, v: list[LocationConfig]) -> list[LocationConfig]:
        names = [loc.name for loc in v]
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise ValueError(f"duplicate location names: {', '.join(dupes)}")
        return v
