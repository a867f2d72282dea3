"""Open-Meteo forecast API client."""

import logging

import httpx

from skiwatch.config.schema import ApiConfig, LocationConfig
from skiwatch.errors import FetchFailure

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "skiwatch/0.1.0"

LIST_HOURLY = ("snow_depth", "snowfall", "temperature_2m")
DETAIL_HOURLY = ("temperature_2m", "snow_depth", "snowfall", "windspeed_10m", "weathercode")
DAILY = (
    "weathercode",
    "temperature_2m_max",
    "temperature_2m_min",
    "snowfall_sum",
    "windspeed_10m_max",
)


class OpenMeteoClient:
    def __init__(
        self,
        api: ApiConfig | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        http: httpx.Client | None = None,
    ):
        self.api = api or ApiConfig()
        self.user_agent = user_agent
        self._http = http

    def build_params(self, location: LocationConfig, detail: bool = False) -> dict[str, str]:
        """Query parameters for the list view (short) or detail view (extended)."""
        return {
            "latitude": str(location.latitude),
            "longitude": str(location.longitude),
            "current_weather": "true",
            "hourly": ",".join(DETAIL_HOURLY if detail else LIST_HOURLY),
            "daily": ",".join(DAILY),
            "timezone": self.api.timezone,
            "forecast_days": str(
                self.api.detail_forecast_days if detail else self.api.list_forecast_days
            ),
        }

    def get_forecast(self, location: LocationConfig, detail: bool = False) -> dict:
        """Fetch the raw forecast JSON for one location. No retries.

        Raises:
            FetchFailure: on transport errors, non-2xx status or a non-JSON body.
        """
        params = self.build_params(location, detail)
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        try:
            if self._http is not None:
                resp = self._http.get(self.api.base_url, params=params, headers=headers)
            else:
                resp = httpx.get(
                    self.api.base_url,
                    params=params,
                    headers=headers,
                    timeout=self.api.timeout_seconds,
                )
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Open-Meteo returned %d for %s", e.response.status_code, location.name
            )
            raise FetchFailure(location.name, f"HTTP {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.warning("Open-Meteo request error for %s: %s", location.name, e)
            raise FetchFailure(location.name, f"request error: {e}") from e
        except ValueError as e:
            raise FetchFailure(location.name, "invalid JSON body") from e
