"""Ski-condition rating: a fixed decision table over WMO weather codes."""

from skiwatch.models.conditions import HIGH_WIND_KMH, ConditionTier, WeatherDescription

STORM_CODES = frozenset({95, 96, 99})
RAIN_CODES = frozenset({51, 53, 55, 61, 63, 65, 80, 81, 82})
SNOWING_CODES = frozenset({71, 73, 75, 77, 85, 86})
SUNNY_CODES = frozenset({0, 1, 2})

GOOD_SNOWPACK_CM = 50
OK_SNOWPACK_CM = 20

WMO_CODES: dict[int, WeatherDescription] = {
    0: WeatherDescription("☀️", "Clear sky"),
    1: WeatherDescription("🌤️", "Mainly clear"),
    2: WeatherDescription("⛅", "Partly cloudy"),
    3: WeatherDescription("☁️", "Overcast"),
    45: WeatherDescription("🌫️", "Fog"),
    48: WeatherDescription("🌫️", "Freezing fog"),
    51: WeatherDescription("🌦️", "Light drizzle"),
    53: WeatherDescription("🌦️", "Moderate drizzle"),
    55: WeatherDescription("🌦️", "Dense drizzle"),
    61: WeatherDescription("🌧️", "Light rain"),
    63: WeatherDescription("🌧️", "Moderate rain"),
    65: WeatherDescription("🌧️", "Heavy rain"),
    71: WeatherDescription("❄️", "Light snow"),
    73: WeatherDescription("❄️", "Moderate snow"),
    75: WeatherDescription("❄️", "Heavy snow"),
    77: WeatherDescription("🌨️", "Snow grains"),
    80: WeatherDescription("🌦️", "Light showers"),
    81: WeatherDescription("🌧️", "Moderate showers"),
    82: WeatherDescription("🌧️", "Violent showers"),
    85: WeatherDescription("🌨️", "Light snow showers"),
    86: WeatherDescription("🌨️", "Heavy snow showers"),
    95: WeatherDescription("⛈️", "Thunderstorm"),
    96: WeatherDescription("⛈️", "Thunderstorm with hail"),
    99: WeatherDescription("⛈️", "Thunderstorm with heavy hail"),
}

DEFAULT_WEATHER = WeatherDescription("🌡️", "Data unavailable")


def classify(weather_code: int | None, wind_kmh: float, snow_depth_cm: float) -> ConditionTier:
    """Rate ski conditions. First matching rule wins; rule order matters.

    Unknown codes are not errors: they simply belong to none of the
    special code sets.
    """
    if weather_code in STORM_CODES or weather_code in RAIN_CODES:
        return ConditionTier.POOR
    if wind_kmh > HIGH_WIND_KMH:
        return ConditionTier.FAIR
    good_snowpack = snow_depth_cm >= GOOD_SNOWPACK_CM
    if weather_code in SNOWING_CODES and good_snowpack:
        return ConditionTier.EXCELLENT
    if weather_code in SUNNY_CODES and good_snowpack:
        return ConditionTier.EXCELLENT
    if good_snowpack:
        return ConditionTier.GOOD
    if snow_depth_cm >= OK_SNOWPACK_CM:
        return ConditionTier.FAIR
    return ConditionTier.POOR


def describe(weather_code: int | None) -> WeatherDescription:
    if weather_code is None:
        return DEFAULT_WEATHER
    return WMO_CODES.get(weather_code, DEFAULT_WEATHER)
