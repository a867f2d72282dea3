"""Default resort fleet: Alpine resorts around Geneva."""

from skiwatch.config.schema import LocationConfig

DEFAULT_LOCATIONS: list[LocationConfig] = [
    LocationConfig(
        name="Chamonix", country="France",
        latitude=45.9237, longitude=6.8694, altitude_m=1035,
    ),
    LocationConfig(
        name="Verbier", country="Switzerland",
        latitude=46.0960, longitude=7.2270, altitude_m=1500,
    ),
    LocationConfig(
        name="Zermatt", country="Switzerland",
        latitude=46.0207, longitude=7.7491, altitude_m=1620,
    ),
    LocationConfig(
        name="Megève", country="France",
        latitude=45.8567, longitude=6.6167, altitude_m=1113,
    ),
    LocationConfig(
        name="Les Gets", country="France",
        latitude=46.1575, longitude=6.6683, altitude_m=1172,
    ),
    LocationConfig(
        name="Crans-Montana", country="Switzerland",
        latitude=46.3110, longitude=7.4820, altitude_m=1500,
    ),
    LocationConfig(
        name="Flaine", country="France",
        latitude=46.0000, longitude=6.6833, altitude_m=1600,
    ),
    LocationConfig(
        name="Saas-Fee", country="Switzerland",
        latitude=46.1132, longitude=7.9261, altitude_m=1800,
    ),
]
