"""Error taxonomy for snow-condition derivation and fleet refresh."""


class SkiwatchError(Exception):
    """Base class for all skiwatch errors."""


class EmptySeries(SkiwatchError):
    """A time series has no timestamped samples to resolve against."""


class MissingCurrentConditions(SkiwatchError):
    """A forecast payload lacks the mandatory instantaneous weather block."""


class FetchFailure(SkiwatchError):
    """Transport or HTTP status failure while fetching one location's forecast."""

    def __init__(self, location: str, cause: str):
        super().__init__(f"{location}: {cause}")
        self.location = location
        self.cause = cause
