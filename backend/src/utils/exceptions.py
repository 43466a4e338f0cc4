"""Exception types raised by the trip planning services."""


class PlannerError(Exception):
    """Base class for all trip planner errors."""


class ValidationError(PlannerError, ValueError):
    """Malformed or missing date range or coordinates.

    Raised before any computation or network call happens.
    """


class UpstreamFetchError(PlannerError):
    """A request to the weather provider failed or returned unusable data."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


class NoHistoricalDataError(PlannerError):
    """Every sampled historical year failed to return data."""

    def __init__(self, years: list[int]):
        super().__init__(
            f"No historical data available for any sampled year: {years}"
        )
        self.years = years


class InsightGenerationError(PlannerError):
    """The narrative insight generator failed or returned malformed output."""
