"""Shared constants for the trip planner backend."""

# Open-Meteo forecast horizon (days), including today.
OPEN_METEO_FORECAST_MAX_DAYS: int = 16

# WMO weather codes treated as rain by the ridability scorer: drizzle,
# rain and rain showers. Tied to Open-Meteo's code scheme.
RAIN_WEATHER_CODES: frozenset[int] = frozenset({51, 53, 55, 61, 63, 65, 80, 81, 82})

# Crowd scale bounds (1 = very light, 5 = very busy)
MIN_CROWD_LEVEL: int = 1
MAX_CROWD_LEVEL: int = 5

CROWD_LEVEL_LABELS: dict[int, str] = {
    1: "Very Light",
    2: "Light",
    3: "Moderate",
    4: "Busy",
    5: "Very Busy",
}

# Lift hours covered by the hourly crowd shape
FIRST_LIFT_HOUR: int = 7
LAST_LIFT_HOUR: int = 17

# Snowfall (cm) that turns a day into a powder day for crowd purposes
POWDER_DAY_SNOWFALL_CM: float = 15.0

# Ridability score bounds and starting point
RIDABILITY_BASE_SCORE: float = 50.0
RIDABILITY_MIN_SCORE: float = 0.0
RIDABILITY_MAX_SCORE: float = 100.0

# Percent difference from the historical average that flips a verdict
VERDICT_THRESHOLD_PCT: float = 15.0

# Precipitation (mm) above which an archive day counts as a wet day
WET_DAY_PRECIP_MM: float = 0.1

# Lead time (days from today) for comparison confidence tiers
HIGH_CONFIDENCE_MAX_DAYS: int = 7
MEDIUM_CONFIDENCE_MAX_DAYS: int = 14

DATE_FORMAT: str = "%Y-%m-%d"
