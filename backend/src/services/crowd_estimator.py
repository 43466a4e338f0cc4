"""Heuristic crowd estimation from the calendar and forecast snowfall."""

from collections.abc import Callable, Iterable, Mapping

from models.crowd import DailyCrowd, HourlyCrowd
from models.weather import DailyWeather
from services.holiday_calendar import HolidayCalendar, get_default_calendar
from utils.constants import (
    FIRST_LIFT_HOUR,
    LAST_LIFT_HOUR,
    MAX_CROWD_LEVEL,
    MIN_CROWD_LEVEL,
    POWDER_DAY_SNOWFALL_CM,
)
from utils.date_utils import format_date, format_hour, parse_date

# Weather-driven adjustments to the day's base level, applied in order
WEATHER_ADJUSTMENTS: list[tuple[Callable[[DailyWeather], bool], int]] = [
    # Powder days pull in more visitors
    (lambda w: w.snowfall_sum > POWDER_DAY_SNOWFALL_CM, 1),
]

# Offsets from the day's level across lift hours
HOURLY_OFFSETS: list[tuple[range, int]] = [
    (range(7, 9), -1),  # First chair
    (range(9, 12), 1),  # Morning rush
    (range(12, 14), 0),  # Lunch
    (range(14, 16), -1),
    (range(16, 18), -2),  # Last runs
]

DEFAULT_BEST_ARRIVAL = "Before 8:30am"
# Arrival advice only looks at hours before the morning rush
ARRIVAL_CUTOFF_HOUR = 9
QUIET_CROWD_LEVEL = 2


def clamp_level(level: int) -> int:
    return max(MIN_CROWD_LEVEL, min(MAX_CROWD_LEVEL, level))


def _hour_offset(hour: int) -> int:
    for hours, offset in HOURLY_OFFSETS:
        if hour in hours:
            return offset
    return 0


def build_hourly_breakdown(level: int) -> list[HourlyCrowd]:
    """Shape a day's crowd level into one entry per lift hour."""
    return [
        HourlyCrowd(hour=hour, crowd_level=clamp_level(level + _hour_offset(hour)))
        for hour in range(FIRST_LIFT_HOUR, LAST_LIFT_HOUR + 1)
    ]


def calculate_peak_hours(hourly: list[HourlyCrowd]) -> str:
    """Render the span from the first to the last hour at the maximum level."""
    max_level = max(h.crowd_level for h in hourly)
    peak = [h.hour for h in hourly if h.crowd_level == max_level]
    return f"{format_hour(peak[0])} – {format_hour(peak[-1] + 1)}"


def calculate_best_arrival_time(hourly: list[HourlyCrowd]) -> str:
    for h in hourly:
        if h.hour < ARRIVAL_CUTOFF_HOUR and h.crowd_level <= QUIET_CROWD_LEVEL:
            return f"Before {h.hour + 1}:30am"
    return DEFAULT_BEST_ARRIVAL


def _index_weather(
    weather: Mapping[str, DailyWeather] | Iterable[DailyWeather] | None,
) -> dict[str, DailyWeather]:
    if weather is None:
        return {}
    if isinstance(weather, Mapping):
        return {format_date(parse_date(k)): v for k, v in weather.items()}
    return {w.date: w for w in weather}


class CrowdEstimator:
    """Estimate per-date crowd levels and hourly shape."""

    def __init__(self, calendar: HolidayCalendar | None = None):
        self.calendar = calendar or get_default_calendar()

    def estimate(
        self,
        dates: Iterable[str],
        weather: Mapping[str, DailyWeather] | Iterable[DailyWeather] | None = None,
    ) -> list[DailyCrowd]:
        """
        Estimate crowds for each date, preserving input order.

        Args:
            dates: Dates (YYYY-MM-DD) to estimate
            weather: Forecast keyed by date, or a list of daily records

        Returns:
            One DailyCrowd per input date

        Raises:
            ValidationError: If a date is malformed
        """
        weather_by_date = _index_weather(weather)
        keys = [format_date(parse_date(d)) for d in dates]
        return [self.estimate_day(k, weather_by_date.get(k)) for k in keys]

    def estimate_day(self, value: str, weather: DailyWeather | None = None) -> DailyCrowd:
        day = parse_date(value)
        classification = self.calendar.classify(day)

        level = classification.base_level
        if weather is not None:
            for applies, delta in WEATHER_ADJUSTMENTS:
                if applies(weather):
                    level = clamp_level(level + delta)

        hourly = build_hourly_breakdown(level)

        return DailyCrowd(
            date=format_date(day),
            day_type=classification.day_type,
            holiday_name=classification.holiday.name if classification.holiday else None,
            overall_level=level,
            hourly_breakdown=hourly,
            peak_hours=calculate_peak_hours(hourly),
            best_arrival_time=calculate_best_arrival_time(hourly),
        )


def estimate_crowds(
    dates: Iterable[str],
    weather: Mapping[str, DailyWeather] | Iterable[DailyWeather] | None = None,
) -> list[DailyCrowd]:
    """Estimate crowds with the bundled holiday calendar."""
    return CrowdEstimator().estimate(dates, weather)
