"""Data models for the ski trip planner."""

from .comparison import (
    ComparisonConfidence,
    ComparisonResult,
    TripComparison,
    TripComparisonSummary,
    Verdict,
)
from .crowd import DailyCrowd, DayType, Holiday, HourlyCrowd
from .insights import ResortInsights, TripBrief
from .resort import Resort
from .spy import BestWindow, Ridability, RidabilityLabel, SpyDay, SpyReport
from .trip import Coordinates, TripConfig, TripDates
from .weather import DailyWeather, RecentWeather, Region, WeatherSeries

__all__ = [
    "BestWindow",
    "ComparisonConfidence",
    "ComparisonResult",
    "Coordinates",
    "DailyCrowd",
    "DailyWeather",
    "DayType",
    "Holiday",
    "HourlyCrowd",
    "RecentWeather",
    "Region",
    "Resort",
    "ResortInsights",
    "Ridability",
    "RidabilityLabel",
    "SpyDay",
    "SpyReport",
    "TripBrief",
    "TripComparison",
    "TripComparisonSummary",
    "TripConfig",
    "TripDates",
    "Verdict",
    "WeatherSeries",
]
