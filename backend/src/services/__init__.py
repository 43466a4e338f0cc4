"""Services for the ski trip planner backend."""

from .best_window_service import BestWindowService, recommend_best_window
from .crowd_estimator import CrowdEstimator, estimate_crowds
from .historical_service import HistoricalService, aggregate_historical
from .holiday_calendar import HolidayCalendar
from .insight_service import InsightService
from .openmeteo_service import OpenMeteoService, fetch_forecast
from .ridability_service import RidabilityService, score_ridability
from .spy_service import SpyService
from .weather_comparison_service import compare_weather_data

__all__ = [
    "BestWindowService",
    "CrowdEstimator",
    "HistoricalService",
    "HolidayCalendar",
    "InsightService",
    "OpenMeteoService",
    "RidabilityService",
    "SpyService",
    "aggregate_historical",
    "compare_weather_data",
    "estimate_crowds",
    "fetch_forecast",
    "recommend_best_window",
    "score_ridability",
]
