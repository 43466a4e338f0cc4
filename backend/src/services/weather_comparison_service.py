"""Compare a trip's forecast against the historical average for its dates."""

import logging
import math
from collections.abc import Iterable
from datetime import UTC, date, datetime

from models.comparison import (
    ComparisonConfidence,
    ComparisonDelta,
    ComparisonResult,
    ForecastSnapshot,
    HistoricalSnapshot,
    TripComparison,
    TripComparisonSummary,
    Verdict,
)
from models.weather import DailyWeather
from utils.constants import (
    HIGH_CONFIDENCE_MAX_DAYS,
    MEDIUM_CONFIDENCE_MAX_DAYS,
    VERDICT_THRESHOLD_PCT,
)
from utils.date_utils import parse_date, weekday_name

logger = logging.getLogger(__name__)

NO_BEST_DAY = "No heavy snow expected"
TYPICAL_SNOWFALL = "Typical snowfall"
AVERAGE_TEMPERATURE = "About average temperature"
# Below this mean difference (°C) temperatures read as average
TEMP_VERDICT_THRESHOLD = 1.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (12.5 -> 13)."""
    return math.floor(value + 0.5)


def percent_difference(value: float, baseline: float) -> float:
    """Percent by which value differs from baseline; 0 for a zero baseline."""
    if baseline == 0:
        return 0.0
    return (value - baseline) * 100 / baseline


def snowfall_verdict(pct: float) -> Verdict:
    if pct > VERDICT_THRESHOLD_PCT:
        return Verdict.ABOVE_AVG
    if pct < -VERDICT_THRESHOLD_PCT:
        return Verdict.BELOW_AVG
    return Verdict.AVERAGE


def confidence_for(forecast_date: date, today: date) -> ComparisonConfidence:
    """Confidence from the lead time between today and the forecast date."""
    days_out = (forecast_date - today).days
    if days_out <= HIGH_CONFIDENCE_MAX_DAYS:
        return ComparisonConfidence.HIGH
    if days_out <= MEDIUM_CONFIDENCE_MAX_DAYS:
        return ComparisonConfidence.MEDIUM
    return ComparisonConfidence.LOW


def describe_snowfall(pct: float) -> str:
    verdict = snowfall_verdict(pct)
    if verdict == Verdict.ABOVE_AVG:
        return f"{round_half_up(abs(pct))}% above average"
    if verdict == Verdict.BELOW_AVG:
        return f"{round_half_up(abs(pct))}% below average"
    return TYPICAL_SNOWFALL


def describe_temperature(avg_delta: float) -> str:
    if abs(avg_delta) < TEMP_VERDICT_THRESHOLD:
        return AVERAGE_TEMPERATURE
    direction = "warmer" if avg_delta > 0 else "colder"
    return f"{abs(avg_delta):.1f}°C {direction} than usual"


def compare_day(
    forecast: DailyWeather, historical: DailyWeather, today: date
) -> ComparisonResult:
    """Compare one forecast day against its historical average."""
    forecast_avg = forecast.temp_avg
    historical_avg = historical.temp_avg

    snowfall_delta = forecast.snowfall_sum - historical.snowfall_sum
    snowfall_pct = percent_difference(forecast.snowfall_sum, historical.snowfall_sum)

    return ComparisonResult(
        date=forecast.date,
        forecast=ForecastSnapshot(snowfall=forecast.snowfall_sum, temp_avg=forecast_avg),
        historical=HistoricalSnapshot(
            snowfall=historical.snowfall_sum,
            temp_avg=historical_avg,
            # A plain archive record is a single year
            sample_years=historical.sample_years if historical.sample_years is not None else 1,
        ),
        delta=ComparisonDelta(
            snowfall=snowfall_delta,
            snowfall_pct=snowfall_pct,
            temp=forecast_avg - historical_avg,
        ),
        verdict=snowfall_verdict(snowfall_pct),
        confidence=confidence_for(parse_date(forecast.date), today),
    )


def compare_weather_data(
    forecast: Iterable[DailyWeather],
    historical: Iterable[DailyWeather],
    trip_start: str | date,
    today: date | None = None,
) -> TripComparison:
    """
    Compare a forecast against historical averages and summarize the trip.

    Forecast days without a historical counterpart are skipped.

    Args:
        forecast: Forecast days for the trip
        historical: Averaged historical days, dated in the trip's year
        trip_start: First day of the trip
        today: Reference date for confidence tiers (defaults to today, UTC)

    Returns:
        TripComparison with per-day results and a trip summary

    Raises:
        ValidationError: If trip_start is malformed
    """
    start = parse_date(trip_start)
    today = today or datetime.now(UTC).date()
    forecast = list(forecast)
    historical_by_date = {h.date: h for h in historical}

    daily: list[ComparisonResult] = []
    total_forecast_snow = 0.0
    total_historical_snow = 0.0
    total_temp_delta = 0.0
    best_date: str | None = None
    best_snow = -1.0

    for day in forecast:
        match = historical_by_date.get(day.date)
        if match is None:
            continue

        result = compare_day(day, match, today)
        daily.append(result)

        total_forecast_snow += day.snowfall_sum
        total_historical_snow += match.snowfall_sum
        total_temp_delta += result.delta.temp

        # Strictly greater: the first day wins ties
        if day.snowfall_sum > best_snow:
            best_snow = day.snowfall_sum
            best_date = day.date

    if len(daily) < len(forecast):
        logger.debug(
            f"Skipped {len(forecast) - len(daily)} forecast days with no historical match"
        )
    avg_temp_delta = total_temp_delta / len(daily) if daily else 0.0
    snow_diff_pct = percent_difference(total_forecast_snow, total_historical_snow)

    snow_text = describe_snowfall(snow_diff_pct)
    temp_text = describe_temperature(avg_temp_delta)
    best_day = (
        f"{weekday_name(parse_date(best_date))} looks best" if best_date else NO_BEST_DAY
    )
    caption = (
        f"Your trip dates historically see {round_half_up(total_historical_snow)}cm of snow, "
        f"but this year's forecast shows {round_half_up(total_forecast_snow)}cm: "
        f"{snow_text.lower()} conditions. "
        f"Temperatures will be {temp_text.lower()}."
    )

    return TripComparison(
        daily=daily,
        summary=TripComparisonSummary(
            total_forecast_snow=total_forecast_snow,
            total_historical_snow=total_historical_snow,
            snow_diff_pct=snow_diff_pct,
            snowfall_verdict=snow_text,
            temp_verdict=temp_text,
            best_day=best_day,
            caption=caption,
            days_until_trip=(start - today).days,
        ),
    )
