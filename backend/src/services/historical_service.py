"""Multi-year historical averages for a trip's calendar days."""

import logging
import os
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date, timedelta

from models.trip import Coordinates, TripDates
from models.weather import DailyWeather
from services.openmeteo_service import OpenMeteoService
from utils.cache import cached_historical
from utils.constants import WET_DAY_PRECIP_MM
from utils.date_utils import format_date, parse_date, shift_year
from utils.exceptions import NoHistoricalDataError, UpstreamFetchError, ValidationError

logger = logging.getLogger(__name__)

HISTORICAL_SAMPLE_YEARS = int(os.environ.get("HISTORICAL_SAMPLE_YEARS", "5"))
# Number of per-year archive fetches in flight at once
HISTORICAL_MAX_WORKERS = int(os.environ.get("HISTORICAL_MAX_WORKERS", "5"))

AVERAGED_FIELDS = [
    "temp_max",
    "temp_min",
    "snowfall_sum",
    "precipitation_sum",
    "wind_speed_max",
]


def validate_request(
    latitude: float, longitude: float, trip_start: str | date, trip_end: str | date
) -> tuple[date, date]:
    """Validate coordinates and the trip range before any fetch.

    Raises:
        ValidationError: If coordinates or dates are missing or malformed
    """
    start, end = parse_date(trip_start), parse_date(trip_end)
    try:
        Coordinates(latitude=latitude, longitude=longitude)
        TripDates(start_date=format_date(start), end_date=format_date(end))
    except ValueError as e:
        raise ValidationError(str(e)) from e
    return start, end


def sample_years_for(trip_year: int, count: int) -> list[int]:
    """The ``count`` completed years before the trip year, most recent first."""
    return [trip_year - i for i in range(1, count + 1)]


def average_offset(days: list[DailyWeather], offset_date: date) -> DailyWeather:
    """Average one trip day across the sampled years that covered it.

    ``days`` must be ordered most recent year first; the weather code mode
    breaks ties in that order.
    """
    count = len(days)
    averages = {
        field: round(sum(getattr(d, field) for d in days) / count, 1)
        for field in AVERAGED_FIELDS
    }
    wet_days = sum(1 for d in days if d.precipitation_sum > WET_DAY_PRECIP_MM)
    # most_common keeps first-seen order among equal counts
    weather_code = Counter(d.weather_code for d in days).most_common(1)[0][0]

    return DailyWeather(
        date=format_date(offset_date),
        precipitation_probability=round(wet_days / count * 100),
        weather_code=weather_code,
        uv_index_max=0.0,
        sample_years=count,
        **averages,
    )


class HistoricalService:
    """Average the trip's calendar days over the most recent completed years."""

    def __init__(
        self,
        openmeteo_service: OpenMeteoService | None = None,
        sample_years: int = HISTORICAL_SAMPLE_YEARS,
        max_workers: int = HISTORICAL_MAX_WORKERS,
    ):
        self.openmeteo_service = openmeteo_service or OpenMeteoService()
        self.sample_years = sample_years
        self.max_workers = max_workers

    def aggregate(
        self,
        latitude: float,
        longitude: float,
        trip_start: str | date,
        trip_end: str | date,
    ) -> list[DailyWeather]:
        """
        Build one averaged DailyWeather per trip day.

        Each sampled year is fetched independently and concurrently. Years
        that fail are dropped from the average rather than zero-filled.

        Args:
            latitude: Resort latitude
            longitude: Resort longitude
            trip_start: First trip day (YYYY-MM-DD)
            trip_end: Last trip day (YYYY-MM-DD)

        Returns:
            Averaged days dated in the trip's own year, in trip order

        Raises:
            ValidationError: If the request is malformed
            NoHistoricalDataError: If every sampled year failed
        """
        start, end = validate_request(latitude, longitude, trip_start, trip_end)
        years = sample_years_for(start.year, self.sample_years)

        by_year = self._fetch_years(latitude, longitude, start, end, years)
        if not by_year:
            raise NoHistoricalDataError(years)

        # Most recent year first
        series = [by_year[y] for y in years if y in by_year]
        duration = (end - start).days + 1

        aggregated = []
        for offset in range(duration):
            days = [s[offset] for s in series if offset < len(s)]
            if not days:
                # Only reachable when the trip spans Feb 29 and no sampled
                # year has the matching extra day
                logger.warning(f"No sampled year covers trip day {offset}, skipping")
                continue
            aggregated.append(average_offset(days, start + timedelta(days=offset)))

        logger.info(
            f"Aggregated {len(aggregated)} days from {len(by_year)}/{len(years)} "
            f"years for ({latitude}, {longitude})"
        )
        return aggregated

    def _fetch_years(
        self,
        latitude: float,
        longitude: float,
        start: date,
        end: date,
        years: list[int],
    ) -> dict[int, list[DailyWeather]]:
        """Fetch every sampled year concurrently and keep the ones that succeed."""
        results: dict[int, list[DailyWeather]] = {}
        # Trips crossing New Year end in the sample year after the start
        span_years = end.year - start.year

        with ThreadPoolExecutor(max_workers=max(1, min(self.max_workers, len(years)))) as executor:
            futures = {
                executor.submit(
                    self.openmeteo_service.get_history,
                    latitude,
                    longitude,
                    shift_year(start, year),
                    shift_year(end, year + span_years),
                ): year
                for year in years
            }

            for future in as_completed(futures):
                year = futures[future]
                try:
                    weather = future.result().weather
                except UpstreamFetchError as e:
                    logger.warning(f"Historical fetch for {year} failed: {e}")
                    continue
                if not weather:
                    logger.warning(f"Historical fetch for {year} returned no days")
                    continue
                results[year] = weather

        return results


@cached_historical
def aggregate_historical(
    latitude: float,
    longitude: float,
    trip_start: str,
    trip_end: str,
) -> list[DailyWeather]:
    """Historical averages for a trip using the default Open-Meteo client."""
    return HistoricalService().aggregate(latitude, longitude, trip_start, trip_end)
