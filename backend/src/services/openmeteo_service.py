"""Open-Meteo client for daily forecast and archive weather."""

import logging
import os
from datetime import UTC, date, datetime, timedelta
from typing import Any

import requests

from models.weather import DailyWeather, WeatherSeries
from utils.cache import cached_forecast
from utils.date_utils import format_date, parse_date
from utils.exceptions import UpstreamFetchError, ValidationError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_SECONDS = float(os.environ.get("OPEN_METEO_TIMEOUT_SECONDS", "15"))

FORECAST_DAILY_FIELDS = [
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "snowfall_sum",
    "precipitation_probability_max",
    "weather_code",
    "wind_speed_10m_max",
    "uv_index_max",
]

# The archive has no precipitation probability or UV index
ARCHIVE_DAILY_FIELDS = [
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "snowfall_sum",
    "weather_code",
    "wind_speed_10m_max",
]

# Open-Meteo daily column -> DailyWeather field
COLUMN_MAP = {
    "temperature_2m_max": "temp_max",
    "temperature_2m_min": "temp_min",
    "precipitation_sum": "precipitation_sum",
    "snowfall_sum": "snowfall_sum",
    "precipitation_probability_max": "precipitation_probability",
    "weather_code": "weather_code",
    "wind_speed_10m_max": "wind_speed_max",
    "uv_index_max": "uv_index_max",
}


def _request(url: str, params: dict[str, Any]) -> dict[str, Any]:
    """GET a JSON document from Open-Meteo in a single attempt.

    Raises:
        UpstreamFetchError: On transport errors, non-2xx status or invalid JSON
    """
    try:
        response = requests.get(url, params=params, timeout=REQUEST_TIMEOUT_SECONDS)
        response.raise_for_status()
        return response.json()
    except requests.exceptions.RequestException as e:
        logger.error(f"Open-Meteo request to {url} failed: {e}")
        raise UpstreamFetchError(f"Failed to fetch weather data: {e}", url=url) from e
    except ValueError as e:
        logger.error(f"Open-Meteo returned invalid JSON from {url}: {e}")
        raise UpstreamFetchError(f"Invalid weather API response: {e}", url=url) from e


def daily_to_rows(daily: dict[str, list[Any]]) -> list[DailyWeather]:
    """Reshape Open-Meteo's column-oriented daily block into DailyWeather rows.

    Missing columns and null cells default to 0.
    """
    times = daily["time"]
    rows = []
    for i, day in enumerate(times):
        values: dict[str, Any] = {"date": day}
        for column, field in COLUMN_MAP.items():
            series = daily.get(column) or []
            value = series[i] if i < len(series) else None
            if value is not None:
                values[field] = int(value) if field == "weather_code" else value
        rows.append(DailyWeather(**values))
    return rows


class OpenMeteoService:
    """Service for fetching daily weather from the Open-Meteo API.

    Open-Meteo provides:
    - Free API (no key required)
    - Daily forecast up to 16 days ahead
    - Historical archive (ERA5 reanalysis) for past years
    """

    def __init__(self):
        """Initialize the Open-Meteo service."""
        self.base_url = "https://api.open-meteo.com/v1/forecast"
        self.archive_url = "https://archive-api.open-meteo.com/v1/archive"

    def get_forecast(
        self,
        latitude: float,
        longitude: float,
        start: str | date,
        end: str | date,
        today: date | None = None,
    ) -> WeatherSeries:
        """
        Fetch the daily forecast for a date range.

        Args:
            latitude: Location latitude
            longitude: Location longitude
            start: First forecast date (must not be in the past)
            end: Last forecast date

        Raises:
            ValidationError: If the range is malformed or starts in the past
            UpstreamFetchError: If the request fails
        """
        start_date, end_date = parse_date(start), parse_date(end)
        today = today or datetime.now(UTC).date()
        if start_date < today:
            raise ValidationError(
                f"get_forecast called with past date {format_date(start_date)}. "
                "Use get_history instead."
            )
        return self._fetch_series(
            self.base_url,
            latitude,
            longitude,
            start_date,
            end_date,
            FORECAST_DAILY_FIELDS,
        )

    def get_history(
        self,
        latitude: float,
        longitude: float,
        start: str | date,
        end: str | date,
    ) -> WeatherSeries:
        """
        Fetch observed daily weather from the archive.

        Precipitation probability and UV index are not available in the
        archive and are left at 0.

        Raises:
            ValidationError: If the range is malformed
            UpstreamFetchError: If the request fails
        """
        return self._fetch_series(
            self.archive_url,
            latitude,
            longitude,
            parse_date(start),
            parse_date(end),
            ARCHIVE_DAILY_FIELDS,
        )

    def get_recent_history(
        self,
        latitude: float,
        longitude: float,
        days: int = 2,
        today: date | None = None,
    ) -> WeatherSeries:
        """Fetch the ``days`` days ending yesterday."""
        if days < 1:
            raise ValidationError(f"days must be at least 1, got {days}")
        today = today or datetime.now(UTC).date()
        return self.get_history(
            latitude,
            longitude,
            today - timedelta(days=days),
            today - timedelta(days=1),
        )

    def _fetch_series(
        self,
        url: str,
        latitude: float,
        longitude: float,
        start: date,
        end: date,
        fields: list[str],
    ) -> WeatherSeries:
        if end < start:
            raise ValidationError(
                f"End date {format_date(end)} is before start date {format_date(start)}"
            )
        if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
            raise ValidationError(f"Invalid coordinates: ({latitude}, {longitude})")

        params = {
            "latitude": latitude,
            "longitude": longitude,
            "start_date": format_date(start),
            "end_date": format_date(end),
            "daily": ",".join(fields),
            "timezone": "auto",
        }
        data = _request(url, params)

        try:
            weather = daily_to_rows(data["daily"])
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Unexpected Open-Meteo response format from {url}: {e}")
            raise UpstreamFetchError(
                f"Unexpected weather API response format: {e}", url=url
            ) from e

        return WeatherSeries(
            weather=weather,
            timezone=data.get("timezone") or "GMT",
            utc_offset_seconds=data.get("utc_offset_seconds") or 0,
        )


@cached_forecast
def fetch_forecast(
    latitude: float, longitude: float, start: str, end: str
) -> WeatherSeries:
    """Forecast for a trip using the default client, cached for 30 minutes."""
    return OpenMeteoService().get_forecast(latitude, longitude, start, end)
