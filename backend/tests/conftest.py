"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime
from unittest.mock import Mock

import pytest

from models.crowd import Holiday
from models.resort import Resort
from models.trip import TripConfig, TripDates
from models.weather import DailyWeather, WeatherSeries
from services.holiday_calendar import HolidayCalendar
from utils.cache import clear_all_caches


@pytest.fixture(autouse=True)
def _clear_caches():
    """Clear all caches before and after each test."""
    clear_all_caches()
    yield
    clear_all_caches()


@pytest.fixture
def make_day():
    """Factory for DailyWeather with neutral defaults."""

    def _make_day(date="2026-01-10", **overrides):
        return DailyWeather(date=date, **overrides)

    return _make_day


@pytest.fixture
def snowy_cold_day():
    """A deep powder day in the east."""
    return DailyWeather(
        date="2026-01-10",
        temp_min=-12.0,
        temp_max=-8.0,
        precipitation_sum=20.0,
        snowfall_sum=25.0,
        precipitation_probability=90.0,
        weather_code=73,
        wind_speed_max=10.0,
    )


@pytest.fixture
def rainy_warm_day():
    """Moderate rain on a warm day."""
    return DailyWeather(
        date="2026-01-11",
        temp_min=1.0,
        temp_max=5.0,
        precipitation_sum=12.0,
        snowfall_sum=0.0,
        precipitation_probability=80.0,
        weather_code=63,
        wind_speed_max=15.0,
    )


@pytest.fixture
def christmas_calendar():
    """Calendar with a single high-impact holiday."""
    return HolidayCalendar(
        {"2025-12-25": Holiday(date="2025-12-25", name="Christmas Day", crowd_impact=5)}
    )


@pytest.fixture
def sample_resort():
    """Create a sample east-coast resort for testing."""
    return Resort(
        resort_id="stowe",
        name="Stowe Mountain Resort",
        region="Northern Vermont",
        state="VT",
        latitude=44.5303,
        longitude=-72.7814,
        ride_region="east",
        subreddit="skiing",
    )


@pytest.fixture
def west_resort():
    """Create a sample west-coast resort for testing."""
    return Resort(
        resort_id="heavenly-tahoe",
        name="Heavenly",
        region="Lake Tahoe",
        state="CA",
        latitude=38.9353,
        longitude=-119.9400,
        ride_region="west",
    )


@pytest.fixture
def sample_trip():
    """Create a sample trip for testing."""
    return TripConfig(
        trip_id="trip_123",
        resort_id="stowe",
        dates=TripDates(start_date="2026-01-10", end_date="2026-01-12"),
        discipline="snowboard",
        skill_level="advanced",
    )


@pytest.fixture
def fixed_now():
    """Fixed wall clock for report tests."""
    return datetime(2026, 1, 10, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def mock_openmeteo():
    """Mock Open-Meteo client returning empty series by default."""
    service = Mock()
    service.get_forecast.return_value = WeatherSeries()
    service.get_history.return_value = WeatherSeries()
    service.get_recent_history.return_value = WeatherSeries()
    return service
