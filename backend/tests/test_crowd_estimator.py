"""Tests for the heuristic crowd estimator."""

import pytest

from models.crowd import DayType, Holiday
from models.weather import DailyWeather
from services.crowd_estimator import (
    CrowdEstimator,
    build_hourly_breakdown,
    calculate_best_arrival_time,
    calculate_peak_hours,
    clamp_level,
    estimate_crowds,
)
from services.holiday_calendar import HolidayCalendar
from utils.exceptions import ValidationError


@pytest.fixture
def estimator(christmas_calendar):
    return CrowdEstimator(christmas_calendar)


def _levels(crowd):
    return [h.crowd_level for h in crowd.hourly_breakdown]


class TestHourlyShape:
    """Test the hourly breakdown helpers."""

    def test_eleven_lift_hours(self):
        hourly = build_hourly_breakdown(3)

        assert [h.hour for h in hourly] == list(range(7, 18))
        assert all(h.source == "heuristic" for h in hourly)

    def test_weekday_shape(self):
        levels = [h.crowd_level for h in build_hourly_breakdown(2)]

        assert levels == [1, 1, 3, 3, 3, 2, 2, 1, 1, 1, 1]

    def test_levels_clamped(self):
        for level in range(1, 6):
            for h in build_hourly_breakdown(level):
                assert 1 <= h.crowd_level <= 5

    def test_clamp_level(self):
        assert clamp_level(0) == 1
        assert clamp_level(6) == 5
        assert clamp_level(3) == 3

    def test_peak_hours_morning(self):
        assert calculate_peak_hours(build_hourly_breakdown(2)) == "9am – 12pm"

    def test_peak_hours_extends_through_lunch_when_capped(self):
        # Level 5: morning rush clamps to 5, lunch stays at 5
        assert calculate_peak_hours(build_hourly_breakdown(5)) == "9am – 2pm"

    def test_best_arrival_quiet_morning(self):
        assert calculate_best_arrival_time(build_hourly_breakdown(2)) == "Before 8:30am"

    def test_best_arrival_default_when_busy(self):
        # Level 4 puts first chair at 3, so no quiet hour before 9am
        assert calculate_best_arrival_time(build_hourly_breakdown(4)) == "Before 8:30am"


class TestEstimate:
    """Test per-date estimates."""

    def test_midweek(self, estimator):
        (crowd,) = estimator.estimate(["2025-12-17"])

        assert crowd.day_type == DayType.WEEKDAY
        assert crowd.overall_level == 2
        assert crowd.holiday_name is None
        assert crowd.peak_hours == "9am – 12pm"
        assert crowd.best_arrival_time == "Before 8:30am"

    def test_friday(self, estimator):
        (crowd,) = estimator.estimate(["2025-12-19"])

        assert crowd.overall_level == 3
        assert _levels(crowd) == [2, 2, 4, 4, 4, 3, 3, 2, 2, 1, 1]

    def test_saturday(self, estimator):
        (crowd,) = estimator.estimate(["2025-12-20"])

        assert crowd.day_type == DayType.WEEKEND
        assert crowd.overall_level == 4
        assert _levels(crowd) == [3, 3, 5, 5, 5, 4, 4, 3, 3, 2, 2]

    def test_holiday(self, estimator):
        (crowd,) = estimator.estimate(["2025-12-25"])

        assert crowd.day_type == DayType.HOLIDAY
        assert crowd.holiday_name == "Christmas Day"
        assert crowd.overall_level == 5
        assert crowd.peak_hours == "9am – 2pm"

    def test_powder_day_bump(self, estimator):
        weather = {"2025-12-17": DailyWeather(date="2025-12-17", snowfall_sum=20.0)}

        (crowd,) = estimator.estimate(["2025-12-17"], weather)

        assert crowd.overall_level == 3

    def test_snowfall_at_threshold_no_bump(self, estimator):
        weather = {"2025-12-17": DailyWeather(date="2025-12-17", snowfall_sum=15.0)}

        (crowd,) = estimator.estimate(["2025-12-17"], weather)

        assert crowd.overall_level == 2

    def test_powder_bump_capped(self, estimator):
        weather = [DailyWeather(date="2025-12-25", snowfall_sum=40.0)]

        (crowd,) = estimator.estimate(["2025-12-25"], weather)

        assert crowd.overall_level == 5
        assert crowd.holiday_name == "Christmas Day"

    def test_weather_list_input(self, estimator):
        weather = [
            DailyWeather(date="2025-12-19", snowfall_sum=30.0),
            DailyWeather(date="2025-12-20", snowfall_sum=0.0),
        ]

        crowds = estimator.estimate(["2025-12-19", "2025-12-20"], weather)

        assert [c.overall_level for c in crowds] == [4, 4]

    def test_weather_for_other_dates_ignored(self, estimator):
        weather = {"2025-12-18": DailyWeather(date="2025-12-18", snowfall_sum=30.0)}

        (crowd,) = estimator.estimate(["2025-12-17"], weather)

        assert crowd.overall_level == 2

    def test_preserves_input_order(self, estimator):
        dates = ["2025-12-25", "2025-12-17", "2025-12-20"]

        crowds = estimator.estimate(dates)

        assert [c.date for c in crowds] == dates

    def test_idempotent(self, estimator):
        dates = ["2025-12-19", "2025-12-20", "2025-12-25"]

        assert estimator.estimate(dates) == estimator.estimate(dates)

    def test_empty_input(self, estimator):
        assert estimator.estimate([]) == []

    def test_low_impact_holiday(self):
        calendar = HolidayCalendar(
            {"2025-12-17": Holiday(date="2025-12-17", name="Quiet Day", crowd_impact=1)}
        )

        (crowd,) = CrowdEstimator(calendar).estimate(["2025-12-17"])

        assert crowd.overall_level == 1
        assert min(_levels(crowd)) == 1
        assert crowd.peak_hours == "9am – 12pm"

    def test_malformed_date(self, estimator):
        with pytest.raises(ValidationError):
            estimator.estimate(["not-a-date"])

    def test_every_day_valid_over_a_season(self, estimator):
        dates = [f"2026-01-{d:02d}" for d in range(1, 32)]

        for crowd in estimator.estimate(dates):
            assert 1 <= crowd.overall_level <= 5
            assert len(crowd.hourly_breakdown) == 11


class TestEstimateCrowds:
    """Test the module-level entry point with the bundled calendar."""

    def test_christmas(self):
        (crowd,) = estimate_crowds(["2025-12-25"])

        assert crowd.overall_level == 5
        assert crowd.day_type == DayType.HOLIDAY
        assert crowd.holiday_name == "Christmas Day"
