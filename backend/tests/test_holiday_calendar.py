"""Tests for the holiday calendar, day classifier and holiday loader."""

import json
from datetime import date

import pytest

from models.crowd import DayType, Holiday
from services.holiday_calendar import HolidayCalendar, get_default_calendar
from utils.exceptions import ValidationError
from utils.holiday_loader import DATA_FILE, HolidayLoader


class TestClassify:
    """Test day-type classification and base levels."""

    @pytest.mark.parametrize(
        "value,day_type,level",
        [
            ("2025-12-15", DayType.WEEKDAY, 2),  # Monday
            ("2025-12-17", DayType.WEEKDAY, 2),  # Wednesday
            ("2025-12-19", DayType.WEEKDAY, 3),  # Friday
            ("2025-12-20", DayType.WEEKEND, 4),  # Saturday
            ("2025-12-21", DayType.WEEKEND, 4),  # Sunday
        ],
    )
    def test_non_holiday_days(self, christmas_calendar, value, day_type, level):
        result = christmas_calendar.classify(value)

        assert result.day_type == day_type
        assert result.base_level == level
        assert result.holiday is None

    def test_holiday_uses_crowd_impact(self, christmas_calendar):
        result = christmas_calendar.classify("2025-12-25")

        assert result.day_type == DayType.HOLIDAY
        assert result.base_level == 5
        assert result.holiday.name == "Christmas Day"

    def test_holiday_wins_over_weekend(self):
        """A low-impact holiday on a Saturday is still a holiday."""
        calendar = HolidayCalendar(
            {"2025-12-20": Holiday(date="2025-12-20", name="Quiet Day", crowd_impact=1)}
        )

        result = calendar.classify("2025-12-20")

        assert result.day_type == DayType.HOLIDAY
        assert result.base_level == 1

    def test_accepts_date_objects(self, christmas_calendar):
        assert christmas_calendar.classify(date(2025, 12, 25)).day_type == DayType.HOLIDAY

    def test_accepts_timestamps(self, christmas_calendar):
        assert christmas_calendar.classify("2025-12-25T00:00").day_type == DayType.HOLIDAY

    def test_malformed_date_raises(self, christmas_calendar):
        with pytest.raises(ValidationError):
            christmas_calendar.classify("12/25/2025")

    def test_empty_calendar(self):
        calendar = HolidayCalendar()

        assert len(calendar) == 0
        assert calendar.classify("2025-12-25").day_type == DayType.WEEKDAY


class TestLookup:
    """Test holiday lookups."""

    def test_contains(self, christmas_calendar):
        assert "2025-12-25" in christmas_calendar
        assert "2025-12-26" not in christmas_calendar

    def test_get_holiday(self, christmas_calendar):
        assert christmas_calendar.get_holiday("2025-12-25").crowd_impact == 5
        assert christmas_calendar.get_holiday("2025-12-24") is None


class TestHolidayLoader:
    """Test loading the season-keyed holiday table."""

    @pytest.fixture
    def holiday_file(self, tmp_path):
        path = tmp_path / "holidays.json"
        path.write_text(
            json.dumps(
                {
                    "2025-2026": [
                        {"date": "2025-12-25", "name": "Christmas Day", "crowdImpact": 5},
                        {"date": "2026-01-19", "name": "MLK Day", "crowd_impact": 4},
                    ],
                    "2026-2027": [
                        {"date": "2026-12-25", "name": "Christmas Day", "crowdImpact": 5},
                        {"date": "2026-12-26", "name": "Broken", "crowdImpact": 9},
                        "2026-12-27",
                    ],
                }
            )
        )
        return path

    def test_merges_all_seasons(self, holiday_file):
        holidays = HolidayLoader(holiday_file).get_holidays()

        assert set(holidays) == {"2025-12-25", "2026-01-19", "2026-12-25"}
        assert holidays["2026-01-19"].crowd_impact == 4

    def test_season_filter(self, holiday_file):
        holidays = HolidayLoader(holiday_file).get_holidays("2026-2027")

        assert list(holidays) == ["2026-12-25"]

    def test_skips_invalid_entries(self, holiday_file):
        holidays = HolidayLoader(holiday_file).get_holidays()

        assert "2026-12-26" not in holidays

    def test_skips_non_object_entries(self, holiday_file):
        """A bare string in a season list is skipped, not fatal."""
        holidays = HolidayLoader(holiday_file).get_holidays("2026-2027")

        assert list(holidays) == ["2026-12-25"]

    def test_get_seasons_sorted(self, holiday_file):
        assert HolidayLoader(holiday_file).get_seasons() == ["2025-2026", "2026-2027"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            HolidayLoader(tmp_path / "missing.json").load()

    def test_bundled_table(self):
        """The bundled table loads and includes Christmas for both seasons."""
        loader = HolidayLoader(DATA_FILE)
        holidays = loader.get_holidays()

        assert "2025-2026" in loader.get_seasons()
        assert holidays["2025-12-25"].name == "Christmas Day"
        assert holidays["2025-12-25"].crowd_impact == 5
        assert "2026-12-25" in holidays

    def test_default_calendar(self):
        calendar = get_default_calendar()

        assert calendar is get_default_calendar()
        assert calendar.classify("2025-12-25").day_type == DayType.HOLIDAY
