"""Holiday lookup and weekday/weekend/holiday day classification."""

from collections.abc import Callable, Mapping
from datetime import date
from typing import NamedTuple

from models.crowd import DayType, Holiday
from utils.date_utils import format_date, parse_date
from utils.holiday_loader import HolidayLoader


class DayClassification(NamedTuple):
    """Calendar classification of a date and its base crowd level."""

    day_type: DayType
    base_level: int
    holiday: Holiday | None


# Evaluated in order after the holiday lookup; weekday() is 0 for Monday.
WEEKDAY_RULES: list[tuple[Callable[[date], bool], DayType, int]] = [
    (lambda d: d.weekday() in (5, 6), DayType.WEEKEND, 4),
    (lambda d: d.weekday() == 4, DayType.WEEKDAY, 3),
    (lambda d: True, DayType.WEEKDAY, 2),
]


class HolidayCalendar:
    """Read-only date to holiday lookup."""

    def __init__(self, holidays: Mapping[str, Holiday] | None = None):
        self._holidays = dict(holidays or {})

    @classmethod
    def from_loader(cls, loader: HolidayLoader | None = None) -> "HolidayCalendar":
        """Build a calendar from the bundled holiday table."""
        return cls((loader or HolidayLoader()).get_holidays())

    def __contains__(self, value: str | date) -> bool:
        return self.get_holiday(value) is not None

    def __len__(self) -> int:
        return len(self._holidays)

    def get_holiday(self, value: str | date) -> Holiday | None:
        return self._holidays.get(format_date(parse_date(value)))

    def classify(self, value: str | date) -> DayClassification:
        """Classify a date; holidays always win over weekday/weekend."""
        day = parse_date(value)
        holiday = self._holidays.get(format_date(day))
        if holiday:
            return DayClassification(DayType.HOLIDAY, holiday.crowd_impact, holiday)

        for matches, day_type, level in WEEKDAY_RULES:
            if matches(day):
                return DayClassification(day_type, level, None)

        raise AssertionError("WEEKDAY_RULES must end with a catch-all rule")


_default_calendar: HolidayCalendar | None = None


def get_default_calendar() -> HolidayCalendar:
    """Calendar built from backend/data/holidays.json, loaded once."""
    global _default_calendar
    if _default_calendar is None:
        _default_calendar = HolidayCalendar.from_loader()
    return _default_calendar
