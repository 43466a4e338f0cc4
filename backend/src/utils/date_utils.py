"""Calendar helpers shared by the crowd, historical and comparison services."""

from datetime import date, datetime

from utils.constants import DATE_FORMAT
from utils.exceptions import ValidationError


def parse_date(value: str | date) -> date:
    """Parse a YYYY-MM-DD string (or ISO timestamp) into a date.

    Raises:
        ValidationError: If the value is missing or not a valid date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        raise ValidationError(f"Missing or invalid date: {value!r}")
    try:
        # Accept "2025-12-18T00:00" style values by dropping the time part
        return datetime.strptime(value.split("T")[0], DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Date must be in YYYY-MM-DD format: {value!r}")


def format_date(value: date) -> str:
    """Render a date as YYYY-MM-DD."""
    return value.strftime(DATE_FORMAT)


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def shift_year(value: date, year: int) -> date:
    """Move a date into another year, keeping month and day.

    Feb 29 moved into a non-leap year rolls forward to Mar 1.
    """
    if value.month == 2 and value.day == 29 and not is_leap_year(year):
        return date(year, 3, 1)
    return value.replace(year=year)


def format_hour(hour: int) -> str:
    """Render a 24h hour as a compact 12h label ("9am", "12pm", "3pm")."""
    if hour == 12:
        return "12pm"
    if hour > 12:
        return f"{hour - 12}pm"
    return f"{hour}am"


def weekday_name(value: date) -> str:
    return value.strftime("%A")
