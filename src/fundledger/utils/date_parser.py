"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta


WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

PERIODS = [
    "this-week",
    "this-month",
    "this-quarter",
    "this-year",
    "last-week",
    "last-month",
    "last-quarter",
    "last-year",
]


def _quarter_start(day: date) -> date:
    return date(day.year, 3 * ((day.month - 1) // 3) + 1, 1)


def _period_start(unit: str, today: date) -> Optional[date]:
    """First day of the unit ("week", "month", "quarter", "year") containing today."""
    if unit == "week":
        return today - timedelta(days=today.weekday())
    if unit == "month":
        return today.replace(day=1)
    if unit == "quarter":
        return _quarter_start(today)
    if unit == "year":
        return today.replace(month=1, day=1)
    return None


def _unit_delta(unit: str) -> relativedelta:
    return {
        "week": relativedelta(weeks=1),
        "month": relativedelta(months=1),
        "quarter": relativedelta(months=3),
        "year": relativedelta(years=1),
    }[unit]


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    dates: "today", "yesterday", "N days ago", "last monday", and
    "this/last week|month|quarter|year" (first day of that period).

    Args:
        date_str: Date string in various formats
        today: Reference date for relative dates (defaults to the current date)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    if today is None:
        today = date.today()

    if text == "today":
        return today
    if text == "yesterday":
        return today - timedelta(days=1)

    words = text.split()
    if len(words) == 3 and words[1:] == ["days", "ago"] and words[0].isdigit():
        return today - timedelta(days=int(words[0]))

    if len(words) == 2 and words[0] in ("this", "last"):
        prefix, unit = words
        if unit in WEEKDAYS and prefix == "last":
            days_ago = (today.weekday() - WEEKDAYS.index(unit)) % 7 or 7
            return today - timedelta(days=days_ago)
        start = _period_start(unit, today)
        if start is not None:
            return start if prefix == "this" else start - _unit_delta(unit)

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    "this-*" periods end today; "last-*" periods cover the whole previous
    week, month, quarter or year.

    Args:
        period: One of PERIODS
        today: Reference date (defaults to the current date)

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    normalized = period.strip().lower()
    if today is None:
        today = date.today()

    if normalized not in PERIODS:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}"
        )

    prefix, unit = normalized.split("-", 1)
    current_start = _period_start(unit, today)
    if prefix == "this":
        return (current_start, today)

    previous_start = current_start - _unit_delta(unit)
    return (previous_start, current_start - timedelta(days=1))
