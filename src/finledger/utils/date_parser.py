"""Date parsing utilities."""

from datetime import date, timedelta
from typing import Callable, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
STEPS = {
    "week": relativedelta(weeks=1),
    "month": relativedelta(months=1),
    "quarter": relativedelta(months=3),
    "year": relativedelta(years=1),
}


def _week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def _quarter_start(day: date) -> date:
    return day.replace(month=3 * ((day.month - 1) // 3) + 1, day=1)


def _last_period(start: date, step: relativedelta) -> tuple[date, date]:
    previous = start - step
    return previous, start - timedelta(days=1)


# Period name -> function of today returning (start, end), both inclusive
PERIODS: dict[str, Callable[[date], tuple[date, date]]] = {
    "this-week": lambda today: (_week_start(today), today),
    "this-month": lambda today: (today.replace(day=1), today),
    "this-quarter": lambda today: (_quarter_start(today), today),
    "this-year": lambda today: (today.replace(month=1, day=1), today),
    "last-week": lambda today: _last_period(_week_start(today), STEPS["week"]),
    "last-month": lambda today: _last_period(today.replace(day=1), STEPS["month"]),
    "last-quarter": lambda today: _last_period(_quarter_start(today), STEPS["quarter"]),
    "last-year": lambda today: _last_period(today.replace(month=1, day=1), STEPS["year"]),
}


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and relative
    ones: "today", "yesterday", "tomorrow", "last friday", and "this", "last"
    or "next" followed by week, month, quarter or year (the first day of
    that period).

    Args:
        date_str: Date string
        today: Reference date for relative forms, defaults to today

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or date.today()

    simple = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in simple:
        return simple[text]

    prefix, _, unit = text.partition(" ")
    if prefix == "last" and unit in WEEKDAYS:
        days_ago = (today.weekday() - WEEKDAYS.index(unit)) % 7 or 7
        return today - timedelta(days=days_ago)

    if prefix in ("this", "last", "next") and unit in ("week", "month", "quarter", "year"):
        start = PERIODS[f"this-{unit}"](today)[0]
        step = STEPS[unit]
        if prefix == "last":
            return start - step
        if prefix == "next":
            return start + step
        return start

    try:
        return date_parser.parse(date_str.strip()).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of the PERIODS names, e.g. "this-month" or "last-quarter"
        today: Reference date, defaults to today

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If period string is not recognized
    """
    key = period.strip().lower()
    if key not in PERIODS:
        supported = ", ".join(PERIODS)
        raise ValueError(f"Unknown period: '{period}'. Supported periods: {supported}")
    return PERIODS[key](today or date.today())
