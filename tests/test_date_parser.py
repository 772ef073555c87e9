"""Tests for date parser with relative dates."""

import pytest
from datetime import date, timedelta
from finledger.utils.date_parser import parse_date, get_date_range

# A Wednesday in the second quarter
TODAY = date(2024, 5, 15)


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()
    assert parse_date("Today", today=TODAY) == TODAY


def test_parse_yesterday_and_tomorrow():
    assert parse_date("yesterday", today=TODAY) == date(2024, 5, 14)
    assert parse_date("tomorrow", today=TODAY) == date(2024, 5, 16)


def test_parse_last_month():
    """Test parsing 'last month' (first day of last month)."""
    assert parse_date("last month", today=TODAY) == date(2024, 4, 1)
    assert parse_date("last month", today=date(2024, 1, 10)) == date(2023, 12, 1)


def test_parse_weeks():
    """Weeks start on Monday."""
    assert parse_date("this week", today=TODAY) == date(2024, 5, 13)
    assert parse_date("last week", today=TODAY) == date(2024, 5, 6)
    assert parse_date("next week", today=TODAY) == date(2024, 5, 20)
    assert parse_date("last week", today=TODAY).weekday() == 0


def test_parse_quarters_and_years():
    assert parse_date("this quarter", today=TODAY) == date(2024, 4, 1)
    assert parse_date("last quarter", today=TODAY) == date(2024, 1, 1)
    assert parse_date("next year", today=TODAY) == date(2025, 1, 1)


def test_parse_last_weekday():
    assert parse_date("last monday", today=TODAY) == date(2024, 5, 13)
    # The same weekday means a week ago
    assert parse_date("last wednesday", today=TODAY) == date(2024, 5, 8)


def test_parse_invalid_date():
    """Test parsing invalid date raises error."""
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not a date at all")


@pytest.mark.parametrize(
    "period, expected",
    [
        ("this-week", (date(2024, 5, 13), TODAY)),
        ("this-month", (date(2024, 5, 1), TODAY)),
        ("this-quarter", (date(2024, 4, 1), TODAY)),
        ("this-year", (date(2024, 1, 1), TODAY)),
        ("last-week", (date(2024, 5, 6), date(2024, 5, 12))),
        ("last-month", (date(2024, 4, 1), date(2024, 4, 30))),
        ("last-quarter", (date(2024, 1, 1), date(2024, 3, 31))),
        ("last-year", (date(2023, 1, 1), date(2023, 12, 31))),
    ],
)
def test_get_date_range(period, expected):
    assert get_date_range(period, today=TODAY) == expected


def test_get_date_range_default_today():
    start, end = get_date_range("this-month")
    assert end == date.today()
    assert start == date.today().replace(day=1)
    assert end - start < timedelta(days=31)


def test_get_date_range_invalid():
    """Test invalid period raises error."""
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("next-decade")
