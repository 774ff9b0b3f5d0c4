"""Tests for date parser with relative dates."""

import pytest
from datetime import date, datetime, UTC

from fxledger.utils.clock import FixedClock
from fxledger.utils.date_parser import parse_date, get_date_range


@pytest.fixture
def tuesday():
    """Tuesday 2 January 2024, 10:00 in Bangkok."""
    return FixedClock(datetime(2024, 1, 2, 3, 0, tzinfo=UTC))


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    result = parse_date("2024-01-15")
    assert result == date(2024, 1, 15)


def test_parse_today(tuesday):
    """Test parsing 'today'."""
    assert parse_date("today", tuesday) == date(2024, 1, 2)


def test_parse_today_uses_bangkok_date():
    """'today' follows the Bangkok calendar, not UTC."""
    clock = FixedClock(datetime(2024, 1, 1, 20, 0, tzinfo=UTC))
    assert parse_date("today", clock) == date(2024, 1, 2)


def test_parse_yesterday(tuesday):
    """Test parsing 'yesterday'."""
    assert parse_date("yesterday", tuesday) == date(2024, 1, 1)


def test_parse_tomorrow(tuesday):
    """Test parsing 'tomorrow'."""
    assert parse_date(" Tomorrow ", tuesday) == date(2024, 1, 3)


def test_parse_last_month(tuesday):
    """Test parsing 'last month' across a year boundary."""
    assert parse_date("last month", tuesday) == date(2023, 12, 1)


def test_parse_last_week(tuesday):
    """Test parsing 'last week'."""
    result = parse_date("last week", tuesday)
    assert result == date(2023, 12, 25)
    assert result.weekday() == 0


def test_parse_this_week(tuesday):
    assert parse_date("this week", tuesday) == date(2024, 1, 1)


def test_parse_this_month(tuesday):
    """Test parsing 'this month'."""
    assert parse_date("this month", tuesday) == date(2024, 1, 1)


def test_parse_this_year(tuesday):
    """Test parsing 'this year'."""
    assert parse_date("this year", tuesday) == date(2024, 1, 1)


def test_parse_last_year(tuesday):
    """Test parsing 'last year'."""
    assert parse_date("last year", tuesday) == date(2023, 1, 1)


def test_parse_invalid_relative():
    """Test parsing invalid relative date."""
    with pytest.raises(ValueError):
        parse_date("last invalid")


def test_parse_garbage():
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not-a-date")


def test_parse_standard_formats():
    """Test parsing various standard date formats."""
    # These should all work via dateutil parser
    assert parse_date("January 15, 2024") == date(2024, 1, 15)
    assert parse_date("15/01/2024") == date(2024, 1, 15)


def test_get_date_range_today(tuesday):
    assert get_date_range("today", tuesday) == (date(2024, 1, 2), date(2024, 1, 2))


def test_get_date_range_this_month(tuesday):
    """Test get_date_range for this-month."""
    assert get_date_range("this-month", tuesday) == (date(2024, 1, 1), date(2024, 1, 2))


def test_get_date_range_this_week(tuesday):
    """Test get_date_range for this-week."""
    start, end = get_date_range("this-week", tuesday)
    assert start == date(2024, 1, 1)
    assert start.weekday() == 0  # Should be Monday
    assert end == date(2024, 1, 2)


def test_get_date_range_last_week(tuesday):
    """Test get_date_range for last-week."""
    start, end = get_date_range("last-week", tuesday)
    assert start == date(2023, 12, 25)
    assert end == date(2023, 12, 31)
    assert start.weekday() == 0  # Monday
    assert end.weekday() == 6  # Sunday


def test_get_date_range_last_month(tuesday):
    """Test get_date_range for last-month when the current month is January."""
    assert get_date_range("last-month", tuesday) == (date(2023, 12, 1), date(2023, 12, 31))


def test_get_date_range_last_month_short_month():
    clock = FixedClock(datetime(2024, 3, 15, 3, 0, tzinfo=UTC))
    assert get_date_range("last-month", clock) == (date(2024, 2, 1), date(2024, 2, 29))


def test_get_date_range_invalid_period():
    """Test get_date_range with invalid period."""
    with pytest.raises(ValueError, match="Unknown period"):
        get_date_range("invalid-period")


def test_get_date_range_first_of_month():
    """On the first of the month this-month is a single day."""
    clock = FixedClock(datetime(2024, 2, 1, 3, 0, tzinfo=UTC))
    start, end = get_date_range("this-month", clock)
    assert start == end == date(2024, 2, 1)
