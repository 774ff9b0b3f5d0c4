"""Date parsing utilities.

Relative words ("today", "last week", ...) resolve against the Bangkok
business day, not the host's local date.
"""

from datetime import date, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from fxledger.utils.clock import BangkokClock, Clock


def _today(clock: Optional[Clock]) -> date:
    return (clock or BangkokClock()).today()


def parse_date(date_str: str, clock: Optional[Clock] = None) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this week", etc.

    Args:
        date_str: Date string in various formats
        clock: Clock used to resolve relative dates (defaults to the wall clock)

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = _today(clock)

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            # Monday of last week
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str, clock: Optional[Clock] = None) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Args:
        period: Period string (today, this-week, this-month, last-week, last-month)
        clock: Clock used to resolve the current day

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = _today(clock)

    if period == "today":
        return (today, today)

    elif period == "this-week":
        return (today - timedelta(days=today.weekday()), today)

    elif period == "this-month":
        return (today.replace(day=1), today)

    elif period == "last-week":
        start_date = today - timedelta(days=today.weekday() + 7)
        return (start_date, start_date + timedelta(days=6))

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    raise ValueError(
        f"Unknown period: '{period}'. Supported periods: today, this-week, this-month, last-week, last-month"
    )
