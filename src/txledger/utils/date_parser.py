"""Date and timestamp parsing utilities."""

import re
from datetime import date, datetime, timedelta
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

# Canonical record timestamp: yyyy-MM-ddTHH:mm:ss
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
TIMESTAMP_LENGTH = 19
DISPLAY_FORMAT = "%d/%m/%Y %H:%M:%S"

_TIMESTAMP_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}")


def parse_timestamp(timestamp_str: str) -> datetime:
    """Parse a record timestamp in the exact ``yyyy-MM-ddTHH:mm:ss`` pattern.

    No other layout is accepted: the separator must be ``T`` and every
    component must be zero padded.

    Args:
        timestamp_str: Timestamp string (already trimmed)

    Returns:
        Naive datetime with second precision

    Raises:
        ValueError: If the string does not match the pattern or is not a
            real calendar date-time
    """
    if not _TIMESTAMP_RE.fullmatch(timestamp_str):
        raise ValueError(
            f"Invalid timestamp format: {timestamp_str}. Expected format: yyyy-MM-ddTHH:mm:ss"
        )
    try:
        return datetime.strptime(timestamp_str, TIMESTAMP_FORMAT)
    except ValueError:
        raise ValueError(
            f"Invalid timestamp format: {timestamp_str}. Expected format: yyyy-MM-ddTHH:mm:ss"
        )


def format_timestamp(value: datetime) -> str:
    """Format a timestamp for statements (dd/MM/yyyy HH:mm:ss)."""
    return value.strftime(DISPLAY_FORMAT)


def parse_date(date_str: str) -> date:
    """Parse a user supplied date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

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
