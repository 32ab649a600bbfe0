"""
utils/time_utils.py

Purpose: Time and display helpers

- Local clock time for reply headers
- Date formatting for activity reports
"""

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def get_timezone(name: str):
    """
    Returns the named timezone, or UTC when the tz database lacks it.
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def format_local_time(tz_name: str, now: Optional[datetime] = None) -> str:
    """
    Formats the current time as HH:MM in the given timezone.
    """
    now = now or datetime.now(timezone.utc)
    return now.astimezone(get_timezone(tz_name)).strftime("%H:%M")


def format_local_datetime(tz_name: str, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    return now.astimezone(get_timezone(tz_name)).strftime("%Y-%m-%d %H:%M:%S")


def format_date(value: Optional[str]) -> str:
    """
    Formats a stored ISO timestamp as a date.
    """
    if not value:
        return "N/A"
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%Y-%m-%d")
    except ValueError:
        return "N/A"
