"""Date utilities."""

import time
from datetime import datetime, timezone
from typing import Optional


# Standard format constants
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S %Z"

# Publication time used for entries that carry none
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def now_utc() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def from_struct_time(value: Optional[time.struct_time], default: Optional[datetime] = None) -> Optional[datetime]:
    """
    Convert a UTC struct_time (as produced by feedparser) to an aware datetime.

    Args:
        value: struct_time in UTC, or None
        default: Value returned when conversion is impossible

    Returns:
        Aware UTC datetime or default
    """
    if not value:
        return default
    try:
        return datetime(*value[:6], tzinfo=timezone.utc)
    except (TypeError, ValueError):
        return default


def parse_iso_datetime(value: Optional[str], default: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse an RFC 3339 timestamp (e.g. "2024-01-04T08:00:00Z") to UTC.

    Args:
        value: Timestamp string; a missing offset is taken as UTC
        default: Value returned if parsing fails

    Returns:
        Aware UTC datetime or default
    """
    if not value:
        return default
    try:
        dt = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return default
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_datetime(dt: datetime, fmt: str = DATETIME_FORMAT) -> str:
    """Format a datetime for display."""
    return dt.strftime(fmt)
