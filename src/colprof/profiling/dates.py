"""Lenient date parsing.

Missing date parts are filled from a fixed default so a parse never depends
on the current day. Parsed values are normalized to UTC-aware datetimes.
"""

from datetime import UTC, datetime
from functools import lru_cache

from dateutil import parser as dateparser

# Filled in for absent parts, e.g. "Dec 25" -> 2001-12-25
DEFAULT_DATE = datetime(2001, 1, 1)


@lru_cache(maxsize=65536)
def parse_date(text: str) -> datetime | None:
    """Parse a string as a date.

    Args:
        text: Candidate date string

    Returns:
        Parsed datetime (naive or aware, as written) or None if unparseable
    """
    if not text or not text.strip():
        return None
    try:
        return dateparser.parse(text, default=DEFAULT_DATE)
    except (ValueError, OverflowError):
        return None


def to_utc(value: datetime) -> datetime:
    """Normalize a datetime to UTC; naive values are taken as UTC."""
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
