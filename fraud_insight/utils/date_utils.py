"""Date parsing and calendar-day helpers"""

from datetime import date, datetime, time
from typing import Optional


def to_local(moment: datetime) -> datetime:
    """Normalize to a timezone-aware datetime in the local zone (naive values are local)"""
    return moment.astimezone()


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp from the statistics service.

    Raises:
        ValueError: If the value is not a valid ISO timestamp
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return to_local(datetime.fromisoformat(text))


def parse_bound(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a filter bound. A bare date means local midnight of that date.

    Returns None for empty input; raises ValueError for malformed input.
    """
    if value is None or not value.strip():
        return None
    text = value.strip()
    if "T" not in text and " " not in text:
        day = date.fromisoformat(text)
        return to_local(datetime.combine(day, time.min))
    return parse_timestamp(text)


def local_day(moment: datetime) -> date:
    """Local calendar date of a timestamp"""
    return to_local(moment).date()
