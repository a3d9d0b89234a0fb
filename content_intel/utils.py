"""Utility functions for the Content Intelligence Engine."""

from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

from .logging import get_logger

logger = get_logger(__name__)

SECONDS_PER_DAY = 86400


def parse_date_string(date_str: str) -> datetime | None:
    """Parse various date string formats.

    Args:
        date_str: Date string to parse

    Returns:
        Parsed timezone-aware datetime or None if parsing fails
    """
    if not date_str:
        return None

    date_str = date_str.strip()

    # ISO 8601 first, WordPress and most CMS APIs emit it
    try:
        return ensure_utc(datetime.fromisoformat(date_str.replace("Z", "+00:00")))
    except ValueError:
        pass

    # RFC 2822 (RSS feeds)
    # Example: "Thu, 17 Jul 2025 23:17:14 GMT"
    try:
        return ensure_utc(parsedate_to_datetime(date_str))
    except (ValueError, TypeError):
        pass

    formats = [
        "%Y-%m-%d %H:%M:%S",
        "%d/%m/%Y",
        "%B %d, %Y",
        "%b %d, %Y",
        "%d %B %Y",
        "%d %b %Y",
    ]

    for fmt in formats:
        try:
            return ensure_utc(datetime.strptime(date_str, fmt))
        except ValueError:
            continue

    logger.warning("Failed to parse date string", date_string=date_str)
    return None


def ensure_utc(dt: datetime) -> datetime:
    """Attach UTC to naive datetimes; aware ones are left as they are."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def format_datetime_iso(dt: datetime) -> str:
    """Format datetime as ISO string.

    Args:
        dt: Datetime to format

    Returns:
        ISO formatted datetime string
    """
    return ensure_utc(dt).isoformat()


def days_between(first: datetime, second: datetime) -> float:
    """Absolute distance between two datetimes in fractional days."""
    delta = ensure_utc(first) - ensure_utc(second)
    return abs(delta.total_seconds()) / SECONDS_PER_DAY
