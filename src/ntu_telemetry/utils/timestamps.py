"""Timestamp helpers shared by the classifier and the series synthesizer."""

from datetime import datetime, timezone
from typing import Any

from dateutil import parser as dateutil_parser


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def normalize_timestamp(value: Any) -> datetime:
    """Convert a maintenance date or reading time to an aware UTC datetime.

    Handles:
    - datetime: naive values are taken to be UTC, aware values are converted
    - date-like str: parsed with dateutil ("2026-11-01", ISO-8601, ...)
    - int/float: Unix epoch, milliseconds detected by magnitude

    Args:
        value: Timestamp as datetime, str, or epoch number

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        ValueError: If value cannot be interpreted as a timestamp

    Example:
        >>> normalize_timestamp("2026-11-01")
        datetime.datetime(2026, 11, 1, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if isinstance(value, bool):
        raise ValueError(f"Cannot parse timestamp: {value!r}")

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)):
        # Database exports use milliseconds; anything past 1e12 is after 2001 in ms
        if value > 1e12:
            value = value / 1000
        return datetime.fromtimestamp(value, tz=timezone.utc)
    elif isinstance(value, str):
        try:
            dt = dateutil_parser.parse(value)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Cannot parse timestamp: {value!r}") from e
    else:
        raise ValueError(f"Cannot parse timestamp: {value!r} (type: {type(value).__name__})")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Render a datetime as sortable ISO-8601 with a Z suffix.

    Naive datetimes are taken to be UTC.
    """
    dt = normalize_timestamp(value)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
