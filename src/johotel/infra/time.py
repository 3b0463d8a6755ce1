"""Time utilities for consistent timestamp handling."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC timestamp (timezone-aware)."""
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    """Convert an aware datetime to UTC.

    Naive datetimes are rejected: a wall-clock value without an offset has no
    single absolute instant.
    """
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError("datetime must be timezone-aware")
    return value.astimezone(timezone.utc)
