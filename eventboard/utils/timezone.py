"""Timezone helpers for timestamps stored by the event store."""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Get the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc_timezone(dt: datetime) -> datetime:
    """
    Ensure a datetime is timezone-aware and expressed in UTC.

    Naive values are interpreted as UTC, since SQLite drops the offset
    of DateTime(timezone=True) columns on the way back out.
    """
    if dt.tzinfo is None or dt.utcoffset() is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
