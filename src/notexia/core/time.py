"""Time helpers for Notexia.

UTC discipline: timestamps persisted in vault metadata are timezone-aware
ISO-8601 strings in UTC. Entry timestamps are whole epoch seconds rendered as
decimal strings.
"""

from __future__ import annotations

from datetime import datetime, timezone

__all__ = [
    "format_epoch_seconds",
    "format_utc_iso8601",
    "get_current_utc",
]


def get_current_utc() -> datetime:
    """Get current time in UTC.

    Returns
    -------
    datetime
        Current time in UTC with timezone info
    """
    return datetime.now(timezone.utc)


def format_utc_iso8601(dt: datetime) -> str:
    """Format datetime as ISO-8601 UTC string.

    Naive datetimes are assumed to be UTC already.

    Parameters
    ----------
    dt
        Datetime to format

    Returns
    -------
    str
        ISO-8601 UTC string (e.g., "2025-10-08T12:30:00+00:00")

    Example
    -------
    >>> dt = datetime(2025, 10, 8, 12, 30, 0, tzinfo=timezone.utc)
    >>> format_utc_iso8601(dt)
    '2025-10-08T12:30:00+00:00'
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)

    return dt.isoformat()


def format_epoch_seconds(timestamp: float | None) -> str | None:
    """Render a POSIX timestamp as whole seconds, or None if unavailable."""
    if timestamp is None or timestamp < 0:
        return None
    return str(int(timestamp))
