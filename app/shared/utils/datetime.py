"""UTC datetime helpers.

Task timestamps and due dates are always timezone-aware UTC. Naive values
coming from clients or the database are treated as UTC.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize dt to aware UTC.

    Naive datetimes get UTC attached; aware ones are converted. None passes
    through unchanged so nullable columns (due_date) can be normalized in one call.

    Args:
        dt: Datetime to normalize, or None.

    Returns:
        UTC-aware datetime or None.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
