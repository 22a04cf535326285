"""UTC-everywhere time handling. Every stored timestamp is timezone-aware UTC."""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Current time in UTC. Use instead of datetime.now()."""
    return datetime.now(timezone.utc)


def to_utc(dt: datetime) -> datetime:
    """
    Convert an aware datetime to UTC.

    Raises ValueError if datetime is naive (no timezone).
    """
    if dt.tzinfo is None:
        raise ValueError(
            "Cannot convert naive datetime to UTC. Datetime must be timezone-aware."
        )
    return dt.astimezone(timezone.utc)


def assume_utc(dt: datetime | None) -> datetime | None:
    """
    Normalize a client-supplied timestamp to UTC.

    Naive values are read as UTC wall-clock time; None passes through.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return to_utc(dt)
