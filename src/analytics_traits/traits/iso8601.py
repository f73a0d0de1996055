"""Canonical ISO-8601 text for instants: ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""

from __future__ import annotations

from datetime import date, datetime, time, timezone

from ..errors import InvalidDateError, TypeMismatchError


def to_utc(value: date | datetime, key: str = "date") -> datetime:
    """Interpret ``value`` as an instant in UTC.

    A ``date`` without a time is taken as midnight UTC. A naive ``datetime``
    has no defined instant and is rejected.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            raise InvalidDateError(f"{key!r}: datetime {value.isoformat()} has no timezone")
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time(0, 0), tzinfo=timezone.utc)
    raise TypeMismatchError(key, "a date or timezone-aware datetime", value)


def format_instant(value: date | datetime, key: str = "date") -> str:
    """Format as UTC with millisecond precision, e.g. ``1990-01-15T00:00:00.000Z``."""
    utc = to_utc(value, key)
    # %Y is not zero-padded below year 1000 on every platform
    return (
        f"{utc.year:04d}-{utc.month:02d}-{utc.day:02d}"
        f"T{utc.hour:02d}:{utc.minute:02d}:{utc.second:02d}"
        f".{utc.microsecond // 1000:03d}Z"
    )
