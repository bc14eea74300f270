"""Timestamp normalization for persisted records.

Stored entries carry dates in whatever shape the writer produced: native
datetimes, Firestore timestamps, exported ``{seconds, nanoseconds}`` maps,
ISO strings or epoch numbers. Everything is folded into an aware UTC
``datetime`` here so nothing downstream has to care.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date, datetime, time, timezone
from typing import Any

# Epoch numbers above this are milliseconds (year ~2286 in seconds).
_MILLIS_THRESHOLD = 10_000_000_000


def _from_seconds(value: float) -> datetime | None:
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        # out of range for the platform, or nan/inf
        return None


def _from_epoch(value: float) -> datetime | None:
    if abs(value) >= _MILLIS_THRESHOLD:
        try:
            value = value / 1000
        except OverflowError:
            return None
    return _from_seconds(value)


def normalize_timestamp(value: Any) -> datetime | None:
    """Convert a stored date representation into an aware UTC datetime.

    Returns None for missing or unparseable values.
    """
    if value is None or value == "":
        return None

    # Firestore's DatetimeWithNanoseconds is a datetime subclass.
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        try:
            return value.astimezone(timezone.utc)
        except OverflowError:
            return None

    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)

    to_datetime = getattr(value, "to_datetime", None)
    if callable(to_datetime):
        return normalize_timestamp(to_datetime())

    if isinstance(value, Mapping):
        seconds = value.get("seconds", value.get("_seconds"))
        if seconds is None:
            return None
        nanos = value.get("nanoseconds", value.get("_nanoseconds")) or 0
        try:
            return _from_seconds(int(seconds) + int(nanos) / 1e9)
        except (OverflowError, TypeError, ValueError):
            return None

    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return _from_epoch(value)

    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return normalize_timestamp(datetime.fromisoformat(text))
        except ValueError:
            pass
        try:
            return _from_epoch(float(text))
        except ValueError:
            return None

    return None
