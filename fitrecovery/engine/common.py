"""Time and rounding helpers shared by the engine modules."""

from __future__ import annotations

import datetime
import math


def ensure_utc(value: datetime.datetime) -> datetime.datetime:
    """Return *value* as an aware UTC datetime.  Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def resolve_now(now: datetime.datetime | None) -> datetime.datetime:
    """The reference time for a computation; current UTC time when omitted."""
    return ensure_utc(now) if now is not None else utc_now()


def hours_between(later: datetime.datetime, earlier: datetime.datetime) -> float:
    """Signed hours from *earlier* to *later*."""
    return (ensure_utc(later) - ensure_utc(earlier)).total_seconds() / 3600.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return int(math.floor(value + 0.5))
