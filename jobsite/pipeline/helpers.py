"""
Shared helpers for date arithmetic and rounding.
"""
import math
from datetime import datetime, timezone
from typing import Optional

SECONDS_PER_DAY = 60 * 60 * 24
SECONDS_PER_HOUR = 60 * 60


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """Current UTC time unless a reference time is given."""
    if now is None:
        return datetime.now(timezone.utc)
    return as_utc(now)


def days_between(start: datetime, end: datetime) -> float:
    """Fractional days from start to end (negative when end is earlier)."""
    return (as_utc(end) - as_utc(start)).total_seconds() / SECONDS_PER_DAY


def days_until(target: datetime, now: datetime) -> int:
    """Whole days until target, counting any partial day as a full one."""
    return math.ceil(days_between(now, target))


def days_since(moment: datetime, now: datetime) -> int:
    """Whole days elapsed since moment, counting any partial day as a full one."""
    return math.ceil(days_between(moment, now))


def hours_until(target: datetime, now: datetime) -> float:
    return (as_utc(target) - as_utc(now)).total_seconds() / SECONDS_PER_HOUR
