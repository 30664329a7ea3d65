"""
Injectable Clock

Every operation that reads "now" accepts it as a parameter. Multi-step
operations (building a session, composing dashboard stats) read the clock
once and thread that instant through, so that due classification and
ordering inside one operation never see two different instants.

Usage:
    from srs_engine.services.clock import fixed_clock, resolve_now

    clock = fixed_clock(datetime(2024, 1, 1, tzinfo=timezone.utc))
    now = resolve_now(None, clock)
"""

from datetime import datetime, timezone
from typing import Callable, Optional

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current instant as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def fixed_clock(instant: datetime) -> Clock:
    """Clock that always returns ``instant`` (normalized to UTC)."""
    frozen = to_utc(instant)
    return lambda: frozen


def to_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to ``timezone.utc``.

    Naive datetimes are taken to already be UTC. Aware datetimes are
    converted, which also replaces pydantic's parsed UTC tzinfo with the
    stdlib singleton the memory-model library insists on.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def resolve_now(now: Optional[datetime] = None, clock: Clock = utc_now) -> datetime:
    """Return ``now`` normalized to UTC, reading ``clock`` only if it is None."""
    return to_utc(now if now is not None else clock())
