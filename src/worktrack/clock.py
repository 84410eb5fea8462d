"""Injectable time source.

Entities validate timestamps against "now" (start times may not be in the
future, due dates must be). Reading now through a Clock lets services and
tests pin it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import UTC, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo


class Clock(ABC):
    """Source of the current time. ``now()`` is always timezone-aware."""

    @property
    @abstractmethod
    def tz(self) -> tzinfo: ...

    @abstractmethod
    def now(self) -> datetime: ...


class SystemClock(Clock):
    """Wall-clock time in a fixed timezone."""

    def __init__(self, tz: tzinfo | str = UTC) -> None:
        self._tz = ZoneInfo(tz) if isinstance(tz, str) else tz

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        return datetime.now(self._tz)


class FixedClock(Clock):
    """Clock that returns the same instant until moved with ``advance`` or ``set``."""

    def __init__(self, fixed_time: datetime | None = None) -> None:
        fixed_time = fixed_time or datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
        self._time = ensure_aware(fixed_time, UTC)

    @property
    def tz(self) -> tzinfo:
        return self._time.tzinfo or UTC

    def now(self) -> datetime:
        return self._time

    def set(self, when: datetime) -> None:
        self._time = ensure_aware(when, self.tz)

    def advance(self, delta: timedelta | None = None, **kwargs: float) -> datetime:
        """Move the clock forward by ``delta`` or by timedelta keyword arguments."""
        self._time += delta if delta is not None else timedelta(**kwargs)
        return self._time


def ensure_aware(value: datetime, tz: tzinfo) -> datetime:
    """Attach ``tz`` to a naive datetime; aware values pass through."""
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value.replace(tzinfo=tz)
    return value


_default_clock: Clock = SystemClock()


def default_clock() -> Clock:
    return _default_clock


def set_default_clock(clock: Clock) -> Clock:
    """Replace the process-wide clock used when an entity is created without one.

    Returns the previous clock so callers can restore it.
    """
    global _default_clock
    previous, _default_clock = _default_clock, clock
    return previous
