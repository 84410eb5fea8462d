"""Tests for clocks and timezone handling."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

from worktrack.clock import FixedClock, SystemClock, default_clock, ensure_aware, set_default_clock


def test_fixed_clock_advance_and_set() -> None:
    clock = FixedClock(datetime(2024, 1, 1, tzinfo=UTC))

    assert clock.advance(hours=2) == datetime(2024, 1, 1, 2, tzinfo=UTC)
    assert clock.advance(timedelta(minutes=30)) == datetime(2024, 1, 1, 2, 30, tzinfo=UTC)
    clock.set(datetime(2025, 5, 5))
    assert clock.now() == datetime(2025, 5, 5, tzinfo=UTC)


def test_system_clock_is_aware() -> None:
    clock = SystemClock("Europe/Prague")
    now = clock.now()

    assert now.tzinfo == ZoneInfo("Europe/Prague")
    assert abs(now - datetime.now(UTC)) < timedelta(seconds=5)


def test_ensure_aware() -> None:
    tz = ZoneInfo("Europe/Prague")
    naive = datetime(2024, 7, 1, 12, 0)
    aware = datetime(2024, 7, 1, 12, 0, tzinfo=UTC)

    assert ensure_aware(naive, tz).tzinfo == tz
    assert ensure_aware(aware, tz) is aware


def test_set_default_clock_returns_previous() -> None:
    fixed = FixedClock()
    previous = set_default_clock(fixed)
    try:
        assert default_clock() is fixed
    finally:
        set_default_clock(previous)
    assert default_clock() is previous
