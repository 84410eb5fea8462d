"""Input checks shared by the domain models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from worktrack.clock import Clock, ensure_aware
from worktrack.exceptions import ValidationError


def require_text(value: str | None, label: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{label} cannot be null or empty")
    return value


def require(value, label: str):
    if value is None:
        raise ValidationError(f"{label} cannot be null")
    return value


def require_choice(value, choices: type[Enum], label: str):
    """Coerce ``value`` to a member of ``choices``."""
    require(value, label)
    try:
        return choices(value)
    except ValueError:
        allowed = ", ".join(member.value for member in choices)
        raise ValidationError(f"Unknown {label.lower()}: {value!r} (expected one of {allowed})") from None


def require_time(value: datetime | None, label: str, clock: Clock) -> datetime:
    if value is None:
        raise ValidationError(f"{label} cannot be null")
    return ensure_aware(value, clock.tz)


def require_positive(hours: float, label: str) -> float:
    if hours is None or hours <= 0:
        raise ValidationError(f"{label} must be positive")
    return float(hours)


def progress(actual: float, estimated: float) -> float:
    if estimated == 0:
        return 0.0
    return actual / estimated * 100
