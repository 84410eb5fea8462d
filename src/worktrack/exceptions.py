"""Exceptions raised by the worktrack domain and services."""

from __future__ import annotations


class WorktrackError(Exception):
    """Base class for all worktrack errors."""


class ValidationError(WorktrackError, ValueError):
    """Raised when input to a constructor or mutator is malformed or out of range."""


class InvalidStateError(WorktrackError):
    """Raised when an operation is not allowed in the entity's current state."""


class NotFoundError(WorktrackError, LookupError):
    """Raised when an id does not resolve to a registered entity."""
