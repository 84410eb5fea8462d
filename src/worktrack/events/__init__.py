"""worktrack event system."""

from worktrack.events.bus import Event, EventBus
from worktrack.events.types import EventType

__all__ = ["Event", "EventBus", "EventType"]
