"""Synchronous event bus for worktrack.

Besides fanning events out to listeners, the bus keeps a bounded journal of
what was emitted. Every worktrack event names the project it happened in,
so the journal can answer "what happened on project P1" without a listener
having been registered up front.
"""

from __future__ import annotations

import itertools
import logging
from collections import defaultdict, deque
from collections.abc import Callable
from typing import Any, NamedTuple

from worktrack.events.types import EventType

logger = logging.getLogger(__name__)

Listener = Callable[[EventType, dict[str, Any]], None]

DEFAULT_JOURNAL_SIZE = 500


class Event(NamedTuple):
    seq: int
    type: EventType
    data: dict[str, Any]

    @property
    def project_id(self) -> str | None:
        return self.data.get("project_id")


class EventBus:
    """Pub/sub event bus. Listeners run inline, in registration order."""

    def __init__(self, journal_size: int = DEFAULT_JOURNAL_SIZE) -> None:
        self._listeners: dict[EventType, list[Listener]] = defaultdict(list)
        self._global_listeners: list[Listener] = []
        self._journal: deque[Event] = deque(maxlen=journal_size)
        self._seq = itertools.count(1)

    def on(self, event_type: EventType, listener: Listener) -> None:
        """Register a listener for a specific event type."""
        self._listeners[event_type].append(listener)

    def on_all(self, listener: Listener) -> None:
        """Register a listener for all events."""
        self._global_listeners.append(listener)

    def off(self, event_type: EventType | None, listener: Listener) -> None:
        """Remove a listener; ``None`` removes an ``on_all`` listener."""
        listeners = self._global_listeners if event_type is None else self._listeners[event_type]
        if listener in listeners:
            listeners.remove(listener)

    def emit(self, event_type: EventType, data: dict[str, Any] | None = None) -> Event:
        """Journal an event and hand it to every matching listener.

        A failing listener is logged and skipped: approving an entry must not
        fail because a subscriber did.
        """
        event = Event(next(self._seq), event_type, dict(data or {}))
        self._journal.append(event)
        if event.project_id is None:
            logger.debug("Event %s carries no project_id", event_type)

        for listener in self._listeners.get(event_type, []) + self._global_listeners:
            try:
                listener(event_type, dict(event.data))
            except Exception:
                logger.exception("Error in event listener for %s (project=%s)", event_type, event.project_id)
        return event

    def history(
        self,
        *,
        project_id: str | None = None,
        event_type: EventType | None = None,
    ) -> list[Event]:
        """Journaled events, oldest first, optionally for one project or type."""
        events = list(self._journal)
        if project_id is not None:
            events = [e for e in events if e.project_id == project_id]
        if event_type is not None:
            events = [e for e in events if e.type == event_type]
        return events

    def clear(self) -> None:
        """Remove all listeners and forget the journal."""
        self._listeners.clear()
        self._global_listeners.clear()
        self._journal.clear()
