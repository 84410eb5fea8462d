"""Timesheet service: time-entry lifecycle and the approval cascade."""

from __future__ import annotations

import logging
from datetime import datetime

from worktrack.clock import Clock, default_clock
from worktrack.core.registry import Registry
from worktrack.events.bus import EventBus
from worktrack.events.types import EventType
from worktrack.models.employee import Employee
from worktrack.models.time_entry import TimeEntry

logger = logging.getLogger(__name__)


class TimesheetService:
    """Starts, stops, approves and rejects time entries.

    Approving an entry logs its hours on the task, which forwards them to
    the project. The whole cascade runs under the project's lock.
    """

    def __init__(self, registry: Registry, event_bus: EventBus, clock: Clock | None = None) -> None:
        self._registry = registry
        self._event_bus = event_bus
        self._clock = clock or default_clock()

    def start_entry(
        self,
        *,
        entry_id: str,
        employee: Employee,
        project_id: str,
        task_id: str | None = None,
        start_time: datetime | None = None,
        description: str | None = None,
    ) -> TimeEntry:
        """Open a time entry, starting now unless ``start_time`` is given.

        Raises:
            NotFoundError: If the project or task does not exist
            ValidationError: If the input is invalid or the id is taken
        """
        project = self._registry.get_project(project_id)
        task = self._registry.get_task(task_id) if task_id is not None else None
        with self._registry.lock_for(project_id):
            self._registry.ensure_new_entry_id(entry_id)
            entry = TimeEntry.create(
                entry_id,
                employee,
                project,
                task,
                start_time or self._clock.now(),
                description=description,
                clock=self._clock,
            )
            self._registry.add_entry(entry)

        logger.info(
            "Started time entry %s for %s on project %s (task=%s)",
            entry.id,
            employee.id,
            project_id,
            task_id,
        )
        self._event_bus.emit(
            EventType.TIME_ENTRY_STARTED,
            {
                "entry_id": entry.id,
                "employee_id": employee.id,
                "project_id": project_id,
                "task_id": task_id,
                "start_time": entry.start_time.isoformat(),
            },
        )
        return entry

    def get_entry(self, entry_id: str) -> TimeEntry:
        return self._registry.get_entry(entry_id)

    def stop_entry(self, entry_id: str, end_time: datetime | None = None) -> TimeEntry:
        """Stop an open entry, at ``end_time`` or now.

        Raises:
            ValidationError: If end_time is before the start or in the future
            InvalidStateError: If the entry was already stopped
        """
        entry = self._registry.get_entry(entry_id)
        with self._registry.lock_for(entry.project_id):
            entry.stop(end_time or self._clock.now())

        logger.info("Stopped time entry %s (%.2fh)", entry.id, entry.hours)
        self._event_bus.emit(
            EventType.TIME_ENTRY_STOPPED,
            {
                "entry_id": entry.id,
                "project_id": entry.project_id,
                "end_time": entry.end_time.isoformat(),
                "hours": entry.hours,
            },
        )
        return entry

    def approve_entry(self, entry_id: str) -> TimeEntry:
        """Approve a stopped entry and log its hours on the task and project.

        Approving an approved entry changes nothing.

        Raises:
            InvalidStateError: If the entry has not been stopped
        """
        entry = self._registry.get_entry(entry_id)
        with self._registry.lock_for(entry.project_id):
            if entry.approved:
                logger.debug("Time entry %s is already approved", entry.id)
                return entry
            cascaded = entry.approve()
            task_hours = entry.task.actual_hours if entry.task is not None else None
            project_hours = entry.project.actual_hours

        logger.info("Approved time entry %s (%.2fh)", entry.id, entry.hours)
        self._event_bus.emit(
            EventType.TIME_ENTRY_APPROVED,
            {"entry_id": entry.id, "project_id": entry.project_id, "hours": entry.hours},
        )
        if cascaded:
            logger.info(
                "Logged %.2fh on task %s (total=%.2fh) and project %s (total=%.2fh)",
                entry.hours,
                entry.task_id,
                task_hours,
                entry.project_id,
                project_hours,
            )
            self._event_bus.emit(
                EventType.WORK_LOGGED,
                {
                    "entry_id": entry.id,
                    "task_id": entry.task_id,
                    "project_id": entry.project_id,
                    "hours": entry.hours,
                    "task_hours": task_hours,
                    "project_hours": project_hours,
                },
            )
        return entry

    def reject_entry(self, entry_id: str) -> TimeEntry:
        """Clear an entry's approval. Hours already logged are not retracted."""
        entry = self._registry.get_entry(entry_id)
        with self._registry.lock_for(entry.project_id):
            was_approved = entry.approved
            entry.reject()

        if was_approved:
            logger.warning(
                "Rejected approved time entry %s; %.2fh stay logged on task %s",
                entry.id,
                entry.hours,
                entry.task_id,
            )
        else:
            logger.info("Rejected time entry %s", entry.id)
        self._event_bus.emit(
            EventType.TIME_ENTRY_REJECTED,
            {"entry_id": entry.id, "project_id": entry.project_id, "was_approved": was_approved},
        )
        return entry

    def update_entry_description(self, entry_id: str, description: str | None) -> TimeEntry:
        """Replace an entry's description.

        Raises:
            InvalidStateError: If the entry is approved
        """
        entry = self._registry.get_entry(entry_id)
        with self._registry.lock_for(entry.project_id):
            entry.update_description(description)
        self._event_bus.emit(
            EventType.TIME_ENTRY_UPDATED,
            {"entry_id": entry.id, "project_id": entry.project_id},
        )
        return entry

    def list_entries(
        self,
        *,
        project_id: str | None = None,
        employee_id: str | None = None,
        approved: bool | None = None,
    ) -> list[TimeEntry]:
        entries = list(self._registry.entries())
        if project_id is not None:
            entries = [e for e in entries if e.project_id == project_id]
        if employee_id is not None:
            entries = [e for e in entries if e.employee.id == employee_id]
        if approved is not None:
            entries = [e for e in entries if e.approved == approved]
        return entries

    def pending_approval(self, project_id: str | None = None) -> list[TimeEntry]:
        """Stopped entries that are not approved, oldest start first."""
        entries = [e for e in self.list_entries(project_id=project_id, approved=False) if not e.is_open]
        return sorted(entries, key=lambda e: e.start_time)
