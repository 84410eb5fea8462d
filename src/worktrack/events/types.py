"""Event type constants for worktrack."""

from enum import StrEnum


class EventType(StrEnum):
    PROJECT_CREATED = "project.created"
    PROJECT_UPDATED = "project.updated"
    PROJECT_STATUS_CHANGED = "project.status_changed"

    PARTICIPANT_ADDED = "participant.added"
    PARTICIPANT_REMOVED = "participant.removed"
    MANAGER_CHANGED = "manager.changed"

    TASK_CREATED = "task.created"
    TASK_UPDATED = "task.updated"
    TASK_STATUS_CHANGED = "task.status_changed"

    TIME_ENTRY_STARTED = "time_entry.started"
    TIME_ENTRY_STOPPED = "time_entry.stopped"
    TIME_ENTRY_UPDATED = "time_entry.updated"
    TIME_ENTRY_APPROVED = "time_entry.approved"
    TIME_ENTRY_REJECTED = "time_entry.rejected"

    WORK_LOGGED = "work.logged"
