"""worktrack: project, task and time-entry tracking."""

from worktrack.exceptions import InvalidStateError, NotFoundError, ValidationError, WorktrackError
from worktrack.models import (
    Employee,
    Manager,
    Project,
    ProjectStatus,
    Task,
    TaskPriority,
    TaskStatus,
    TimeEntry,
)

__version__ = "0.1.0"

__all__ = [
    "Employee",
    "InvalidStateError",
    "Manager",
    "NotFoundError",
    "Project",
    "ProjectStatus",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "TimeEntry",
    "ValidationError",
    "WorktrackError",
]
