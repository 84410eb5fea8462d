"""worktrack domain models."""

from worktrack.models.employee import Employee, Manager
from worktrack.models.project import Project, ProjectStatus
from worktrack.models.task import Task, TaskPriority, TaskStatus
from worktrack.models.time_entry import TimeEntry

__all__ = [
    "Employee",
    "Manager",
    "Project",
    "ProjectStatus",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "TimeEntry",
]
