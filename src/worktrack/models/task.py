"""Task model: a unit of work inside a project that accumulates approved hours."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, PrivateAttr

from worktrack.clock import Clock
from worktrack.exceptions import InvalidStateError, ValidationError
from worktrack.models._checks import (
    progress,
    require,
    require_choice,
    require_positive,
    require_text,
    require_time,
)
from worktrack.models.employee import Employee
from worktrack.models.project import Project

if TYPE_CHECKING:
    from worktrack.models.time_entry import TimeEntry


class TaskStatus(StrEnum):
    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class TaskPriority(StrEnum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


_STATUS_TRANSITIONS: dict[TaskStatus, set[TaskStatus]] = {
    TaskStatus.NEW: {TaskStatus.IN_PROGRESS, TaskStatus.ON_HOLD, TaskStatus.CANCELLED},
    TaskStatus.IN_PROGRESS: {TaskStatus.ON_HOLD, TaskStatus.COMPLETED, TaskStatus.CANCELLED},
    TaskStatus.ON_HOLD: {TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED, TaskStatus.CANCELLED},
    TaskStatus.COMPLETED: set(),
    TaskStatus.CANCELLED: set(),
}


class Task(BaseModel):
    """A task belonging to exactly one project.

    The owning project is fixed at creation and reached through
    :attr:`project`; :meth:`log_work` forwards every hour it records to it.
    """

    id: str = Field(frozen=True)
    project_id: str = Field(frozen=True)
    title: str
    description: str | None = None
    assignee: Employee | None = None
    estimated_hours: float = 0.0
    actual_hours: float = 0.0
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.NEW
    due_date: datetime
    created_at: datetime = Field(frozen=True)

    _project: Project = PrivateAttr()
    _time_entries: list[TimeEntry] = PrivateAttr(default_factory=list)

    @classmethod
    def create(
        cls,
        id: str,
        title: str,
        project: Project | None,
        due_date: datetime | None,
        assignee: Employee | None = None,
        *,
        description: str | None = None,
        clock: Clock | None = None,
    ) -> Task:
        """Create a NEW task and append it to ``project``'s tasks.

        Raises:
            ValidationError: If id or title is blank, the project is missing,
                the due date is not strictly in the future, or the project
                already has a task with this id.
        """
        require_text(id, "Task ID")
        require_text(title, "Title")
        require(project, "Project")
        clock = clock or project.clock
        due_date = _check_due_date(due_date, clock)

        task = cls(
            id=id,
            project_id=project.id,
            title=title,
            description=description,
            assignee=assignee,
            due_date=due_date,
            created_at=clock.now(),
        )
        task._project = project
        project._attach_task(task)
        return task

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.id == other.id and self.project_id == other.project_id

    def __hash__(self) -> int:
        return hash(("task", self.project_id, self.id))

    @property
    def project(self) -> Project:
        return self._project

    @property
    def time_entries(self) -> tuple[TimeEntry, ...]:
        return tuple(self._time_entries)

    def get_progress(self) -> float:
        return progress(self.actual_hours, self.estimated_hours)

    def log_work(self, hours: float) -> None:
        """Record approved hours on this task and on the owning project.

        A NEW task moves to IN_PROGRESS.

        Raises:
            ValidationError: If hours is not positive.
        """
        hours = require_positive(hours, "Hours")
        self.actual_hours += hours
        self._project.update_actual_hours(hours)
        if self.status == TaskStatus.NEW:
            self.status = TaskStatus.IN_PROGRESS

    def _attach_entry(self, entry: TimeEntry) -> None:
        if any(e.id == entry.id for e in self._time_entries):
            raise ValidationError(f"Time entry {entry.id} already exists in task {self.id}")
        self._time_entries.append(entry)

    def reassign(self, employee: Employee | None) -> None:
        self.assignee = require(employee, "Employee")

    def set_estimated_hours(self, hours: float) -> None:
        self.estimated_hours = require_positive(hours, "Estimated hours")

    def update_due_date(self, due_date: datetime | None) -> None:
        self.due_date = _check_due_date(due_date, self._project.clock)

    def update_title(self, title: str | None) -> None:
        self.title = require_text(title, "Title")

    def update_description(self, description: str | None) -> None:
        self.description = description

    def set_priority(self, priority: TaskPriority | None) -> None:
        self.priority = require_choice(priority, TaskPriority, "Priority")

    def set_status(self, status: TaskStatus | None) -> bool:
        """Move to ``status``; returns False if already there."""
        status = require_choice(status, TaskStatus, "Status")
        if status == self.status:
            return False
        if status not in _STATUS_TRANSITIONS[self.status]:
            raise InvalidStateError(f"Invalid status transition: {self.status} → {status}")
        self.status = status
        return True

    def to_response(self, *, detail: str = "summary", precision: int = 1) -> dict:
        data = {
            "_v": "1.0",
            "id": self.id,
            "project_id": self.project_id,
            "title": self.title,
            "status": self.status.value,
            "priority": self.priority.value,
            "actual_hours": self.actual_hours,
            "progress": round(self.get_progress(), precision),
            "assignee": self.assignee.full_name if self.assignee else None,
        }
        if detail != "summary":
            data.update(
                {
                    "description": self.description,
                    "estimated_hours": self.estimated_hours,
                    "due_date": self.due_date.isoformat(),
                    "time_entries": [e.id for e in self._time_entries],
                    "created_at": self.created_at.isoformat(),
                }
            )
        return data


def _check_due_date(due_date: datetime | None, clock: Clock) -> datetime:
    if due_date is None:
        raise ValidationError("Due date must be in the future")
    due_date = require_time(due_date, "Due date", clock)
    if due_date <= clock.now():
        raise ValidationError("Due date must be in the future")
    return due_date
