"""Time entry model and its open → stopped → approved lifecycle."""

from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import BaseModel, Field, PrivateAttr

from worktrack.clock import Clock
from worktrack.exceptions import InvalidStateError, ValidationError
from worktrack.models._checks import require, require_text, require_time
from worktrack.models.employee import Employee
from worktrack.models.project import Project
from worktrack.models.task import Task


class TimeEntry(BaseModel):
    """One employee's work interval against a project and, usually, a task.

    An entry is created open, stopped once, then approved. The first
    approval pushes :attr:`hours` into the task (and through it, the
    project); later approvals do nothing. Rejection only clears the flag.
    """

    id: str = Field(frozen=True)
    employee: Employee = Field(frozen=True)
    project_id: str = Field(frozen=True)
    task_id: str | None = Field(default=None, frozen=True)
    start_time: datetime = Field(frozen=True)
    end_time: datetime | None = None
    description: str | None = None
    approved: bool = False
    created_at: datetime = Field(frozen=True)

    _project: Project = PrivateAttr()
    _task: Task | None = PrivateAttr(default=None)
    _clock: Clock = PrivateAttr()

    @classmethod
    def create(
        cls,
        id: str,
        employee: Employee | None,
        project: Project | None,
        task: Task | None = None,
        start_time: datetime | None = None,
        *,
        description: str | None = None,
        clock: Clock | None = None,
    ) -> TimeEntry:
        """Open a new, unapproved entry starting at ``start_time``.

        Raises:
            ValidationError: If the id is blank, employee, project or start
                time is missing, the start time is in the future, or the
                task belongs to a different project.
        """
        require_text(id, "Time entry ID")
        require(employee, "Employee")
        require(project, "Project")
        clock = clock or project.clock
        start_time = require_time(start_time, "Start time", clock)
        now = clock.now()
        if start_time > now:
            raise ValidationError("Start time cannot be in the future")
        if task is not None and task.project is not project:
            raise ValidationError(f"Task {task.id} does not belong to project {project.id}")

        entry = cls(
            id=id,
            employee=employee,
            project_id=project.id,
            task_id=task.id if task is not None else None,
            start_time=start_time,
            description=description,
            created_at=now,
        )
        entry._project = project
        entry._task = task
        entry._clock = clock
        if task is not None:
            task._attach_entry(entry)
        return entry

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeEntry):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("time_entry", self.id))

    @property
    def project(self) -> Project:
        return self._project

    @property
    def task(self) -> Task | None:
        return self._task

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    @property
    def duration(self) -> timedelta:
        if self.end_time is None:
            return timedelta(0)
        return self.end_time - self.start_time

    @property
    def hours(self) -> float:
        """Duration in hours, counted in whole minutes."""
        return (self.duration // timedelta(minutes=1)) / 60.0

    def stop(self, end_time: datetime | None) -> None:
        """Close the interval at ``end_time``.

        Raises:
            ValidationError: If end_time is missing, before the start, or in
                the future.
            InvalidStateError: If the entry was already stopped.
        """
        end_time = require_time(end_time, "End time", self._clock)
        if end_time < self.start_time:
            raise ValidationError("End time cannot be before start time")
        if end_time > self._clock.now():
            raise ValidationError("End time cannot be in the future")
        if self.end_time is not None:
            raise InvalidStateError("Time entry has already been stopped")
        self.end_time = end_time

    def approve(self) -> bool:
        """Approve the entry, logging its hours on the task the first time.

        Returns True when hours were pushed to the task. Entries without a
        task, or shorter than a minute, are approved without logging.

        Raises:
            InvalidStateError: If the entry has not been stopped.
        """
        if self.end_time is None:
            raise InvalidStateError("Cannot approve time entry without end time")
        if self.approved:
            return False

        hours = self.hours
        cascaded = self._task is not None and hours > 0
        if cascaded:
            self._task.log_work(hours)
        self.approved = True
        return cascaded

    def reject(self) -> None:
        # Hours already logged on the task and project stay there.
        self.approved = False

    def update_description(self, description: str | None) -> None:
        if self.approved:
            raise InvalidStateError("Cannot update description of approved time entry")
        self.description = description

    def to_response(self, *, detail: str = "summary") -> dict:
        data = {
            "_v": "1.0",
            "id": self.id,
            "employee": self.employee.full_name,
            "project_id": self.project_id,
            "task_id": self.task_id,
            "hours": round(self.hours, 2),
            "approved": self.approved,
        }
        if detail != "summary":
            data.update(
                {
                    "description": self.description,
                    "start_time": self.start_time.isoformat(),
                    "end_time": self.end_time.isoformat() if self.end_time else None,
                    "created_at": self.created_at.isoformat(),
                }
            )
        return data
