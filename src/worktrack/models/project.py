"""Project aggregate: membership, tasks and aggregated hours."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field, PrivateAttr

from worktrack.clock import Clock, default_clock
from worktrack.exceptions import InvalidStateError, ValidationError
from worktrack.models._checks import (
    progress,
    require,
    require_choice,
    require_positive,
    require_text,
    require_time,
)
from worktrack.models.employee import Employee, Manager

if TYPE_CHECKING:
    from worktrack.models.task import Task


class ProjectStatus(StrEnum):
    PLANNED = "PLANNED"
    IN_PROGRESS = "IN_PROGRESS"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


_STATUS_TRANSITIONS: dict[ProjectStatus, set[ProjectStatus]] = {
    ProjectStatus.PLANNED: {ProjectStatus.IN_PROGRESS, ProjectStatus.ON_HOLD, ProjectStatus.CANCELLED},
    ProjectStatus.IN_PROGRESS: {ProjectStatus.ON_HOLD, ProjectStatus.COMPLETED, ProjectStatus.CANCELLED},
    ProjectStatus.ON_HOLD: {ProjectStatus.IN_PROGRESS, ProjectStatus.COMPLETED, ProjectStatus.CANCELLED},
    ProjectStatus.COMPLETED: set(),  # final
    ProjectStatus.CANCELLED: set(),  # final
}


class Project(BaseModel):
    """A project led by a manager, owning an ordered list of tasks.

    ``actual_hours`` only grows, fed by :meth:`Task.log_work` through
    :meth:`update_actual_hours`. Participants and tasks are exposed as
    tuples; change them through the methods on this class.
    """

    id: str = Field(frozen=True)
    name: str
    description: str | None = None
    start_date: datetime
    end_date: datetime
    manager: Manager
    estimated_hours: float = 0.0
    actual_hours: float = 0.0
    status: ProjectStatus = ProjectStatus.PLANNED
    created_at: datetime = Field(frozen=True)

    _participants: dict[str, Employee] = PrivateAttr(default_factory=dict)
    _tasks: list[Task] = PrivateAttr(default_factory=list)
    _clock: Clock = PrivateAttr(default_factory=default_clock)

    @classmethod
    def create(
        cls,
        id: str,
        name: str,
        description: str | None,
        start_date: datetime | None,
        end_date: datetime | None,
        manager: Manager | None,
        *,
        clock: Clock | None = None,
    ) -> Project:
        """Create a project in PLANNED status with the manager as first participant.

        Raises:
            ValidationError: If id or name is blank, a date is missing, the
                end date precedes the start date, or the manager is missing.
        """
        clock = clock or default_clock()
        require_text(id, "Project ID")
        require_text(name, "Project name")
        start_date, end_date = _check_dates(start_date, end_date, clock)
        require(manager, "Project manager")
        if not isinstance(manager, Manager):
            raise ValidationError("Project manager must be a Manager")

        project = cls(
            id=id,
            name=name,
            description=description,
            start_date=start_date,
            end_date=end_date,
            manager=manager,
            created_at=clock.now(),
        )
        project._clock = clock
        project._participants[manager.id] = manager
        return project

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Project):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(("project", self.id))

    @property
    def clock(self) -> Clock:
        return self._clock

    @property
    def participants(self) -> tuple[Employee, ...]:
        return tuple(self._participants.values())

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def is_participant(self, employee: Employee) -> bool:
        return employee.id in self._participants

    def get_task(self, task_id: str) -> Task | None:
        return next((t for t in self._tasks if t.id == task_id), None)

    def get_progress(self) -> float:
        return progress(self.actual_hours, self.estimated_hours)

    # Aggregation

    def update_actual_hours(self, hours: float) -> None:
        """Add hours logged against one of this project's tasks.

        Zero is accepted. A PLANNED project moves to IN_PROGRESS.
        """
        if hours is None or hours < 0:
            raise ValidationError("Hours cannot be negative")
        self.actual_hours += hours
        if self.status == ProjectStatus.PLANNED:
            self.status = ProjectStatus.IN_PROGRESS

    def _attach_task(self, task: Task) -> None:
        if self.get_task(task.id) is not None:
            raise ValidationError(f"Task {task.id} already exists in project {self.id}")
        self._tasks.append(task)

    # Membership

    def add_participant(self, employee: Employee | None) -> bool:
        """Add an employee; returns False if they were already a participant."""
        require(employee, "Employee")
        if employee.id in self._participants:
            return False
        self._participants[employee.id] = employee
        return True

    def remove_participant(self, employee: Employee | None) -> bool:
        """Remove an employee; returns False if they were not a participant.

        Raises:
            InvalidStateError: If the employee is the project manager.
        """
        require(employee, "Employee")
        if employee.id == self.manager.id:
            raise InvalidStateError("Cannot remove project manager from participants")
        return self._participants.pop(employee.id, None) is not None

    def change_project_manager(self, new_manager: Manager | None) -> None:
        require(new_manager, "Project manager")
        if not isinstance(new_manager, Manager):
            raise ValidationError("Project manager must be a Manager")
        self._participants.setdefault(new_manager.id, new_manager)
        self.manager = new_manager

    # Updates

    def update_name(self, name: str | None) -> None:
        self.name = require_text(name, "Project name")

    def update_description(self, description: str | None) -> None:
        self.description = description

    def update_dates(self, start_date: datetime | None, end_date: datetime | None) -> None:
        self.start_date, self.end_date = _check_dates(start_date, end_date, self._clock)

    def set_estimated_hours(self, hours: float) -> None:
        self.estimated_hours = require_positive(hours, "Estimated hours")

    def set_status(self, status: ProjectStatus | None) -> bool:
        """Move to ``status``; returns False if already there.

        Raises:
            ValidationError: If ``status`` is not a project status.
            InvalidStateError: If the transition is not allowed.
        """
        status = require_choice(status, ProjectStatus, "Status")
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
            "name": self.name,
            "status": self.status.value,
            "manager": self.manager.full_name,
            "actual_hours": self.actual_hours,
            "progress": round(self.get_progress(), precision),
        }
        if detail != "summary":
            data.update(
                {
                    "description": self.description,
                    "start_date": self.start_date.isoformat(),
                    "end_date": self.end_date.isoformat(),
                    "estimated_hours": self.estimated_hours,
                    "participants": [e.id for e in self.participants],
                    "tasks": [t.id for t in self._tasks],
                    "created_at": self.created_at.isoformat(),
                }
            )
        return data


def _check_dates(
    start_date: datetime | None, end_date: datetime | None, clock: Clock
) -> tuple[datetime, datetime]:
    if start_date is None or end_date is None:
        raise ValidationError("Project dates cannot be null")
    start_date = require_time(start_date, "Start date", clock)
    end_date = require_time(end_date, "End date", clock)
    if end_date < start_date:
        raise ValidationError("End date cannot be before start date")
    return start_date, end_date
