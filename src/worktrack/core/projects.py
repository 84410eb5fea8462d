"""Project service: project lifecycle, membership and task management."""

from __future__ import annotations

import logging
from datetime import datetime

from worktrack.clock import Clock, default_clock
from worktrack.core.registry import Registry
from worktrack.events.bus import EventBus
from worktrack.events.types import EventType
from worktrack.models._checks import require_choice, require_positive
from worktrack.models.employee import Employee, Manager
from worktrack.models.project import Project, ProjectStatus
from worktrack.models.task import Task, TaskPriority, TaskStatus

logger = logging.getLogger(__name__)


class ProjectService:
    """Creates and updates projects and their tasks."""

    def __init__(self, registry: Registry, event_bus: EventBus, clock: Clock | None = None) -> None:
        """Initialize ProjectService.

        Args:
            registry: Registry holding the object graph
            event_bus: Event bus for emitting events
            clock: Time source for validation; defaults to the process clock
        """
        self._registry = registry
        self._event_bus = event_bus
        self._clock = clock or default_clock()

    # --- Projects ---

    def create_project(
        self,
        *,
        project_id: str,
        name: str,
        start_date: datetime,
        end_date: datetime,
        manager: Manager,
        description: str | None = None,
        estimated_hours: float | None = None,
    ) -> Project:
        """Create and register a project.

        Raises:
            ValidationError: If the input is invalid or the id is taken
        """
        self._registry.ensure_new_project_id(project_id)
        project = Project.create(
            project_id, name, description, start_date, end_date, manager, clock=self._clock
        )
        if estimated_hours is not None:
            project.set_estimated_hours(estimated_hours)
        # add_project re-checks the id under the registry guard and creates the lock
        self._registry.add_project(project)

        logger.info("Created project: %s (id=%s)", project.name, project.id)
        self._event_bus.emit(
            EventType.PROJECT_CREATED,
            {"project_id": project.id, "name": project.name, "manager_id": manager.id},
        )
        return project

    def get_project(self, project_id: str) -> Project:
        return self._registry.get_project(project_id)

    def list_projects(self, *, status: ProjectStatus | None = None) -> list[Project]:
        projects = list(self._registry.projects())
        if status is not None:
            projects = [p for p in projects if p.status == status]
        return projects

    def set_estimated_hours(self, project_id: str, hours: float) -> Project:
        project = self._registry.get_project(project_id)
        with self._registry.lock_for(project_id):
            project.set_estimated_hours(hours)
        logger.info("Set estimate for project %s to %.2fh", project_id, hours)
        self._event_bus.emit(
            EventType.PROJECT_UPDATED,
            {"project_id": project_id, "estimated_hours": project.estimated_hours},
        )
        return project

    def set_status(self, project_id: str, status: ProjectStatus) -> Project:
        """Change a project's status.

        Raises:
            InvalidStateError: If the transition is not allowed
        """
        project = self._registry.get_project(project_id)
        with self._registry.lock_for(project_id):
            previous = project.status
            changed = project.set_status(status)

        if changed:
            logger.info("Project %s status: %s → %s", project_id, previous, project.status)
            self._event_bus.emit(
                EventType.PROJECT_STATUS_CHANGED,
                {"project_id": project_id, "from": previous.value, "to": project.status.value},
            )
        return project

    # --- Membership ---

    def add_participant(self, project_id: str, employee: Employee) -> bool:
        project = self._registry.get_project(project_id)
        with self._registry.lock_for(project_id):
            added = project.add_participant(employee)

        if added:
            logger.info("Added %s to project %s", employee.id, project_id)
            self._event_bus.emit(
                EventType.PARTICIPANT_ADDED,
                {"project_id": project_id, "employee_id": employee.id},
            )
        else:
            logger.debug("%s is already a participant of project %s", employee.id, project_id)
        return added

    def remove_participant(self, project_id: str, employee: Employee) -> bool:
        """Remove a participant.

        Raises:
            InvalidStateError: If the employee is the project manager
        """
        project = self._registry.get_project(project_id)
        with self._registry.lock_for(project_id):
            removed = project.remove_participant(employee)

        if removed:
            logger.info("Removed %s from project %s", employee.id, project_id)
            self._event_bus.emit(
                EventType.PARTICIPANT_REMOVED,
                {"project_id": project_id, "employee_id": employee.id},
            )
        return removed

    def change_manager(self, project_id: str, new_manager: Manager) -> Project:
        project = self._registry.get_project(project_id)
        with self._registry.lock_for(project_id):
            previous = project.manager
            project.change_project_manager(new_manager)

        logger.info("Project %s manager: %s → %s", project_id, previous.id, new_manager.id)
        self._event_bus.emit(
            EventType.MANAGER_CHANGED,
            {"project_id": project_id, "from": previous.id, "to": new_manager.id},
        )
        return project

    # --- Tasks ---

    def create_task(
        self,
        *,
        project_id: str,
        task_id: str,
        title: str,
        due_date: datetime,
        assignee: Employee | None = None,
        description: str | None = None,
        estimated_hours: float | None = None,
        priority: TaskPriority | None = None,
    ) -> Task:
        """Create a task inside a registered project.

        Raises:
            NotFoundError: If the project does not exist
            ValidationError: If the input is invalid or the id is taken
        """
        # Task.create attaches to the project, so nothing may fail after it
        if estimated_hours is not None:
            estimated_hours = require_positive(estimated_hours, "Estimated hours")
        if priority is not None:
            priority = require_choice(priority, TaskPriority, "Priority")

        project = self._registry.get_project(project_id)
        with self._registry.lock_for(project_id):
            self._registry.ensure_new_task_id(task_id)
            task = Task.create(
                task_id,
                title,
                project,
                due_date,
                assignee,
                description=description,
                clock=self._clock,
            )
            if estimated_hours is not None:
                task.set_estimated_hours(estimated_hours)
            if priority is not None:
                task.set_priority(priority)
            self._registry.add_task(task)

        logger.info("Created task: %s (id=%s, project=%s)", task.title, task.id, project_id)
        self._event_bus.emit(
            EventType.TASK_CREATED,
            {"task_id": task.id, "project_id": project_id, "title": task.title},
        )
        return task

    def get_task(self, task_id: str) -> Task:
        return self._registry.get_task(task_id)

    def list_tasks(self, project_id: str, *, status: TaskStatus | None = None) -> list[Task]:
        tasks = list(self._registry.get_project(project_id).tasks)
        if status is not None:
            tasks = [t for t in tasks if t.status == status]
        return tasks

    def reassign_task(self, task_id: str, employee: Employee) -> Task:
        task = self._registry.get_task(task_id)
        with self._registry.lock_for(task.project_id):
            task.reassign(employee)
        logger.info("Reassigned task %s to %s", task_id, employee.id)
        self._emit_task_updated(task, assignee_id=employee.id)
        return task

    def update_task_due_date(self, task_id: str, due_date: datetime) -> Task:
        task = self._registry.get_task(task_id)
        with self._registry.lock_for(task.project_id):
            task.update_due_date(due_date)
        self._emit_task_updated(task, due_date=task.due_date.isoformat())
        return task

    def set_task_estimate(self, task_id: str, hours: float) -> Task:
        task = self._registry.get_task(task_id)
        with self._registry.lock_for(task.project_id):
            task.set_estimated_hours(hours)
        self._emit_task_updated(task, estimated_hours=task.estimated_hours)
        return task

    def set_task_priority(self, task_id: str, priority: TaskPriority) -> Task:
        task = self._registry.get_task(task_id)
        with self._registry.lock_for(task.project_id):
            task.set_priority(priority)
        self._emit_task_updated(task, priority=task.priority.value)
        return task

    def set_task_status(self, task_id: str, status: TaskStatus) -> Task:
        task = self._registry.get_task(task_id)
        with self._registry.lock_for(task.project_id):
            previous = task.status
            changed = task.set_status(status)

        if changed:
            logger.info("Task %s status: %s → %s", task_id, previous, task.status)
            self._event_bus.emit(
                EventType.TASK_STATUS_CHANGED,
                {
                    "task_id": task_id,
                    "project_id": task.project_id,
                    "from": previous.value,
                    "to": task.status.value,
                },
            )
        return task

    def _emit_task_updated(self, task: Task, **changes) -> None:
        self._event_bus.emit(
            EventType.TASK_UPDATED,
            {"task_id": task.id, "project_id": task.project_id, **changes},
        )
