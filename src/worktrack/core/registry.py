"""In-memory registry of projects, tasks and time entries.

Ids are unique across the registry per entity kind. Each registered project
gets its own re-entrant lock, created when the project is added. Services
hold it for the whole of any mutation so the entry → task → project
cascade is never observed half done.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator

from worktrack.exceptions import NotFoundError, ValidationError
from worktrack.models.project import Project
from worktrack.models.task import Task
from worktrack.models.time_entry import TimeEntry

logger = logging.getLogger(__name__)


class Registry:
    """Id index over the object graph plus per-project locks."""

    def __init__(self) -> None:
        self._projects: dict[str, Project] = {}
        self._tasks: dict[str, Task] = {}
        self._entries: dict[str, TimeEntry] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    def lock_for(self, project_id: str) -> threading.RLock:
        """Return the lock of a registered project.

        Raises:
            NotFoundError: If the project is not registered
        """
        try:
            return self._locks[project_id]
        except KeyError:
            raise NotFoundError(f"Project {project_id} not found") from None

    # --- Projects ---

    def ensure_new_project_id(self, project_id: str) -> None:
        if project_id in self._projects:
            raise ValidationError(f"Project {project_id} already exists")

    def add_project(self, project: Project) -> None:
        with self._guard:
            self.ensure_new_project_id(project.id)
            self._projects[project.id] = project
            self._locks[project.id] = threading.RLock()
        logger.debug("Registered project %s", project.id)

    def get_project(self, project_id: str) -> Project:
        try:
            return self._projects[project_id]
        except KeyError:
            raise NotFoundError(f"Project {project_id} not found") from None

    def projects(self) -> Iterator[Project]:
        return iter(list(self._projects.values()))

    # --- Tasks ---

    def ensure_new_task_id(self, task_id: str) -> None:
        if task_id in self._tasks:
            raise ValidationError(f"Task {task_id} already exists")

    def add_task(self, task: Task) -> None:
        with self._guard:
            self.ensure_new_task_id(task.id)
            self._tasks[task.id] = task
        logger.debug("Registered task %s in project %s", task.id, task.project_id)

    def get_task(self, task_id: str) -> Task:
        try:
            return self._tasks[task_id]
        except KeyError:
            raise NotFoundError(f"Task {task_id} not found") from None

    # --- Time entries ---

    def ensure_new_entry_id(self, entry_id: str) -> None:
        if entry_id in self._entries:
            raise ValidationError(f"Time entry {entry_id} already exists")

    def add_entry(self, entry: TimeEntry) -> None:
        with self._guard:
            self.ensure_new_entry_id(entry.id)
            self._entries[entry.id] = entry
        logger.debug("Registered time entry %s", entry.id)

    def get_entry(self, entry_id: str) -> TimeEntry:
        try:
            return self._entries[entry_id]
        except KeyError:
            raise NotFoundError(f"Time entry {entry_id} not found") from None

    def entries(self) -> Iterator[TimeEntry]:
        return iter(list(self._entries.values()))

    def stats(self) -> dict[str, int]:
        return {
            "projects": len(self._projects),
            "tasks": len(self._tasks),
            "time_entries": len(self._entries),
        }
