"""Tests for Task creation, work logging and updates."""

from __future__ import annotations

from datetime import timedelta

import pytest

from worktrack.exceptions import InvalidStateError, ValidationError
from worktrack.models import Employee, Project, ProjectStatus, Task, TaskPriority, TaskStatus

from conftest import NOW


class TestCreate:
    def test_defaults(self, task: Task, project: Project, employee: Employee) -> None:
        assert task.status == TaskStatus.NEW
        assert task.priority == TaskPriority.MEDIUM
        assert task.actual_hours == 0
        assert task.estimated_hours == 0
        assert task.assignee == employee
        assert task.project is project
        assert task.project_id == "P1"
        assert task.created_at == NOW

    def test_appended_to_project(self, project: Project) -> None:
        first = Task.create("T1", "One", project, NOW + timedelta(days=1))
        second = Task.create("T2", "Two", project, NOW + timedelta(days=1))

        assert project.tasks == (first, second)
        assert project.get_task("T2") is second

    def test_assignee_is_optional(self, project: Project) -> None:
        task = Task.create("T2", "Unassigned", project, NOW + timedelta(hours=1))
        assert task.assignee is None

    @pytest.mark.parametrize("task_id", ["", "  ", None])
    def test_blank_id(self, project: Project, task_id) -> None:
        with pytest.raises(ValidationError, match="Task ID"):
            Task.create(task_id, "x", project, NOW + timedelta(days=1))

    def test_blank_title(self, project: Project) -> None:
        with pytest.raises(ValidationError, match="Title"):
            Task.create("T2", " ", project, NOW + timedelta(days=1))

    def test_missing_project(self) -> None:
        with pytest.raises(ValidationError, match="Project"):
            Task.create("T2", "x", None, NOW + timedelta(days=1))

    def test_due_date_yesterday(self, project: Project) -> None:
        with pytest.raises(ValidationError, match="future"):
            Task.create("T1", "x", project, NOW - timedelta(days=1))
        assert project.tasks == ()

    def test_due_date_now_is_rejected(self, project: Project) -> None:
        with pytest.raises(ValidationError, match="future"):
            Task.create("T1", "x", project, NOW)

    def test_missing_due_date(self, project: Project) -> None:
        with pytest.raises(ValidationError):
            Task.create("T1", "x", project, None)

    def test_duplicate_id_in_project(self, task: Task, project: Project) -> None:
        with pytest.raises(ValidationError, match="already exists"):
            Task.create("T1", "again", project, NOW + timedelta(days=1))
        assert len(project.tasks) == 1


class TestLogWork:
    def test_adds_hours_and_forwards_to_project(self, task: Task, project: Project) -> None:
        task.log_work(3)
        task.log_work(1.5)

        assert task.actual_hours == 4.5
        assert project.actual_hours == 4.5

    def test_starts_task_and_project(self, task: Task, project: Project) -> None:
        task.log_work(1)

        assert task.status == TaskStatus.IN_PROGRESS
        assert project.status == ProjectStatus.IN_PROGRESS

    def test_does_not_override_other_status(self, task: Task) -> None:
        task.set_status(TaskStatus.ON_HOLD)
        task.log_work(1)
        assert task.status == TaskStatus.ON_HOLD

    @pytest.mark.parametrize("hours", [0, -1, -0.5])
    def test_requires_positive_hours(self, task: Task, project: Project, hours) -> None:
        with pytest.raises(ValidationError, match="positive"):
            task.log_work(hours)

        assert task.actual_hours == 0
        assert project.actual_hours == 0
        assert task.status == TaskStatus.NEW
        assert project.status == ProjectStatus.PLANNED


class TestUpdates:
    def test_reassign(self, task: Task) -> None:
        other = Employee(id="E2", first_name="Olga", last_name="Sidorova")
        task.reassign(other)
        assert task.assignee == other

    def test_reassign_to_nobody(self, task: Task, employee: Employee) -> None:
        with pytest.raises(ValidationError):
            task.reassign(None)
        assert task.assignee == employee

    def test_set_estimated_hours(self, task: Task) -> None:
        task.set_estimated_hours(8)
        assert task.estimated_hours == 8

    @pytest.mark.parametrize("hours", [0, -3])
    def test_estimated_hours_must_be_positive(self, task: Task, hours) -> None:
        with pytest.raises(ValidationError):
            task.set_estimated_hours(hours)

    def test_update_due_date(self, task: Task) -> None:
        task.update_due_date(NOW + timedelta(days=14))
        assert task.due_date == NOW + timedelta(days=14)

    def test_update_due_date_in_past(self, task: Task) -> None:
        original = task.due_date
        with pytest.raises(ValidationError):
            task.update_due_date(NOW - timedelta(minutes=1))
        with pytest.raises(ValidationError):
            task.update_due_date(None)
        assert task.due_date == original

    def test_due_date_checked_against_current_time(self, task: Task, clock) -> None:
        clock.advance(days=10)
        with pytest.raises(ValidationError):
            task.update_due_date(NOW + timedelta(days=9))

    def test_update_title(self, task: Task) -> None:
        task.update_title("Invoice export v2")
        assert task.title == "Invoice export v2"
        with pytest.raises(ValidationError):
            task.update_title("")

    def test_set_priority(self, task: Task) -> None:
        task.set_priority(TaskPriority.CRITICAL)
        assert task.priority == TaskPriority.CRITICAL
        with pytest.raises(ValidationError):
            task.set_priority(None)

    def test_unknown_priority(self, task: Task) -> None:
        with pytest.raises(ValidationError, match="Unknown priority: 'URGENT'"):
            task.set_priority("URGENT")
        assert task.priority == TaskPriority.MEDIUM


class TestStatus:
    def test_allowed_transition(self, task: Task) -> None:
        assert task.set_status(TaskStatus.IN_PROGRESS) is True
        assert task.set_status(TaskStatus.COMPLETED) is True
        assert task.status == TaskStatus.COMPLETED

    def test_same_status_is_noop(self, task: Task) -> None:
        assert task.set_status(TaskStatus.NEW) is False

    def test_completed_is_final(self, task: Task) -> None:
        task.set_status(TaskStatus.IN_PROGRESS)
        task.set_status(TaskStatus.COMPLETED)
        with pytest.raises(InvalidStateError):
            task.set_status(TaskStatus.IN_PROGRESS)

    def test_new_cannot_complete_directly(self, task: Task) -> None:
        with pytest.raises(InvalidStateError):
            task.set_status(TaskStatus.COMPLETED)

    def test_unknown_status(self, task: Task) -> None:
        with pytest.raises(ValidationError, match="Unknown status"):
            task.set_status("DONE")
        assert task.status == TaskStatus.NEW


class TestProgress:
    def test_zero_estimate_gives_zero(self, task: Task) -> None:
        task.log_work(5)
        assert task.get_progress() == 0

    def test_ratio(self, task: Task) -> None:
        task.set_estimated_hours(8)
        task.log_work(2)
        assert task.get_progress() == 25.0


def test_to_response(task: Task) -> None:
    task.set_estimated_hours(4)
    task.log_work(1)
    data = task.to_response()

    assert data["id"] == "T1"
    assert data["status"] == "IN_PROGRESS"
    assert data["priority"] == "MEDIUM"
    assert data["progress"] == 25.0
    assert data["assignee"] == "Ivan Petrov"
