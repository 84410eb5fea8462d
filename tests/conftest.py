"""Shared test fixtures for worktrack."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from worktrack.clock import FixedClock
from worktrack.config import Config
from worktrack.core import ProjectService, Registry, TimesheetService
from worktrack.events import EventBus
from worktrack.models import Employee, Manager, Project, Task

NOW = datetime(2024, 6, 3, 9, 0, tzinfo=UTC)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def manager() -> Manager:
    return Manager(id="M1", first_name="Maria", last_name="Novak")


@pytest.fixture
def employee() -> Employee:
    return Employee(id="E1", first_name="Ivan", last_name="Petrov")


@pytest.fixture
def project(clock: FixedClock, manager: Manager) -> Project:
    return Project.create(
        "P1", "Billing revamp", "Rework invoicing", NOW, NOW + timedelta(days=30), manager, clock=clock
    )


@pytest.fixture
def task(project: Project, employee: Employee) -> Task:
    return Task.create("T1", "Invoice export", project, NOW + timedelta(days=7), employee)


@pytest.fixture
def registry() -> Registry:
    return Registry()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def events(event_bus: EventBus) -> list[dict]:
    """Every event emitted on the bus, in order."""
    captured: list[dict] = []
    event_bus.on_all(lambda event_type, data: captured.append({"type": event_type, "data": data}))
    return captured


@pytest.fixture
def projects(registry: Registry, event_bus: EventBus, clock: FixedClock) -> ProjectService:
    return ProjectService(registry, event_bus, clock)


@pytest.fixture
def timesheet(registry: Registry, event_bus: EventBus, clock: FixedClock) -> TimesheetService:
    return TimesheetService(registry, event_bus, clock)


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(home=tmp_path)
