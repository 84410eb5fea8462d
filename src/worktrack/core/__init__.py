"""worktrack application services."""

from worktrack.core.projects import ProjectService
from worktrack.core.registry import Registry
from worktrack.core.timesheet import TimesheetService

__all__ = ["ProjectService", "Registry", "TimesheetService"]
