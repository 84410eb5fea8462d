"""Walkthrough of worktrack's start → stop → approve → reject workflow.

Builds a project with two tasks, tracks time for two employees, approves
the entries and shows how totals roll up from entry to task to project.
The last step rejects an approved entry to show that logged hours stay.
"""

from datetime import timedelta

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from worktrack.clock import FixedClock
from worktrack.core import ProjectService, Registry, TimesheetService
from worktrack.events import EventBus
from worktrack.models import Employee, Manager, Project

console = Console()


def step_header(num: int, title: str) -> None:
    """Display a colorful step header."""
    console.print()
    console.print(
        Panel(
            f"[bold cyan]Step {num}:[/bold cyan] [yellow]{title}[/yellow]",
            border_style="cyan",
        )
    )


def hours_table(project: Project) -> Table:
    table = Table(title=f"{project.name} ({project.status})")
    table.add_column("Task", style="cyan")
    table.add_column("Status", style="magenta")
    table.add_column("Actual (h)", justify="right", style="green")
    table.add_column("Estimate (h)", justify="right")
    table.add_column("Progress", justify="right")
    for task in project.tasks:
        table.add_row(
            task.title,
            task.status.value,
            f"{task.actual_hours:.2f}",
            f"{task.estimated_hours:.2f}",
            f"{task.get_progress():.1f}%",
        )
    table.add_row(
        "[bold]Project total[/bold]",
        project.status.value,
        f"[bold]{project.actual_hours:.2f}[/bold]",
        f"{project.estimated_hours:.2f}",
        f"{project.get_progress():.1f}%",
    )
    return table


def demo() -> None:
    """Run the walkthrough."""
    clock = FixedClock()
    registry = Registry()
    bus = EventBus()
    projects = ProjectService(registry, bus, clock)
    timesheet = TimesheetService(registry, bus, clock)
    bus.on_all(lambda event_type, data: console.print(f"  [dim]event {event_type}[/dim]"))

    start = clock.now()
    manager = Manager(id="M1", first_name="Maria", last_name="Novak")
    ivan = Employee(id="E1", first_name="Ivan", last_name="Petrov")
    olga = Employee(id="E2", first_name="Olga", last_name="Sidorova")

    step_header(1, "Create the project and its tasks")
    project = projects.create_project(
        project_id="BILL",
        name="Billing revamp",
        description="New invoice pipeline",
        start_date=start,
        end_date=start + timedelta(days=30),
        manager=manager,
        estimated_hours=40,
    )
    projects.add_participant(project.id, ivan)
    projects.add_participant(project.id, olga)
    projects.create_task(
        project_id=project.id,
        task_id="BILL-1",
        title="Invoice export",
        due_date=start + timedelta(days=7),
        assignee=ivan,
        estimated_hours=12,
    )
    projects.create_task(
        project_id=project.id,
        task_id="BILL-2",
        title="Tax rounding",
        due_date=start + timedelta(days=10),
        assignee=olga,
        estimated_hours=6,
    )
    console.print(hours_table(project))

    step_header(2, "Track time")
    clock.advance(hours=3)
    timesheet.start_entry(
        entry_id="TE-1",
        employee=ivan,
        project_id=project.id,
        task_id="BILL-1",
        start_time=start,
        description="CSV layout",
    )
    timesheet.stop_entry("TE-1", start + timedelta(hours=2, minutes=30))
    timesheet.start_entry(
        entry_id="TE-2",
        employee=olga,
        project_id=project.id,
        task_id="BILL-2",
        start_time=start + timedelta(minutes=45),
    )
    timesheet.stop_entry("TE-2")
    for entry in timesheet.pending_approval(project.id):
        console.print(f"  pending: {entry.id} {entry.employee.full_name} {entry.hours:.2f}h")

    step_header(3, "Approve (twice) and roll up")
    for entry_id in ("TE-1", "TE-2", "TE-1"):
        timesheet.approve_entry(entry_id)
    console.print(hours_table(project))

    step_header(4, "Reject an approved entry")
    timesheet.reject_entry("TE-1")
    console.print("[yellow]TE-1 is unapproved again; its 2.50h remain on the task and project.[/yellow]")
    console.print(hours_table(project))


if __name__ == "__main__":
    demo()
