"""CLI: init, config, demo."""

from __future__ import annotations

import json
import logging
from datetime import timedelta
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from worktrack.config import Config


@click.group()
@click.version_option(package_name="worktrack")
@click.option("--home", type=click.Path(path_type=Path), default=None, help="Config directory")
@click.pass_context
def main(ctx: click.Context, home: Path | None) -> None:
    """worktrack: projects, tasks and approved hours."""
    config = Config.load(home.expanduser().resolve() if home else None)
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )
    ctx.obj = config


@main.command()
@click.argument("path", type=click.Path(), default="~/.worktrack")
def init(path: str) -> None:
    """Write a default config.yaml to PATH."""
    home = Path(path).expanduser().resolve()
    config = Config(home=home)
    config.save()
    click.echo(f"Initialized worktrack at {home}")
    click.echo(f"Config: {config.config_file}")


@main.command("config")
@click.pass_obj
def show_config(config: Config) -> None:
    """Show the effective configuration."""
    click.echo(json.dumps(config.to_dict(), indent=2))


@main.command()
@click.option("--minutes", default=150, show_default=True, help="Length of the demo time entry")
@click.pass_obj
def demo(config: Config, minutes: int) -> None:
    """Walk through the time-entry approval cascade in memory."""
    from worktrack.core import ProjectService, Registry, TimesheetService
    from worktrack.events import EventBus
    from worktrack.models import Employee, Manager

    if minutes <= 0:
        raise click.BadParameter("must be positive", param_hint="--minutes")

    console = Console()
    clock = config.clock()
    registry = Registry()
    bus = EventBus()
    projects = ProjectService(registry, bus, clock)
    timesheet = TimesheetService(registry, bus, clock)

    console.print(
        Panel(
            "[bold cyan]worktrack demo[/bold cyan]\n\n"
            "1. Create a project   3. Track time\n"
            "2. Create a task      4. Approve the entry",
            title="Welcome to worktrack",
        )
    )

    now = clock.now()
    manager = Manager(id="M1", first_name="Maria", last_name="Novak")
    worker = Employee(id="E1", first_name="Ivan", last_name="Petrov")

    console.print("\n[bold]Step 1: Creating a project[/bold]")
    project = projects.create_project(
        project_id="P1",
        name="Billing revamp",
        start_date=now,
        end_date=now + timedelta(days=30),
        manager=manager,
        estimated_hours=40,
    )
    projects.add_participant(project.id, worker)
    console.print(f"  [green]✓[/green] {project.name} ({project.status})")

    console.print("\n[bold]Step 2: Creating a task[/bold]")
    task = projects.create_task(
        project_id=project.id,
        task_id="T1",
        title="Invoice export",
        due_date=now + timedelta(days=7),
        assignee=worker,
        estimated_hours=10,
    )
    console.print(f"  [green]✓[/green] {task.title} ({task.status})")

    console.print("\n[bold]Step 3: Tracking time[/bold]")
    entry = timesheet.start_entry(
        entry_id="E1-1",
        employee=worker,
        project_id=project.id,
        task_id=task.id,
        start_time=now - timedelta(minutes=minutes),
        description="Export format and totals",
    )
    timesheet.stop_entry(entry.id, now)
    console.print(f"  [green]✓[/green] Stopped after {entry.hours:.2f}h")

    console.print("\n[bold]Step 4: Approving the entry[/bold]")
    timesheet.approve_entry(entry.id)
    timesheet.approve_entry(entry.id)
    console.print("  [green]✓[/green] Approved twice, logged once")

    precision = config.progress_precision
    table = Table(title="Hours")
    table.add_column("Item", style="cyan")
    table.add_column("Status", style="magenta")
    table.add_column("Actual (h)", style="green")
    table.add_column("Progress", style="green")
    table.add_row(
        f"Project {project.id}",
        project.status.value,
        f"{project.actual_hours:.2f}",
        f"{project.get_progress():.{precision}f}%",
    )
    table.add_row(
        f"Task {task.id}",
        task.status.value,
        f"{task.actual_hours:.2f}",
        f"{task.get_progress():.{precision}f}%",
    )
    console.print(table)
    events = [event.type.value for event in bus.history(project_id=project.id)]
    console.print(f"Events: {', '.join(events)}")
