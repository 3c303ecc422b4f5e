"""Scheduling CLI commands.

Regenerate subtasks for stored tasks, or preview the dates a recurrence
category produces without touching the data file.
"""

from pathlib import Path
from typing import Optional

import typer

from taskplan.application import reschedule_all, reschedule_task_by_id
from taskplan.domain.shared import StorageError, UnknownRecurrenceError, is_err
from taskplan.domain.task import format_due_date, generate_occurrences, resolve_category
from taskplan.domain.types import effective_window
from taskplan.interfaces.cli.common import (
    data_file_option,
    load_settings,
    open_store,
    parse_day,
    print_counts,
    print_error,
    print_header,
    print_info,
    print_success,
    print_warning,
)

app = typer.Typer(help="Subtask scheduling commands")


@app.command("all")
def schedule_all(data_file: Optional[Path] = data_file_option) -> None:
    """Regenerate subtasks for every task, in task-number order.

    Existing subtasks are deleted first; status changes made to them
    are lost.
    """
    config = load_settings(data_file)
    store = open_store(config)

    try:
        report = reschedule_all(store, config.project_window)
    except StorageError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_header("SUBTASK GENERATION")
    typer.echo(f"Tasks processed:     {report.tasks_processed}")
    typer.echo(f"Subtasks created:    {report.subtasks_created}")
    typer.echo(f"Average per task:    {report.average_per_task}")
    typer.echo(f"Failures:            {report.failures}")
    typer.echo(f"Project window:      {config.project_window}")

    print_counts("Tasks by recurrence", report.tasks_by_category, "tasks")
    print_counts("Subtasks by recurrence", report.subtasks_by_category, "subtasks")
    print_counts("Subtasks by month", report.subtasks_by_month, "subtasks")

    if report.failures:
        raise typer.Exit(1)


@app.command("task")
def schedule_task(
    task_id: str = typer.Argument(..., help="Task id or task number"),
    data_file: Optional[Path] = data_file_option,
) -> None:
    """Regenerate subtasks for one task."""
    config = load_settings(data_file)
    store = open_store(config)

    # Accept the human task number as well as the storage id
    for task in store.list_tasks_ordered_by_number():
        if task.task_number == task_id:
            task_id = task.id
            break

    result = reschedule_task_by_id(store, task_id, config.project_window)
    if is_err(result):
        print_error(result.error)
        raise typer.Exit(1)

    subtasks, event = result.value
    print_success(
        f"Task {event.task_number}: removed {event.deleted}, generated {event.created} subtasks"
    )
    for subtask in subtasks:
        typer.echo(f"  {format_due_date(subtask.due_date)}  {subtask.title}")


@app.command("preview")
def preview(
    category: str = typer.Argument(..., help="Recurrence category or source label"),
    start: Optional[str] = typer.Option(None, "--start", help="Window start (YYYY-MM-DD)"),
    end: Optional[str] = typer.Option(None, "--end", help="Window end (YYYY-MM-DD)"),
    strict: bool = typer.Option(False, "--strict", help="Fail on unknown categories"),
) -> None:
    """Show the dates a recurrence category produces in a window."""
    config = load_settings()
    window = effective_window(
        parse_day(start, "--start"),
        parse_day(end, "--end"),
        config.project_window,
    )

    try:
        resolved = resolve_category(category, strict=strict)
    except UnknownRecurrenceError as e:
        print_error(str(e))
        raise typer.Exit(1)

    dates = generate_occurrences(resolved, window.start, window.end)
    if window.is_empty and not dates:
        print_warning(f"Window {window} is empty")
    print_info(f"{resolved.value} in {window}: {len(dates)} occurrences")
    for day in dates:
        typer.echo(f"  {day.isoformat()}")
