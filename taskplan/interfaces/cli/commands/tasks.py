"""Task inspection CLI commands.

Views over the stored tasks: the hierarchy rebuilt from task numbers,
per-task and filtered subtask listings, and summary counts. The only
write is a manual subtask status change, which the next reschedule of
the owning task discards.
"""

from pathlib import Path
from typing import Optional

import typer

from taskplan.application import find_subtasks, set_subtask_status, subtasks_by_month
from taskplan.domain.shared import is_err
from taskplan.domain.task import (
    SubtaskStatus,
    TaskTreeNode,
    build_tree,
    count_by_depth,
    format_due_date,
    walk_tree,
)
from taskplan.infrastructure.storage import iter_subtasks_by_task
from taskplan.interfaces.cli.common import (
    data_file_option,
    load_settings,
    open_store,
    parse_day,
    print_counts,
    print_error,
    print_header,
    print_success,
)

app = typer.Typer(help="Task inspection commands")


def format_node(node: TaskTreeNode, depth: int, subtask_count: int | None = None) -> str:
    """One indented tree line: number, title and optional subtask count."""
    task = node.task
    line = f"{'  ' * depth}- {task.task_number} {task.title}"
    if subtask_count is not None:
        line += f" [{subtask_count}]"
    return line


@app.command("tree")
def tree(
    data_file: Optional[Path] = data_file_option,
    counts: bool = typer.Option(False, "--counts", "-c", help="Show subtask counts"),
) -> None:
    """Print the task hierarchy."""
    store = open_store(load_settings(data_file))
    roots = build_tree(store.list_tasks_ordered_by_number())
    if not roots:
        typer.echo("No tasks stored. Run 'taskplan import run' first.")
        return

    subtask_counts = (
        {task.id: len(subs) for task, subs in iter_subtasks_by_task(store)} if counts else {}
    )
    for node, depth in walk_tree(roots):
        typer.echo(format_node(node, depth, subtask_counts.get(node.task.id)))


@app.command("show")
def show(
    task_number: str = typer.Argument(..., help="Task number, e.g. 2.3.1"),
    data_file: Optional[Path] = data_file_option,
) -> None:
    """Show one task with its scheduled subtasks."""
    store = open_store(load_settings(data_file))
    for task, subtasks in iter_subtasks_by_task(store):
        if task.task_number != task_number:
            continue

        print_header(f"TASK {task.task_number}")
        typer.echo(f"Title:       {task.title}")
        typer.echo(f"Type:        {task.task_type}")
        typer.echo(f"Recurrence:  {task.recurrence.value}")
        typer.echo(f"Priority:    {task.priority.value}")
        typer.echo(f"Window:      {task.start_date or '-'} .. {task.end_date or '-'}")
        if task.responsible_person:
            typer.echo(f"Responsible: {task.responsible_person}")
        parent = store.get_task(task.parent_id) if task.parent_id else None
        typer.echo(f"Parent:      {parent.task_number if parent else '-'}")

        typer.echo(f"\nSubtasks ({len(subtasks)}):")
        for subtask in subtasks:
            typer.echo(
                f"  {format_due_date(subtask.due_date)}  {subtask.status.value:<11}  {subtask.title}"
            )
        return

    print_error(f"Task not found: {task_number}")
    raise typer.Exit(1)


@app.command("subtasks")
def list_subtasks(
    data_file: Optional[Path] = data_file_option,
    task_number: Optional[str] = typer.Option(None, "--task", "-t", help="Only this task"),
    status: Optional[SubtaskStatus] = typer.Option(
        None, "--status", "-s", case_sensitive=False, help="Only this status"
    ),
    due_from: Optional[str] = typer.Option(None, "--from", help="Due on or after (YYYY-MM-DD)"),
    due_to: Optional[str] = typer.Option(None, "--to", help="Due on or before (YYYY-MM-DD)"),
) -> None:
    """List subtasks in due-date order, with their ids."""
    start = parse_day(due_from, "--from")
    end = parse_day(due_to, "--to")
    store = open_store(load_settings(data_file))

    result = find_subtasks(store, task_number, status=status, due_from=start, due_to=end)
    if is_err(result):
        print_error(result.error)
        raise typer.Exit(1)

    numbers = {task.id: task.task_number for task in store.list_tasks_ordered_by_number()}
    for subtask in result.value:
        typer.echo(
            f"{subtask.id}  {format_due_date(subtask.due_date)}  "
            f"{subtask.status.value:<11}  {numbers.get(subtask.task_id, '?'):<8}  {subtask.title}"
        )
    typer.echo(f"\n{len(result.value)} subtasks")


@app.command("set-status")
def set_status(
    subtask_id: str = typer.Argument(..., help="Subtask id, as listed by 'tasks subtasks'"),
    status: SubtaskStatus = typer.Argument(..., case_sensitive=False, help="New status"),
    data_file: Optional[Path] = data_file_option,
) -> None:
    """Change a subtask's status (lost when its task is rescheduled)."""
    store = open_store(load_settings(data_file))

    result = set_subtask_status(store, subtask_id, status)
    if is_err(result):
        print_error(result.error)
        raise typer.Exit(1)

    subtask = result.value
    print_success(
        f"{subtask.title} ({format_due_date(subtask.due_date)}) is now {subtask.status.value}"
    )


@app.command("stats")
def stats(data_file: Optional[Path] = data_file_option) -> None:
    """Show task and subtask counts."""
    store = open_store(load_settings(data_file))
    tasks = store.list_tasks_ordered_by_number()
    roots = build_tree(tasks)
    subtasks = store.list_subtasks()

    print_header("TASK STATISTICS")
    typer.echo(f"Tasks:      {len(tasks)}")
    typer.echo(f"Top-level:  {len(roots)}")
    typer.echo(f"Subtasks:   {len(subtasks)}")
    typer.echo(f"Documents:  {len(store.list_documents())}")

    levels = {f"level {depth + 1}": n for depth, n in sorted(count_by_depth(roots).items())}
    print_counts("Tasks by level", levels)
    print_counts("Tasks by type", store.count_tasks_by_field("task_type"))
    print_counts("Tasks by recurrence", store.count_tasks_by_field("recurrence"))
    print_counts("Subtasks by status", _status_counts(subtasks))
    print_counts("Subtasks by month", subtasks_by_month(subtasks))


def _status_counts(subtasks) -> dict[str, int]:
    counts: dict[str, int] = {}
    for subtask in subtasks:
        counts[subtask.status.value] = counts.get(subtask.status.value, 0) + 1
    return counts
