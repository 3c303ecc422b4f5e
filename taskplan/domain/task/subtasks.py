"""Subtask record building.

Turns a task and its occurrence dates into subtask records with
generated titles and descriptions. Persisting them (and removing the
previous generation) is the schedule service's job.
"""

from datetime import date

from taskplan.domain.task.models import Subtask, SubtaskStatus, Task


def format_due_date(day: date) -> str:
    """Short due date used in titles, e.g. 01.04.2025."""
    return day.strftime("%d.%m.%Y")


def format_long_date(day: date) -> str:
    """Long due date used in descriptions, e.g. Tuesday, 1 April 2025."""
    return f"{day:%A}, {day.day} {day:%B %Y}"


def subtask_title(title: str, due_date: date, index: int, total: int) -> str:
    """Title for the occurrence at ``index`` (0-based) of ``total``."""
    if total == 1:
        return f"{title} ({format_due_date(due_date)})"
    return f"{title} - {index + 1}/{total} ({format_due_date(due_date)})"


def subtask_description(task: Task, due_date: date, index: int, total: int) -> str:
    """Description block for one occurrence.

    Optional task fields appear only when the task has them; the
    ordinal line appears only when there is more than one occurrence.
    """
    parts = [f'Carry out "{task.title}" by {format_long_date(due_date)}.']

    if task.description:
        parts.append(f"Description: {task.description}")
    if task.expected_result:
        parts.append(f"Expected result: {task.expected_result}")
    if task.responsible_person:
        parts.append(f"Responsible: {task.responsible_person}")

    summary = [
        f"Recurrence: {task.recurrence.value}",
        f"Priority: {task.priority.value}",
    ]
    if total > 1:
        summary.append(f"Occurrence {index + 1} of {total}")
    parts.append("\n".join(summary))

    return "\n\n".join(parts)


def build_subtasks(task: Task, dates: list[date]) -> list[Subtask]:
    """Build one PENDING subtask per date, in date-list order."""
    total = len(dates)
    return [
        Subtask(
            task_id=task.id,
            title=subtask_title(task.title, due_date, index, total),
            description=subtask_description(task, due_date, index, total),
            due_date=due_date,
            status=SubtaskStatus.PENDING,
            notes=f"Generated for recurrence {task.recurrence.value}",
        )
        for index, due_date in enumerate(dates)
    ]
