"""Schedule application service.

Regenerates a task's subtasks from its recurrence. Regeneration is
destructive: every existing subtask of the task is deleted and a fresh
set is created, so manual status changes do not survive a reschedule.
"""

import logging
from collections import Counter
from datetime import date

from pydantic import BaseModel, Field

from taskplan.domain.shared import Err, Ok, Result, StorageError
from taskplan.domain.task import (
    Subtask,
    SubtasksRegenerated,
    Task,
    build_subtasks,
    generate_occurrences,
)
from taskplan.domain.types import DateWindow, effective_window
from taskplan.infrastructure.storage.base import TaskStore

logger = logging.getLogger(__name__)


class ScheduleReport(BaseModel):
    """Outcome of regenerating subtasks for every stored task."""

    tasks_processed: int = 0
    subtasks_created: int = 0
    failures: int = 0
    tasks_by_category: dict[str, int] = Field(default_factory=dict)
    subtasks_by_category: dict[str, int] = Field(default_factory=dict)
    subtasks_by_month: dict[str, int] = Field(default_factory=dict)

    @property
    def average_per_task(self) -> float:
        """Mean subtasks per processed task."""
        if self.tasks_processed == 0:
            return 0.0
        return round(self.subtasks_created / self.tasks_processed, 1)


def occurrences_for(task: Task, default_window: DateWindow) -> list[date]:
    """Occurrence dates of a task within its effective window."""
    window = effective_window(task.start_date, task.end_date, default_window)
    return generate_occurrences(task.recurrence, window.start, window.end)


def reschedule_task(
    store: TaskStore,
    task: Task,
    default_window: DateWindow,
) -> tuple[list[Subtask], SubtasksRegenerated]:
    """Replace all subtasks of a task with the current generation.

    Delete and insert run in one store transaction, so a failure leaves
    the previous subtasks in place.

    Args:
        store: Backing store.
        task: The task to reschedule.
        default_window: Project window for missing task dates.

    Returns:
        (created subtasks in due-date order, SubtasksRegenerated event)

    Raises:
        StorageError: If the store rejects a write.
    """
    dates = occurrences_for(task, default_window)
    subtasks = build_subtasks(task, dates)

    with store.transaction():
        deleted = store.delete_subtasks_for_task(task.id)
        created = [store.create_subtask(subtask) for subtask in subtasks]

    if created:
        logger.info(
            "Task %s: %d subtasks (%s, %s .. %s)",
            task.task_number,
            len(created),
            task.recurrence.value,
            dates[0].isoformat(),
            dates[-1].isoformat(),
        )
    else:
        logger.warning("Task %s: no occurrences in its window", task.task_number)

    event = SubtasksRegenerated(
        task_id=task.id,
        task_number=task.task_number,
        deleted=deleted,
        created=len(created),
    )
    return created, event


def reschedule_task_by_id(
    store: TaskStore,
    task_id: str,
    default_window: DateWindow,
) -> Result[tuple[list[Subtask], SubtasksRegenerated], str]:
    """Reschedule a single task looked up by id.

    Returns:
        Ok((subtasks, event)) on success, or
        Err(str) if the task does not exist or the store fails.
    """
    task = store.get_task(task_id)
    if task is None:
        return Err(f"Task not found: {task_id}")

    try:
        return Ok(reschedule_task(store, task, default_window))
    except StorageError as e:
        logger.error("Rescheduling task %s failed: %s", task.task_number, e)
        return Err(f"Failed to generate subtasks for {task.task_number}: {e}")


def reschedule_all(store: TaskStore, default_window: DateWindow) -> ScheduleReport:
    """Regenerate subtasks for every stored task in task-number order.

    A storage failure on one task is logged and counted; the run
    continues with the next task.
    """
    tasks = store.list_tasks_ordered_by_number()
    logger.info(
        "Generating subtasks for %d tasks (project window %s)",
        len(tasks),
        default_window,
    )

    report = ScheduleReport()
    subtasks_by_category: Counter[str] = Counter()
    for position, task in enumerate(tasks, start=1):
        try:
            created, _ = reschedule_task(store, task, default_window)
        except StorageError as e:
            logger.error("Task %s: subtask generation failed: %s", task.task_number, e)
            report.failures += 1
            continue

        report.tasks_processed += 1
        report.subtasks_created += len(created)
        subtasks_by_category[task.recurrence.value] += len(created)

        if position % 10 == 0:
            logger.info("Processed %d/%d tasks", position, len(tasks))

    report.tasks_by_category = store.count_tasks_by_field("recurrence")
    report.subtasks_by_category = dict(subtasks_by_category.most_common())
    report.subtasks_by_month = subtasks_by_month(store.list_subtasks())
    return report


def subtasks_by_month(subtasks: list[Subtask]) -> dict[str, int]:
    """Count subtasks per due month (YYYY-MM), in month order."""
    counts = Counter(subtask.due_date.strftime("%Y-%m") for subtask in subtasks)
    return dict(sorted(counts.items()))
