"""Subtask application service.

Filtered listing of scheduled subtasks and manual status changes.
A status set here lasts only until the owning task is rescheduled.
"""

import logging
from datetime import date

from taskplan.domain.shared import (
    Err,
    Ok,
    Result,
    StorageError,
    SubtaskNotFoundError,
)
from taskplan.domain.task import Subtask, SubtaskStatus
from taskplan.infrastructure.storage.base import TaskStore

logger = logging.getLogger(__name__)


def find_subtasks(
    store: TaskStore,
    task_number: str | None = None,
    status: SubtaskStatus | None = None,
    due_from: date | None = None,
    due_to: date | None = None,
) -> Result[list[Subtask], str]:
    """List subtasks matching every given filter, in due-date order.

    Args:
        store: Backing store.
        task_number: Only subtasks of this task.
        status: Only subtasks in this status.
        due_from: Earliest due date (inclusive).
        due_to: Latest due date (inclusive).

    Returns:
        Ok(subtasks), or Err(str) if the task number is unknown.
    """
    task_id = None
    if task_number is not None:
        task = next(
            (t for t in store.list_tasks_ordered_by_number() if t.task_number == task_number),
            None,
        )
        if task is None:
            return Err(f"Task not found: {task_number}")
        task_id = task.id

    return Ok(store.list_subtasks(task_id, status=status, due_from=due_from, due_to=due_to))


def set_subtask_status(
    store: TaskStore,
    subtask_id: str,
    status: SubtaskStatus,
) -> Result[Subtask, str]:
    """Change one subtask's status."""
    try:
        subtask = store.update_subtask_status(subtask_id, status)
    except SubtaskNotFoundError as e:
        return Err(str(e))
    except StorageError as e:
        logger.error("Updating subtask %s failed: %s", subtask_id, e)
        return Err(f"Failed to update subtask {subtask_id}: {e}")

    logger.info("Subtask %s (%s) is now %s", subtask.id, subtask.due_date, status.value)
    return Ok(subtask)
