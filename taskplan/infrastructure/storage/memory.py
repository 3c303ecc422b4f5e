"""In-memory TaskStore backend.

Holds all records in dictionaries. Used directly in tests and as the
base of the JSON file backend, which adds loading and persisting.
"""

import copy
import logging
from collections import Counter
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from enum import Enum
from typing import Any

from taskplan.domain.shared.errors import (
    StorageError,
    SubtaskNotFoundError,
    TaskNotFoundError,
)
from taskplan.domain.task.hierarchy import sort_by_number
from taskplan.domain.task.models import Document, Subtask, SubtaskStatus, Task

logger = logging.getLogger(__name__)


class InMemoryStore:
    """TaskStore keeping tasks, subtasks and documents in memory.

    Every write runs as its own transaction unless it is already inside
    one, so a write that fails to persist leaves no trace in memory.
    Writes made inside ``transaction()`` are rolled back if the block
    raises. Nested transactions join the outermost one.
    """

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}
        self._subtasks: dict[str, Subtask] = {}
        self._documents: dict[str, Document] = {}
        self._depth = 0

    # =========================================================================
    # Tasks
    # =========================================================================

    def create_task(self, task: Task) -> Task:
        existing = self._find_task_by_number(task.task_number)
        if existing is not None:
            task = task.model_copy(update={"id": existing.id, "parent_id": None})
        with self.transaction():
            self._tasks[task.id] = task
        return task

    def get_task(self, task_id: str) -> Task | None:
        return self._tasks.get(task_id)

    def update_task_parent(self, task_id: str, parent_id: str | None) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        if parent_id is not None and parent_id not in self._tasks:
            raise TaskNotFoundError(parent_id)

        task = task.model_copy(update={"parent_id": parent_id})
        with self.transaction():
            self._tasks[task_id] = task
        return task

    def list_tasks_ordered_by_number(self) -> list[Task]:
        return sort_by_number(self._tasks.values())

    def count_tasks_by_field(self, field: str) -> dict[str, int]:
        if field not in Task.model_fields:
            raise StorageError(f"Unknown task field: {field}")

        counts = Counter(_group_key(getattr(task, field)) for task in self._tasks.values())
        return dict(counts.most_common())

    def _find_task_by_number(self, task_number: str) -> Task | None:
        for task in self._tasks.values():
            if task.task_number == task_number:
                return task
        return None

    # =========================================================================
    # Documents
    # =========================================================================

    def upsert_document(self, document: Document) -> Document:
        for existing in self._documents.values():
            if existing.internal_number == document.internal_number:
                document = document.model_copy(update={"id": existing.id})
                break
        with self.transaction():
            self._documents[document.id] = document
        return document

    def find_document_by_name_contains(self, text: str) -> Document | None:
        needle = text.casefold()
        for document in self.list_documents():
            if needle in document.original_name.casefold():
                return document
        return None

    def list_documents(self) -> list[Document]:
        return sorted(self._documents.values(), key=lambda d: d.internal_number)

    # =========================================================================
    # Subtasks
    # =========================================================================

    def delete_subtasks_for_task(self, task_id: str) -> int:
        doomed = [sid for sid, sub in self._subtasks.items() if sub.task_id == task_id]
        with self.transaction():
            for subtask_id in doomed:
                del self._subtasks[subtask_id]
        return len(doomed)

    def create_subtask(self, subtask: Subtask) -> Subtask:
        if subtask.task_id not in self._tasks:
            raise TaskNotFoundError(subtask.task_id)
        with self.transaction():
            self._subtasks[subtask.id] = subtask
        return subtask

    def get_subtask(self, subtask_id: str) -> Subtask | None:
        return self._subtasks.get(subtask_id)

    def update_subtask_status(self, subtask_id: str, status: SubtaskStatus) -> Subtask:
        subtask = self._subtasks.get(subtask_id)
        if subtask is None:
            raise SubtaskNotFoundError(subtask_id)

        subtask = subtask.model_copy(update={"status": status})
        with self.transaction():
            self._subtasks[subtask_id] = subtask
        return subtask

    def list_subtasks(
        self,
        task_id: str | None = None,
        status: SubtaskStatus | None = None,
        due_from: date | None = None,
        due_to: date | None = None,
    ) -> list[Subtask]:
        subtasks = [
            sub
            for sub in self._subtasks.values()
            if (task_id is None or sub.task_id == task_id)
            and (status is None or sub.status == status)
            and (due_from is None or sub.due_date >= due_from)
            and (due_to is None or sub.due_date <= due_to)
        ]
        return sorted(subtasks, key=lambda sub: sub.due_date)

    # =========================================================================
    # Units of work
    # =========================================================================

    @contextmanager
    def transaction(self) -> Iterator["InMemoryStore"]:
        """Apply the block's writes together, restoring state on error."""
        snapshot = self._snapshot()
        self._depth += 1
        try:
            yield self
            if self._depth == 1:
                self._persist()
        except Exception:
            logger.debug("Rolling back store transaction")
            self._restore(snapshot)
            raise
        finally:
            self._depth -= 1

    def _snapshot(self) -> dict[str, dict[str, Any]]:
        return {
            "tasks": copy.copy(self._tasks),
            "subtasks": copy.copy(self._subtasks),
            "documents": copy.copy(self._documents),
        }

    def _restore(self, snapshot: dict[str, dict[str, Any]]) -> None:
        self._tasks = snapshot["tasks"]
        self._subtasks = snapshot["subtasks"]
        self._documents = snapshot["documents"]

    def _persist(self) -> None:
        """Hook for durable backends; memory has nothing to flush."""


def _group_key(value: Any) -> str:
    if isinstance(value, Enum):
        return value.value
    if value is None:
        return ""
    return str(value)
