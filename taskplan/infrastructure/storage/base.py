"""Storage interface consumed by the application services.

The services never talk to a concrete backend; anything that satisfies
``TaskStore`` can hold the tasks, subtasks and documents. Backends
signal failures by raising ``StorageError``.
"""

from collections.abc import Iterator
from contextlib import AbstractContextManager
from datetime import date
from typing import Protocol

from taskplan.domain.task.models import Document, Subtask, SubtaskStatus, Task


class TaskStore(Protocol):
    """Create/update/delete/query operations over tasks and subtasks."""

    # Tasks

    def create_task(self, task: Task) -> Task:
        """Store a task, replacing any task with the same task number.

        A replaced task keeps its id and loses its parent link.
        """
        ...

    def get_task(self, task_id: str) -> Task | None: ...

    def update_task_parent(self, task_id: str, parent_id: str | None) -> Task: ...

    def list_tasks_ordered_by_number(self) -> list[Task]: ...

    def count_tasks_by_field(self, field: str) -> dict[str, int]:
        """Task counts grouped by a task field, largest group first."""
        ...

    # Documents

    def upsert_document(self, document: Document) -> Document:
        """Store a document, replacing any with the same internal number."""
        ...

    def find_document_by_name_contains(self, text: str) -> Document | None: ...

    def list_documents(self) -> list[Document]: ...

    # Subtasks

    def delete_subtasks_for_task(self, task_id: str) -> int:
        """Delete every subtask of a task, returning how many were removed."""
        ...

    def create_subtask(self, subtask: Subtask) -> Subtask: ...

    def get_subtask(self, subtask_id: str) -> Subtask | None: ...

    def update_subtask_status(self, subtask_id: str, status: SubtaskStatus) -> Subtask:
        """Set a subtask's status; the next reschedule discards it."""
        ...

    def list_subtasks(
        self,
        task_id: str | None = None,
        status: SubtaskStatus | None = None,
        due_from: date | None = None,
        due_to: date | None = None,
    ) -> list[Subtask]:
        """Subtasks in due-date order, filtered by task, status and due range."""
        ...

    # Units of work

    def transaction(self) -> AbstractContextManager["TaskStore"]:
        """Group writes so they apply together or not at all."""
        ...


def iter_subtasks_by_task(store: TaskStore) -> Iterator[tuple[Task, list[Subtask]]]:
    """Yield each task (in number order) with its subtasks."""
    for task in store.list_tasks_ordered_by_number():
        yield task, store.list_subtasks(task.id)
