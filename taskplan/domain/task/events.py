"""Task domain events.

Domain events are immutable records of what happened to each input row
and task during an import or scheduling run. The import report keeps
them so every row's fate can be inspected after the run.

All events are pure data structures - no I/O, no side effects.
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class DomainEvent(BaseModel):
    """Base class for all domain events.

    Each event has a unique ID and timestamp.
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"frozen": True}


class DocumentImported(DomainEvent):
    """A document row was upserted."""

    line: int
    internal_number: int
    document_id: str


class TaskImported(DomainEvent):
    """A task row was created or replaced."""

    line: int
    task_number: str
    task_id: str
    document_id: str | None = None


class RowSkipped(DomainEvent):
    """An input row was skipped.

    ``dataset`` is "documents" or "tasks"; ``key`` is the row's natural
    key as read (possibly empty).
    """

    dataset: str
    line: int
    key: str
    reason: str


class ParentLinked(DomainEvent):
    """A task was linked to its parent task."""

    task_number: str
    parent_number: str


class SubtasksRegenerated(DomainEvent):
    """A task's subtasks were deleted and recreated."""

    task_id: str
    task_number: str
    deleted: int
    created: int
