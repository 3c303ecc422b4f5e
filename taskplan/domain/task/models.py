"""Task domain models.

Pure domain models for project tasks, their scheduled subtasks and the
source documents tasks are linked to. Uses Pydantic for serialization
compatibility with the storage backends.
"""

from datetime import date
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field


def new_id() -> str:
    """Generate an opaque storage identifier."""
    return uuid4().hex


class RecurrenceCategory(str, Enum):
    """Recurrence category of a project task.

    Each category selects a schedule shape (see recurrence.py).
    """

    ONGOING = "ONGOING"
    PERIODIC = "PERIODIC"
    DURING_WORKS = "DURING_WORKS"
    TWICE_MONTHLY = "TWICE_MONTHLY"
    QUARTERLY = "QUARTERLY"
    ONE_TIME = "ONE_TIME"
    AS_NEEDED = "AS_NEEDED"
    AFTER_COMPLETION = "AFTER_COMPLETION"


class Priority(str, Enum):
    """Priority of a project task."""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @classmethod
    def from_label(cls, label: str) -> "Priority":
        """Map a source priority label to a Priority, defaulting to MEDIUM."""
        key = label.strip().casefold()
        for priority in cls:
            if key == priority.value.casefold():
                return priority
        return _PRIORITY_LABELS.get(key, cls.MEDIUM)


_PRIORITY_LABELS = {
    "vysoká": Priority.HIGH,
    "stredná": Priority.MEDIUM,
    "nízka": Priority.LOW,
}


class SubtaskStatus(str, Enum):
    """Status of a scheduled subtask."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    OVERDUE = "OVERDUE"


class Task(BaseModel):
    """A unit of recurring or one-time project work.

    The task number is the natural key; ``parent_id`` is derived from it
    on every import and is never authoritative.
    """

    id: str = Field(default_factory=new_id)
    task_number: str
    title: str = ""
    task_type: str = ""
    description: str = ""
    source: str = ""
    priority: Priority = Priority.MEDIUM
    recurrence: RecurrenceCategory = RecurrenceCategory.AS_NEEDED
    start_date: date | None = None
    end_date: date | None = None
    duration: str | None = None
    responsible_person: str | None = None
    expected_result: str | None = None
    fulfills_kc: bool = False
    notes: str | None = None
    document_id: str | None = None
    parent_id: str | None = None


class Subtask(BaseModel):
    """One concrete scheduled occurrence of a task."""

    id: str = Field(default_factory=new_id)
    task_id: str
    title: str
    description: str = ""
    due_date: date
    status: SubtaskStatus = SubtaskStatus.PENDING
    notes: str | None = None


class Document(BaseModel):
    """A program document that tasks may cite as their source.

    ``internal_number`` is the natural key used for upserts.
    """

    id: str = Field(default_factory=new_id)
    internal_number: int
    original_name: str
    task_type: str = ""
    is_direct_source: bool = False
    notes: str | None = None
    file_path: str | None = None


class TaskTreeNode(BaseModel):
    """A task with its child tasks, rebuilt from task numbers."""

    task: Task
    children: list["TaskTreeNode"] = Field(default_factory=list)
