"""Task domain - recurrence scheduling and hierarchy rules.

All exports are pure (no I/O, no side effects).

Key Types:
    Task - A recurring or one-time unit of project work
    Subtask - One scheduled occurrence of a task
    Document - A source document tasks may be linked to
    RecurrenceCategory - Recurrence tag of a task
    ScheduleShape - Date-generation algorithm a category selects
    TaskTreeNode - Task with its child tasks

Recurrence Functions:
    generate_occurrences - Expand a category into dates within a window
    resolve_category - Map a raw label to a category
    shape_for - Category -> schedule shape

Hierarchy Functions:
    resolve_parents - Child/parent links from a task-number arena
    build_tree - Nested tree from stored parent links
    walk_tree / fold_tree / count_by_depth - Tree traversal

Subtask Functions:
    build_subtasks - Subtask records for a task's occurrence dates

Domain Events:
    DocumentImported, TaskImported, RowSkipped, ParentLinked,
    SubtasksRegenerated
"""

from .events import (
    DocumentImported,
    DomainEvent,
    ParentLinked,
    RowSkipped,
    SubtasksRegenerated,
    TaskImported,
)
from .hierarchy import (
    ParentLink,
    build_tree,
    count_by_depth,
    fold_tree,
    resolve_parents,
    sort_by_number,
    walk_tree,
)
from .models import (
    Document,
    Priority,
    RecurrenceCategory,
    Subtask,
    SubtaskStatus,
    Task,
    TaskTreeNode,
)
from .recurrence import (
    CATEGORY_SHAPES,
    DEFAULT_SHAPE,
    ScheduleShape,
    generate_occurrences,
    resolve_category,
    shape_for,
)
from .subtasks import (
    build_subtasks,
    format_due_date,
    subtask_description,
    subtask_title,
)

__all__ = [
    # Models
    "Task",
    "Subtask",
    "Document",
    "Priority",
    "RecurrenceCategory",
    "SubtaskStatus",
    "TaskTreeNode",
    # Recurrence
    "ScheduleShape",
    "CATEGORY_SHAPES",
    "DEFAULT_SHAPE",
    "generate_occurrences",
    "resolve_category",
    "shape_for",
    # Hierarchy
    "ParentLink",
    "resolve_parents",
    "sort_by_number",
    "build_tree",
    "walk_tree",
    "fold_tree",
    "count_by_depth",
    # Subtasks
    "build_subtasks",
    "format_due_date",
    "subtask_title",
    "subtask_description",
    # Events
    "DomainEvent",
    "DocumentImported",
    "TaskImported",
    "RowSkipped",
    "ParentLinked",
    "SubtasksRegenerated",
]
