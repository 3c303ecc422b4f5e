"""Application service layer for taskplan.

Services orchestrate domain functions against a TaskStore.

Services:
    import_service - Document and task register import pipeline
    schedule_service - Destructive subtask regeneration
    subtask_service - Filtered subtask listing and status changes

Example usage:
    >>> from taskplan.application import ImportPipeline
    >>> from taskplan.infrastructure.storage import InMemoryStore
    >>>
    >>> report = ImportPipeline(InMemoryStore()).run(task_rows, document_rows)
    >>> print(f"{report.tasks_created} tasks, {report.subtasks_created} subtasks")
"""

from taskplan.application.import_service import (
    ImportPipeline,
    ImportReport,
    document_hint,
)
from taskplan.application.schedule_service import (
    ScheduleReport,
    occurrences_for,
    reschedule_all,
    reschedule_task,
    reschedule_task_by_id,
    subtasks_by_month,
)
from taskplan.application.subtask_service import find_subtasks, set_subtask_status

__all__ = [
    # Import service
    "ImportPipeline",
    "ImportReport",
    "document_hint",
    # Schedule service
    "ScheduleReport",
    "occurrences_for",
    "reschedule_task",
    "reschedule_task_by_id",
    "reschedule_all",
    "subtasks_by_month",
    # Subtask service
    "find_subtasks",
    "set_subtask_status",
]
