"""Import application service.

Loads the document register and the task register into a TaskStore:

1. Documents are upserted by internal number.
2. Task rows are created (pass 1), each linked best-effort to the
   document named in its source column.
3. Parent links are derived from task numbers (pass 2). This needs every
   task's storage id, so it only starts once pass 1 is complete.
4. Every created task's subtasks are regenerated from its recurrence.
   A task whose subtasks cannot be stored keeps its row but is counted
   in ``subtask_failures``.

Rows are processed sequentially in source order. A bad row is skipped
and counted; it never aborts the run. Only an unreadable input file or
an unusable store does.
"""

import logging
import re

from pydantic import BaseModel, Field

from taskplan.application.schedule_service import reschedule_task
from taskplan.config import TaskplanConfig
from taskplan.domain.shared import StorageError, UnknownRecurrenceError
from taskplan.domain.task import (
    Document,
    DocumentImported,
    DomainEvent,
    ParentLinked,
    Priority,
    RowSkipped,
    Task,
    TaskImported,
    resolve_category,
    resolve_parents,
)
from taskplan.infrastructure.storage.base import TaskStore
from taskplan.infrastructure.tabular import (
    Row,
    optional_text,
    parse_date,
    parse_flag,
    read_rows,
)

logger = logging.getLogger(__name__)

# Header occupies line 1, so the first data row is line 2
FIRST_DATA_LINE = 2

_DOCUMENT_HINT = re.compile(r"^([^(]+)")


class ImportReport(BaseModel):
    """Aggregate counts of an import run plus per-row events."""

    documents_imported: int = 0
    documents_skipped: int = 0
    tasks_created: int = 0
    tasks_skipped: int = 0
    hierarchy_links: int = 0
    subtasks_created: int = 0
    subtask_failures: int = 0
    root_tasks: int = 0
    child_tasks: int = 0
    tasks_by_category: dict[str, int] = Field(default_factory=dict)
    tasks_by_type: dict[str, int] = Field(default_factory=dict)
    documents_by_type: dict[str, int] = Field(default_factory=dict)
    events: list[DomainEvent] = Field(default_factory=list)

    def skipped_rows(self) -> list[RowSkipped]:
        """Events for every skipped row, in processing order."""
        return [event for event in self.events if isinstance(event, RowSkipped)]


def document_hint(source: str) -> str | None:
    """Leading text of a source reference, up to its first parenthesis.

    Example:
        document_hint("Príručka pre prijímateľa (str. 12)")
        # -> "Príručka pre prijímateľa"
    """
    match = _DOCUMENT_HINT.match(source)
    if not match:
        return None
    return match.group(1).strip() or None


class ImportPipeline:
    """Imports the document and task registers into a store."""

    def __init__(self, store: TaskStore, config: TaskplanConfig | None = None) -> None:
        """Initialize the pipeline.

        Args:
            store: Backing store for documents, tasks and subtasks.
            config: Settings (columns, project window, strictness).
                Defaults are used if not provided.
        """
        self.store = store
        self.config = config or TaskplanConfig()

    # =========================================================================
    # Entry points
    # =========================================================================

    def run(self, task_rows: list[Row], document_rows: list[Row]) -> ImportReport:
        """Import documents, then tasks, into one report."""
        report = ImportReport()
        logger.info("Phase 1: importing %d document rows", len(document_rows))
        self.import_documents(document_rows, report)
        logger.info("Phase 2: importing %d task rows", len(task_rows))
        self.import_tasks(task_rows, report)
        return report

    def run_files(self) -> ImportReport:
        """Read both registers from the configured paths and import them.

        Raises:
            SourceReadError: If either file cannot be read.
        """
        document_rows = read_rows(self.config.documents_csv, self.config.delimiter)
        task_rows = read_rows(self.config.tasks_csv, self.config.delimiter)
        return self.run(task_rows, document_rows)

    # =========================================================================
    # Documents
    # =========================================================================

    def import_documents(
        self,
        rows: list[Row],
        report: ImportReport | None = None,
    ) -> ImportReport:
        """Upsert document rows by internal number."""
        report = report or ImportReport()
        cols = self.config.document_columns

        for line, row in enumerate(rows, start=FIRST_DATA_LINE):
            key = row.get(cols.internal_number, "")
            try:
                internal_number = int(key)
            except ValueError:
                self._skip(report, "documents", line, key, "invalid internal number")
                continue

            document = Document(
                internal_number=internal_number,
                original_name=row.get(cols.original_name, ""),
                task_type=row.get(cols.task_type, ""),
                is_direct_source=parse_flag(row.get(cols.is_direct_source, "")),
                notes=optional_text(row.get(cols.notes, "")),
            )
            try:
                document = self.store.upsert_document(document)
            except StorageError as e:
                logger.error("Document %s: storage failure: %s", key, e)
                self._skip(report, "documents", line, key, f"storage error: {e}")
                continue

            logger.info(
                "Imported document %d - %s",
                document.internal_number,
                document.original_name,
            )
            report.documents_imported += 1
            report.events.append(
                DocumentImported(
                    line=line,
                    internal_number=document.internal_number,
                    document_id=document.id,
                )
            )

        report.documents_by_type = _count_by(
            document.task_type for document in self.store.list_documents()
        )
        return report

    # =========================================================================
    # Tasks
    # =========================================================================

    def import_tasks(
        self,
        rows: list[Row],
        report: ImportReport | None = None,
    ) -> ImportReport:
        """Create tasks, link the hierarchy and regenerate subtasks."""
        report = report or ImportReport()
        cols = self.config.task_columns

        # Pass 1: create every task, building the number -> id arena
        created: dict[str, Task] = {}
        lines: dict[str, int] = {}
        for line, row in enumerate(rows, start=FIRST_DATA_LINE):
            number = row.get(cols.number, "").strip()
            if not number:
                self._skip(report, "tasks", line, number, "missing task number")
                continue

            try:
                task = self.store.create_task(self._task_from_row(row, number))
            except UnknownRecurrenceError as e:
                self._skip(report, "tasks", line, number, str(e))
                continue
            except StorageError as e:
                logger.error("Task %s: storage failure: %s", number, e)
                self._skip(report, "tasks", line, number, f"storage error: {e}")
                continue

            created[number] = task
            lines[number] = line
            report.tasks_created += 1
            report.events.append(
                TaskImported(
                    line=line,
                    task_number=number,
                    task_id=task.id,
                    document_id=task.document_id,
                )
            )
            logger.info("Created task %s - %s", number, task.title)

        # Pass 2: link children to parents present in this batch
        self._link_hierarchy(created, report)

        # Regenerate subtasks for every task created in pass 1
        for task in created.values():
            try:
                subtasks, event = reschedule_task(
                    self.store, task, self.config.project_window
                )
            except StorageError as e:
                logger.error("Task %s: subtask generation failed: %s", task.task_number, e)
                report.subtask_failures += 1
                report.events.append(
                    RowSkipped(
                        dataset="subtasks",
                        line=lines[task.task_number],
                        key=task.task_number,
                        reason=f"storage error: {e}",
                    )
                )
                continue
            report.subtasks_created += len(subtasks)
            report.events.append(event)

        self._collect_task_stats(report)
        return report

    def _task_from_row(self, row: Row, number: str) -> Task:
        cols = self.config.task_columns
        return Task(
            task_number=number,
            task_type=row.get(cols.task_type, ""),
            title=row.get(cols.title, ""),
            description=row.get(cols.description, ""),
            source=row.get(cols.source, ""),
            priority=Priority.from_label(row.get(cols.priority, "")),
            recurrence=resolve_category(
                row.get(cols.recurrence, ""),
                strict=self.config.strict_recurrence,
            ),
            start_date=parse_date(row.get(cols.start_date, "")),
            end_date=parse_date(row.get(cols.end_date, "")),
            duration=optional_text(row.get(cols.duration, "")),
            responsible_person=optional_text(row.get(cols.responsible_person, "")),
            expected_result=optional_text(row.get(cols.expected_result, "")),
            fulfills_kc=parse_flag(row.get(cols.fulfills_kc, "")),
            notes=optional_text(row.get(cols.notes, "")),
            document_id=self._find_document_id(row.get(cols.source, "")),
        )

    def _find_document_id(self, source: str) -> str | None:
        hint = document_hint(source)
        if hint is None:
            return None
        try:
            document = self.store.find_document_by_name_contains(hint)
        except StorageError as e:
            logger.warning("Document lookup for %r failed: %s", hint, e)
            return None
        if document is None:
            logger.debug("No document matches source %r", source)
            return None
        return document.id

    def _link_hierarchy(self, created: dict[str, Task], report: ImportReport) -> None:
        number_to_id = {number: task.id for number, task in created.items()}
        for link in resolve_parents(number_to_id):
            try:
                self.store.update_task_parent(link.child_id, link.parent_id)
            except StorageError as e:
                logger.error(
                    "Linking %s -> %s failed: %s",
                    link.child_number,
                    link.parent_number,
                    e,
                )
                continue
            report.hierarchy_links += 1
            report.events.append(
                ParentLinked(
                    task_number=link.child_number,
                    parent_number=link.parent_number,
                )
            )
            logger.info("Linked %s -> %s", link.child_number, link.parent_number)

    def _collect_task_stats(self, report: ImportReport) -> None:
        tasks = self.store.list_tasks_ordered_by_number()
        report.root_tasks = sum(1 for task in tasks if task.parent_id is None)
        report.child_tasks = len(tasks) - report.root_tasks
        report.tasks_by_category = self.store.count_tasks_by_field("recurrence")
        report.tasks_by_type = self.store.count_tasks_by_field("task_type")

    # =========================================================================
    # Helpers
    # =========================================================================

    def _skip(
        self,
        report: ImportReport,
        dataset: str,
        line: int,
        key: str,
        reason: str,
    ) -> None:
        logger.warning("Skipping %s line %d (%r): %s", dataset, line, key, reason)
        if dataset == "documents":
            report.documents_skipped += 1
        else:
            report.tasks_skipped += 1
        report.events.append(RowSkipped(dataset=dataset, line=line, key=key, reason=reason))


def _count_by(values) -> dict[str, int]:
    counts: dict[str, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    return dict(sorted(counts.items(), key=lambda item: (-item[1], item[0])))
