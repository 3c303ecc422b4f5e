"""Import CLI commands.

Commands that load the document and task registers into the data file.
Running an import twice on the same input leaves the same tasks and
documents and regenerates the same subtasks.
"""

from pathlib import Path
from typing import Optional

import typer

from taskplan.application import ImportPipeline, ImportReport
from taskplan.domain.shared import SourceReadError, StorageError
from taskplan.infrastructure.tabular import read_rows
from taskplan.interfaces.cli.common import (
    data_file_option,
    load_settings,
    open_store,
    print_counts,
    print_error,
    print_header,
    print_success,
    print_warning,
)

app = typer.Typer(help="Import the document and task registers")

tasks_csv_option = typer.Option(
    None, "--tasks-csv", "-t", help="Task register (semicolon-separated)"
)
documents_csv_option = typer.Option(
    None, "--documents-csv", "-D", help="Document register (semicolon-separated)"
)
strict_option = typer.Option(
    None,
    "--strict/--lenient",
    help="Reject unknown recurrence labels instead of scheduling them quarterly",
)


# =============================================================================
# Output Formatting Helpers
# =============================================================================


def print_report(report: ImportReport, documents: bool, tasks: bool) -> None:
    """Print the summary of an import run."""
    print_header("IMPORT SUMMARY")

    if documents:
        typer.echo(f"Documents imported:  {report.documents_imported}")
        typer.echo(f"Documents skipped:   {report.documents_skipped}")
    if tasks:
        typer.echo(f"Tasks created:       {report.tasks_created}")
        typer.echo(f"Tasks skipped:       {report.tasks_skipped}")
        typer.echo(f"Hierarchy links:     {report.hierarchy_links}")
        typer.echo(f"Subtasks generated:  {report.subtasks_created}")
        typer.echo(f"Subtask failures:    {report.subtask_failures}")
        typer.echo(f"Top-level tasks:     {report.root_tasks}")
        typer.echo(f"Child tasks:         {report.child_tasks}")

    skipped = report.skipped_rows()
    if skipped:
        typer.echo("\nSkipped rows:")
        for event in skipped:
            typer.echo(f"  {event.dataset} line {event.line} ({event.key!r}): {event.reason}")

    if documents:
        print_counts("Documents by task type", report.documents_by_type)
    if tasks:
        print_counts("Tasks by type", report.tasks_by_type)
        print_counts("Tasks by recurrence", report.tasks_by_category)


def _run(
    data_file: Path | None,
    tasks_csv: Path | None,
    documents_csv: Path | None,
    strict: bool | None,
    documents: bool,
    tasks: bool,
) -> None:
    config = load_settings(data_file, tasks_csv, documents_csv, strict)
    pipeline = ImportPipeline(open_store(config), config)

    try:
        if documents and tasks:
            report = pipeline.run_files()
        elif documents:
            report = pipeline.import_documents(read_rows(config.documents_csv, config.delimiter))
        else:
            report = pipeline.import_tasks(read_rows(config.tasks_csv, config.delimiter))
    except (SourceReadError, StorageError) as e:
        print_error(str(e))
        print_warning("Import aborted; see the messages above.")
        raise typer.Exit(1)

    print_report(report, documents=documents, tasks=tasks)
    if report.subtask_failures:
        print_error(
            f"\nSubtasks could not be stored for {report.subtask_failures} task(s); "
            "run 'taskplan schedule all' to retry."
        )
        raise typer.Exit(1)
    print_success(f"\nImport finished. Data saved to {config.data_file}")


# =============================================================================
# Commands
# =============================================================================


@app.command("run")
def run(
    data_file: Optional[Path] = data_file_option,
    tasks_csv: Optional[Path] = tasks_csv_option,
    documents_csv: Optional[Path] = documents_csv_option,
    strict: Optional[bool] = strict_option,
) -> None:
    """Import documents, then tasks (with hierarchy and subtasks)."""
    _run(data_file, tasks_csv, documents_csv, strict, documents=True, tasks=True)


@app.command("documents")
def documents(
    data_file: Optional[Path] = data_file_option,
    documents_csv: Optional[Path] = documents_csv_option,
) -> None:
    """Import the document register only."""
    _run(data_file, None, documents_csv, None, documents=True, tasks=False)


@app.command("tasks")
def tasks(
    data_file: Optional[Path] = data_file_option,
    tasks_csv: Optional[Path] = tasks_csv_option,
    strict: Optional[bool] = strict_option,
) -> None:
    """Import the task register only (documents must already be loaded)."""
    _run(data_file, tasks_csv, None, strict, documents=False, tasks=True)
