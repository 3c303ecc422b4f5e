"""CLI interface for taskplan using Typer.

Usage:
    taskplan import run          # Import documents and tasks, generate subtasks
    taskplan schedule all        # Regenerate subtasks for every task
    taskplan schedule preview X  # Show dates a recurrence produces
    taskplan tasks tree          # Print the task hierarchy

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups (import, schedule, tasks)
- common.py: Shared utilities for CLI commands
- main.py: Entry point that runs the app
"""

from typing import Optional

import typer

from taskplan import __version__
from taskplan.config import load_config
from taskplan.interfaces.cli.commands import ingest, schedule, tasks
from taskplan.logging_setup import configure_logging

# Create the main Typer application
app = typer.Typer(
    name="taskplan",
    help="Recurrence-driven project task scheduler",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"taskplan version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level (or set TASKPLAN_LOG_LEVEL env var)",
    ),
) -> None:
    """taskplan - import project tasks and schedule their recurring work.

    Rebuilds the task hierarchy from dot-numbered task ids and expands
    each task's recurrence into dated subtasks.
    """
    configure_logging(log_level or load_config().log_level)


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(ingest.app, name="import")
app.add_typer(schedule.app, name="schedule")
app.add_typer(tasks.app, name="tasks")


__all__ = ["app"]
