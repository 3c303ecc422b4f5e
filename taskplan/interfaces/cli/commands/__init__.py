"""CLI command groups for taskplan.

This package contains individual command groups that are registered
with the main Typer app. Each module provides a set of related commands.

Command groups:
- ingest: Register import (registered as "import")
- schedule: Subtask regeneration and recurrence preview
- tasks: Hierarchy, per-task detail, subtask listing and status, statistics

Each command group is a Typer app that gets registered
with the main app using app.add_typer().
"""

from taskplan.interfaces.cli.commands import ingest, schedule, tasks

__all__ = ["ingest", "schedule", "tasks"]
