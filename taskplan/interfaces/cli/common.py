"""Shared utilities for taskplan CLI commands.

This module provides common utilities used across CLI commands:
- Settings resolution (config file, environment, CLI options)
- Store opening with user-facing error handling
- Date option parsing
- Formatted output helpers (error, success, info, counts)
"""

from datetime import date, datetime
from pathlib import Path

import typer

from taskplan.config import TaskplanConfig, load_config
from taskplan.domain.shared import StorageError
from taskplan.infrastructure.storage import JsonFileStore

# Reusable data file option for CLI commands
# Usage: def my_command(data_file: Optional[Path] = data_file_option) -> None:
data_file_option = typer.Option(
    None,
    "--data-file",
    "-d",
    help="JSON data file (or set TASKPLAN_DATA_FILE env var)",
)


def load_settings(
    data_file: Path | None = None,
    tasks_csv: Path | None = None,
    documents_csv: Path | None = None,
    strict: bool | None = None,
) -> TaskplanConfig:
    """Load configuration and apply explicit CLI overrides.

    Resolution order (last wins):
    1. Defaults
    2. ~/.taskplan/config.json
    3. TASKPLAN_* environment variables
    4. CLI options

    Returns:
        The effective configuration.
    """
    config = load_config()
    overrides = {
        "data_file": data_file,
        "tasks_csv": tasks_csv,
        "documents_csv": documents_csv,
        "strict_recurrence": strict,
    }
    return config.model_copy(
        update={key: value for key, value in overrides.items() if value is not None}
    )


def open_store(config: TaskplanConfig) -> JsonFileStore:
    """Open the configured data file.

    Raises:
        typer.Exit: If the data file exists but cannot be loaded.
    """
    try:
        return JsonFileStore(config.data_file)
    except StorageError as e:
        print_error(str(e))
        raise typer.Exit(1)


def parse_day(value: str | None, option: str) -> date | None:
    """Parse a YYYY-MM-DD option value; exits with a usage error otherwise."""
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        print_error(f"{option} must be YYYY-MM-DD, got {value!r}")
        raise typer.Exit(2)


def print_error(msg: str) -> None:
    """Print a formatted error message."""
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    """Print a formatted success message."""
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    """Print a formatted info message."""
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_warning(msg: str) -> None:
    """Print a formatted warning message."""
    typer.echo(typer.style(f"Warning: {msg}", fg=typer.colors.YELLOW), err=True)


def print_separator(char: str = "=", width: int = 50) -> None:
    """Print a separator line."""
    typer.echo(char * width)


def print_header(title: str, width: int = 50) -> None:
    """Print a formatted header with separators.

    Args:
        title: Header title text
        width: Width of the separator lines
    """
    print_separator("=", width)
    typer.echo(title)
    print_separator("=", width)


def print_counts(title: str, counts: dict[str, int], unit: str = "") -> None:
    """Print a titled breakdown, one "key: count" line per entry.

    Args:
        title: Heading for the breakdown
        counts: Key -> count, printed in the given order
        unit: Optional noun appended to each count
    """
    typer.echo(f"\n{title}:")
    if not counts:
        typer.echo("  (none)")
        return
    suffix = f" {unit}" if unit else ""
    for key, count in counts.items():
        typer.echo(f"  {key or '(blank)'}: {count}{suffix}")


__all__ = [
    "data_file_option",
    "load_settings",
    "open_store",
    "parse_day",
    "print_error",
    "print_success",
    "print_info",
    "print_warning",
    "print_separator",
    "print_header",
    "print_counts",
]
