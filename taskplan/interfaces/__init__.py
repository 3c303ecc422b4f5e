"""Interfaces layer for taskplan.

This layer contains adapters for external interactions:
- CLI: Command-line interface using Typer

The interfaces layer is responsible for:
- Accepting user input and validating it
- Calling application services
- Formatting output for the user
"""

from taskplan.interfaces.cli import app

__all__ = ["app"]
