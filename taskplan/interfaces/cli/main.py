"""Entry point for the taskplan CLI.

Usage:
    python -m taskplan.interfaces.cli.main

Or via installed entry point:
    taskplan <command>
"""

from taskplan.interfaces.cli import app


def main() -> None:
    """Run the taskplan CLI application."""
    app()


if __name__ == "__main__":
    main()
