"""taskplan CLI.

Re-exports the CLI from taskplan.interfaces.cli so ``python -m taskplan.cli``
works without the installed entry point.
"""

from taskplan.interfaces.cli import app
from taskplan.interfaces.cli.main import main

__all__ = ["app", "main"]

if __name__ == "__main__":
    main()
