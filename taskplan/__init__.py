"""taskplan - recurrence-driven task scheduler and hierarchy builder.

Imports a flat list of dot-numbered project tasks, rebuilds their
parent/child tree and expands each task's recurrence into dated subtasks
bounded by the project window.
"""

__version__ = "0.1.0"
