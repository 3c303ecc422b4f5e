"""Shared domain utilities.

This package provides common building blocks used across domain modules:

- Result monad for explicit error handling
- The taskplan exception hierarchy
"""

from taskplan.domain.shared.errors import (
    SourceReadError,
    StorageError,
    SubtaskNotFoundError,
    TaskNotFoundError,
    TaskplanError,
    UnknownRecurrenceError,
)
from taskplan.domain.shared.result import Err, Ok, Result, is_err

__all__ = [
    # Result monad
    "Ok",
    "Err",
    "Result",
    "is_err",
    # Errors
    "TaskplanError",
    "UnknownRecurrenceError",
    "StorageError",
    "TaskNotFoundError",
    "SubtaskNotFoundError",
    "SourceReadError",
]
