"""Result monad for explicit error handling in service operations.

Lookups that can legitimately miss (a task id that does not exist) and
file I/O return a Result instead of raising, so callers decide how to
report the failure.

Example usage:
    >>> def find_task(task_id: str) -> Result[str, str]:
    ...     if task_id == "missing":
    ...         return Err("Task not found: missing")
    ...     return Ok(task_id)
    ...
    >>> result = find_task("abc")
    >>> if isinstance(result, Ok):
    ...     print(result.value)
    abc
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Represents a successful result containing a value.

    Attributes:
        value: The success value of type T.
    """

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Represents a failed result containing an error.

    Attributes:
        error: The error value of type E.
    """

    error: E


# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def is_err(result: Ok[T] | Err[E]) -> bool:
    """Check if a result is an error."""
    return isinstance(result, Err)
