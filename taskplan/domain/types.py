"""Domain value objects for taskplan.

Immutable value objects representing core domain concepts.
These provide type safety and domain-specific operations.
"""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class TaskNumber:
    """Immutable dot-segmented task number.

    The number encodes the task's position in the hierarchy: every
    segment but the last names the parent task.

    Example:
        number = TaskNumber.parse("2.3.1")
        parent = number.parent()  # 2.3
        root = TaskNumber.parse("2").parent()  # None
    """

    segments: tuple[str, ...]

    @classmethod
    def parse(cls, value: str, separator: str = ".") -> "TaskNumber":
        """Create a TaskNumber from a dot-separated string.

        Args:
            value: String number like "1.2.3"
            separator: Character(s) separating segments, defaults to "."

        Returns:
            New TaskNumber with parsed segments (empty for blank input)
        """
        value = value.strip()
        if not value:
            return cls(segments=())
        return cls(segments=tuple(value.split(separator)))

    def __str__(self) -> str:
        """Return the number as a dot-separated string."""
        return ".".join(self.segments)

    def parent(self) -> "TaskNumber | None":
        """Return the number with its last segment removed.

        Returns:
            The parent number, or None for single-segment and empty numbers
        """
        if len(self.segments) <= 1:
            return None
        return TaskNumber(segments=self.segments[:-1])

    @property
    def depth(self) -> int:
        """Number of segments (1 for top-level tasks)."""
        return len(self.segments)

    def sort_key(self) -> tuple[tuple[int, int, str], ...]:
        """Key ordering numbers segment-wise, numerically where possible.

        "1.9" sorts before "1.10"; non-numeric segments sort after
        numeric ones and compare as text.
        """
        return tuple(
            (0, int(segment), "") if segment.isdigit() else (1, 0, segment)
            for segment in self.segments
        )

    def __bool__(self) -> bool:
        """Return True if the number has any segments."""
        return len(self.segments) > 0


def parent_number(task_number: str) -> str | None:
    """Parent task number of a dot-segmented number, or None.

    Example:
        parent_number("1.2.3")  # "1.2"
        parent_number("4")      # None
    """
    parent = TaskNumber.parse(task_number).parent()
    return str(parent) if parent is not None else None


def number_sort_key(task_number: str) -> tuple[tuple[int, int, str], ...]:
    """Sort key for plain task-number strings."""
    return TaskNumber.parse(task_number).sort_key()


@dataclass(frozen=True)
class DateWindow:
    """Inclusive [start, end] date interval that bounds scheduling.

    A window whose start lies after its end is empty; it is still a
    valid value and simply produces no occurrences.

    Attributes:
        start: First schedulable day
        end: Last schedulable day
    """

    start: date
    end: date

    @property
    def is_empty(self) -> bool:
        """True when start is after end."""
        return self.start > self.end

    def __str__(self) -> str:
        return f"{self.start.isoformat()} .. {self.end.isoformat()}"


def effective_window(
    task_start: date | None,
    task_end: date | None,
    default: DateWindow,
) -> DateWindow:
    """Resolve the window a task is scheduled against.

    Each missing bound falls back to the matching bound of the
    project-wide default window.

    Args:
        task_start: Task-level start date, if any
        task_end: Task-level end date, if any
        default: Project window

    Returns:
        The effective window (possibly empty)
    """
    return DateWindow(
        start=task_start if task_start is not None else default.start,
        end=task_end if task_end is not None else default.end,
    )
