"""Exception hierarchy shared by all taskplan layers."""


class TaskplanError(Exception):
    """Base exception for taskplan errors."""


class UnknownRecurrenceError(TaskplanError, ValueError):
    """Raised in strict mode when a recurrence label is not recognized."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"Unknown recurrence category: {label!r}")


class StorageError(TaskplanError):
    """Raised by storage backends when a read or write fails."""


class TaskNotFoundError(StorageError):
    """Raised when a write targets a task id the store does not hold."""

    def __init__(self, task_id: str) -> None:
        self.task_id = task_id
        super().__init__(f"Task not found: {task_id}")


class SourceReadError(TaskplanError):
    """Raised when a tabular input source cannot be read at all."""


class SubtaskNotFoundError(StorageError):
    """Raised when a write targets a subtask id the store does not hold."""

    def __init__(self, subtask_id: str) -> None:
        self.subtask_id = subtask_id
        super().__init__(f"Subtask not found: {subtask_id}")
