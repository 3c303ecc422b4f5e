"""Storage infrastructure for taskplan.

Provides the TaskStore interface and its backends:

- InMemoryStore - dictionaries, used by tests and as a base class
- JsonFileStore - InMemoryStore persisted to one JSON data file
- JsonStorage - Result-returning JSON file I/O used by JsonFileStore
"""

from taskplan.infrastructure.storage.base import TaskStore, iter_subtasks_by_task
from taskplan.infrastructure.storage.json_storage import JsonStorage
from taskplan.infrastructure.storage.json_store import JsonFileStore
from taskplan.infrastructure.storage.memory import InMemoryStore

__all__ = [
    "TaskStore",
    "iter_subtasks_by_task",
    "InMemoryStore",
    "JsonFileStore",
    "JsonStorage",
]
