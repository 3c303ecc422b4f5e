"""TaskStore persisted to a single JSON data file.

Keeps the working set in memory (see InMemoryStore) and writes the whole
file after every committed change. Load and save failures surface as
StorageError so the import pipeline can treat them like any other
backend failure.
"""

import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from taskplan.domain.shared.errors import StorageError
from taskplan.domain.shared.result import Err
from taskplan.domain.task.models import Document, Subtask, Task
from taskplan.infrastructure.storage.json_storage import JsonStorage
from taskplan.infrastructure.storage.memory import InMemoryStore

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


class JsonFileStore(InMemoryStore):
    """File-backed TaskStore.

    A missing data file means an empty store - not an error. A file that
    exists but cannot be read or parsed raises StorageError.
    """

    def __init__(self, path: Path, storage: JsonStorage | None = None) -> None:
        """Initialize the store and load any existing data.

        Args:
            path: Data file location.
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        super().__init__()
        self.path = path
        self._storage = storage or JsonStorage()
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            logger.debug("No data file at %s, starting empty", self.path)
            return

        result = self._storage.load_json(self.path)
        if isinstance(result, Err):
            raise StorageError(result.error)

        try:
            self._tasks = _index(Task, result.value.get("tasks", []))
            self._subtasks = _index(Subtask, result.value.get("subtasks", []))
            self._documents = _index(Document, result.value.get("documents", []))
        except ValidationError as e:
            raise StorageError(f"Invalid data in {self.path}: {e}") from e

        logger.debug(
            "Loaded %d tasks, %d subtasks, %d documents from %s",
            len(self._tasks),
            len(self._subtasks),
            len(self._documents),
            self.path,
        )

    def _persist(self) -> None:
        data = {
            "version": FORMAT_VERSION,
            "tasks": [t.model_dump(mode="json") for t in self.list_tasks_ordered_by_number()],
            "subtasks": [s.model_dump(mode="json") for s in self._subtasks.values()],
            "documents": [d.model_dump(mode="json") for d in self.list_documents()],
        }
        result = self._storage.save_json(self.path, data)
        if isinstance(result, Err):
            raise StorageError(result.error)


def _index(model: Any, records: list[dict[str, Any]]) -> dict[str, Any]:
    items = [model.model_validate(record) for record in records]
    return {item.id: item for item in items}
