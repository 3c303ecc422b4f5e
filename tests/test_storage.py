"""
Tests for the in-memory and JSON file stores
"""

import json
from datetime import date

import pytest
from conftest import task_row

from taskplan.application import ImportPipeline
from taskplan.domain.shared import (
    Err,
    Ok,
    StorageError,
    SubtaskNotFoundError,
    TaskNotFoundError,
)
from taskplan.domain.task import Document, RecurrenceCategory, Subtask, SubtaskStatus, Task
from taskplan.infrastructure.storage import JsonFileStore, JsonStorage


def test_create_task_upserts_by_number(store):
    parent = store.create_task(Task(task_number="1"))
    first = store.create_task(Task(task_number="1.1", title="Old"))
    store.update_task_parent(first.id, parent.id)

    second = store.create_task(Task(task_number="1.1", title="New"))

    assert second.id == first.id
    assert second.parent_id is None
    assert store.get_task(first.id).title == "New"
    assert len(store.list_tasks_ordered_by_number()) == 2


def test_update_parent_unknown_ids(store):
    task = store.create_task(Task(task_number="1"))

    with pytest.raises(TaskNotFoundError):
        store.update_task_parent("missing", task.id)
    with pytest.raises(TaskNotFoundError) as exc_info:
        store.update_task_parent(task.id, "missing")
    assert exc_info.value.task_id == "missing"


def test_create_subtask_requires_task(store):
    with pytest.raises(TaskNotFoundError):
        store.create_subtask(Subtask(task_id="missing", title="x", due_date=date(2025, 1, 1)))


def test_count_tasks_by_field(store):
    store.create_task(Task(task_number="1", recurrence=RecurrenceCategory.QUARTERLY))
    store.create_task(Task(task_number="2", recurrence=RecurrenceCategory.QUARTERLY))
    store.create_task(Task(task_number="3", recurrence=RecurrenceCategory.ONE_TIME))

    assert store.count_tasks_by_field("recurrence") == {"QUARTERLY": 2, "ONE_TIME": 1}
    with pytest.raises(StorageError):
        store.count_tasks_by_field("nonsense")


def test_find_document_by_name_contains(store):
    store.upsert_document(Document(internal_number=2, original_name="Príručka, verzia 2"))
    store.upsert_document(Document(internal_number=1, original_name="Príručka pre prijímateľa"))

    assert store.find_document_by_name_contains("PRÍRUČKA").internal_number == 1
    assert store.find_document_by_name_contains("verzia").internal_number == 2
    assert store.find_document_by_name_contains("zmluva") is None


def test_transaction_rollback_restores_subtasks(store):
    task = store.create_task(Task(task_number="1"))
    kept = store.create_subtask(Subtask(task_id=task.id, title="a", due_date=date(2025, 1, 1)))

    with pytest.raises(RuntimeError):
        with store.transaction():
            store.delete_subtasks_for_task(task.id)
            store.create_subtask(Subtask(task_id=task.id, title="b", due_date=date(2025, 2, 1)))
            raise RuntimeError("boom")

    assert store.list_subtasks(task.id) == [kept]


def test_json_store_survives_reload(tmp_path):
    path = tmp_path / "data.json"
    store = JsonFileStore(path)
    parent = store.create_task(Task(task_number="1", title="Riadenie"))
    child = store.create_task(
        Task(task_number="1.1", title="Porada", start_date=date(2025, 1, 1))
    )
    store.update_task_parent(child.id, parent.id)
    store.upsert_document(Document(internal_number=1, original_name="Príručka"))
    with store.transaction():
        store.create_subtask(Subtask(task_id=child.id, title="x", due_date=date(2025, 1, 15)))

    reloaded = JsonFileStore(path)

    assert reloaded.list_tasks_ordered_by_number() == store.list_tasks_ordered_by_number()
    assert reloaded.get_task(child.id).parent_id == parent.id
    assert reloaded.list_subtasks() == store.list_subtasks()
    assert reloaded.list_documents()[0].original_name == "Príručka"

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["version"] == 1
    assert "Príručka" in path.read_text(encoding="utf-8")


def test_json_store_missing_file_is_empty(tmp_path):
    store = JsonFileStore(tmp_path / "absent.json")

    assert store.list_tasks_ordered_by_number() == []
    assert not (tmp_path / "absent.json").exists()


def test_json_store_rejects_corrupt_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError, match="Invalid JSON"):
        JsonFileStore(path)


def test_json_store_rejects_invalid_records(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"tasks": [{"title": "no number"}]}), encoding="utf-8")

    with pytest.raises(StorageError, match="Invalid data"):
        JsonFileStore(path)


def test_json_transaction_rollback_does_not_persist(tmp_path):
    path = tmp_path / "data.json"
    store = JsonFileStore(path)
    task = store.create_task(Task(task_number="1"))

    with pytest.raises(RuntimeError):
        with store.transaction():
            store.create_subtask(Subtask(task_id=task.id, title="x", due_date=date(2025, 1, 1)))
            raise RuntimeError("boom")

    assert JsonFileStore(path).list_subtasks() == []


def test_json_storage_results(tmp_path):
    storage = JsonStorage()
    path = tmp_path / "nested" / "file.json"

    assert isinstance(storage.load_json(path), Err)
    assert isinstance(storage.save_json(path, {"a": 1}), Ok)
    assert storage.load_json(path).value == {"a": 1}

    path.write_text("[1, 2]", encoding="utf-8")
    assert isinstance(storage.load_json(path), Err)


def test_subtask_status_update_and_lookup(store):
    task = store.create_task(Task(task_number="1"))
    subtask = store.create_subtask(Subtask(task_id=task.id, title="a", due_date=date(2025, 1, 1)))

    updated = store.update_subtask_status(subtask.id, SubtaskStatus.COMPLETED)

    assert updated.status is SubtaskStatus.COMPLETED
    assert store.get_subtask(subtask.id) == updated
    assert store.get_subtask("missing") is None
    with pytest.raises(SubtaskNotFoundError) as exc_info:
        store.update_subtask_status("missing", SubtaskStatus.COMPLETED)
    assert exc_info.value.subtask_id == "missing"


def test_list_subtasks_filters(store):
    first = store.create_task(Task(task_number="1"))
    second = store.create_task(Task(task_number="2"))
    for task, day in [(second, 20), (first, 10), (first, 5), (second, 1)]:
        store.create_subtask(Subtask(task_id=task.id, title="x", due_date=date(2025, 3, day)))
    late = store.list_subtasks(first.id)[-1]
    store.update_subtask_status(late.id, SubtaskStatus.OVERDUE)

    def days(**filters):
        return [s.due_date.day for s in store.list_subtasks(**filters)]

    assert days() == [1, 5, 10, 20]
    assert days(task_id=first.id) == [5, 10]
    assert days(status=SubtaskStatus.OVERDUE) == [10]
    assert days(status=SubtaskStatus.PENDING, task_id=first.id) == [5]
    assert days(due_from=date(2025, 3, 5), due_to=date(2025, 3, 10)) == [5, 10]
    assert days(due_from=date(2025, 3, 21)) == []


class FlakyStorage(JsonStorage):
    """JsonStorage whose next save can be made to fail"""

    def __init__(self):
        self.fail_next = False

    def save_json(self, path, data, indent=2):
        if self.fail_next:
            self.fail_next = False
            return Err("disk full")
        return super().save_json(path, data, indent)


def test_failed_save_leaves_no_record_behind(tmp_path):
    path = tmp_path / "data.json"
    storage = FlakyStorage()
    store = JsonFileStore(path, storage)
    store.create_task(Task(task_number="1"))

    storage.fail_next = True
    with pytest.raises(StorageError, match="disk full"):
        store.create_task(Task(task_number="2"))
    store.create_task(Task(task_number="3"))

    numbers = [t.task_number for t in store.list_tasks_ordered_by_number()]
    reloaded = [t.task_number for t in JsonFileStore(path).list_tasks_ordered_by_number()]
    assert numbers == reloaded == ["1", "3"]


def test_failed_status_save_keeps_old_status(tmp_path):
    path = tmp_path / "data.json"
    storage = FlakyStorage()
    store = JsonFileStore(path, storage)
    task = store.create_task(Task(task_number="1"))
    subtask = store.create_subtask(Subtask(task_id=task.id, title="a", due_date=date(2025, 1, 1)))

    storage.fail_next = True
    with pytest.raises(StorageError):
        store.update_subtask_status(subtask.id, SubtaskStatus.COMPLETED)

    assert store.get_subtask(subtask.id).status is SubtaskStatus.PENDING


def test_import_row_that_fails_to_save_is_not_persisted(tmp_path):
    path = tmp_path / "data.json"
    storage = FlakyStorage()
    store = JsonFileStore(path, storage)
    pipeline = ImportPipeline(store)
    pipeline.import_tasks([task_row("1", "", "Root", "", "", "", "Jednorazovo", "", "")])

    storage.fail_next = True
    report = pipeline.import_tasks(
        [
            task_row("2", "", "Lost", "", "", "", "Jednorazovo", "", ""),
            task_row("3", "", "Kept", "", "", "", "Jednorazovo", "", ""),
        ]
    )

    assert report.tasks_created == 1
    assert report.tasks_skipped == 1
    assert report.skipped_rows()[0].reason == "storage error: disk full"
    reloaded = JsonFileStore(path)
    assert [t.task_number for t in reloaded.list_tasks_ordered_by_number()] == ["1", "3"]
