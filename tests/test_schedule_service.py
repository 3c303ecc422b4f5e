"""
Tests for subtask regeneration
"""

from datetime import date

import pytest

from taskplan.application import (
    occurrences_for,
    reschedule_all,
    reschedule_task,
    reschedule_task_by_id,
    set_subtask_status,
    subtasks_by_month,
)
from taskplan.domain.shared import Err, Ok, StorageError
from taskplan.domain.task import RecurrenceCategory, SubtaskStatus, Task, generate_occurrences
from taskplan.infrastructure.storage import InMemoryStore


@pytest.fixture
def quarterly_task(store):
    return store.create_task(
        Task(task_number="1", title="Kontrola", recurrence=RecurrenceCategory.QUARTERLY)
    )


def test_occurrences_use_task_dates(window):
    task = Task(
        task_number="1",
        recurrence=RecurrenceCategory.ONGOING,
        start_date=date(2025, 5, 1),
        end_date=date(2025, 7, 31),
    )

    assert occurrences_for(task, window) == [date(2025, 5, 1), date(2025, 6, 1), date(2025, 7, 1)]


def test_reschedule_replaces_previous_generation(store, quarterly_task, window):
    reschedule_task(store, quarterly_task, window)
    first = store.list_subtasks(quarterly_task.id)
    store.create_subtask(first[0].model_copy(update={"id": "manual", "title": "Extra"}))

    created, event = reschedule_task(store, quarterly_task, window)

    expected = generate_occurrences(RecurrenceCategory.QUARTERLY, window.start, window.end)
    remaining = store.list_subtasks(quarterly_task.id)
    assert len(remaining) == len(expected) == 8
    assert [s.due_date for s in remaining] == expected
    assert {s.id for s in remaining}.isdisjoint({s.id for s in first} | {"manual"})
    assert event.deleted == 9
    assert event.created == 8
    assert created == remaining


def test_reschedule_resets_status(store, quarterly_task, window):
    created, _ = reschedule_task(store, quarterly_task, window)
    set_subtask_status(store, created[0].id, SubtaskStatus.COMPLETED)
    assert store.list_subtasks(status=SubtaskStatus.COMPLETED) == [
        created[0].model_copy(update={"status": SubtaskStatus.COMPLETED})
    ]

    reschedule_task(store, quarterly_task, window)

    assert all(s.status is SubtaskStatus.PENDING for s in store.list_subtasks(quarterly_task.id))


def test_empty_window_creates_nothing(store, window):
    task = store.create_task(
        Task(
            task_number="1",
            recurrence=RecurrenceCategory.ONE_TIME,
            start_date=date(2025, 6, 1),
            end_date=date(2025, 5, 1),
        )
    )

    created, event = reschedule_task(store, task, window)

    assert created == []
    assert event.created == 0


class BrokenSubtaskStore(InMemoryStore):
    """Store whose subtask inserts fail after the first one"""

    fail = False

    def create_subtask(self, subtask):
        if self.fail and self.list_subtasks():
            raise StorageError("disk full")
        return super().create_subtask(subtask)


def test_failed_regeneration_rolls_back(window):
    store = BrokenSubtaskStore()
    task = store.create_task(Task(task_number="1", recurrence=RecurrenceCategory.QUARTERLY))
    reschedule_task(store, task, window)
    before = store.list_subtasks(task.id)

    store.fail = True
    with pytest.raises(StorageError):
        reschedule_task(store, task, window)

    assert store.list_subtasks(task.id) == before


def test_reschedule_by_id(store, quarterly_task, window):
    result = reschedule_task_by_id(store, quarterly_task.id, window)

    assert isinstance(result, Ok)
    subtasks, event = result.value
    assert len(subtasks) == 8
    assert event.task_number == "1"


def test_reschedule_by_id_unknown(store, window):
    result = reschedule_task_by_id(store, "nope", window)

    assert isinstance(result, Err)
    assert "not found" in result.error


def test_reschedule_by_id_storage_failure(window):
    store = BrokenSubtaskStore()
    task = store.create_task(Task(task_number="1", recurrence=RecurrenceCategory.QUARTERLY))
    reschedule_task(store, task, window)
    store.fail = True

    result = reschedule_task_by_id(store, task.id, window)

    assert isinstance(result, Err)
    assert "disk full" in result.error


def test_reschedule_all(store, window):
    store.create_task(Task(task_number="2", recurrence=RecurrenceCategory.QUARTERLY))
    store.create_task(Task(task_number="1", recurrence=RecurrenceCategory.ONGOING))
    store.create_task(
        Task(
            task_number="1.1",
            recurrence=RecurrenceCategory.AFTER_COMPLETION,
            end_date=date(2025, 3, 31),
        )
    )

    report = reschedule_all(store, window)

    assert report.tasks_processed == 3
    assert report.failures == 0
    assert report.subtasks_created == 24 + 8 + 1
    assert report.average_per_task == 11.0
    assert report.subtasks_by_category == {"ONGOING": 24, "QUARTERLY": 8, "AFTER_COMPLETION": 1}
    assert report.subtasks_by_month["2025-01"] == 2
    assert report.subtasks_by_month["2025-03"] == 2
    assert list(report.subtasks_by_month) == sorted(report.subtasks_by_month)


def test_reschedule_all_counts_failures(window):
    store = BrokenSubtaskStore()
    store.create_task(Task(task_number="1", recurrence=RecurrenceCategory.QUARTERLY))
    store.create_task(Task(task_number="2", recurrence=RecurrenceCategory.QUARTERLY))
    store.fail = True

    report = reschedule_all(store, window)

    # Each task gets one subtask in before failing, and both roll back
    assert report.failures == 2
    assert report.tasks_processed == 0
    assert store.list_subtasks() == []


def test_subtasks_by_month_empty():
    assert subtasks_by_month([]) == {}
