"""
Pytest configuration and fixtures
"""

import logging
from datetime import date

import pytest

from taskplan.config import DocumentColumns, TaskColumns
from taskplan.domain.types import DateWindow
from taskplan.infrastructure.storage import InMemoryStore

TASK_HEADERS = list(TaskColumns().model_dump().values())
DOCUMENT_HEADERS = list(DocumentColumns().model_dump().values())

# number, type, title, description, source, priority, recurrence, start, end
TASK_LINES = [
    ("1", "Riadenie", "Riadenie projektu", "Koordinácia partnerov",
     "Príručka pre prijímateľa (str. 5)", "Vysoká", "Priebežne", "", ""),
    ("1.1", "Riadenie", "Porada tímu", "", "", "Stredná", "2x mesačne",
     "2025-01-01", "2025-03-31"),
    ("1.1.1", "Riadenie", "Zápisnica z porady", "", "", "Nízka", "Jednorazovo",
     "15.02.2025", ""),
    ("", "Riadenie", "Riadok bez čísla", "", "", "", "Priebežne", "", ""),
    ("2", "Publicita", "Aktualizácia webu", "", "Zmluva o poskytnutí NFP, čl. 3",
     "", "Raz za čas", "", ""),
    ("3", "Financie", "Záverečná správa", "", "Zmluva o poskytnutí NFP (čl. 12)",
     "Vysoká", "Po ukončení prác", "", "2025-06-30"),
]

DOCUMENT_LINES = [
    ("1", "Príručka pre prijímateľa", "Riadenie", "ÁNO", ""),
    ("2", "Zmluva o poskytnutí NFP", "Financie", "NIE", "Duplicita s prílohou"),
    ("x", "Neplatný riadok", "Riadenie", "", ""),
]


def task_row(number, task_type, title, description, source, priority, recurrence,
             start, end) -> dict[str, str]:
    """Header-keyed task row with the remaining columns blank."""
    cols = TaskColumns()
    row = {header: "" for header in TASK_HEADERS}
    row.update({
        cols.number: number,
        cols.task_type: task_type,
        cols.title: title,
        cols.description: description,
        cols.source: source,
        cols.priority: priority,
        cols.recurrence: recurrence,
        cols.start_date: start,
        cols.end_date: end,
    })
    return row


def document_row(number, name, task_type, direct, notes) -> dict[str, str]:
    cols = DocumentColumns()
    return {
        cols.internal_number: number,
        cols.original_name: name,
        cols.task_type: task_type,
        cols.is_direct_source: direct,
        cols.notes: notes,
    }


def to_csv(headers: list[str], rows: list[dict[str, str]]) -> str:
    lines = [";".join(headers)]
    lines.extend(";".join(row[header] for header in headers) for row in rows)
    return "\n".join(lines) + "\n"


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep config reads and writes inside the test's temp directory"""
    home = tmp_path / "taskplan-home"
    monkeypatch.setenv("TASKPLAN_HOME", str(home))
    for name in ("DATA_FILE", "PROJECT_START", "PROJECT_END", "LOG_LEVEL",
                 "STRICT_RECURRENCE", "TASKS_CSV", "DOCUMENTS_CSV"):
        monkeypatch.delenv(f"TASKPLAN_{name}", raising=False)
    yield home

    # The CLI attaches a stream handler; drop it so later tests start clean
    logger = logging.getLogger("taskplan")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def store():
    """Empty in-memory store"""
    return InMemoryStore()


@pytest.fixture
def window():
    """Default project window 2025-01-01 .. 2026-12-31"""
    return DateWindow(start=date(2025, 1, 1), end=date(2026, 12, 31))


@pytest.fixture
def task_rows():
    return [task_row(*line) for line in TASK_LINES]


@pytest.fixture
def document_rows():
    return [document_row(*line) for line in DOCUMENT_LINES]


@pytest.fixture
def csv_files(tmp_path, task_rows, document_rows):
    """Task and document registers written as semicolon-separated files"""
    upload = tmp_path / "upload"
    upload.mkdir()
    tasks_csv = upload / "Projektove_ulohy.csv"
    documents_csv = upload / "Prehlad_dokumentov.csv"
    tasks_csv.write_text(to_csv(TASK_HEADERS, task_rows), encoding="utf-8")
    documents_csv.write_text(to_csv(DOCUMENT_HEADERS, document_rows), encoding="utf-8")
    return tasks_csv, documents_csv
