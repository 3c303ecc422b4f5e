"""
Tests for delimited input parsing
"""

from datetime import date

import pytest

from taskplan.domain.shared import SourceReadError
from taskplan.infrastructure.tabular import (
    optional_text,
    parse_date,
    parse_flag,
    parse_rows,
    read_rows,
)


def test_parse_rows_trims_and_keys_by_header():
    content = "\ufeffP.č. ; Názov úlohy;Priorita\n 1 ; Riadenie ;Vysoká\n"

    rows = parse_rows(content)

    assert rows == [{"P.č.": "1", "Názov úlohy": "Riadenie", "Priorita": "Vysoká"}]


def test_short_rows_padded_and_blank_lines_skipped():
    content = "a;b;c\n1;2\n\n;;\n4;5;6;7\n"

    rows = parse_rows(content)

    assert rows == [{"a": "1", "b": "2", "c": ""}, {"a": "4", "b": "5", "c": "6"}]


def test_quoted_delimiter_kept():
    rows = parse_rows('a;b\n"x;y";z\n')

    assert rows == [{"a": "x;y", "b": "z"}]


def test_parse_rows_empty_content():
    assert parse_rows("") == []


def test_read_rows_missing_file(tmp_path):
    with pytest.raises(SourceReadError, match="not found"):
        read_rows(tmp_path / "missing.csv")


def test_read_rows_from_file(csv_files):
    tasks_csv, documents_csv = csv_files

    assert len(read_rows(tasks_csv)) == 6
    assert len(read_rows(documents_csv)) == 3


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2025-03-31", date(2025, 3, 31)),
        ("15.02.2025", date(2025, 2, 15)),
        ("1.4.2025", date(2025, 4, 1)),
        (" 2025-12-01 ", date(2025, 12, 1)),
        ("2025-02-29", None),
        ("15/02/2025", None),
        ("", None),
        ("N/A", None),
        ("31.02.2025", None),
        ("next week", None),
    ],
)
def test_parse_date(value, expected):
    assert parse_date(value) == expected


def test_parse_flag():
    assert parse_flag("ÁNO")
    assert parse_flag(" yes ")
    assert not parse_flag("NIE")
    assert not parse_flag("")


def test_optional_text():
    assert optional_text("  ") is None
    assert optional_text(" note ") == "note"
