"""Delimiter-separated tabular input.

The task and document registers are exported as semicolon-separated
text with a header line. Rows come back as header -> value mappings;
a header a short row has no value for maps to an empty string.

Also holds the cell-level parsers for dates and yes/no flags used by
the import pipeline.
"""

import csv
import io
import logging
from datetime import date, datetime
from pathlib import Path

from taskplan.domain.shared.errors import SourceReadError

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ";"

Row = dict[str, str]

DATE_FORMATS = ("%Y-%m-%d", "%d.%m.%Y")
_MISSING = {"", "n/a"}
_YES = {"áno", "ano", "yes", "true"}


def parse_rows(content: str, delimiter: str = DEFAULT_DELIMITER) -> list[Row]:
    """Parse delimited text into header-keyed rows.

    Headers and values are trimmed. Blank lines are skipped. Values
    beyond the last header are ignored.

    Args:
        content: Full text, first line holding the headers
        delimiter: Field separator

    Returns:
        One mapping per data line, in source order
    """
    reader = csv.reader(io.StringIO(content.lstrip("\ufeff")), delimiter=delimiter)
    try:
        headers = [header.strip() for header in next(reader)]
    except StopIteration:
        return []

    rows: list[Row] = []
    for values in reader:
        values = [value.strip() for value in values]
        if not any(values):
            continue
        rows.append(
            {
                header: values[index] if index < len(values) else ""
                for index, header in enumerate(headers)
            }
        )
    return rows


def read_rows(path: Path, delimiter: str = DEFAULT_DELIMITER) -> list[Row]:
    """Read and parse a delimited file.

    Raises:
        SourceReadError: If the file is missing or unreadable
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SourceReadError(f"Input file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise SourceReadError(f"Cannot read {path}: {e}") from e

    rows = parse_rows(content, delimiter)
    logger.info("Read %d rows from %s", len(rows), path)
    return rows


def parse_date(value: str) -> date | None:
    """Parse YYYY-MM-DD, DD.MM.YYYY or D.M.YYYY; None when absent or invalid."""
    value = value.strip()
    if value.casefold() in _MISSING:
        return None

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue

    logger.debug("Unparseable date %r", value)
    return None


def parse_flag(value: str) -> bool:
    """Interpret a yes/no cell ("ÁNO" and friends are yes)."""
    return value.strip().casefold() in _YES


def optional_text(value: str) -> str | None:
    """Empty cells become None."""
    value = value.strip()
    return value or None
