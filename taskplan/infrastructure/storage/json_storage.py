"""JSON file storage with Result-based error handling.

Provides a thin wrapper around file I/O operations for JSON data,
returning Result types instead of raising exceptions.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from taskplan.domain.shared.result import Err, Ok, Result


class JsonStorage:
    """Low-level JSON file I/O with Result-based error handling.

    Contains no domain logic - just file I/O. Saves go through a
    temporary file in the target directory and are moved into place,
    so a crash never leaves a half-written data file behind.

    Example:
        storage = JsonStorage()
        result = storage.load_json(Path("taskplan-data.json"))
        if isinstance(result, Ok):
            data = result.value
        else:
            print(f"Error: {result.error}")
    """

    def load_json(self, path: Path) -> Result[dict[str, Any], str]:
        """Load JSON data from a file.

        Args:
            path: Path to the JSON file to read.

        Returns:
            Ok(dict) if successful, Err(str) with error message if failed.
        """
        try:
            if not path.exists():
                return Err(f"File not found: {path}")

            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                return Err(f"Expected a JSON object in {path}")
            return Ok(data)

        except json.JSONDecodeError as e:
            return Err(f"Invalid JSON in {path}: {e}")
        except PermissionError:
            return Err(f"Permission denied reading {path}")
        except OSError as e:
            return Err(f"Error reading {path}: {e}")

    def save_json(
        self,
        path: Path,
        data: dict[str, Any],
        indent: int = 2,
    ) -> Result[None, str]:
        """Save JSON data to a file atomically.

        Args:
            path: Path to the JSON file to write.
            data: Dictionary to serialize as JSON.
            indent: JSON indentation level (default 2).

        Returns:
            Ok(None) if successful, Err(str) with error message if failed.
        """
        try:
            content = json.dumps(data, indent=indent, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            return Err(f"Data not JSON serializable: {e}")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(content)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
            return Ok(None)

        except PermissionError:
            return Err(f"Permission denied writing {path}")
        except OSError as e:
            return Err(f"Error writing {path}: {e}")
