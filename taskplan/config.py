"""Configuration for taskplan.

Settings live in ~/.taskplan/config.json (the directory can be moved
with TASKPLAN_HOME). Any setting can be overridden with a TASKPLAN_*
environment variable, e.g. TASKPLAN_PROJECT_END=2027-06-30. A missing
or invalid file falls back to the defaults.
"""

import json
import logging
import os
from datetime import date
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from taskplan.domain.types import DateWindow

logger = logging.getLogger(__name__)

CONFIG_FILE = "config.json"
ENV_PREFIX = "TASKPLAN_"

# Cooperation programme period: 01.01.2025 - 31.12.2026
PROJECT_START = date(2025, 1, 1)
PROJECT_END = date(2026, 12, 31)


class TaskColumns(BaseModel):
    """Header names of the task register."""

    number: str = "P.č."
    task_type: str = "Typ úlohy"
    title: str = "Názov úlohy"
    description: str = "Detailný popis"
    source: str = "Zdroj (dokument, strana)"
    priority: str = "Priorita"
    recurrence: str = "Opakovanie"
    start_date: str = "Začiatok"
    end_date: str = "Ukončenie"
    duration: str = "Trvanie"
    responsible_person: str = "Zodpovedná osoba"
    expected_result: str = "Očakávaný výsledok"
    fulfills_kc: str = "Plní KC?"
    notes: str = "Poznámky"


class DocumentColumns(BaseModel):
    """Header names of the document register."""

    internal_number: str = "Interné P.č."
    original_name: str = "Názov dokumentu (originálny)"
    task_type: str = "Typ úlohy (hlavná kategória)"
    is_direct_source: str = "Priamy zdroj pre úlohu v Projektove_ulohy.csv?"
    notes: str = "Poznámky (Duplicita/Kontext)"


class TaskplanConfig(BaseModel):
    """User-level taskplan settings."""

    project_start: date = PROJECT_START
    project_end: date = PROJECT_END
    data_file: Path = Path("taskplan-data.json")
    tasks_csv: Path = Path("upload/Projektove_ulohy.csv")
    documents_csv: Path = Path("upload/Prehlad_dokumentov.csv")
    delimiter: str = ";"
    strict_recurrence: bool = Field(
        default=False,
        description="Reject unknown recurrence labels instead of scheduling them quarterly",
    )
    log_level: str = "INFO"
    task_columns: TaskColumns = Field(default_factory=TaskColumns)
    document_columns: DocumentColumns = Field(default_factory=DocumentColumns)

    @property
    def project_window(self) -> DateWindow:
        """Default scheduling window for tasks without their own dates."""
        return DateWindow(start=self.project_start, end=self.project_end)


def get_config_dir() -> Path:
    """Get the taskplan config directory."""
    override = os.environ.get(f"{ENV_PREFIX}HOME")
    config_dir = Path(override) if override else Path.home() / ".taskplan"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def _env_overrides() -> dict[str, str]:
    overrides = {}
    for name, field in TaskplanConfig.model_fields.items():
        if field.annotation in (TaskColumns, DocumentColumns):
            continue
        value = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None:
            overrides[name] = value
    return overrides


def load_config() -> TaskplanConfig:
    """Load configuration from the config file and environment."""
    data: dict = {}
    config_file = get_config_dir() / CONFIG_FILE
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable config %s: %s", config_file, e)
            data = {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config %s: expected a JSON object", config_file)
            data = {}

    try:
        return TaskplanConfig.model_validate({**data, **_env_overrides()})
    except ValidationError as e:
        logger.warning("Invalid configuration, using defaults: %s", e)
        return TaskplanConfig()


def save_config(config: TaskplanConfig) -> Path:
    """Save configuration to the config file."""
    config_file = get_config_dir() / CONFIG_FILE
    config_file.write_text(
        json.dumps(config.model_dump(mode="json"), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    return config_file
