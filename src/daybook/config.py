"""Configuration management for Daybook."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .core.events import Category
from .core.errors import ValidationError
from .core.interval import parse_range
from .core.month import Weekday

logger = logging.getLogger(__name__)

DAYBOOK_HOME = Path(os.environ.get("DAYBOOK_HOME", Path.home() / "daybook"))
CONFIG_FILE = DAYBOOK_HOME / "config" / "daybook.conf"
DATA_DIR = DAYBOOK_HOME / "data"
EXPORT_DIR = DAYBOOK_HOME / "exports"


@dataclass
class Config:
    """Daybook configuration."""

    data_dir: str = ""
    storage_key: str = "events"
    export_dir: str = ""
    week_start: str = "Sunday"
    default_category: str = "Work"
    work_hours: str = "09:00-17:00"

    def resolved_data_dir(self) -> Path:
        return Path(self.data_dir).expanduser() if self.data_dir else DATA_DIR

    def resolved_export_dir(self) -> Path:
        return Path(self.export_dir).expanduser() if self.export_dir else EXPORT_DIR


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from daybook.conf file."""
    config = Config()
    config_file = Path(path) if path else CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "data_dir":
                config.data_dir = value
            case "storage_key":
                if value:
                    config.storage_key = value
            case "export_dir":
                config.export_dir = value
            case "week_start":
                try:
                    config.week_start = Weekday.parse(value).name.title()
                except ValueError as e:
                    logger.warning(f"Ignoring WEEK_START: {e}")
            case "default_category":
                try:
                    config.default_category = Category.parse(value).value
                except ValidationError as e:
                    logger.warning(f"Ignoring DEFAULT_CATEGORY: {e}")
            case "work_hours":
                try:
                    config.work_hours = parse_range(value).format()
                except ValidationError as e:
                    logger.warning(f"Ignoring WORK_HOURS: {e}")

    return config
