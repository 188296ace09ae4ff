"""User settings for the velm editor.

Settings are read from ``settings.json`` in the user's config directory as
reported by platformdirs. A missing file means defaults; an unreadable file
or a bad value is logged and replaced by its default so a broken config
never prevents the editor from starting.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional, Union

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

APP_NAME = "velm"
SETTINGS_FILE_NAME = "settings.json"
LOG_FILE_NAME = "velm.log"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    """User-tunable editor settings."""
    log_level: str = "WARNING"
    log_file: Optional[str] = None  # None means the platform log directory
    status_message_timeout: float = EditorConstants.STATUS_MESSAGE_TIMEOUT
    command_prompt: str = EditorConstants.COMMAND_PROMPT
    command_placeholder: str = EditorConstants.COMMAND_PLACEHOLDER

    def resolved_log_file(self) -> Path:
        if self.log_file:
            return Path(self.log_file).expanduser()
        return Path(platformdirs.user_log_dir(APP_NAME)) / LOG_FILE_NAME


def default_settings_path() -> Path:
    return Path(platformdirs.user_config_dir(APP_NAME)) / SETTINGS_FILE_NAME


def _valid(name: str, value: Any) -> bool:
    if name == "log_level":
        return isinstance(value, str) and value.upper() in _LOG_LEVELS
    if name == "log_file":
        return value is None or isinstance(value, str)
    if name == "status_message_timeout":
        return isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0
    return isinstance(value, str)


def settings_from_dict(data: dict[str, Any]) -> Settings:
    """Build settings from a decoded JSON object, skipping invalid values."""
    known = {f.name for f in fields(Settings)}
    values: dict[str, Any] = {}
    for name, value in data.items():
        if name not in known:
            logger.warning("Ignoring unknown setting %r", name)
            continue
        if not _valid(name, value):
            logger.warning("Ignoring invalid value %r for setting %r", value, name)
            continue
        values[name] = value.upper() if name == "log_level" else value
    return Settings(**values)


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings from ``path`` (default: the platform config directory)."""
    settings_file = Path(path) if path is not None else default_settings_path()
    if not settings_file.exists():
        return Settings()

    try:
        with open(settings_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load settings from {settings_file}: {e}")
        return Settings()

    if not isinstance(data, dict):
        logger.warning("Settings file has invalid format (not an object), ignoring")
        return Settings()
    return settings_from_dict(data)


def configure_logging(settings: Settings) -> Path:
    """Send log records to the configured log file.

    The terminal belongs to the editor, so nothing is logged to stderr.
    Returns the log file path.
    """
    log_file = settings.resolved_log_file()
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning(f"Could not create log directory {log_file.parent}: {e}")
    logging.basicConfig(
        filename=str(log_file),
        level=getattr(logging, settings.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return log_file
