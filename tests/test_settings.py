"""Unit tests for settings loading."""

import json
import logging

from velm.constants import EditorConstants
from velm.settings import Settings, configure_logging, load_settings, settings_from_dict


def test_missing_file_gives_defaults(tmp_path):
    settings = load_settings(tmp_path / "settings.json")
    assert settings == Settings()
    assert settings.status_message_timeout == EditorConstants.STATUS_MESSAGE_TIMEOUT
    assert settings.command_prompt == ":"


def test_load_values(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "log_level": "debug",
        "status_message_timeout": 1,
        "command_prompt": "> ",
    }), encoding="utf-8")
    settings = load_settings(path)
    assert settings.log_level == "DEBUG"
    assert settings.status_message_timeout == 1
    assert settings.command_prompt == "> "
    assert settings.command_placeholder == EditorConstants.COMMAND_PLACEHOLDER


def test_invalid_json_gives_defaults(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert load_settings(path) == Settings()
    assert "Could not load settings" in caplog.text


def test_non_object_gives_defaults(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert load_settings(path) == Settings()
    assert "not an object" in caplog.text


def test_unknown_and_invalid_values_are_skipped(caplog):
    with caplog.at_level(logging.WARNING):
        settings = settings_from_dict({
            "theme": "dark",
            "log_level": "LOUD",
            "status_message_timeout": -1,
            "command_prompt": 3,
            "log_file": "~/velm.log",
        })
    assert settings.log_level == "WARNING"
    assert settings.status_message_timeout == EditorConstants.STATUS_MESSAGE_TIMEOUT
    assert settings.command_prompt == ":"
    assert settings.log_file == "~/velm.log"
    assert "unknown setting 'theme'" in caplog.text
    assert "'log_level'" in caplog.text


def test_boolean_is_not_a_timeout():
    assert settings_from_dict({"status_message_timeout": True}).status_message_timeout == \
        EditorConstants.STATUS_MESSAGE_TIMEOUT


def test_resolved_log_file(tmp_path):
    settings = Settings(log_file=str(tmp_path / "logs" / "velm.log"))
    assert settings.resolved_log_file() == tmp_path / "logs" / "velm.log"
    assert Settings().resolved_log_file().name == "velm.log"


def test_configure_logging_creates_log_directory(tmp_path):
    settings = Settings(log_file=str(tmp_path / "logs" / "velm.log"))
    assert configure_logging(settings) == tmp_path / "logs" / "velm.log"
    assert (tmp_path / "logs").is_dir()
