import json
import logging

import pytest
from pythonjsonlogger import jsonlogger

from task_notifications.app import config
from task_notifications.app.config import Settings, get_prefix
from task_notifications.app.logging_config import HANDLER_NAME, setup_logging


@pytest.mark.parametrize("path_prefix, expected", [
    ("", ""),
    ("functions", "/functions"),
    ("/functions/", "/functions"),
])
def test_get_prefix(path_prefix, expected):
    assert get_prefix(path_prefix) == expected


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("FCM_BATCH_SIZE", "100")
    monkeypatch.setenv("FCM_DRY_RUN", "true")

    settings = Settings()

    assert settings.fcm_batch_size == 100
    assert settings.fcm_dry_run is True


def test_settings_reject_oversized_batches(monkeypatch):
    monkeypatch.setenv("FCM_BATCH_SIZE", "1000")

    with pytest.raises(ValueError):
        Settings()


def app_handler(root_logger):
    handlers = [h for h in root_logger.handlers if h.get_name() == HANDLER_NAME]
    assert len(handlers) == 1
    return handlers[0]


def test_setup_logging_json(root_logger):
    setup_logging(Settings(service_name="task-notifications-test", environment="prod", log_level="debug"))

    assert root_logger.level == logging.DEBUG
    formatter = app_handler(root_logger).formatter
    assert isinstance(formatter, jsonlogger.JsonFormatter)

    record = logging.LogRecord("test", logging.INFO, __file__, 1, "Sending notifications to 2 devices", None, None)
    payload = json.loads(formatter.format(record))
    assert payload["message"] == "Sending notifications to 2 devices"
    assert payload["service"] == "task-notifications-test"
    assert payload["environment"] == "prod"


def test_setup_logging_text(root_logger):
    setup_logging(Settings(log_format="text"))

    formatter = app_handler(root_logger).formatter
    assert not isinstance(formatter, jsonlogger.JsonFormatter)


def test_setup_logging_twice_keeps_one_handler(root_logger):
    setup_logging(Settings())
    setup_logging(Settings())

    app_handler(root_logger)


def test_get_prefix_defaults_to_settings(monkeypatch):
    monkeypatch.setattr(config, "settings", Settings(path_prefix="functions"))

    assert get_prefix() == "/functions"
