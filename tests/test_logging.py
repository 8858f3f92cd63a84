"""Tests for logging configuration."""

import logging

import pytest

from revision_diff.logging import configure_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_sets_level_and_single_console_handler():
    configure_logging("debug")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)


def test_quiets_sdk_loggers():
    configure_logging()
    assert logging.getLogger("azure.cosmos").level == logging.WARNING
    assert logging.getLogger("httpx").level == logging.WARNING


def test_log_file_handler(tmp_path):
    log_file = tmp_path / "app.log"
    configure_logging("INFO", log_file=str(log_file))
    logging.getLogger("revision_diff.test").info("Started — env=%s", "test")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "Started — env=test" in log_file.read_text(encoding="utf-8")
