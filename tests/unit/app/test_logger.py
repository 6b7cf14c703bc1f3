"""Tests for logging setup and ContextualLogger."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

import pytest

from rpiui_remote.log_config.logger import ContextualLogger, get_logger, setup_logging


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    saved = (root.level, root.handlers[:])
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in saved[1]:
            handler.close()
    root.setLevel(saved[0])
    for handler in saved[1]:
        root.addHandler(handler)


class TestSetupLogging:
    def test_console_and_file(self, tmp_path, restore_root):
        setup_logging("DEBUG", str(tmp_path / "logs"))
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert any(isinstance(h, RotatingFileHandler) for h in root.handlers)
        assert (tmp_path / "logs").is_dir()

    def test_console_only(self, restore_root):
        setup_logging("WARNING", None)
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert not any(isinstance(h, RotatingFileHandler) for h in root.handlers)

    def test_reinit_replaces_handlers(self, restore_root):
        setup_logging("INFO", None)
        setup_logging("INFO", None)
        assert len(logging.getLogger().handlers) == 1


class TestContextualLogger:
    def test_prefix(self, caplog):
        caplog.set_level("INFO")
        log = ContextualLogger(get_logger("rpiui_remote.test"), button=3)
        log.info("Button %d pushed", 3)
        assert "[button=3] Button 3 pushed" in caplog.text

    def test_warning_prefix(self, caplog):
        caplog.set_level("INFO")
        log = ContextualLogger(get_logger("rpiui_remote.test"), button=1)
        log.warning("I/O error while sending data: %s", "broken pipe")
        assert "[button=1] I/O error while sending data: broken pipe" in caplog.text
        assert caplog.records[-1].levelname == "WARNING"
