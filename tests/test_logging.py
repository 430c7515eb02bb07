"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from gobble.core.logging import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Leave the root logger as it was found."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    for handler in root_logger.handlers:
        if handler not in handlers:
            handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    for name in ("urllib3", "requests"):
        logging.getLogger(name).setLevel(logging.NOTSET)


class TestSetupLogging:
    def test_console_handler_only(self):
        setup_logging("WARNING")

        root_logger = logging.getLogger()
        assert root_logger.level == logging.WARNING
        assert len(root_logger.handlers) == 1
        assert isinstance(root_logger.handlers[0], RichHandler)

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("chatty")
        assert logging.getLogger().level == logging.INFO

    def test_log_file_receives_records(self, tmp_path):
        log_file = tmp_path / "logs" / "gobble.log"

        setup_logging("DEBUG", log_file=log_file)
        logging.getLogger("gobble.test").debug("fetched 42 bytes")
        for handler in logging.getLogger().handlers:
            handler.flush()

        text = log_file.read_text(encoding="utf-8")
        assert "gobble.test - DEBUG - fetched 42 bytes" in text

    def test_http_stack_quiet_unless_debugging(self):
        setup_logging("INFO")
        assert logging.getLogger("urllib3").level == logging.WARNING

        setup_logging("DEBUG")
        assert logging.getLogger("urllib3").level == logging.DEBUG
