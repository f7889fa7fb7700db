"""Tests for logging_setup.py."""

import logging
from pathlib import Path

import pytest

from tasktui.logging_setup import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield root
    for h in list(root.handlers):
        if isinstance(h, logging.FileHandler):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    logging.captureWarnings(False)


class TestSetupLogging:
    def test_writes_to_file_only(self, tmp_path: Path, restore_root_logger) -> None:
        log_file = setup_logging(log_dir=tmp_path / "logs", level="DEBUG")

        logging.getLogger("tasktui.test").debug("hello %s", "file")
        for h in restore_root_logger.handlers:
            h.flush()

        assert log_file == tmp_path / "logs" / "tasktui.log"
        assert "hello file" in log_file.read_text()
        assert all(
            isinstance(h, logging.FileHandler) for h in restore_root_logger.handlers
        )

    def test_repeated_setup_does_not_duplicate(
        self, tmp_path: Path, restore_root_logger
    ) -> None:
        setup_logging(log_dir=tmp_path)
        setup_logging(log_dir=tmp_path)

        assert len(restore_root_logger.handlers) == 1
