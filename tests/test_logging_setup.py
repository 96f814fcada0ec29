import logging
from logging.handlers import RotatingFileHandler

import pytest

from backend.roadrisk.logging_setup import LOG_FILE, configure_logging


@pytest.fixture
def scratch_logger():
    name = "roadrisk.test-scratch"
    yield name
    log = logging.getLogger(name)
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()


def test_configure_logging_attaches_file_and_console_once(scratch_logger, tmp_path):
    log = configure_logging(scratch_logger, "DEBUG", str(tmp_path / "logs"))
    configure_logging(scratch_logger, "DEBUG", str(tmp_path / "other"))

    kinds = sorted(type(h).__name__ for h in log.handlers)
    assert kinds == ["RotatingFileHandler", "StreamHandler"]
    assert log.level == logging.DEBUG
    assert not (tmp_path / "other").exists()


def test_configure_logging_writes_formatted_lines(scratch_logger, tmp_path):
    log = configure_logging(scratch_logger, "INFO", str(tmp_path))
    log.info("zone seed done")
    log.debug("below level")
    for handler in log.handlers:
        handler.flush()

    text = (tmp_path / LOG_FILE).read_text(encoding="utf-8")
    assert f"[INFO] - {scratch_logger} - zone seed done" in text
    assert "below level" not in text
    file_handler = next(h for h in log.handlers if isinstance(h, RotatingFileHandler))
    assert file_handler.backupCount == 3
