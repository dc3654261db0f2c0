"""Unit tests for logging configuration"""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from searcher.logging_config import setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_console_only(restore_root_logger):
    assert setup_logging(log_file=None, console_level=logging.INFO) is None

    handlers = restore_root_logger.handlers
    assert len(handlers) == 1
    assert handlers[0].level == logging.INFO


def test_file_logging(tmp_path, restore_root_logger):
    session_log = setup_logging(log_file=str(tmp_path / "logs" / "searcher.log"))

    assert session_log.parent == tmp_path / "logs"
    assert session_log.name.startswith("searcher_")
    assert any(isinstance(h, RotatingFileHandler) for h in restore_root_logger.handlers)

    logging.getLogger("searcher.test").debug("indexed something")
    for handler in restore_root_logger.handlers:
        handler.flush()
    assert "indexed something" in session_log.read_text()


def test_old_session_logs_cleaned_up(tmp_path, restore_root_logger):
    log_dir = tmp_path / "logs"
    log_dir.mkdir()
    for day in range(1, 8):
        (log_dir / f"searcher_2024010{day}_000000.log").write_text("old")

    setup_logging(log_file=str(log_dir / "searcher.log"))

    remaining = sorted(p.name for p in log_dir.glob("searcher_2024*.log"))
    assert remaining == [f"searcher_2024010{day}_000000.log" for day in range(4, 8)]
