"""Tests for logging setup."""

import logging
import sys

from pecahan_pkg.logging_config import StructuredFormatter, get_logger, setup_logging


def test_module_loggers_share_one_root():
    assert get_logger("worker").name == "pecahan.worker"
    assert get_logger("worker").parent is logging.getLogger("pecahan")


def test_setup_replaces_handlers(tmp_path):
    log_file = tmp_path / "pecahan.log"
    logger = setup_logging("debug", str(log_file))
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    logger = setup_logging("ERROR")
    assert logger.level == logging.ERROR
    assert len(logger.handlers) == 1


def test_setup_writes_structured_lines(tmp_path):
    log_file = tmp_path / "pecahan.log"
    setup_logging("INFO", str(log_file))
    get_logger("session").info("Angle unit set to %s", "deg")
    for handler in logging.getLogger("pecahan").handlers:
        handler.flush()
    line = log_file.read_text(encoding="utf-8").strip()
    assert line.endswith("[INFO] pecahan.session: Angle unit set to deg")
    setup_logging("WARNING")


def test_formatter_appends_traceback():
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.getLogger("pecahan.test").makeRecord(
            "pecahan.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info()
        )
    text = StructuredFormatter().format(record)
    assert "[ERROR] pecahan.test: failed" in text
    assert "ValueError: boom" in text
