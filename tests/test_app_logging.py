"""Tests for logging configuration."""

import logging

from caltrack.app_logging import configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger("caltrack")
    logger.handlers.clear()

    configure_logging(log_file=None)
    first_count = len(logger.handlers)

    configure_logging(log_file=None)
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.propagate is False
    logger.handlers.clear()


def test_configure_logging_writes_to_file(tmp_path) -> None:
    logger = logging.getLogger("caltrack")
    logger.handlers.clear()
    log_file = tmp_path / "logs" / "caltrack.log"

    configure_logging("debug", str(log_file))
    logging.getLogger("caltrack.services.catalog").info("Food created")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    assert isinstance(logger.handlers[0], logging.FileHandler)
    assert "INFO: caltrack.services.catalog: Food created" in log_file.read_text(
        encoding="utf-8"
    )
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
