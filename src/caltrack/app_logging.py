"""Logging configuration helpers."""

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s: %(name)s: %(message)s"


def configure_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure the ``caltrack`` logger with a single handler.

    The terminal UI owns stdout, so a log file is preferred when configured.
    """
    logger = logging.getLogger("caltrack")
    logger.setLevel(level.upper())
    if logger.handlers:
        return
    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
