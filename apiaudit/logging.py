"""Logging utilities for apiaudit commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "apiaudit"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the apiaudit hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the apiaudit logger with console output and optional file sink.

    ``quiet`` limits the console to warnings so machine-readable reports on
    stdout are not interleaved with progress lines; ``verbose`` wins over it.
    """
    level = logging.DEBUG if verbose else logging.INFO
    console_level = level if verbose or not quiet else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(console_level)
    stream_handler.setFormatter(logging.Formatter("[apiaudit] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
