"""Logging setup for archanalyzer runs."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "archanalyzer"

# Progress lines stay terse; debug output names the emitting component.
_CONSOLE_FORMAT = "archanalyzer: %(message)s"
_VERBOSE_FORMAT = "archanalyzer [%(levelname)s %(component)s] %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class _ComponentFilter(logging.Filter):
    """Expose the logger suffix (``digest``, ``llm`` ...) as ``%(component)s``."""

    def filter(self, record: logging.LogRecord) -> bool:
        _, _, component = record.name.partition(".")
        record.component = component or "main"
        return True


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a component logger under the archanalyzer hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install console (and optional file) handlers on the archanalyzer logger.

    ``quiet`` hides progress messages and keeps warnings and errors;
    ``verbose`` wins over ``quiet`` and adds debug output with component names.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.addFilter(_ComponentFilter())
    console.setFormatter(logging.Formatter(_VERBOSE_FORMAT if verbose else _CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["configure_logging", "get_logger"]
