"""Logging utilities for repolist runs."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "repolist"

TICK = "✔"
CROSS = "✖"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the repolist hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class CheckpointFormatter(logging.Formatter):
    """Prefix checkpoint records with their glyph instead of the level name."""

    def __init__(self) -> None:
        super().__init__("[repolist] %(levelname)s %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        success = getattr(record, "checkpoint", None)
        if success is None:
            return super().format(record)
        glyph = TICK if success else CROSS
        return f"[repolist] {glyph} {record.getMessage()}"


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the repolist logger with console output and optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(CheckpointFormatter())
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


def checkpoint(message: str, *, success: bool = True, logger: logging.Logger | None = None) -> None:
    """Log a progress line; the console shows it behind a tick or a cross."""
    target = logger or get_logger()
    level = logging.INFO if success else logging.WARNING
    target.log(level, "%s", message, extra={"checkpoint": success})


__all__ = ["CROSS", "CheckpointFormatter", "TICK", "checkpoint", "configure_logging", "get_logger"]
