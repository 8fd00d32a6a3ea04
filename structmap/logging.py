"""Logging utilities for structmap runs."""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import FingerprintResult

_LOGGER_NAME = "structmap"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a component logger under the structmap hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the structmap logger with console output and optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so repeated CLI invocations in one process do not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[structmap] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


def log_run_summary(logger: logging.Logger, result: FingerprintResult) -> None:
    """Report a finished fingerprint run: totals at INFO, category breakdown at DEBUG."""
    logger.info(
        "Fingerprinted %d files across %d directories (architecture: %s)",
        len(result.file_classifications),
        len(result.directory_analyses),
        result.architecture_pattern.type,
    )
    if result.skipped_paths or result.unattributed_modules:
        logger.info(
            "Skipped %d malformed path(s); %d module(s) left unattributed",
            len(result.skipped_paths),
            len(result.unattributed_modules),
        )
    if logger.isEnabledFor(logging.DEBUG):
        totals = Counter(item.category.value for item in result.file_classifications)
        breakdown = ", ".join(f"{name}={count}" for name, count in sorted(totals.items()))
        logger.debug("Category totals: %s", breakdown or "none")


__all__ = ["configure_logging", "get_logger", "log_run_summary"]
