"""Logger hierarchy and handler setup for assetgraph."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import IO, Optional

_ROOT = "assetgraph"
_CONSOLE_FORMAT = "[assetgraph] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(component: str | None = None) -> logging.Logger:
    """Return ``assetgraph.<component>``, or the package logger itself."""
    if not component:
        return logging.getLogger(_ROOT)
    return logging.getLogger(f"{_ROOT}.{component}")


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    log_file: Path | None = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Route assetgraph records to stderr, plus ``log_file`` when given.

    Only warnings reach the console unless ``verbose`` is set; command output
    goes to stdout and must stay clean.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = get_logger()
    logger.setLevel(level)
    logger.propagate = False

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()

    logger.addHandler(_handler(logging.StreamHandler(stream or sys.stderr), level, _CONSOLE_FORMAT))
    if log_file is not None:
        logger.addHandler(
            _handler(logging.FileHandler(log_file, encoding="utf-8"), level, _FILE_FORMAT)
        )
    return logger


__all__ = ["configure_logging", "get_logger"]
