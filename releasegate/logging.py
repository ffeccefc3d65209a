"""Diagnostic logging for the release gate, kept apart from the stdout trace."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "releasegate"
_CONSOLE_FORMAT = "[releasegate] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger for one gate component, e.g. ``get_logger("git")`` -> ``releasegate.git``."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route gate diagnostics (git commands, resolved refs, slot decisions).

    stderr shows warnings only, or everything with ``verbose``. ``log_file``
    records every git command at DEBUG regardless, so a failed CI gate can be
    replayed from its log. Pass/fail lines never go through here; the
    reporter prints them to stdout.
    """
    console_level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if log_file is not None else console_level)
    logger.propagate = False

    # One set of sinks per process, even when main() runs repeatedly (tests).
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)

    return logger


__all__ = ["configure_logging", "get_logger"]
