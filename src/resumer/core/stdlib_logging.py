from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from resumer.core.file_io import ensure_parent_dir

ROOT_LOGGER = "resumer"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_INSTALLED_HANDLERS: list[logging.Handler] = []


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(
    *,
    level: str = "WARNING",
    log_path: Optional[Path] = None,
    verbose: bool = False,
) -> logging.Logger:
    """Configure the ``resumer`` logger for one CLI invocation.

    - ``log_path`` adds a file handler at ``level``
    - ``verbose`` adds a stderr handler at DEBUG
    - with neither, a NullHandler keeps the lastResort handler from writing
      warnings into the user's terminal

    Idempotent: handlers installed by a previous call are replaced.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    reset_logging()

    handlers: list[logging.Handler] = []
    if log_path is not None:
        ensure_parent_dir(log_path)
        fh = logging.FileHandler(str(log_path), encoding="utf-8")
        fh.setLevel(_level_from_name(level))
        handlers.append(fh)
    if verbose:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(logging.DEBUG)
        handlers.append(sh)
    if not handlers:
        handlers.append(logging.NullHandler())

    fmt = logging.Formatter(LOG_FORMAT)
    for h in handlers:
        h.setFormatter(fmt)
        logger.addHandler(h)
        _INSTALLED_HANDLERS.append(h)

    logger.setLevel(logging.DEBUG if verbose else _level_from_name(level))
    logger.propagate = False
    return logger


def reset_logging() -> None:
    """Remove handlers installed by :func:`configure_logging`."""
    logger = logging.getLogger(ROOT_LOGGER)
    while _INSTALLED_HANDLERS:
        h = _INSTALLED_HANDLERS.pop()
        logger.removeHandler(h)
        h.close()
    logger.propagate = True


__all__ = ["configure_logging", "reset_logging", "ROOT_LOGGER"]
