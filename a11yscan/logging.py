"""Logger setup for the a11yscan CLI.

Console output goes to stderr so JSON written to stdout stays parseable.
Extraction runs on a thread pool, so the optional file sink records the
worker thread of every message.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOGGER_NAME = "a11yscan"
_CONSOLE_FORMAT = "[a11yscan] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s"
_OWNED = "_a11yscan_handler"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``a11yscan`` or one of its children (``a11yscan.pipeline``)."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def _level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def _own(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    setattr(handler, _OWNED, True)
    return handler


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install the console handler and, when ``log_file`` is given, a file sink.

    ``verbose`` wins over ``quiet``. Handlers installed by an earlier call are
    replaced; handlers attached by anyone else are left alone.
    """
    level = _level(verbose, quiet)
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        if getattr(handler, _OWNED, False):
            logger.removeHandler(handler)
            handler.close()

    logger.addHandler(_own(logging.StreamHandler(sys.stderr), level, _CONSOLE_FORMAT))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(_own(logging.FileHandler(log_file, encoding="utf-8"), level, _FILE_FORMAT))
    return logger


__all__ = ["configure_logging", "get_logger"]
