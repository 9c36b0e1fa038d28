"""Logging setup for cubemap runs.

The console gets short ``LEVEL: message`` lines, the same shape as the
``Error: ...`` diagnostics the CLI prints. An optional rotating log file
gets timestamps and logger names.
"""

import logging
import logging.handlers
import os
import sys
import threading

logger = logging.getLogger("cubemap")

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# 10 MB max per log file, keep 3 rotated backups
_LOG_MAX_BYTES = 10 * 1024 * 1024
_LOG_BACKUP_COUNT = 3
_setup_lock = threading.Lock()


def setup_logging(level: str = "INFO", log_file: str = None, force: bool = False):
    """Configure cubemap logging.

    Standalone (``force`` or a bare root logger): the root logger gets a
    stderr console handler plus the optional file handler. Embedded (the host
    already configured root): only the ``cubemap`` logger is touched, and
    only a file handler is ever added to it.
    """
    with _setup_lock:
        numeric_level = _resolve_level(level)
        logger.setLevel(numeric_level)
        if force or not logging.getLogger().handlers:
            _configure_root(numeric_level, log_file, force)
        elif log_file:
            _attach_file_handler(log_file)


def _resolve_level(level) -> int:
    numeric_level = getattr(logging, str(level).upper(), None)
    if not isinstance(numeric_level, int):
        logger.warning("Invalid log level '%s', defaulting to INFO", level)
        return logging.INFO
    return numeric_level


def _file_handler(log_file: str) -> logging.Handler:
    os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
    handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=_LOG_MAX_BYTES, backupCount=_LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def _configure_root(numeric_level: int, log_file: str, force: bool):
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    handlers = [console]
    if log_file:
        handlers.append(_file_handler(log_file))
    logging.basicConfig(level=numeric_level, handlers=handlers, force=force)
    logger.debug(
        "Logging to stderr%s at %s",
        f" and {log_file}" if log_file else "",
        logging.getLevelName(numeric_level),
    )


def _attach_file_handler(log_file: str):
    target = os.path.abspath(log_file)
    for handler in logger.handlers:
        if getattr(handler, "baseFilename", None) == target:
            return
    logger.addHandler(_file_handler(log_file))
    logger.info("Adding file handler: %s", target)
