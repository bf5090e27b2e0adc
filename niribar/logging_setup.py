"""Logging setup.

Logs go to stderr, and to a file with `--debug FILE`. stdout is reserved
for the JSON documents.
"""

import logging
import os

from .ansi import LogStyles, make_style, should_colorize

__all__ = [
    "LogObjects",
    "ScreenLogFormatter",
    "get_logger",
    "init_logger",
    "is_debug",
    "set_debug",
]

FILE_FORMAT = r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"
DEBUG_FORMAT = r"%(name)12s - %(message)s // %(filename)s:%(lineno)d"


class LogObjects:
    """Handlers shared by every niribar logger, and the debug flag."""

    handlers: list[logging.Handler] = []
    debug: bool = bool(os.environ.get("DEBUG"))


def is_debug() -> bool:
    return LogObjects.debug


def set_debug(value: bool) -> None:
    LogObjects.debug = value


class ScreenLogFormatter(logging.Formatter):
    """Formatter for stderr, coloring warnings and errors when the terminal allows it."""

    def __init__(self) -> None:
        super().__init__()
        log_format = DEBUG_FORMAT if is_debug() else r"%(message)s"
        colored = should_colorize()
        styles = {
            logging.WARNING: LogStyles.WARNING,
            logging.ERROR: LogStyles.ERROR,
            logging.CRITICAL: LogStyles.CRITICAL,
        }
        self._plain = logging.Formatter(log_format)
        self._formatters: dict[int, logging.Formatter] = {}
        for level, codes in styles.items():
            prefix, suffix = make_style(*codes) if colored else ("", "")
            self._formatters[level] = logging.Formatter(prefix + log_format + suffix)

    def format(self, record: logging.LogRecord) -> str:
        return self._formatters.get(record.levelno, self._plain).format(record)


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """(Re)create the shared handlers.

    Args:
        filename: also log to this file (full details)
        force_debug: enable debug mode
    """
    if force_debug:
        set_debug(True)

    LogObjects.handlers.clear()
    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT))
        LogObjects.handlers.append(file_handler)
    screen_handler = logging.StreamHandler()
    screen_handler.setFormatter(ScreenLogFormatter())
    LogObjects.handlers.append(screen_handler)


def get_logger(name: str = "niribar", level: int | None = None) -> logging.Logger:
    """Return a named logger attached to the shared handlers.

    Args:
        name: logger's name
        level: logger's level, DEBUG or WARNING depending on debug mode if not set
    """
    logger = logging.getLogger(name)
    if level is None:
        level = logging.DEBUG if is_debug() else logging.WARNING
    logger.setLevel(level)
    logger.propagate = False
    for handler in LogObjects.handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.debug('Logger "%s" initialized', name)
    return logger
