"""Colors for the log output on stderr.

stdout carries the JSON documents and is never colored.
"""

import os
import sys
from typing import TextIO

__all__ = ["BOLD", "DIM", "RED", "RESET", "YELLOW", "LogStyles", "colorize", "make_style", "should_colorize"]

RESET = "\x1b[0m"

BOLD = "1"
DIM = "2"
RED = "31"
YELLOW = "33"


def should_colorize(stream: TextIO | None = None) -> bool:
    """Tell whether `stream` (stderr by default) should get ANSI colors.

    NO_COLOR disables them, FORCE_COLOR forces them, otherwise only TTYs get colors.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    stream = sys.stderr if stream is None else stream
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def make_style(*codes: str) -> tuple[str, str]:
    """Return the (prefix, suffix) pair wrapping a text with `codes`."""
    prefix = f"\x1b[{';'.join(codes)}m" if codes else ""
    return prefix, RESET


def colorize(text: str, *codes: str) -> str:
    if not codes:
        return text
    prefix, suffix = make_style(*codes)
    return prefix + text + suffix


class LogStyles:
    """Codes used per log level, and for received events."""

    WARNING = (YELLOW, DIM)
    ERROR = (RED, DIM)
    CRITICAL = (RED, BOLD)
    EVENT = (BOLD,)
