"""
Console logging for math-expr.

Engine modules log through ``logging.getLogger(__name__)`` and never install
handlers themselves; the CLI calls :func:`setup_logging` once.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import datetime
from typing import TextIO

# =============================================================================
# Terminal Colors (respects NO_COLOR)
# =============================================================================


def _color_enabled(stream: TextIO) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    DIM = "\033[2m"

    DEBUG = "\033[36m"  # Cyan
    INFO = "\033[32m"  # Green
    WARNING = "\033[33m"  # Yellow
    ERROR = "\033[31m"  # Red
    CRITICAL = "\033[35m"  # Magenta


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output."""

    LEVEL_COLORS = {
        logging.DEBUG: Colors.DEBUG,
        logging.INFO: Colors.INFO,
        logging.WARNING: Colors.WARNING,
        logging.ERROR: Colors.ERROR,
        logging.CRITICAL: Colors.CRITICAL,
    }

    def __init__(self, use_color: bool = False) -> None:
        super().__init__()
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        component = record.name.rsplit(".", 1)[-1]

        if self.use_color:
            level_color = self.LEVEL_COLORS.get(record.levelno, "")
            prefix = (
                f"{Colors.DIM}{timestamp}{Colors.RESET} "
                f"[{component}] {level_color}{record.levelname}{Colors.RESET}:"
            )
        else:
            prefix = f"[{timestamp}] [{component}] {record.levelname}:"

        message = f"{prefix} {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


# =============================================================================
# Logger Setup
# =============================================================================


def setup_logging(level: int | str = logging.WARNING, stream: TextIO | None = None) -> logging.Logger:
    """
    Configure the ``math_expr`` logger.

    Existing handlers are replaced, so calling this twice is safe.

    Args:
        level: Minimum log level (name or number)
        stream: Output stream; defaults to stderr so results on stdout stay clean

    Returns:
        The configured package logger
    """
    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {name}")

    stream = stream if stream is not None else sys.stderr

    root_logger = logging.getLogger("math_expr")
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream)
    handler.setFormatter(ConsoleFormatter(use_color=_color_enabled(stream)))
    handler.setLevel(level)
    root_logger.addHandler(handler)

    return root_logger
