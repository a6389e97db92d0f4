"""
Logging setup for datepipe.

Library modules log through ``logging.getLogger(__name__)`` and install no
handlers, so records reach whatever the host application configured. The
command-line interface calls :func:`configure_logging` to print them on
stderr according to its ``-v``/``-q`` verbosity.
"""

import logging
import sys
from enum import IntEnum
from typing import Optional

from datepipe.core.types import VerbosityLevel

ROOT_LOGGER = "datepipe"


class LogLevel(IntEnum):
    """Log levels matching datepipe verbosity."""

    TRACE = 5  # Most verbose (-vvv)
    DEBUG = 10  # Debug info (-vv)
    INFO = 20  # Informational (-v)
    WARN = 30  # Warnings (default)
    ERROR = 40  # Errors (-q)
    FATAL = 50  # Fatal errors (-qq)


TRACE = LogLevel.TRACE
logging.addLevelName(TRACE, "TRACE")

_VERBOSITY_LEVELS = {
    -2: LogLevel.FATAL,
    -1: LogLevel.ERROR,
    0: LogLevel.WARN,
    1: LogLevel.INFO,
    2: LogLevel.DEBUG,
    3: LogLevel.TRACE,
}

_cli_handler: Optional[logging.Handler] = None


class DatePipeFormatter(logging.Formatter):
    """
    Plain formatter for command-line output.

    Prints the bare message; with ``show_level`` set, warnings and above
    are prefixed with their level name.
    """

    def __init__(self, show_level: bool = False) -> None:
        super().__init__()
        self.show_level = show_level

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if self.show_level and record.levelno >= logging.WARNING:
            return f"{record.levelname.lower()}: {message}"
        return message


def verbosity_to_level(verbosity: int) -> LogLevel:
    """Map a ``-v``/``-q`` count to a log level, WARN when out of range."""
    return _VERBOSITY_LEVELS.get(verbosity, LogLevel.WARN)


def configure_logging(verbosity: VerbosityLevel = 0) -> logging.Logger:
    """
    Send datepipe log records to stderr.

    Calling it again replaces the handler installed by the previous call.

    Args:
        verbosity: Verbosity level (-2 to 3)

    Returns:
        The package logger
    """
    global _cli_handler

    logger = logging.getLogger(ROOT_LOGGER)
    if _cli_handler is not None:
        logger.removeHandler(_cli_handler)

    level = verbosity_to_level(verbosity)
    _cli_handler = logging.StreamHandler(sys.stderr)
    _cli_handler.setLevel(level)
    _cli_handler.setFormatter(DatePipeFormatter(show_level=verbosity >= 1))

    logger.addHandler(_cli_handler)
    logger.setLevel(level)
    return logger
