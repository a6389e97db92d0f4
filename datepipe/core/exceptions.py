"""
Custom exception hierarchy for datepipe.

This module defines the exceptions raised by the date formatting pipeline,
providing clear error categorization and consistent error reporting for
the library and the command-line interface.
"""

import logging
import sys
from typing import Any, Optional

from datepipe.i18n import __x

logger = logging.getLogger(__name__)


class DatePipeError(Exception):
    """
    Base exception for all datepipe errors.

    Every error raised by datepipe derives from this class. It carries an
    identifier describing the failing area and the exit value the CLI uses
    when the error terminates the program.
    """

    def __init__(
        self, message: str, ident: str = "datepipe", exitval: int = 2, **kwargs: Any
    ) -> None:
        """
        Initialize datepipe error.

        Args:
            message: Human-readable error message
            ident: Error identifier naming the failing area
            exitval: Exit value to use when this error causes program termination
            **kwargs: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.ident = ident
        self.exitval = exitval
        self.context = kwargs
        self.previous_exception = kwargs.get("previous_exception")

    def __str__(self) -> str:
        return self.message

    def details_string(self) -> str:
        """
        Return the underlying cause, if any.

        Returns:
            Text of the previous exception, or an empty string
        """
        if self.previous_exception is None:
            return ""
        return f"{type(self.previous_exception).__name__}: {self.previous_exception}"


class ConfigurationError(DatePipeError):
    """
    Configuration-related errors.

    Raised when a configuration file cannot be parsed, a key is malformed,
    or a configured value (such as the locale identifier) is unusable.
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        config_key: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, ident="config", exitval=2, **kwargs)
        self.config_file = config_file
        self.config_key = config_key


def _invalid_argument_message(value: Any, pipe: str) -> str:
    return __x("Invalid argument '{value}' for pipe '{pipe}'", value=value, pipe=pipe)


class InvalidPipeArgumentError(DatePipeError):
    """
    Raised when a value handed to a pipe is not something it can format.

    The offending value and the pipe name are kept on the exception so the
    caller can display them.
    """

    def __init__(self, value: Any, pipe: str = "date", **kwargs: Any) -> None:
        """
        Initialize invalid argument error.

        Args:
            value: The value the pipe refused
            pipe: Name of the pipe that refused it
            **kwargs: Additional context
        """
        message = _invalid_argument_message(value, pipe)
        super().__init__(message, ident="pipe", exitval=2, **kwargs)
        self.value = value
        self.pipe = pipe


def format_error_message(error_type: str, details: str) -> str:
    """
    Format an error message for terminal display.

    Args:
        error_type: Type of error (e.g., "config", "pipe")
        details: Detailed error description

    Returns:
        Formatted error message string
    """
    return f"datepipe: {error_type}: {details}"


def handle_exception(exc: Exception) -> int:
    """
    Report an exception on stderr and return the exit code it maps to.

    The cause of a datepipe error is logged at debug level.

    Args:
        exc: Exception to handle

    Returns:
        Exit code for the application
    """
    if isinstance(exc, DatePipeError):
        print(f"datepipe: {exc.message}", file=sys.stderr)
        details = exc.details_string()
        if details:
            logger.debug("Caused by %s", details)
        return exc.exitval

    print(format_error_message("unexpected error", str(exc)), file=sys.stderr)
    return 2
