"""
datepipe - locale-aware date formatting.

Formats dates, epoch timestamps and ISO calendar dates with CLDR locale
conventions, using named formats (``mediumDate``, ``shortTime``, ...) or
symbolic field patterns (``yMMMd``, ``jms``, ...).
"""

from datepipe.core.aliases import DEFAULT_ALIASES, DEFAULT_FORMAT, AliasTable
from datepipe.core.exceptions import (
    ConfigurationError,
    DatePipeError,
    InvalidPipeArgumentError,
)
from datepipe.core.pipe import DatePipe, transform

__version__ = "1.0.0"

__all__ = [
    "AliasTable",
    "ConfigurationError",
    "DEFAULT_ALIASES",
    "DEFAULT_FORMAT",
    "DatePipe",
    "DatePipeError",
    "InvalidPipeArgumentError",
    "transform",
]
