"""
Type system and validators for datepipe.

This module defines the raw input variants accepted by the date pipe, type
aliases shared across the package, and the small predicates used to
classify input values.
"""

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Literal, Protocol, Union

# Type aliases for common types
LocaleId = str
FormatToken = str  # alias name or symbolic pattern
SymbolicPattern = str  # field letters only, e.g. "yMMMd"

# Verbosity levels
VerbosityLevel = Literal[-2, -1, 0, 1, 2, 3]

NUMERIC_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)$", re.ASCII)
ISO_DATE_ONLY_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$", re.ASCII)
CONFIG_KEY_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9._-]*$")
LOCALE_ID_PATTERN = re.compile(r"^[A-Za-z]{2,8}(?:[-_][A-Za-z0-9]{1,8})*(?:\.[\w-]+)?(?:@\w+)?$")


@dataclass(frozen=True)
class EpochMillis:
    """A point in time given as milliseconds since the Unix epoch."""

    millis: float


@dataclass(frozen=True)
class CalendarDate:
    """
    A civil calendar date with no time of day and no timezone.

    Rendered as local midnight of that date, so the displayed day never
    shifts with the host's UTC offset.
    """

    year: int
    month: int
    day: int

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True)
class NativeTime:
    """A ``datetime`` or ``date`` handed in directly by the caller."""

    value: Union[datetime, date]


@dataclass(frozen=True)
class ParsedString:
    """A free-form string accepted by the generic date parser."""

    source: str
    parsed: datetime


RawInput = Union[EpochMillis, CalendarDate, NativeTime, ParsedString]


class DateRenderer(Protocol):
    """Renders a point in time for a locale following a symbolic pattern."""

    def render(self, time: datetime, locale_id: LocaleId, pattern: SymbolicPattern) -> str:
        ...


def is_blank(value: Any) -> bool:
    """Return True for the "no value" sentinel."""
    return value is None


def is_numeric(value: Any) -> bool:
    """
    Check whether a value can be read as epoch milliseconds.

    Finite ints and floats qualify (booleans do not), as do strings made of
    an optional sign, digits and at most one decimal point.

    Args:
        value: Value to check

    Returns:
        True if numeric, False otherwise
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if isinstance(value, str):
        return bool(NUMERIC_PATTERN.fullmatch(value))
    return False


def is_iso_date_only(value: Any) -> bool:
    """
    Check if a value is an ISO-8601 calendar date with no time (e.g. 2015-01-31).

    Args:
        value: Value to check

    Returns:
        True if the whole string is ``YYYY-M-D`` shaped, False otherwise
    """
    return isinstance(value, str) and bool(ISO_DATE_ONLY_PATTERN.fullmatch(value))


def validate_config_key(key: str) -> bool:
    """
    Validate configuration key format.

    Args:
        key: Configuration key to validate

    Returns:
        True if valid, False otherwise
    """
    return bool(CONFIG_KEY_PATTERN.fullmatch(key)) and len(key) <= 255


def validate_locale_id(locale_id: str) -> bool:
    """
    Validate the shape of a locale identifier.

    Accepts BCP 47 style (``en-US``) and POSIX style (``en_US.UTF-8``)
    identifiers. Whether locale data exists for it is checked at render time.

    Args:
        locale_id: Locale identifier to validate

    Returns:
        True if valid, False otherwise
    """
    return isinstance(locale_id, str) and bool(LOCALE_ID_PATTERN.fullmatch(locale_id))
