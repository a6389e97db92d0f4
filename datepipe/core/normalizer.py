"""
Input normalization for the date pipe.

Raw input values are classified into one of the ``RawInput`` variants and
then converted into a timezone-aware ``datetime`` in the local system
timezone, ready for rendering.
"""

from datetime import date, datetime, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from babel.dates import LOCALTZ
from dateutil import parser as date_parser
from dateutil import tz

from datepipe.core.exceptions import InvalidPipeArgumentError
from datepipe.core.types import (
    ISO_DATE_ONLY_PATTERN,
    CalendarDate,
    EpochMillis,
    NativeTime,
    ParsedString,
    RawInput,
    is_iso_date_only,
    is_numeric,
)

PIPE_NAME = "date"

# Two defaults differing in year, month and day; a string that parses to
# different values under each one is missing one of those fields
_PARSE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def _system_timezone() -> tzinfo:
    key = getattr(LOCALTZ, "key", None) or getattr(LOCALTZ, "zone", None)
    if key:
        try:
            return ZoneInfo(key)
        except (ZoneInfoNotFoundError, ValueError):
            return tz.tzlocal()
    return tz.tzlocal()


_LOCAL_TIMEZONE = _system_timezone()


def local_timezone() -> tzinfo:
    """
    Return the local system timezone.

    A named IANA zone when the system one can be identified, so that zone
    names render; ``dateutil``'s offset-only local zone otherwise.
    """
    return _LOCAL_TIMEZONE


def _parse_calendar_date(value: str) -> CalendarDate:
    """
    Split a ``YYYY-M-D`` string into its calendar fields.

    Fields come from the delimited groups, so month and day may be one or
    two digits wide. Out-of-range fields (``2016-02-30``, ``2016-13-01``)
    are refused rather than rolled over into a neighbouring month: the
    generic parser refuses the same strings, so such a value was never
    supported input.

    Raises:
        InvalidPipeArgumentError: If the fields do not name a real date
    """
    match = ISO_DATE_ONLY_PATTERN.fullmatch(value)
    year, month, day = (int(group, 10) for group in match.groups())
    try:
        date(year, month, day)
    except ValueError as e:
        raise InvalidPipeArgumentError(value, PIPE_NAME, previous_exception=e)
    return CalendarDate(year=year, month=month, day=day)


def _parse_string(value: str) -> ParsedString:
    """
    Parse a free-form date string.

    The string must name a year, month and day on its own; nothing is
    filled in from the current date. Its UTC offset, if any, must be valid.

    Raises:
        InvalidPipeArgumentError: If the string is not a complete date
    """
    try:
        first, second = (date_parser.parse(value, default=d) for d in _PARSE_DEFAULTS)
        first.utcoffset()
    except (ValueError, OverflowError) as e:
        raise InvalidPipeArgumentError(value, PIPE_NAME, previous_exception=e)
    if first != second:
        raise InvalidPipeArgumentError(value, PIPE_NAME)
    return ParsedString(source=value, parsed=first)


def classify(value: Any) -> RawInput:
    """
    Classify a raw input value.

    The first matching rule wins:

    1. numeric (number or numeric string): epoch milliseconds
    2. ``YYYY-M-D`` string: calendar date, no time and no timezone
    3. ``datetime`` or ``date``: used as is
    4. any other string the generic date parser accepts

    Args:
        value: Raw input, never the blank sentinel

    Returns:
        The matching ``RawInput`` variant

    Raises:
        InvalidPipeArgumentError: If the value matches no variant
    """
    if is_numeric(value):
        return EpochMillis(float(value))
    if is_iso_date_only(value):
        return _parse_calendar_date(value)
    if isinstance(value, str):
        return _parse_string(value)
    if isinstance(value, (datetime, date)):
        return NativeTime(value)
    raise InvalidPipeArgumentError(value, PIPE_NAME)


def _localize(value: datetime) -> datetime:
    if value.tzinfo is None:
        # Naive values are wall-clock time in the local zone
        return value.replace(tzinfo=local_timezone())
    return value.astimezone(local_timezone())


def to_renderable(raw: RawInput) -> datetime:
    """
    Convert a classified input into an aware local ``datetime``.

    Errors raised by the ``datetime`` constructors (e.g. an epoch value out
    of range) propagate unchanged.
    """
    if isinstance(raw, EpochMillis):
        return datetime.fromtimestamp(raw.millis / 1000.0, tz=local_timezone())
    if isinstance(raw, CalendarDate):
        # Built from the fields directly; parsing the ISO string would read it as UTC
        return datetime(raw.year, raw.month, raw.day, tzinfo=local_timezone())
    if isinstance(raw, NativeTime):
        if isinstance(raw.value, datetime):
            return _localize(raw.value)
        return datetime(raw.value.year, raw.value.month, raw.value.day, tzinfo=local_timezone())
    if isinstance(raw, ParsedString):
        return _localize(raw.parsed)
    raise TypeError(f"Unknown input variant: {type(raw).__name__}")


def normalize(value: Any) -> datetime:
    """Classify ``value`` and return the local ``datetime`` to render."""
    return to_renderable(classify(value))


def supports(value: Any) -> bool:
    """Return True if ``value`` can be formatted by the date pipe."""
    try:
        classify(value)
    except InvalidPipeArgumentError:
        return False
    return True
