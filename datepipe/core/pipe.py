"""
The date pipe.

Formats a date according to locale rules::

    pipe = DatePipe("en-US")
    pipe.transform(datetime(2015, 6, 15, 21, 43, 11))            # 'Jun 15, 2015'
    pipe.transform(datetime(2015, 6, 15, 21, 43, 11), "medium")  # 'Jun 15, 2015, 9:43:11 PM'
    pipe.transform(datetime(2015, 6, 15, 21, 43, 11), "mmss")    # '43:11'

The value may be a ``datetime``/``date``, epoch milliseconds (number or
numeric string), an ISO calendar date such as ``2016-09-19`` (shown with
the same day, month and year whatever the local UTC offset), or any string
the generic date parser accepts. ``None`` formats to ``None``.

The format is one of the aliases below or a symbolic pattern:

    ============  ==============
    alias         pattern
    ============  ==============
    medium        yMMMdjms
    short         yMdjm
    fullDate      yMMMMEEEEd
    longDate      yMMMMd
    mediumDate    yMMMd
    shortDate     yMd
    mediumTime    jms
    shortTime     jm
    ============  ==============

Only the fields named in a pattern are shown; order, punctuation and
wording follow the locale. Output is in the local system timezone.

A ``DatePipe`` holds no mutable state, so results can be cached by the
caller on (value, format, locale).
"""

import logging
from typing import Any, Optional

from datepipe.core import normalizer
from datepipe.core.aliases import DEFAULT_ALIASES, DEFAULT_FORMAT, AliasTable
from datepipe.core.config import default_locale_id
from datepipe.core.resolver import PatternResolver
from datepipe.core.types import DateRenderer, FormatToken, LocaleId, is_blank
from datepipe.i18n.date_time import get_date_formatter
from datepipe.utils.logging import TRACE

logger = logging.getLogger(__name__)


class DatePipe:
    """Formats dates for one locale."""

    name = normalizer.PIPE_NAME

    def __init__(
        self,
        locale_id: LocaleId,
        aliases: AliasTable = DEFAULT_ALIASES,
        renderer: Optional[DateRenderer] = None,
    ) -> None:
        """
        Initialize the pipe.

        Args:
            locale_id: Active locale identifier, e.g. ``en-US``
            aliases: Alias table used to expand named formats
            renderer: Rendering backend; the CLDR formatter when omitted
        """
        if renderer is None:
            renderer = get_date_formatter()

        self.locale_id = locale_id
        self.resolver = PatternResolver(aliases)
        self.renderer = renderer

    def supports(self, value: Any) -> bool:
        return normalizer.supports(value)

    def transform(self, value: Any, pattern: FormatToken = DEFAULT_FORMAT) -> Optional[str]:
        """
        Format ``value`` following ``pattern``.

        Args:
            value: Date-like input, or ``None``
            pattern: Alias name or symbolic pattern

        Returns:
            The formatted string, or ``None`` when ``value`` is ``None``

        Raises:
            InvalidPipeArgumentError: If ``value`` cannot be read as a date
        """
        if is_blank(value):
            return None

        raw = normalizer.classify(value)
        logger.log(TRACE, "Classified %r as %s", value, type(raw).__name__)

        time = normalizer.to_renderable(raw)
        symbolic = self.resolver.resolve(pattern)
        if self.resolver.is_alias(pattern):
            logger.log(TRACE, "Expanded format %s to %s", pattern, symbolic)
        logger.debug("Formatting %r with pattern %s for locale %s", value, symbolic, self.locale_id)

        return self.renderer.render(time, self.locale_id, symbolic)

    def __call__(self, value: Any, pattern: FormatToken = DEFAULT_FORMAT) -> Optional[str]:
        return self.transform(value, pattern)


def transform(
    value: Any, pattern: FormatToken = DEFAULT_FORMAT, locale_id: Optional[LocaleId] = None
) -> Optional[str]:
    """
    Format ``value`` with a one-off pipe.

    Args:
        value: Date-like input, or ``None``
        pattern: Alias name or symbolic pattern
        locale_id: Locale identifier; taken from ``LC_ALL``, ``LC_TIME`` or
            ``LANG`` when omitted, ``en-US`` failing those

    Returns:
        The formatted string, or ``None`` when ``value`` is ``None``
    """
    if is_blank(value):
        return None
    return DatePipe(locale_id or default_locale_id()).transform(value, pattern)
