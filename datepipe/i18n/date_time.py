"""
Locale-aware date/time rendering for datepipe.

This module renders a point in time against CLDR locale data (through
Babel), following a symbolic pattern made of field letters such as
``yMMMd`` or ``jms``. Only the fields named in the pattern are shown;
their order, punctuation and wording come from the locale.
"""

import re
from datetime import datetime, tzinfo
from typing import Dict, List, Optional, Tuple

from babel import Locale, UnknownLocaleError
from babel.dates import format_datetime, match_skeleton

from datepipe.core.exceptions import ConfigurationError

# Field letters rendered by the time half of a skeleton; all others are date fields
TIME_FIELDS = frozenset("jJChHkKmsSaAbBzZOvVxX")
HOUR_FIELDS = "hHkK"
ZONE_FIELDS = frozenset("zZOvVxX")
# Zone fields that print a zone name; unnamed zones fall back to the GMT offset
NAMED_ZONE_FIELDS = frozenset("zvVO")
# Letters standing for the same field; widths carry over between them
FIELD_CLASSES = {"L": "M", "c": "E", "e": "E"}
# Fields whose width in the locale pattern is kept as is
FIXED_WIDTH_FIELDS = frozenset("hHkKmsaAbBzZOvVxX")
QUOTED_LITERAL = re.compile(r"'[^']*'")
FIELD_RUN = re.compile(r"([A-Za-z])\1*")
PATTERN_TOKEN = re.compile(r"'(?:[^']|'')*'|([A-Za-z])\1*")


class LocaleAwareDateFormatter:
    """
    Formatter for date/time values that follows CLDR locale conventions.

    Locale lookups are cached per instance; the cache only ever grows and
    holds immutable Babel ``Locale`` objects.
    """

    def __init__(self) -> None:
        self._locales: Dict[str, Locale] = {}

    def get_locale(self, locale_id: str) -> Locale:
        """
        Parse a locale identifier into a Babel ``Locale``.

        Args:
            locale_id: Identifier such as ``en-US``, ``en_US`` or ``de_DE.UTF-8``

        Returns:
            The matching ``Locale``

        Raises:
            ConfigurationError: If no locale data exists for the identifier
        """
        locale = self._locales.get(locale_id)
        if locale is None:
            try:
                locale = Locale.parse(locale_id.replace("-", "_"))
            except (UnknownLocaleError, ValueError, TypeError) as e:
                raise ConfigurationError(
                    f"Unknown locale: {locale_id}",
                    config_key="core.locale",
                    previous_exception=e,
                )
            self._locales[locale_id] = locale
        return locale

    def render(self, time: datetime, locale_id: str, pattern: str) -> str:
        """
        Render a datetime following a symbolic pattern.

        Args:
            time: Point in time to render
            locale_id: Locale identifier
            pattern: Symbolic pattern (skeleton), e.g. ``yMMMdjms``

        Returns:
            Rendered string
        """
        locale = self.get_locale(locale_id)
        skeleton = self._expand_hour(pattern, locale)
        date_skeleton, time_skeleton = self._split_skeleton(skeleton)

        if date_skeleton and time_skeleton:
            glue = locale.datetime_formats[self._glue_width(date_skeleton)]
            return (
                glue.replace("'", "")
                .replace("{0}", self._format_part(time, time_skeleton, locale))
                .replace("{1}", self._format_part(time, date_skeleton, locale))
            )
        return self._format_part(time, date_skeleton or time_skeleton, locale)

    def preferred_hour_field(self, locale: Locale) -> str:
        """
        Return the hour letter the locale uses in its short time format.

        ``h`` for a 12-hour clock with day period, ``H`` for 24 hours.
        """
        short_time = QUOTED_LITERAL.sub("", locale.time_formats["short"].pattern)
        for char in short_time:
            if char in HOUR_FIELDS:
                return char
        return "H"

    def _expand_hour(self, pattern: str, locale: Locale) -> str:
        if "j" not in pattern:
            return pattern
        return pattern.replace("j", self.preferred_hour_field(locale))

    def _split_skeleton(self, skeleton: str) -> Tuple[str, str]:
        date_runs: List[str] = []
        time_runs: List[str] = []
        for match in FIELD_RUN.finditer(skeleton):
            run = match.group(0)
            (time_runs if run[0] in TIME_FIELDS else date_runs).append(run)

        time_part = "".join(time_runs)
        if any(run[0] in "hK" for run in time_runs):
            # The day period comes with the 12-hour skeletons
            time_part = "".join(run for run in time_runs if run[0] != "a")
        return "".join(date_runs), time_part

    def _glue_width(self, date_skeleton: str) -> str:
        month_width = max((len(m) for m in re.findall(r"[ML]+", date_skeleton)), default=0)
        if month_width >= 4 and "EEEE" in date_skeleton:
            return "full"
        if month_width >= 4:
            return "long"
        if month_width == 3:
            return "medium"
        return "short"

    def _format_part(self, time: datetime, skeleton: str, locale: Locale) -> str:
        cldr_pattern = self.pattern_for(skeleton, locale)
        if not _zone_key(time.tzinfo):
            cldr_pattern = PATTERN_TOKEN.sub(_gmt_zone_token, cldr_pattern)
        return format_datetime(time, cldr_pattern, tzinfo=time.tzinfo, locale=locale)

    def pattern_for(self, skeleton: str, locale: Locale) -> str:
        """
        Find the locale pattern for a skeleton.

        The closest skeleton in the locale data is used, with its field
        widths stretched to the requested ones (``MMMM`` turns ``Jun`` into
        ``June``). Zone fields missing from every candidate are appended
        after the rest. A skeleton with no candidate at all is applied
        literally as a CLDR pattern.
        """
        matched = self._match(skeleton, locale)
        if matched is not None:
            return self._adjust_widths(matched, skeleton)

        zone = "".join(run for run in _runs(skeleton) if run[0] in ZONE_FIELDS)
        rest = "".join(run for run in _runs(skeleton) if run[0] not in ZONE_FIELDS)
        if zone and rest:
            matched = self._match(rest, locale)
            if matched is not None:
                return f"{self._adjust_widths(matched, rest)} {zone}"
        return skeleton

    def _match(self, skeleton: str, locale: Locale) -> Optional[Tuple[str, str]]:
        """Return the closest (skeleton, pattern) pair of the locale, if any."""
        skeletons = locale.datetime_skeletons
        if skeleton not in skeletons:
            skeleton = match_skeleton(skeleton, skeletons)
            if skeleton is None:
                return None
        return skeleton, skeletons[skeleton].pattern

    def _adjust_widths(self, matched: Tuple[str, str], requested: str) -> str:
        matched_skeleton, cldr_pattern = matched
        wanted = _field_widths(requested)
        available = _field_widths(matched_skeleton)
        zone = next((run for run in _runs(requested) if run[0] in ZONE_FIELDS), None)

        def adjust(match: "re.Match[str]") -> str:
            token = match.group(0)
            field = FIELD_CLASSES.get(token[0], token[0])
            if zone and token[0] in ZONE_FIELDS:
                # The locale may offer another zone style than the one asked for
                return zone
            if token[0] == "'" or field in FIXED_WIDTH_FIELDS or field not in wanted:
                return token
            if available.get(field) == wanted[field]:
                # The locale already picked its width for this request
                return token
            if field == "M" and (len(token) > 2) != (available.get(field, 0) > 2):
                return token
            return token[0] * wanted[field]

        return PATTERN_TOKEN.sub(adjust, cldr_pattern)


def _runs(skeleton: str) -> List[str]:
    return [match.group(0) for match in FIELD_RUN.finditer(skeleton)]


def _field_widths(skeleton: str) -> Dict[str, int]:
    return {FIELD_CLASSES.get(run[0], run[0]): len(run) for run in _runs(skeleton)}


def _zone_key(zone: Optional[tzinfo]) -> Optional[str]:
    """Return the IANA name of a zone, ``None`` for bare offsets."""
    return getattr(zone, "key", None) or getattr(zone, "zone", None)


def _gmt_zone_token(match: "re.Match[str]") -> str:
    token = match.group(0)
    return "OOOO" if token[0] in NAMED_ZONE_FIELDS else token


# Global formatter instance
_formatter: Optional[LocaleAwareDateFormatter] = None


def get_date_formatter() -> LocaleAwareDateFormatter:
    """
    Get the global date formatter instance.

    Returns:
        LocaleAwareDateFormatter instance
    """
    global _formatter
    if _formatter is None:
        _formatter = LocaleAwareDateFormatter()
    return _formatter

