"""
Tests for input normalization.

Covers classification of raw values into input variants and their
conversion into local datetimes.
"""

from datetime import date, datetime, timedelta, timezone, tzinfo

import pytest
from dateutil import tz

from datepipe.core import normalizer
from datepipe.core.exceptions import InvalidPipeArgumentError
from datepipe.core.normalizer import classify, normalize, supports, to_renderable
from datepipe.core.types import CalendarDate, EpochMillis, NativeTime, ParsedString


class TestClassify:
    """Test the classification order."""

    @pytest.mark.parametrize(
        "value, millis",
        [
            (0, 0.0),
            (1434404591000, 1434404591000.0),
            (-86400000, -86400000.0),
            (12.5, 12.5),
            ("1434404591000", 1434404591000.0),
            ("-42", -42.0),
            ("+7.25", 7.25),
            (".5", 0.5),
        ],
    )
    def test_numeric_values(self, value, millis):
        """Numbers and numeric strings are epoch milliseconds."""
        assert classify(value) == EpochMillis(millis)

    def test_numeric_wins_over_date_parsing(self):
        """A string of digits is never handed to the date parser."""
        assert classify("20160919") == EpochMillis(20160919.0)

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2016-09-19", CalendarDate(2016, 9, 19)),
            ("2016-9-19", CalendarDate(2016, 9, 19)),
            ("2016-09-1", CalendarDate(2016, 9, 1)),
            ("2016-9-1", CalendarDate(2016, 9, 1)),
            ("0999-12-31", CalendarDate(999, 12, 31)),
        ],
    )
    def test_calendar_dates(self, value, expected):
        """YYYY-M-D strings become calendar dates, padded or not."""
        assert classify(value) == expected

    def test_calendar_date_with_invalid_fields(self):
        """Fields that do not name a real date are refused."""
        with pytest.raises(InvalidPipeArgumentError) as exc_info:
            classify("2016-13-01")
        assert exc_info.value.value == "2016-13-01"
        assert isinstance(exc_info.value.previous_exception, ValueError)

        with pytest.raises(InvalidPipeArgumentError):
            classify("2015-02-29")

    def test_calendar_shape_is_anchored(self):
        """Only whole-string matches take the calendar path."""
        result = classify("2016-09-19T10:00:00")
        assert isinstance(result, ParsedString)
        assert result.parsed == datetime(2016, 9, 19, 10, 0, 0)

        assert isinstance(classify("2016-09-19\n"), ParsedString)
        assert isinstance(classify(" 2016-09-19"), ParsedString)

    def test_native_values(self, sample_datetime):
        """datetime and date objects are taken as they are."""
        assert classify(sample_datetime) == NativeTime(sample_datetime)
        assert classify(date(2015, 6, 15)) == NativeTime(date(2015, 6, 15))

    def test_parseable_strings(self):
        """Other strings go through the generic parser."""
        result = classify("June 15, 2015 9:43 PM")
        assert result == ParsedString(
            source="June 15, 2015 9:43 PM", parsed=datetime(2015, 6, 15, 21, 43)
        )

    def test_out_of_range_offset(self):
        """A UTC offset of a day or more is refused, not passed on."""
        with pytest.raises(InvalidPipeArgumentError) as exc_info:
            classify("2015-06-15T21:43:11+25:00")
        assert exc_info.value.value == "2015-06-15T21:43:11+25:00"
        assert isinstance(exc_info.value.previous_exception, ValueError)

    @pytest.mark.parametrize(
        "value", ["10:00", "March", "June 2015", "Monday", "\u0661\u0662"]
    )
    def test_incomplete_strings(self, value):
        """Strings lacking a year, month or day are not completed from today."""
        with pytest.raises(InvalidPipeArgumentError) as exc_info:
            classify(value)
        assert exc_info.value.value == value

    @pytest.mark.parametrize(
        "value",
        ["not-a-date", "", "   ", object(), [], {}, True, float("nan"), float("inf"), b"2016"],
    )
    def test_unsupported_values(self, value):
        """Everything else is an invalid argument."""
        with pytest.raises(InvalidPipeArgumentError) as exc_info:
            classify(value)
        assert exc_info.value.value is value
        assert exc_info.value.pipe == "date"


class TestToRenderable:
    """Test conversion to local datetimes."""

    def test_epoch_millis(self, fixed_local_zone):
        """Epoch milliseconds are converted into the local zone."""
        zone = fixed_local_zone(2)
        result = to_renderable(EpochMillis(1434404591000.0))
        assert result == datetime(2015, 6, 15, 21, 43, 11, tzinfo=timezone.utc)
        assert result.utcoffset() == timedelta(hours=2)
        assert result.tzinfo is zone
        assert result.hour == 23

    def test_fractional_millis(self, fixed_local_zone):
        fixed_local_zone(0)
        result = to_renderable(EpochMillis(1500.0))
        assert result.second == 1
        assert result.microsecond == 500000

    @pytest.mark.parametrize("offset", [-12, -5, 0, 5.5, 14])
    def test_calendar_date_has_no_shift(self, fixed_local_zone, offset):
        """Calendar dates land on local midnight of the same day."""
        fixed_local_zone(offset)
        result = to_renderable(CalendarDate(2016, 9, 19))
        assert (result.year, result.month, result.day) == (2016, 9, 19)
        assert (result.hour, result.minute) == (0, 0)

    def test_naive_datetime_is_local(self, fixed_local_zone, sample_datetime):
        zone = fixed_local_zone(-7)
        result = to_renderable(NativeTime(sample_datetime))
        assert result.replace(tzinfo=None) == sample_datetime
        assert result.tzinfo is zone

    def test_aware_datetime_is_converted(self, fixed_local_zone):
        fixed_local_zone(2)
        value = datetime(2015, 6, 15, 21, 43, 11, tzinfo=timezone.utc)
        result = to_renderable(NativeTime(value))
        assert result == value
        assert (result.day, result.hour) == (15, 23)

    def test_date_is_local_midnight(self, fixed_local_zone):
        fixed_local_zone(-10)
        result = to_renderable(NativeTime(date(2015, 6, 15)))
        assert (result.year, result.month, result.day, result.hour) == (2015, 6, 15, 0)

    def test_parsed_string_with_offset(self, fixed_local_zone):
        fixed_local_zone(0)
        raw = classify("2015-06-15T21:43:11+02:00")
        result = to_renderable(raw)
        assert (result.hour, result.minute) == (19, 43)

    def test_epoch_out_of_range_propagates(self):
        """Constructor errors are not turned into pipe errors."""
        with pytest.raises((OverflowError, OSError, ValueError)) as exc_info:
            to_renderable(EpochMillis(1e30))
        assert not isinstance(exc_info.value, InvalidPipeArgumentError)

    def test_unknown_variant(self):
        with pytest.raises(TypeError):
            to_renderable("2016-09-19")


class TestNormalize:
    """Test the combined entry points."""

    def test_normalize(self, fixed_local_zone):
        fixed_local_zone(0)
        assert normalize("2016-09-19") == datetime(2016, 9, 19, tzinfo=tz.UTC)
        assert normalize(0) == datetime(1970, 1, 1, tzinfo=tz.UTC)

    def test_normalize_is_pure(self, sample_datetime):
        assert normalize(sample_datetime) == normalize(sample_datetime)

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0, True),
            ("123", True),
            ("2016-09-19", True),
            (date(2015, 6, 15), True),
            ("Mon, 15 Jun 2015 21:43:11", True),
            ("not-a-date", False),
            ("10:00", False),
            ("2015-06-15T21:43:11+25:00", False),
            ("2016-13-01", False),
            (object(), False),
            (False, False),
        ],
    )
    def test_supports(self, value, expected):
        assert supports(value) is expected

    def test_local_timezone(self):
        zone = normalizer.local_timezone()
        assert isinstance(zone, tzinfo)
        assert normalizer.local_timezone() is zone
