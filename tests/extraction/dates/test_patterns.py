"""Unit tests for the shared time-of-day helper and lookup tables."""

from datetime import time

import pytest

from localevents.extraction.dates.patterns import (
    MONTH_DAY_YEAR_PATTERN,
    MONTH_MAP,
    WEEKDAY_MAP,
    WEEKDAY_PATTERN,
    extract_time_of_day,
    has_meridiem,
    to_24_hour,
)


class TestExtractTimeOfDay:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("7pm", time(19, 0)),
            ("7 PM", time(19, 0)),
            ("7:30 PM", time(19, 30)),
            ("7:30pm", time(19, 30)),
            ("7:30 p.m.", time(19, 30)),
            ("10 a.m.", time(10, 0)),
            ("12 am", time(0, 0)),
            ("12:00 AM", time(0, 0)),
            ("12:15 PM", time(12, 15)),
            ("19:30", time(19, 30)),
            ("0:05", time(0, 5)),
            ("doors at 6pm, show 7:30pm", time(18, 0)),
            ("show 20:00, doors 6pm", time(18, 0)),
        ],
    )
    def test_valid_times(self, text, expected):
        assert extract_time_of_day(text) == expected

    @pytest.mark.parametrize(
        "text",
        ["", "nothing here", "7 amazing bands", "13:00 pm", "7:75 pm", "24:00", "Room 12", "2024"],
    )
    def test_no_valid_time(self, text):
        assert extract_time_of_day(text) is None

    def test_invalid_match_is_skipped_for_later_valid_one(self):
        assert extract_time_of_day("15pm or 9pm") == time(21, 0)


class TestTo24Hour:
    @pytest.mark.parametrize(
        "hour,meridiem,expected",
        [(12, "am", 0), (12, "PM", 12), (1, "am", 1), (7, "pm", 19), (11, "p", 23)],
    )
    def test_conversion(self, hour, meridiem, expected):
        assert to_24_hour(hour, meridiem) == expected


class TestLookupTables:
    def test_months_cover_calendar(self):
        assert sorted(MONTH_MAP.values()) == list(range(1, 13))

    def test_weekdays_follow_datetime_weekday(self):
        assert WEEKDAY_MAP["mon"] == 0
        assert WEEKDAY_MAP["fri"] == 4
        assert WEEKDAY_MAP["sun"] == 6


class TestHasMeridiem:
    @pytest.mark.parametrize("text", ["8pm", "tonight 8:00 p.m.", "doors 7 AM"])
    def test_explicit_suffix(self, text):
        assert has_meridiem(text)

    @pytest.mark.parametrize("text", ["tonight 8:00", "20:00", "no time"])
    def test_no_suffix(self, text):
        assert not has_meridiem(text)


class TestWordBoundaries:
    @pytest.mark.parametrize("text", ["Fri 8pm", "FRI", "friday", "Sat.", "Thurs"])
    def test_weekday_forms(self, text):
        assert WEEKDAY_PATTERN.search(text)

    @pytest.mark.parametrize("text", ["fun in the sun", "sat down", "newly wed", "Sunset Stage"])
    def test_lowercase_short_forms_are_words(self, text):
        assert WEEKDAY_PATTERN.search(text) is None

    def test_modal_may_is_not_a_month(self):
        assert MONTH_DAY_YEAR_PATTERN.search("Doors may 5 pm") is None
        assert MONTH_DAY_YEAR_PATTERN.search("May 5").group(1) == "May"
