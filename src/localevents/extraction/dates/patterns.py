"""Regular expressions and lookup tables for event date recognition.

Also hosts the shared time-of-day helper used by every recognizer that can
carry a clock time (numeric dates, month-name dates, relative phrases and
bare times).
"""

from __future__ import annotations

import re
from datetime import time
from typing import Optional


# ---------------------------------------------------------------------------
# Lookup Tables
# ---------------------------------------------------------------------------

# Keyed by the first three letters of the English month name
MONTH_MAP = {
    "jan": 1, "feb": 2, "mar": 3, "apr": 4, "may": 5, "jun": 6,
    "jul": 7, "aug": 8, "sep": 9, "oct": 10, "nov": 11, "dec": 12,
}

WEEKDAY_NAMES = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)

# Keyed by the first three letters; values follow datetime.weekday()
WEEKDAY_MAP = {name[:3]: index for index, name in enumerate(WEEKDAY_NAMES)}

# Short forms match only when capitalized or upper-case
WEEKDAY_ABBREVIATIONS = ("Mon", "Tue", "Tues", "Wed", "Thu", "Thur", "Thurs", "Fri", "Sat", "Sun")


# ---------------------------------------------------------------------------
# Date Patterns
# ---------------------------------------------------------------------------

_MONTH_ALT = (
    r"jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|(?-i:May|MAY)|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
)

_WEEKDAY_ALT = (
    r"mon(?:day)?|tue(?:s(?:day)?)?|wed(?:nesday)?|thu(?:r(?:s(?:day)?)?)?"
    r"|fri(?:day)?|sat(?:urday)?|sun(?:day)?"
)

# 2024-02-20, 2024-02-20T19:30, 2024-02-20T19:30:00.000-06:00, 2024-02-20 19:30Z
# A clock followed by am/pm is left to the time-of-day helper.
ISO_8601_PATTERN = re.compile(
    r"(?<!\d)(?P<date>\d{4}-\d{2}-\d{2})"
    r"(?:[T ](?P<hour>\d{2}):\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}(?::?\d{2})?)?"
    r"(?![\d:])(?!\s*[ap]\.?m))?"
    r"(?!\d)",
    re.IGNORECASE,
)

# MM/DD/YYYY, M/D/YY, MM-DD-YYYY (separators must agree)
US_DATE_PATTERN = re.compile(
    r"(?<![\d/-])(\d{1,2})([/-])(\d{1,2})\2(\d{4}|\d{2})(?!\d)"
)

# February 20, 2024 / Feb. 20th 2024 / Feb 20 (year optional)
MONTH_DAY_YEAR_PATTERN = re.compile(
    rf"\b({_MONTH_ALT})\b\.?\s+(\d{{1,2}})(?:st|nd|rd|th)?\b(?:,?\s+(\d{{4}}))?(?!\d)",
    re.IGNORECASE,
)

# 20 February 2024 / 20th Feb, 2024
DAY_MONTH_YEAR_PATTERN = re.compile(
    rf"(?<!\d)(\d{{1,2}})(?:st|nd|rd|th)?\s+({_MONTH_ALT})\b\.?,?\s+(\d{{4}})(?!\d)",
    re.IGNORECASE,
)


# ---------------------------------------------------------------------------
# Relative Expression Patterns
# ---------------------------------------------------------------------------

TODAY_TONIGHT_PATTERN = re.compile(r"\b(today|tonight)\b", re.IGNORECASE)
TOMORROW_PATTERN = re.compile(r"\btomorrow\b", re.IGNORECASE)
WEEKDAY_RELATIVE_PATTERN = re.compile(
    rf"\b(this|next)\s+({_WEEKDAY_ALT})\b", re.IGNORECASE
)
THIS_WEEKEND_PATTERN = re.compile(r"\bthis\s+weekend\b", re.IGNORECASE)
NEXT_WEEK_PATTERN = re.compile(r"\bnext\s+week\b", re.IGNORECASE)

# Friday, FRIDAY, Fri, FRI (no this/next qualifier)
WEEKDAY_PATTERN = re.compile(
    r"\b((?i:" + "|".join(WEEKDAY_NAMES) + r")|"
    + "|".join(abbr for name in WEEKDAY_ABBREVIATIONS for abbr in (name, name.upper()))
    + r")\b"
)


# ---------------------------------------------------------------------------
# Time Patterns
# ---------------------------------------------------------------------------

# 7pm, 7 PM, 7:30pm, 7:30 p.m.
TIME_12HR_PATTERN = re.compile(
    r"(?<![\d:])(\d{1,2})(?::(\d{2}))?\s*([ap])\.?\s?m\b\.?",
    re.IGNORECASE,
)

# 19:30, 7:30 (no meridiem suffix)
TIME_24HR_PATTERN = re.compile(
    r"(?<![\d:])(\d{1,2}):(\d{2})(?!\d)(?!\s*[ap]\.?\s?m\b)",
    re.IGNORECASE,
)


def to_24_hour(hour: int, meridiem: str) -> int:
    """Convert a 12-hour clock hour to 24-hour form.

    12 AM is midnight (0) and 12 PM is noon (12).
    """
    meridiem = meridiem.lower()
    if meridiem.startswith("p") and hour != 12:
        return hour + 12
    if meridiem.startswith("a") and hour == 12:
        return 0
    return hour


def extract_time_of_day(text: str) -> Optional[time]:
    """Find the first valid clock time in ``text``.

    12-hour times with an am/pm suffix take precedence over bare ``H:MM``
    values. Out-of-range matches (hour 13 PM, minute 75) are skipped.

    Returns:
        Naive ``datetime.time`` or None when no valid time is present
    """
    for match in TIME_12HR_PATTERN.finditer(text):
        hour = int(match.group(1))
        minute = int(match.group(2) or 0)
        if 1 <= hour <= 12 and minute <= 59:
            return time(to_24_hour(hour, match.group(3)), minute)

    for match in TIME_24HR_PATTERN.finditer(text):
        hour = int(match.group(1))
        minute = int(match.group(2))
        if hour <= 23 and minute <= 59:
            return time(hour, minute)

    return None


def has_meridiem(text: str) -> bool:
    """True when ``text`` carries an explicit am/pm clock time."""
    return TIME_12HR_PATTERN.search(text) is not None
