"""Event date parsing for scraped venue listings.

Turns one free-text candidate string ("today at 7pm", "2/20/2024",
"this Friday", ISO timestamps) into a timezone-aware ParsedDate with a
confidence score and a source label.

Recognizers run in the fixed order given by RECOGNIZER_ORDER and the first
match wins, so precise grammars (ISO, numeric dates) are never shadowed by
looser ones (bare clock times). A date-bearing match that turns out to be
impossible or outside the plausibility window ends the cascade with None.
Relative phrases resolve strictly against the caller-supplied reference
time; the parser never reads the system clock.

Unparseable text returns None and is not logged above DEBUG. Only caller
misuse raises (InvalidReferenceTimeError, InvalidTimezoneError).
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Callable, Dict, Optional, Tuple, Union

from dateutil import parser as dateutil_parser
from dateutil import tz

from localevents.configuration.settings import DateParsingSettings
from localevents.errors import InvalidReferenceTimeError, InvalidTimezoneError
from localevents.extraction.dates.models import (
    SOURCE_BARE_TIME,
    SOURCE_ISO,
    SOURCE_MONTH_NAME,
    SOURCE_NEXT_WEEK,
    SOURCE_THIS_WEEKEND,
    SOURCE_TODAY_TONIGHT,
    SOURCE_TOMORROW,
    SOURCE_US_NUMERIC,
    ParsedDate,
    RecognizerKind,
    weekday_source,
)
from localevents.extraction.dates.patterns import (
    DAY_MONTH_YEAR_PATTERN,
    ISO_8601_PATTERN,
    MONTH_DAY_YEAR_PATTERN,
    MONTH_MAP,
    NEXT_WEEK_PATTERN,
    THIS_WEEKEND_PATTERN,
    TODAY_TONIGHT_PATTERN,
    TOMORROW_PATTERN,
    US_DATE_PATTERN,
    WEEKDAY_MAP,
    WEEKDAY_NAMES,
    WEEKDAY_PATTERN,
    WEEKDAY_RELATIVE_PATTERN,
    extract_time_of_day,
    has_meridiem,
)

logger = logging.getLogger(__name__)

TimezoneArg = Union[str, tzinfo, None]
Recognizer = Callable[[str, datetime, tzinfo], Optional[ParsedDate]]


class _RejectedDate(Exception):
    """Raised by a recognizer whose pattern matched an unusable date."""


# ---------------------------------------------------------------------------
# Cascade Order
# ---------------------------------------------------------------------------

# Reordering changes results on ambiguous input; tests pin this sequence.
RECOGNIZER_ORDER: Tuple[RecognizerKind, ...] = (
    RecognizerKind.ISO,
    RecognizerKind.US_NUMERIC,
    RecognizerKind.MONTH_NAME,
    RecognizerKind.TODAY_TONIGHT,
    RecognizerKind.TOMORROW,
    RecognizerKind.WEEKDAY_RELATIVE,
    RecognizerKind.WEEKDAY,
    RecognizerKind.WEEK_RELATIVE,
    RecognizerKind.BARE_TIME,
)


# ---------------------------------------------------------------------------
# Confidence Bands
# ---------------------------------------------------------------------------

CONFIDENCE_ISO_TIMESTAMP = 0.95
CONFIDENCE_ISO_DATE = 0.90
CONFIDENCE_MONTH_NAME = 0.85
CONFIDENCE_US_NUMERIC = 0.80
CONFIDENCE_US_NUMERIC_SHORT_YEAR = 0.75
CONFIDENCE_MONTH_NAME_NO_YEAR = 0.75
CONFIDENCE_TODAY_TONIGHT = 0.85
CONFIDENCE_TOMORROW = 0.85
CONFIDENCE_WEEKDAY_RELATIVE = 0.75
CONFIDENCE_WEEKDAY = 0.55
CONFIDENCE_THIS_WEEKEND = 0.60
CONFIDENCE_NEXT_WEEK = 0.50
CONFIDENCE_BARE_TIME = 0.40


class EventDateParser:
    """Parse a single candidate string into a ParsedDate.

    Instances hold only immutable configuration and may be shared across
    threads.
    """

    def __init__(self, settings: Optional[DateParsingSettings] = None):
        self.settings = settings or DateParsingSettings()
        self._default_zone = tz.gettz(self.settings.default_timezone)
        self._recognizers: Dict[RecognizerKind, Recognizer] = {
            RecognizerKind.ISO: self._recognize_iso,
            RecognizerKind.US_NUMERIC: self._recognize_us_numeric,
            RecognizerKind.MONTH_NAME: self._recognize_month_name,
            RecognizerKind.TODAY_TONIGHT: self._recognize_today_tonight,
            RecognizerKind.TOMORROW: self._recognize_tomorrow,
            RecognizerKind.WEEKDAY_RELATIVE: self._recognize_weekday_relative,
            RecognizerKind.WEEKDAY: self._recognize_weekday,
            RecognizerKind.WEEK_RELATIVE: self._recognize_week_relative,
            RecognizerKind.BARE_TIME: self._recognize_bare_time,
        }

    def parse_event_date(
        self,
        text: Optional[str],
        reference_time: datetime,
        timezone: TimezoneArg = None,
    ) -> Optional[ParsedDate]:
        """Parse free text into a ParsedDate.

        Args:
            text: Candidate string scraped from a page (None and blank allowed)
            reference_time: The "now" used for relative phrases and implied dates
            timezone: Optional tzinfo or IANA name; defaults to the reference's
                      own zone, then to settings.default_timezone

        Returns:
            ParsedDate from the first matching recognizer, or None

        Raises:
            InvalidReferenceTimeError: reference_time is not a datetime
            InvalidTimezoneError: timezone name cannot be resolved
        """
        reference = self._resolve_reference(reference_time, timezone)

        if not isinstance(text, str):
            return None
        candidate = text.strip()
        if not candidate:
            return None

        zone = reference.tzinfo
        for kind in RECOGNIZER_ORDER:
            try:
                result = self._recognizers[kind](candidate, reference, zone)
            except (_RejectedDate, OverflowError) as e:
                # The text names a date that cannot be used; later recognizers
                # must not pin its clock time to another day.
                logger.debug(f"Rejected '{candidate}' via {kind.value}: {e}")
                return None

            if result is None:
                continue
            if not self._is_plausible(result):
                logger.debug(
                    f"Rejected '{candidate}' via {kind.value}: "
                    f"year {result.instant.year} outside plausibility window"
                )
                return None

            logger.debug(
                f"Parsed '{candidate}' via {kind.value}: "
                f"{result.instant.isoformat()} (confidence={result.confidence})"
            )
            return result

        return None

    # -----------------------------------------------------------------------
    # Reference / Timezone Resolution
    # -----------------------------------------------------------------------

    def _resolve_reference(self, reference_time: datetime, timezone: TimezoneArg) -> datetime:
        """Return the reference time as an aware datetime in the resolution zone."""
        if not isinstance(reference_time, datetime):
            raise InvalidReferenceTimeError(
                f"reference_time must be a datetime, got {type(reference_time).__name__}",
                details={"type": type(reference_time).__name__},
            )

        is_aware = reference_time.utcoffset() is not None

        if timezone is not None:
            zone = self._resolve_zone(timezone)
        elif is_aware:
            zone = reference_time.tzinfo
        else:
            zone = self._default_zone

        if is_aware:
            return reference_time.astimezone(zone)
        return reference_time.replace(tzinfo=zone)

    @staticmethod
    def _resolve_zone(timezone: Union[str, tzinfo]) -> tzinfo:
        if isinstance(timezone, tzinfo):
            return timezone
        if isinstance(timezone, str) and timezone.strip():
            zone = tz.gettz(timezone.strip())
            if zone is not None:
                return zone
        raise InvalidTimezoneError(
            f"Unknown timezone: {timezone!r}", details={"timezone": str(timezone)}
        )

    # -----------------------------------------------------------------------
    # Recognizers
    # -----------------------------------------------------------------------

    def _recognize_iso(self, text: str, reference: datetime, zone: tzinfo) -> Optional[ParsedDate]:
        """ISO 8601 timestamp, or ISO date with a clock time anywhere in the text."""
        match = ISO_8601_PATTERN.search(text)
        if not match:
            return None

        try:
            parsed = dateutil_parser.isoparse(match.group(0).upper().replace(" ", "T", 1))
        except (ValueError, OverflowError) as e:
            raise _RejectedDate(f"invalid ISO value {match.group(0)!r}") from e

        if match.group("hour") is not None:
            if parsed.utcoffset() is None:
                instant = tz.resolve_imaginary(parsed.replace(tzinfo=zone))
            else:
                instant = parsed.astimezone(zone)
            return self._build(
                RecognizerKind.ISO, SOURCE_ISO, CONFIDENCE_ISO_TIMESTAMP, instant, False, text
            )

        clock = extract_time_of_day(_without_match(text, match))
        return self._at(
            RecognizerKind.ISO, SOURCE_ISO, CONFIDENCE_ISO_DATE, parsed.date(), clock, zone, text
        )

    def _recognize_us_numeric(self, text: str, reference: datetime, zone: tzinfo) -> Optional[ParsedDate]:
        """MM/DD/YYYY or M-D-YY; month always comes first."""
        match = US_DATE_PATTERN.search(text)
        if not match:
            return None

        month, day, year_str = int(match.group(1)), int(match.group(3)), match.group(4)
        if len(year_str) == 4:
            year, confidence = int(year_str), CONFIDENCE_US_NUMERIC
        else:
            year, confidence = self._expand_two_digit_year(int(year_str)), CONFIDENCE_US_NUMERIC_SHORT_YEAR

        day_value = _safe_date(year, month, day)
        if day_value is None:
            raise _RejectedDate(f"no such date {month}/{day}/{year}")

        clock = extract_time_of_day(_without_match(text, match))
        return self._at(RecognizerKind.US_NUMERIC, SOURCE_US_NUMERIC, confidence, day_value, clock, zone, text)

    def _recognize_month_name(self, text: str, reference: datetime, zone: tzinfo) -> Optional[ParsedDate]:
        """English month-name dates, with or without a year."""
        mdy = MONTH_DAY_YEAR_PATTERN.search(text)

        if mdy and mdy.group(3):
            match, month_token, day, year = mdy, mdy.group(1), int(mdy.group(2)), int(mdy.group(3))
            confidence = CONFIDENCE_MONTH_NAME
        else:
            dmy = DAY_MONTH_YEAR_PATTERN.search(text)
            if dmy:
                match, month_token, day, year = dmy, dmy.group(2), int(dmy.group(1)), int(dmy.group(3))
                confidence = CONFIDENCE_MONTH_NAME
            elif mdy:
                # No year given: take it from the reference date
                match, month_token, day, year = mdy, mdy.group(1), int(mdy.group(2)), reference.year
                confidence = CONFIDENCE_MONTH_NAME_NO_YEAR
            else:
                return None

        month = MONTH_MAP[month_token.lower()[:3]]
        day_value = _safe_date(year, month, day)
        if day_value is None:
            raise _RejectedDate(f"no such date {month_token} {day} {year}")

        clock = extract_time_of_day(_without_match(text, match))
        return self._at(RecognizerKind.MONTH_NAME, SOURCE_MONTH_NAME, confidence, day_value, clock, zone, text)

    def _recognize_today_tonight(self, text: str, reference: datetime, zone: tzinfo) -> Optional[ParsedDate]:
        match = TODAY_TONIGHT_PATTERN.search(text)
        if not match:
            return None

        clock = extract_time_of_day(text)
        if match.group(1).lower() == "tonight":
            if clock is None:
                clock = time(self.settings.tonight_hour, 0)
            elif 1 <= clock.hour <= 11 and not has_meridiem(text):
                # "tonight 8:00" is an evening show
                clock = clock.replace(hour=clock.hour + 12)

        return self._at(
            RecognizerKind.TODAY_TONIGHT, SOURCE_TODAY_TONIGHT, CONFIDENCE_TODAY_TONIGHT,
            reference.date(), clock, zone, text,
        )

    def _recognize_tomorrow(self, text: str, reference: datetime, zone: tzinfo) -> Optional[ParsedDate]:
        if not TOMORROW_PATTERN.search(text):
            return None

        return self._at(
            RecognizerKind.TOMORROW, SOURCE_TOMORROW, CONFIDENCE_TOMORROW,
            reference.date() + timedelta(days=1), extract_time_of_day(text), zone, text,
        )

    def _recognize_weekday_relative(self, text: str, reference: datetime, zone: tzinfo) -> Optional[ParsedDate]:
        """'this <weekday>' (on/after reference) or 'next <weekday>' (following week)."""
        match = WEEKDAY_RELATIVE_PATTERN.search(text)
        if not match:
            return None

        qualifier = match.group(1).lower()
        target = WEEKDAY_MAP[match.group(2).lower()[:3]]
        current = reference.weekday()

        if qualifier == "this":
            days_ahead = (target - current) % 7
        else:
            # Monday of the following week, then forward to the target day
            days_ahead = (7 - current) + target

        return self._at(
            RecognizerKind.WEEKDAY_RELATIVE, weekday_source(WEEKDAY_NAMES[target]),
            CONFIDENCE_WEEKDAY_RELATIVE, reference.date() + timedelta(days=days_ahead),
            extract_time_of_day(text), zone, text,
        )

    def _recognize_weekday(self, text: str, reference: datetime, zone: tzinfo) -> Optional[ParsedDate]:
        """Unqualified weekday ("Fri 8pm"), read like 'this <weekday>'."""
        match = WEEKDAY_PATTERN.search(text)
        if not match:
            return None

        target = WEEKDAY_MAP[match.group(1).lower()[:3]]
        days_ahead = (target - reference.weekday()) % 7

        return self._at(
            RecognizerKind.WEEKDAY, weekday_source(WEEKDAY_NAMES[target]),
            CONFIDENCE_WEEKDAY, reference.date() + timedelta(days=days_ahead),
            extract_time_of_day(text), zone, text,
        )

    def _recognize_week_relative(self, text: str, reference: datetime, zone: tzinfo) -> Optional[ParsedDate]:
        """'this weekend' (Saturday, or today when already Sunday) and 'next week'."""
        if THIS_WEEKEND_PATTERN.search(text):
            days_ahead = max(5 - reference.weekday(), 0)
            source, confidence = SOURCE_THIS_WEEKEND, CONFIDENCE_THIS_WEEKEND
        elif NEXT_WEEK_PATTERN.search(text):
            days_ahead = 7
            source, confidence = SOURCE_NEXT_WEEK, CONFIDENCE_NEXT_WEEK
        else:
            return None

        return self._at(
            RecognizerKind.WEEK_RELATIVE, source, confidence,
            reference.date() + timedelta(days=days_ahead), extract_time_of_day(text), zone, text,
        )

    def _recognize_bare_time(self, text: str, reference: datetime, zone: tzinfo) -> Optional[ParsedDate]:
        """Clock time alone, placed on the reference date (no roll-over)."""
        clock = extract_time_of_day(text)
        if clock is None:
            return None

        return self._at(
            RecognizerKind.BARE_TIME, SOURCE_BARE_TIME, CONFIDENCE_BARE_TIME,
            reference.date(), clock, zone, text,
        )

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    def _at(
        self,
        kind: RecognizerKind,
        source: str,
        confidence: float,
        day: date,
        clock: Optional[time],
        zone: tzinfo,
        text: str,
    ) -> ParsedDate:
        """Combine a calendar date and optional clock time in ``zone``.

        Without a clock time the result is all-day, anchored at local midnight.
        """
        is_all_day = clock is None
        instant = datetime.combine(day, clock or time(0, 0), tzinfo=zone)
        return self._build(kind, source, confidence, tz.resolve_imaginary(instant), is_all_day, text)

    @staticmethod
    def _build(
        kind: RecognizerKind,
        source: str,
        confidence: float,
        instant: datetime,
        is_all_day: bool,
        text: str,
    ) -> ParsedDate:
        return ParsedDate(
            instant=instant,
            confidence=confidence,
            source=source,
            is_all_day=is_all_day,
            text=text,
            recognizer=kind,
        )

    def _expand_two_digit_year(self, year: int) -> int:
        if year < self.settings.two_digit_year_pivot:
            return 2000 + year
        return 1900 + year

    def _is_plausible(self, result: ParsedDate) -> bool:
        return self.settings.min_year <= result.instant.year <= self.settings.max_year


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    """Build a date, returning None for impossible components (month 13, Feb 30)."""
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _without_match(text: str, match) -> str:
    """Text with the matched date removed, so its digits are not read as a time."""
    return f"{text[:match.start()]} {text[match.end():]}"


# ---------------------------------------------------------------------------
# Module-level convenience API
# ---------------------------------------------------------------------------

_default_parser = EventDateParser()


def parse_event_date(
    text: Optional[str],
    reference_time: datetime,
    timezone: TimezoneArg = None,
) -> Optional[ParsedDate]:
    """Parse one candidate string with default settings."""
    return _default_parser.parse_event_date(text, reference_time, timezone)
