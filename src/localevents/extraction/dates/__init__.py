"""Event date extraction for scraped venue listings.

This package turns free-text date candidates into timezone-aware values:
- ISO 8601 timestamps and dates
- US numeric dates (month first) and English month-name dates
- Relative phrases (today, tonight, tomorrow, this/next <weekday>, bare weekdays,
  this weekend, next week)
- Bare clock times

Usage:
    from localevents.extraction.dates import parse_event_date, get_best_date

    parsed = parse_event_date("tomorrow at 2pm", reference_time)
    best = get_best_date(["Fri 8pm", "2024-02-20T19:30:00-06:00"], reference_time)
"""

from localevents.extraction.dates.models import (
    ParsedDate,
    RecognizerKind,
)
from localevents.extraction.dates.parser import (
    RECOGNIZER_ORDER,
    EventDateParser,
    parse_event_date,
)
from localevents.extraction.dates.patterns import extract_time_of_day
from localevents.extraction.dates.selector import (
    MultiCandidateSelector,
    get_best_date,
    parse_multiple_dates,
)

__all__ = [
    # Models
    "ParsedDate",
    "RecognizerKind",
    # Parser
    "EventDateParser",
    "RECOGNIZER_ORDER",
    "parse_event_date",
    "extract_time_of_day",
    # Selector
    "MultiCandidateSelector",
    "parse_multiple_dates",
    "get_best_date",
]
