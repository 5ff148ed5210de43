"""Data models for event date extraction.

Defines the value object produced by a successful recognizer match and the
enum naming each recognizer in the cascade.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict


class RecognizerKind(Enum):
    """Identity of a recognizer in the parsing cascade."""

    ISO = "iso"
    US_NUMERIC = "us_numeric"
    MONTH_NAME = "month_name"
    TODAY_TONIGHT = "today_tonight"
    TOMORROW = "tomorrow"
    WEEKDAY_RELATIVE = "weekday_relative"
    WEEKDAY = "weekday"
    WEEK_RELATIVE = "week_relative"
    BARE_TIME = "bare_time"


# Source labels reported on ParsedDate.source
SOURCE_ISO = "ISO Format"
SOURCE_US_NUMERIC = "US numeric date"
SOURCE_MONTH_NAME = "Month-name date"
SOURCE_TODAY_TONIGHT = "Today/Tonight"
SOURCE_TOMORROW = "Tomorrow"
SOURCE_THIS_WEEKEND = "This Weekend"
SOURCE_NEXT_WEEK = "Next Week"
SOURCE_BARE_TIME = "Bare time"


def weekday_source(weekday_name: str) -> str:
    """Source label for weekday-relative matches, e.g. ``"friday relative"``."""
    return f"{weekday_name.lower()} relative"


@dataclass(frozen=True)
class ParsedDate:
    """Event date resolved from a single candidate string.

    ``instant`` is always timezone-aware. When ``is_all_day`` is set the
    time-of-day carries no meaning: the instant sits at local midnight of
    the resolved date and consumers should treat it as date-only.
    """

    instant: datetime
    confidence: float
    source: str
    is_all_day: bool
    text: str
    recognizer: RecognizerKind

    def __post_init__(self):
        if self.instant.tzinfo is None:
            raise ValueError("ParsedDate.instant must be timezone-aware")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence out of range: {self.confidence}")

    @property
    def date(self) -> date:
        return self.instant.date()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage."""
        return {
            "instant": self.instant.isoformat(),
            "date": self.date.isoformat(),
            "confidence": self.confidence,
            "source": self.source,
            "is_all_day": self.is_all_day,
            "text": self.text,
            "recognizer": self.recognizer.value,
        }
