"""Rank date candidates scraped from the same event listing.

A listing often shows its date in more than one place: a loosely formatted
visible label next to a machine-readable ``datetime`` attribute. Parsing every
candidate and keeping the most confident result is more robust than trusting
a single DOM selector.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from localevents.errors import InvalidConfigError
from localevents.extraction.dates.models import ParsedDate
from localevents.extraction.dates.parser import EventDateParser, TimezoneArg

logger = logging.getLogger(__name__)


class MultiCandidateSelector:
    """Parse several candidate strings and rank the successes by confidence."""

    def __init__(self, parser: Optional[EventDateParser] = None, min_confidence: float = 0.0):
        if not 0.0 <= min_confidence <= 1.0:
            raise InvalidConfigError(
                f"min_confidence must be within [0, 1], got {min_confidence}",
                details={"min_confidence": min_confidence},
            )
        self.parser = parser or EventDateParser()
        self.min_confidence = min_confidence

    def parse_multiple_dates(
        self,
        texts: Optional[Iterable[Optional[str]]],
        reference_time: datetime,
        timezone: TimezoneArg = None,
    ) -> List[ParsedDate]:
        """Parse every candidate and return successes, most confident first.

        Ties keep input order (earlier candidate first). Empty input or input
        where nothing parses yields an empty list.
        """
        if not texts:
            return []

        results = []
        candidate_count = 0
        for text in texts:
            candidate_count += 1
            parsed = self.parser.parse_event_date(text, reference_time, timezone)
            if parsed is not None and parsed.confidence >= self.min_confidence:
                results.append(parsed)

        # sorted() is stable, so equal confidences stay in input order
        ranked = sorted(results, key=lambda result: result.confidence, reverse=True)
        logger.debug(f"Ranked {len(ranked)} of {candidate_count} candidates")
        return ranked

    def get_best_date(
        self,
        texts: Optional[Iterable[Optional[str]]],
        reference_time: datetime,
        timezone: TimezoneArg = None,
    ) -> Optional[ParsedDate]:
        """Return the most confident parse, or None when nothing parses."""
        ranked = self.parse_multiple_dates(texts, reference_time, timezone)
        return ranked[0] if ranked else None


_default_selector = MultiCandidateSelector()


def parse_multiple_dates(
    texts: Optional[Iterable[Optional[str]]],
    reference_time: datetime,
    timezone: TimezoneArg = None,
) -> List[ParsedDate]:
    """Rank candidates with default settings."""
    return _default_selector.parse_multiple_dates(texts, reference_time, timezone)


def get_best_date(
    texts: Optional[Iterable[Optional[str]]],
    reference_time: datetime,
    timezone: TimezoneArg = None,
) -> Optional[ParsedDate]:
    """Best candidate with default settings."""
    return _default_selector.get_best_date(texts, reference_time, timezone)
