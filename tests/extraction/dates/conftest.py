"""Test fixtures for event date extraction tests.

Provides:
- A fixed reference time (Monday, January 15 2024, noon US Central)
- Parsers built from default and custom settings
"""

from datetime import datetime, timedelta, timezone

import pytest

from localevents.configuration.settings import DateParsingSettings
from localevents.extraction.dates import EventDateParser


CENTRAL_STANDARD = timezone(timedelta(hours=-6))


@pytest.fixture
def central():
    return CENTRAL_STANDARD


@pytest.fixture
def reference_time():
    """Monday, 2024-01-15T12:00:00-06:00."""
    return datetime(2024, 1, 15, 12, 0, 0, tzinfo=CENTRAL_STANDARD)


@pytest.fixture
def parser():
    return EventDateParser()


@pytest.fixture
def settings_factory():
    def _make(**kwargs):
        return DateParsingSettings(**kwargs)

    return _make
