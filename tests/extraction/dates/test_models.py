"""Unit tests for date extraction models."""

from dataclasses import FrozenInstanceError
from datetime import date, datetime, timedelta, timezone

import pytest

from localevents.extraction.dates.models import ParsedDate, RecognizerKind, weekday_source


CENTRAL = timezone(timedelta(hours=-6))


def _parsed(**overrides):
    fields = dict(
        instant=datetime(2024, 2, 20, 19, 30, tzinfo=CENTRAL),
        confidence=0.95,
        source="ISO Format",
        is_all_day=False,
        text="2024-02-20T19:30:00-06:00",
        recognizer=RecognizerKind.ISO,
    )
    fields.update(overrides)
    return ParsedDate(**fields)


class TestParsedDate:
    def test_to_dict(self):
        data = _parsed().to_dict()

        assert data == {
            "instant": "2024-02-20T19:30:00-06:00",
            "date": "2024-02-20",
            "confidence": 0.95,
            "source": "ISO Format",
            "is_all_day": False,
            "text": "2024-02-20T19:30:00-06:00",
            "recognizer": "iso",
        }

    def test_date_property(self):
        assert _parsed().date == date(2024, 2, 20)

    def test_is_immutable(self):
        parsed = _parsed()
        with pytest.raises(FrozenInstanceError):
            parsed.confidence = 0.1

    def test_naive_instant_rejected(self):
        with pytest.raises(ValueError):
            _parsed(instant=datetime(2024, 2, 20, 19, 30))

    @pytest.mark.parametrize("confidence", [-0.1, 1.5])
    def test_confidence_outside_unit_interval_rejected(self, confidence):
        with pytest.raises(ValueError):
            _parsed(confidence=confidence)


def test_weekday_source_label():
    assert weekday_source("Friday") == "friday relative"
