"""Shared test configuration."""

from __future__ import annotations

import pytest


_ENV_OVERRIDES = (
    "LOCALEVENTS_TIMEZONE",
    "LOCALEVENTS_TONIGHT_HOUR",
    "LOCALEVENTS_MIN_YEAR",
    "LOCALEVENTS_MAX_YEAR",
)


@pytest.fixture(autouse=True)
def _isolate_env_overrides(monkeypatch):
    """Keep developer environment overrides out of test runs."""
    for name in _ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)
