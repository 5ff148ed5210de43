"""Typed settings management for localevents.

This module wraps parser configuration in Pydantic models so the CLI and the
date extraction core can rely on validated defaults. Settings are persisted
as JSON and may be overridden through environment variables.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dateutil import tz
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from localevents.errors import InvalidConfigError, MissingConfigError

logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = Path.home() / ".localevents" / "config.json"
DEFAULT_TIMEZONE = "America/Chicago"


class DateParsingSettings(BaseModel):
    """Defaults used when resolving scraped event dates."""

    default_timezone: str = Field(
        DEFAULT_TIMEZONE,
        description="IANA zone used when neither the caller nor the reference time carries one",
    )
    tonight_hour: int = Field(19, ge=0, le=23, description="Hour assigned to a bare 'tonight'")
    min_year: int = Field(2000, ge=1, le=9999, description="Earliest plausible event year")
    max_year: int = Field(2100, ge=1, le=9999, description="Latest plausible event year")
    two_digit_year_pivot: int = Field(
        50, ge=0, le=99, description="Two-digit years below the pivot map to 20xx, others to 19xx"
    )

    @field_validator("default_timezone")
    def _validate_timezone(cls, value: str) -> str:
        if tz.gettz(value) is None:
            raise ValueError(f"Unknown timezone: {value}")
        return value

    @model_validator(mode="after")
    def _validate_year_window(self) -> "DateParsingSettings":
        if self.min_year > self.max_year:
            raise ValueError("min_year must not exceed max_year")
        return self


class Settings(BaseModel):
    """Root configuration state."""

    parsing: DateParsingSettings = Field(default_factory=DateParsingSettings)


def load_settings(path: Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Load settings from disk or raise if missing or invalid."""

    if not path.exists():
        raise MissingConfigError(
            f"Settings file not found at {path}", details={"path": str(path)}
        )
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidConfigError(f"Settings file is not valid JSON: {exc}") from exc
    return _validate(payload)


def save_settings(settings: Settings, path: Path = DEFAULT_CONFIG_PATH) -> None:
    """Persist settings to disk."""

    payload = settings.model_dump(mode="json")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def bootstrap_settings(
    *,
    path: Path = DEFAULT_CONFIG_PATH,
    overrides: Optional[Dict[str, Any]] = None,
) -> Settings:
    """Create or load settings respecting explicit and environment overrides.

    A default config file is written when none exists. Overrides are merged
    into the ``parsing`` section and are not written back to disk.
    """

    overrides = overrides or {}

    if path.exists():
        settings = load_settings(path)
    else:
        settings = Settings()
        save_settings(settings, path)
        logger.info(f"Created default settings at {path}")

    merged = settings.model_dump(mode="python")
    merged["parsing"] = _apply_overrides(merged["parsing"], overrides)
    merged = _apply_env_overrides(merged)

    return _validate(merged)


def _validate(payload: Dict[str, Any]) -> Settings:
    try:
        return Settings.model_validate(payload)
    except ValidationError as exc:
        raise InvalidConfigError(f"Invalid configuration: {exc}") from exc


def _apply_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = base.copy()
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    parsing = data.setdefault("parsing", {})
    _set_env_override(parsing, "default_timezone", "LOCALEVENTS_TIMEZONE")
    _set_env_override(parsing, "tonight_hour", "LOCALEVENTS_TONIGHT_HOUR", cast_int=True)
    _set_env_override(parsing, "min_year", "LOCALEVENTS_MIN_YEAR", cast_int=True)
    _set_env_override(parsing, "max_year", "LOCALEVENTS_MAX_YEAR", cast_int=True)
    return data


def _set_env_override(
    mapping: Dict[str, Any],
    key: str,
    env_name: str,
    *,
    cast_int: bool = False,
) -> None:
    raw = os.getenv(env_name)
    if raw is None:
        return
    if cast_int:
        try:
            mapping[key] = int(raw)
        except ValueError as exc:
            raise InvalidConfigError(
                f"{env_name} must be an integer", details={env_name: raw}
            ) from exc
    else:
        mapping[key] = raw


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_TIMEZONE",
    "DateParsingSettings",
    "Settings",
    "bootstrap_settings",
    "load_settings",
    "save_settings",
]
