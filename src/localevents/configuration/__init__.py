"""Configuration loading utilities for localevents."""

from .settings import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_TIMEZONE,
    DateParsingSettings,
    Settings,
    bootstrap_settings,
    load_settings,
    save_settings,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_TIMEZONE",
    "DateParsingSettings",
    "Settings",
    "bootstrap_settings",
    "load_settings",
    "save_settings",
]
