"""Centralized error definitions for localevents.

Unparseable candidate text is not an error: the parser returns ``None`` for
it. The classes here cover caller misuse (bad reference time, unknown
timezone) and broken configuration.

Usage:
    from localevents.errors import LocalEventsError, handle_error

    try:
        parsed = parser.parse_event_date(text, reference_time)
    except LocalEventsError as e:
        print(handle_error(e))
"""

from __future__ import annotations

import logging

from localevents.errors.user_messages import (
    format_error_for_cli,
    format_error_for_user,
    get_recovery_suggestion,
    get_user_message,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Base Error
# =============================================================================


class LocalEventsError(Exception):
    """Base exception for all localevents errors.

    Attributes:
        code: Error code for categorization
        user_message: User-friendly message (optional override)
        recoverable: Whether the error is potentially recoverable
        details: Additional error details for debugging
    """

    code: str = "LOCALEVENTS_ERROR"
    default_message: str = "An unexpected error occurred"
    recoverable: bool = True

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.message = message or self.default_message
        self._user_message = user_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def user_message(self) -> str:
        """Get user-friendly message."""
        if self._user_message:
            return self._user_message
        return get_user_message(self)

    @property
    def recovery_suggestion(self) -> str:
        return get_recovery_suggestion(self)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "user_message": self.user_message,
            "recoverable": self.recoverable,
            "details": self.details,
        }


# =============================================================================
# Extraction Errors
# =============================================================================


class ExtractionError(LocalEventsError):
    """Base error for date extraction contract violations."""

    code = "EXTRACTION_ERROR"
    default_message = "Date extraction failed"


class InvalidReferenceTimeError(ExtractionError, TypeError):
    """Reference time is absent or not a datetime."""

    code = "INVALID_REFERENCE_TIME"
    default_message = "reference_time must be a datetime"
    recoverable = False


class InvalidTimezoneError(ExtractionError, ValueError):
    """Timezone name could not be resolved."""

    code = "INVALID_TIMEZONE"
    default_message = "Unknown timezone"
    recoverable = False


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(LocalEventsError):
    """Base error for configuration issues."""

    code = "CONFIGURATION_ERROR"
    default_message = "Configuration error"


class InvalidConfigError(ConfigurationError):
    """Configuration file failed validation."""

    code = "INVALID_CONFIG"
    default_message = "Invalid configuration"


class MissingConfigError(ConfigurationError):
    """Configuration file does not exist."""

    code = "MISSING_CONFIG"
    default_message = "Configuration not found"


# =============================================================================
# Error Handling Utilities
# =============================================================================


def handle_error(error: Exception) -> str:
    """Log an error and return a user-friendly message.

    Args:
        error: The exception to handle

    Returns:
        User-friendly error message with recovery suggestion
    """
    if isinstance(error, LocalEventsError) and error.recoverable:
        logger.warning(f"{error.code}: {error.message}")
    else:
        logger.error(f"{type(error).__name__}: {error}")
    return format_error_for_user(error)


def is_recoverable(error: Exception) -> bool:
    """Check if an error is potentially recoverable."""
    if isinstance(error, LocalEventsError):
        return error.recoverable
    return False


__all__ = [
    # Base
    "LocalEventsError",
    # Extraction
    "ExtractionError",
    "InvalidReferenceTimeError",
    "InvalidTimezoneError",
    # Configuration
    "ConfigurationError",
    "InvalidConfigError",
    "MissingConfigError",
    # Utilities
    "handle_error",
    "is_recoverable",
    "format_error_for_cli",
    "format_error_for_user",
    "get_user_message",
    "get_recovery_suggestion",
]
