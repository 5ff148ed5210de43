"""User-friendly error messages for localevents.

Maps error codes to short human-readable messages and recovery suggestions
so CLI users never see raw tracebacks for caller mistakes.
"""

from __future__ import annotations

from typing import Any


# =============================================================================
# Error Message Catalog
# =============================================================================

ERROR_MESSAGES: dict[str, str] = {
    # Extraction errors
    "EXTRACTION_ERROR": "Couldn't extract a date from the given text.",
    "INVALID_REFERENCE_TIME": "The reference time is missing or not a valid date-time.",
    "INVALID_TIMEZONE": "The timezone name isn't recognized.",
    # Configuration errors
    "CONFIGURATION_ERROR": "There's a configuration issue.",
    "INVALID_CONFIG": "The configuration is invalid. Check settings.",
    "MISSING_CONFIG": "Required configuration is missing.",
    # Generic
    "LOCALEVENTS_ERROR": "An unexpected error occurred. Please try again.",
    "UNKNOWN_ERROR": "Something went wrong. Please try again.",
}


# =============================================================================
# Recovery Suggestions
# =============================================================================

RECOVERY_SUGGESTIONS: dict[str, str] = {
    "EXTRACTION_ERROR": "Check the candidate text and try again.",
    "INVALID_REFERENCE_TIME": "Pass an ISO 8601 value such as 2024-01-15T12:00:00-06:00.",
    "INVALID_TIMEZONE": "Use an IANA zone name such as America/Chicago.",
    "CONFIGURATION_ERROR": "Review ~/.localevents/config.json.",
    "INVALID_CONFIG": "Fix or delete the config file to regenerate defaults.",
    "MISSING_CONFIG": "Run 'localevents dates parse' once to create a default config.",
    "LOCALEVENTS_ERROR": "Retry the command with --verbose for details.",
    "UNKNOWN_ERROR": "Retry the command with --verbose for details.",
}


def _error_code(error: Any) -> str:
    if hasattr(error, "code"):
        return error.code
    if isinstance(error, str):
        return error
    return type(error).__name__.upper()


def get_user_message(error: Any) -> str:
    """Get user-friendly message for an error.

    Args:
        error: The error (can be Exception or error code string)

    Returns:
        User-friendly error message
    """
    return ERROR_MESSAGES.get(_error_code(error), ERROR_MESSAGES["UNKNOWN_ERROR"])


def get_recovery_suggestion(error: Any) -> str:
    """Get recovery suggestion for an error."""
    return RECOVERY_SUGGESTIONS.get(_error_code(error), RECOVERY_SUGGESTIONS["UNKNOWN_ERROR"])


def format_error_for_user(error: Any) -> str:
    """Format a complete user-friendly error message.

    Args:
        error: The error to format

    Returns:
        Complete error message with recovery suggestion
    """
    message = get_user_message(error)
    suggestion = get_recovery_suggestion(error)

    return f"{message}\n\nSuggestion: {suggestion}"


def format_error_for_cli(error: Any) -> str:
    """Format error for CLI output, including non-sensitive details."""
    code = getattr(error, "code", "ERROR")

    lines = [
        f"Error [{code}]: {get_user_message(error)}",
        "",
        f"Suggestion: {get_recovery_suggestion(error)}",
    ]

    details = getattr(error, "details", None)
    if details:
        lines.append("")
        lines.append("Details:")
        for key, value in details.items():
            lines.append(f"  {key}: {value}")

    return "\n".join(lines)


__all__ = [
    "ERROR_MESSAGES",
    "RECOVERY_SUGGESTIONS",
    "get_user_message",
    "get_recovery_suggestion",
    "format_error_for_user",
    "format_error_for_cli",
]
