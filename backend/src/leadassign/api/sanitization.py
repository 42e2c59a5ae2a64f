"""Request sanitization utilities.

Provides input sanitization for lead submissions before they are
analyzed, stored or echoed back to admins.
"""

import html
import re

from ..logging import get_context_logger

logger = get_context_logger(__name__)

MAX_STRING_LENGTH = 10000

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{0,15}$")

_ANGLE_BRACKETS = re.compile(r"[<>]")
_JS_PROTOCOL = re.compile(r"javascript:", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+=", re.IGNORECASE)


# =========================
# Sanitization Functions
# =========================


def sanitize_string(value: str, max_length: int = MAX_STRING_LENGTH) -> str:
    """Sanitize a free-text string input.

    - Removes null bytes
    - Strips leading/trailing whitespace
    - Removes angle brackets, ``javascript:`` and inline ``on*=`` handlers
    - Truncates to max length

    Args:
        value: Input string
        max_length: Maximum allowed length

    Returns:
        Sanitized string
    """
    if not value:
        return value

    value = value.replace("\x00", "")
    value = value.strip()
    value = _ANGLE_BRACKETS.sub("", value)
    value = _JS_PROTOCOL.sub("", value)
    value = _EVENT_HANDLER.sub("", value)

    if len(value) > max_length:
        value = value[:max_length]

    return value


def sanitize_html(value: str) -> str:
    """Escape HTML entities in a string.

    Args:
        value: Input string

    Returns:
        HTML-escaped string
    """
    return html.escape(value) if value else value


def sanitize_email(value: str) -> str | None:
    """Validate and normalize an email address.

    Args:
        value: Input email

    Returns:
        Lowercased email or None if invalid
    """
    if not value:
        return None

    value = value.strip().lower()[:255]
    if not EMAIL_PATTERN.match(value):
        return None

    return value


def sanitize_phone(value: str) -> str | None:
    """Strip formatting from a phone number and validate it.

    Args:
        value: Input phone number, e.g. "+1 (555) 010-2030"

    Returns:
        Digits with optional leading "+", or None if invalid
    """
    if not value:
        return None

    value = re.sub(r"[\s\-()]", "", value)[:20]
    if not PHONE_PATTERN.match(value):
        return None

    return value


def sanitize_for_sql_like(value: str) -> str:
    r"""Escape special characters for SQL LIKE patterns.

    Escapes %, _, and \ so user search terms match literally.

    Args:
        value: Input string for LIKE pattern

    Returns:
        Escaped string safe for LIKE
    """
    if not value:
        return value

    # Escape backslash first, then special LIKE chars
    value = value.replace("\\", "\\\\")
    value = value.replace("%", "\\%")
    value = value.replace("_", "\\_")

    return value
