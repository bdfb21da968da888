"""
Input sanitization utilities.

Shared normalisation for user-supplied names before they are validated and
stored. This module has no dependencies on models or services to avoid
circular imports.
"""

import re
from typing import Optional

from core.constants import MAX_NAME_LENGTH


def sanitize_name(value: Optional[str], max_length: int = MAX_NAME_LENGTH) -> str:
    """
    Normalise a display name.

    - Replaces newlines, tabs and other control characters with spaces
    - Collapses runs of spaces
    - Strips leading/trailing whitespace
    - Truncates to ``max_length``

    Args:
        value: Raw user-provided string (None is treated as empty)
        max_length: Maximum allowed length (default: MAX_NAME_LENGTH)

    Returns:
        Sanitized name, possibly empty
    """
    if not value:
        return ""
    sanitized = re.sub(r"[\n\r\t\x00-\x1f\x7f-\x9f]", " ", value)
    sanitized = re.sub(r" +", " ", sanitized)
    sanitized = sanitized.strip()
    return sanitized[:max_length]


def name_key(value: Optional[str]) -> str:
    """Case-insensitive comparison key for unique names."""
    return sanitize_name(value).casefold()
