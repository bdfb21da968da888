"""
Shared helpers for the Supabase repositories.

Every query goes through ``execute`` so unexpected client failures reach the
services as ``StorageError`` (a generic 500) instead of leaking PostgREST
exceptions. Nothing here retries.
"""

import logging
from typing import Any, Dict, List, Optional

from application.exceptions import CoachingError, DuplicateAssignmentError, StorageError

logger = logging.getLogger(__name__)

# Postgres error codes
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def execute(query: Any, action: str) -> Any:
    """
    Run a PostgREST query builder.

    Args:
        query: Supabase query or rpc builder
        action: Short description for logs and the error message

    Returns:
        The APIResponse

    Raises:
        StorageError: If the client raises anything unexpected
    """
    try:
        return query.execute()
    except CoachingError:
        raise
    except Exception as e:
        logger.error(f"Supabase query failed ({action}): {e}")
        raise StorageError(f"Storage failure while trying to {action}") from e


def execute_insert(query: Any, action: str, conflict: Optional[CoachingError] = None) -> Any:
    """
    Like ``execute`` but maps a unique violation to a conflict error.

    Args:
        conflict: Error raised on a unique violation (default:
            DuplicateAssignmentError, which the assignment insert functions
            signal with ``unique_violation``)
    """
    try:
        return query.execute()
    except Exception as e:
        if _pg_code(e) == UNIQUE_VIOLATION or "duplicate_assignment" in str(e):
            logger.warning(f"Duplicate rejected ({action})")
            raise conflict or DuplicateAssignmentError(
                "This template is already assigned to the client on that date"
            ) from e
        logger.error(f"Supabase query failed ({action}): {e}")
        raise StorageError(f"Storage failure while trying to {action}") from e


def execute_delete(query: Any, action: str, in_use: CoachingError) -> Any:
    """
    Like ``execute`` but maps a foreign key violation to ``in_use``.

    Services check references before deleting; a reference inserted after
    that check still fails the delete at the foreign key.
    """
    try:
        return query.execute()
    except CoachingError:
        raise
    except Exception as e:
        if _pg_code(e) == FOREIGN_KEY_VIOLATION:
            logger.warning(f"Delete rejected, row still referenced ({action})")
            raise in_use from e
        logger.error(f"Supabase query failed ({action}): {e}")
        raise StorageError(f"Storage failure while trying to {action}") from e


def _pg_code(error: Exception) -> Optional[str]:
    return getattr(error, "code", None)


def rows(response: Any) -> List[Dict]:
    return response.data or []


def first(response: Any) -> Optional[Dict]:
    data = response.data
    if isinstance(data, list):
        return data[0] if data else None
    return data or None


def escape_ilike(value: str) -> str:
    """Escape metacharacters in user input for safe use in PostgREST ILIKE filters.

    Backslash-escapes SQL ILIKE wildcards (``%``, ``_``, ``\\``) and strips
    PostgREST filter-syntax delimiters (``.`` and ``,``) so ``or_()`` filters
    cannot be extended by the caller.
    """
    value = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return value.replace(",", " ").replace(".", " ")
