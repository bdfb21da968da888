"""
Application-layer exceptions.

These exceptions are used across the services and infrastructure layers.
Each carries a machine-readable ``kind`` and the HTTP status the API layer
answers with, so routers never have to translate them one by one.
"""

from typing import Optional


class CoachingError(Exception):
    """Base class for every business-rule failure raised by the services."""

    kind: str = "error"
    status_code: int = 400

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        """Structured payload for API responses."""
        return {"error": self.kind, "detail": self.message}


class ValidationError(CoachingError):
    """Malformed or incomplete input detected before anything is written."""

    kind = "validation_error"
    status_code = 400


class NotFoundError(CoachingError):
    """
    Referenced entity does not exist or is outside the caller's scope.

    A trainer asking about another trainer's client gets this instead of an
    authorization error so the API never confirms the client exists.
    """

    kind = "not_found"
    status_code = 404


class AuthorizationError(CoachingError):
    """Caller's role or ownership does not permit the action."""

    kind = "forbidden"
    status_code = 403


class EligibilityError(CoachingError):
    """Business-rule rejection: inactive subscription, client already assigned."""

    kind = "ineligible"
    status_code = 400


class ConflictError(CoachingError):
    """Operation would break a referential invariant (e.g. deleting an in-use template)."""

    kind = "conflict"
    status_code = 400


class DuplicateAssignmentError(ConflictError):
    """Same template already assigned to the client on that date."""

    kind = "duplicate_assignment"


class DuplicateExerciseError(ConflictError):
    """Another exercise already uses the name (case-insensitive)."""

    kind = "duplicate_exercise"
    status_code = 409


class StorageError(CoachingError):
    """
    Unexpected failure in the storage layer.

    Surfaced as a generic internal error and never retried here.
    """

    kind = "internal_error"
    status_code = 500
