"""
FastAPI Dependency Providers for the coaching schedule API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with fake implementations.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository providers create new instances per-request
- Service providers compose repositories into Catalog, AssignmentManager
  and CalendarProjector
- get_current_user verifies the bearer token once per request

Usage in routers:
    from api.deps import get_catalog, get_current_user

    @router.get("/workouts")
    def list_workouts(
        user: CurrentUser = Depends(get_current_user),
        catalog: Catalog = Depends(get_catalog),
    ):
        return catalog.list_workouts(user)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_workout_repo] = lambda: FakeWorkoutRepository()
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import (
    AssignmentRepository,
    ClientRepository,
    EnrollmentRepository,
    ExerciseRepository,
    ProgramRepository,
    UserRepository,
    WorkoutRepository,
)

# Concrete implementations
from infrastructure import (
    SupabaseAssignmentRepository,
    SupabaseClientRepository,
    SupabaseEnrollmentRepository,
    SupabaseExerciseRepository,
    SupabaseProgramRepository,
    SupabaseUserRepository,
    SupabaseWorkoutRepository,
)

from backend.auth import validate_jwt
from backend.settings import Settings, get_settings as _get_settings
from models.user import CurrentUser
from services import AssignmentManager, CalendarProjector, Catalog

logger = logging.getLogger(__name__)


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.storage_configured:
        logger.warning("SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY not set; storage unavailable")
        return None

    return create_client(settings.supabase_url, settings.supabase_service_role_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_user_repo(
    client: Client = Depends(get_supabase_client_required),
) -> UserRepository:
    """Get UserRepository implementation."""
    return SupabaseUserRepository(client)


def get_client_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ClientRepository:
    """
    Get ClientRepository implementation.

    Returns a SupabaseClientRepository instance with injected client.
    The return type is the Protocol to enable easy faking.

    Args:
        client: Supabase client (injected)

    Returns:
        ClientRepository: Repository for client profiles
    """
    return SupabaseClientRepository(client)


def get_exercise_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ExerciseRepository:
    """Get ExerciseRepository implementation."""
    return SupabaseExerciseRepository(client)


def get_workout_repo(
    client: Client = Depends(get_supabase_client_required),
) -> WorkoutRepository:
    """Get WorkoutRepository implementation."""
    return SupabaseWorkoutRepository(client)


def get_program_repo(
    client: Client = Depends(get_supabase_client_required),
) -> ProgramRepository:
    """Get ProgramRepository implementation."""
    return SupabaseProgramRepository(client)


def get_assignment_repo(
    client: Client = Depends(get_supabase_client_required),
) -> AssignmentRepository:
    """Get AssignmentRepository implementation (single-workout assignments)."""
    return SupabaseAssignmentRepository(client)


def get_enrollment_repo(
    client: Client = Depends(get_supabase_client_required),
) -> EnrollmentRepository:
    """Get EnrollmentRepository implementation (program enrollments and pinned days)."""
    return SupabaseEnrollmentRepository(client)


# =============================================================================
# Service Providers
# =============================================================================


def get_catalog(
    exercise_repo: ExerciseRepository = Depends(get_exercise_repo),
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
    program_repo: ProgramRepository = Depends(get_program_repo),
    assignment_repo: AssignmentRepository = Depends(get_assignment_repo),
    enrollment_repo: EnrollmentRepository = Depends(get_enrollment_repo),
) -> Catalog:
    """Get the Catalog service."""
    return Catalog(exercise_repo, workout_repo, program_repo, assignment_repo, enrollment_repo)


def get_assignment_manager(
    user_repo: UserRepository = Depends(get_user_repo),
    client_repo: ClientRepository = Depends(get_client_repo),
    catalog: Catalog = Depends(get_catalog),
    assignment_repo: AssignmentRepository = Depends(get_assignment_repo),
    enrollment_repo: EnrollmentRepository = Depends(get_enrollment_repo),
    settings: Settings = Depends(get_settings),
) -> AssignmentManager:
    """
    Get the AssignmentManager service.

    The uniqueness policy comes from ``enforce_unique_assignments``.
    """
    return AssignmentManager(
        user_repo,
        client_repo,
        catalog,
        assignment_repo,
        enrollment_repo,
        enforce_unique=settings.enforce_unique_assignments,
    )


def get_calendar_projector(
    client_repo: ClientRepository = Depends(get_client_repo),
    workout_repo: WorkoutRepository = Depends(get_workout_repo),
    program_repo: ProgramRepository = Depends(get_program_repo),
    assignment_repo: AssignmentRepository = Depends(get_assignment_repo),
    enrollment_repo: EnrollmentRepository = Depends(get_enrollment_repo),
) -> CalendarProjector:
    """Get the CalendarProjector service."""
    return CalendarProjector(
        client_repo, workout_repo, program_repo, assignment_repo, enrollment_repo
    )


# =============================================================================
# Authentication Providers
# =============================================================================


async def get_current_user(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    """
    Get the current authenticated caller.

    Args:
        authorization: Bearer token header

    Returns:
        CurrentUser: User ID and role from the verified token

    Raises:
        HTTPException: 401 if not authenticated
    """
    return validate_jwt(authorization, settings)


__all__ = [
    # Settings
    "get_settings",
    # Supabase
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_user_repo",
    "get_client_repo",
    "get_exercise_repo",
    "get_workout_repo",
    "get_program_repo",
    "get_assignment_repo",
    "get_enrollment_repo",
    # Services
    "get_catalog",
    "get_assignment_manager",
    "get_calendar_projector",
    # Auth
    "get_current_user",
]
