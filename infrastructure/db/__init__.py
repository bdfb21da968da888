"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations are injected into the
services by ``api.deps``.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseClientRepository,
        SupabaseWorkoutRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    client_repo = SupabaseClientRepository(client)
    workout_repo = SupabaseWorkoutRepository(client)
"""

from infrastructure.db.assignment_repository import (
    SupabaseAssignmentRepository,
    SupabaseEnrollmentRepository,
)
from infrastructure.db.client_repository import (
    SupabaseClientRepository,
    SupabaseUserRepository,
)
from infrastructure.db.exercise_repository import SupabaseExerciseRepository
from infrastructure.db.program_repository import SupabaseProgramRepository
from infrastructure.db.workout_repository import SupabaseWorkoutRepository

__all__ = [
    # Accounts
    "SupabaseUserRepository",
    "SupabaseClientRepository",

    # Catalog
    "SupabaseExerciseRepository",
    "SupabaseWorkoutRepository",
    "SupabaseProgramRepository",

    # Scheduling
    "SupabaseAssignmentRepository",
    "SupabaseEnrollmentRepository",
]
