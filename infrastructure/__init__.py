"""
Infrastructure Layer for the coaching schedule API.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseAssignmentRepository,
    SupabaseClientRepository,
    SupabaseEnrollmentRepository,
    SupabaseExerciseRepository,
    SupabaseProgramRepository,
    SupabaseUserRepository,
    SupabaseWorkoutRepository,
)

__all__ = [
    "SupabaseAssignmentRepository",
    "SupabaseClientRepository",
    "SupabaseEnrollmentRepository",
    "SupabaseExerciseRepository",
    "SupabaseProgramRepository",
    "SupabaseUserRepository",
    "SupabaseWorkoutRepository",
]
