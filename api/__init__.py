"""
API package for the coaching schedule API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_user_repo,
    get_client_repo,
    get_exercise_repo,
    get_workout_repo,
    get_program_repo,
    get_assignment_repo,
    get_enrollment_repo,
    get_catalog,
    get_assignment_manager,
    get_calendar_projector,
    get_current_user,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
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
    # Authentication
    "get_current_user",
]
