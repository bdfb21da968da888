"""
Router package for the coaching schedule API.

This package contains all API routers organized by domain:
- health: Health check
- exercises: Exercise catalog
- assignments: Workout assignments, program enrollments, pinned days
- workouts: Single-day workout templates
- programs: Multi-day workout programs
- clients: Trainer-client relationship and calendar projection
"""

from api.routers.assignments import router as assignments_router
from api.routers.clients import router as clients_router
from api.routers.exercises import router as exercises_router
from api.routers.health import router as health_router
from api.routers.programs import router as programs_router
from api.routers.workouts import router as workouts_router

__all__ = [
    "assignments_router",
    "clients_router",
    "exercises_router",
    "health_router",
    "programs_router",
    "workouts_router",
]
