"""
Port interfaces (Protocols) for the coaching schedule API.

This package defines the interface contracts that the infrastructure
layer must implement. Using Protocols enables:
- Clean separation of concerns
- Easy testing with in-memory implementations
- Dependency inversion (depend on abstractions, not concretions)
"""

from application.ports.assignment_repository import (
    AssignmentRepository,
    EnrollmentRepository,
)
from application.ports.exercise_repository import ExerciseRepository
from application.ports.program_repository import ProgramRepository
from application.ports.user_repository import ClientRepository, UserRepository
from application.ports.workout_repository import WorkoutRepository

__all__ = [
    "AssignmentRepository",
    "ClientRepository",
    "EnrollmentRepository",
    "ExerciseRepository",
    "ProgramRepository",
    "UserRepository",
    "WorkoutRepository",
]
