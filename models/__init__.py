"""Models package for the coaching schedule API."""

from models.assignment import (
    AssignmentStatus,
    ClientProgramAssignment,
    ClientWorkoutAssignment,
    EnrollmentStatus,
    ProgramAssignmentCreate,
    ProgramDayOverride,
    WorkoutAssignmentCreate,
)
from models.calendar import CalendarDay, CalendarProjection
from models.client import Client, SubscriptionPlan, SubscriptionStatus
from models.exercise import Difficulty, Exercise, ExerciseCreate
from models.program import WorkoutDay, WorkoutProgram, WorkoutProgramCreate
from models.user import CurrentUser, Role
from models.workout import TemplateStatus, Workout, WorkoutCreate, WorkoutExercise

__all__ = [
    "AssignmentStatus",
    "CalendarDay",
    "CalendarProjection",
    "Client",
    "ClientProgramAssignment",
    "ClientWorkoutAssignment",
    "CurrentUser",
    "Difficulty",
    "EnrollmentStatus",
    "Exercise",
    "ExerciseCreate",
    "ProgramAssignmentCreate",
    "ProgramDayOverride",
    "Role",
    "SubscriptionPlan",
    "SubscriptionStatus",
    "TemplateStatus",
    "Workout",
    "WorkoutAssignmentCreate",
    "WorkoutCreate",
    "WorkoutDay",
    "WorkoutExercise",
    "WorkoutProgram",
    "WorkoutProgramCreate",
]
