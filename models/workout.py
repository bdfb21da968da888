"""
Workout template models.

A workout is a single-day template: an ordered list of exercise lines, each
prescribing sets, reps and rest for one catalog exercise. The same line shape
is reused by program days (see ``models.program``).
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from core.constants import MAX_NAME_LENGTH, MAX_TEXT_LENGTH


class TemplateStatus(str, Enum):
    """Lifecycle of a workout or program template."""

    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


class ExerciseLineInput(BaseModel):
    """One exercise line as submitted by a trainer. Order comes from list position."""

    exercise_id: str
    sets: int = Field(ge=1, description="Number of sets (positive)")
    reps: str = Field(
        default="",
        max_length=50,
        description="Free-form reps, e.g. '10', '8-10' or '30 seconds'",
    )
    rest: str = Field(default="", max_length=50, description="Free-form rest, e.g. '60s'")
    notes: Optional[str] = Field(None, max_length=MAX_TEXT_LENGTH)


class ExerciseRef(BaseModel):
    """Exercise fields embedded in a stored line for display."""

    id: str
    name: str
    category: Optional[str] = None
    difficulty: Optional[str] = None


class WorkoutExercise(BaseModel):
    """A stored exercise line (order is 1-based and contiguous)."""

    exercise_id: str
    order: int = Field(ge=1)
    sets: int = Field(ge=1)
    reps: str = ""
    rest: str = ""
    notes: Optional[str] = None
    exercise: Optional[ExerciseRef] = None


class Workout(BaseModel):
    """A single-day workout template."""

    id: str
    name: str
    description: Optional[str] = None
    status: TemplateStatus = TemplateStatus.DRAFT
    creator_id: str
    estimated_duration: Optional[int] = None
    exercises: List[WorkoutExercise] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class WorkoutCreate(BaseModel):
    """Request model for creating a workout."""

    name: str = Field(max_length=MAX_NAME_LENGTH)
    description: Optional[str] = Field(None, max_length=MAX_TEXT_LENGTH)
    estimated_duration: Optional[int] = Field(None, ge=1, le=600)
    exercises: List[ExerciseLineInput] = []


class WorkoutUpdate(BaseModel):
    """
    Request model for editing a workout.

    When ``exercises`` is provided the whole line list is replaced.
    """

    name: Optional[str] = Field(None, max_length=MAX_NAME_LENGTH)
    description: Optional[str] = Field(None, max_length=MAX_TEXT_LENGTH)
    estimated_duration: Optional[int] = Field(None, ge=1, le=600)
    exercises: Optional[List[ExerciseLineInput]] = None


class TemplateStatusUpdate(BaseModel):
    """Request model for approving or archiving a template."""

    status: TemplateStatus


class WorkoutListResponse(BaseModel):
    """Response model for workout listing."""

    workouts: List[Workout]
    count: int


class TemplateKind(str, Enum):
    """Which kind of template an available entry is."""

    SINGLE_DAY = "single-day"
    MULTI_DAY = "multi-day"


class AvailableTemplate(BaseModel):
    """
    An ACTIVE workout or program offered for assignment.

    ``is_assigned`` and ``assignment_status`` describe the client named in the
    request; both stay at their defaults when no client is given.
    """

    id: str
    kind: TemplateKind
    name: str
    description: Optional[str] = None
    creator_id: str
    total_days: int = Field(ge=1)
    estimated_duration: Optional[int] = None
    is_assigned: bool = False
    assignment_status: Optional[str] = None
    created_at: Optional[datetime] = None


class AvailableTemplateListResponse(BaseModel):
    """Response model for GET /workouts/available."""

    workouts: List[AvailableTemplate]
    count: int
