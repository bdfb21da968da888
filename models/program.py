"""
Workout program models.

A program is a multi-day template. Day numbers run 1..total_days with no gaps
and total_days is always derived from the number of days.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from core.constants import MAX_NAME_LENGTH, MAX_TEXT_LENGTH
from models.workout import ExerciseLineInput, TemplateStatus, WorkoutExercise


class ProgramScope(str, Enum):
    """Listing filter for trainers."""

    ALL = "all"
    OWN = "own"
    ACTIVE = "active"


class WorkoutDayInput(BaseModel):
    """One program day as submitted by a trainer."""

    day_number: int
    name: str = Field(max_length=MAX_NAME_LENGTH)
    is_rest_day: bool = False
    estimated_duration: Optional[int] = Field(None, ge=1, le=600)
    notes: Optional[str] = Field(None, max_length=MAX_TEXT_LENGTH)
    exercises: List[ExerciseLineInput] = []


class WorkoutDay(BaseModel):
    """A stored program day."""

    day_number: int = Field(ge=1)
    name: str
    is_rest_day: bool = False
    estimated_duration: Optional[int] = None
    notes: Optional[str] = None
    exercises: List[WorkoutExercise] = []


class WorkoutProgram(BaseModel):
    """A multi-day workout program template."""

    id: str
    name: str
    description: Optional[str] = None
    status: TemplateStatus = TemplateStatus.DRAFT
    creator_id: str
    total_days: int = Field(ge=1)
    days: List[WorkoutDay] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class WorkoutProgramCreate(BaseModel):
    """Request model for creating a program. total_days is derived from days."""

    name: str = Field(max_length=MAX_NAME_LENGTH)
    description: Optional[str] = Field(None, max_length=MAX_TEXT_LENGTH)
    days: List[WorkoutDayInput] = []


class WorkoutProgramUpdate(BaseModel):
    """
    Request model for editing a program.

    When ``days`` is provided the whole day list is replaced.
    """

    name: Optional[str] = Field(None, max_length=MAX_NAME_LENGTH)
    description: Optional[str] = Field(None, max_length=MAX_TEXT_LENGTH)
    days: Optional[List[WorkoutDayInput]] = None


class ProgramListResponse(BaseModel):
    """Response model for program listing."""

    programs: List[WorkoutProgram]
    count: int
