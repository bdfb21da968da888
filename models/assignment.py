"""
Assignment models: single-workout assignments, program enrollments and
pinned program days.
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from core.constants import MAX_TEXT_LENGTH
from models.client import ClientSummary


class AssignmentStatus(str, Enum):
    """Status of a single-workout assignment."""

    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    SKIPPED = "SKIPPED"
    CANCELLED = "CANCELLED"


class EnrollmentStatus(str, Enum):
    """Status of a program enrollment."""

    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class TemplateSummary(BaseModel):
    """Workout or program fields embedded in assignment responses."""

    id: str
    name: str
    description: Optional[str] = None
    total_days: Optional[int] = None


class WorkoutAssignmentCreate(BaseModel):
    """Request model for POST /workouts/assign."""

    client_id: str
    workout_id: str
    scheduled_date: date
    notes: Optional[str] = Field(None, max_length=MAX_TEXT_LENGTH)


class WorkoutAssignmentUpdate(BaseModel):
    """
    Request model for PATCH /workouts/assign/{id}.

    Clients may only send ``status``; trainers and admins may change any field.
    """

    status: Optional[AssignmentStatus] = None
    scheduled_date: Optional[date] = None
    notes: Optional[str] = Field(None, max_length=MAX_TEXT_LENGTH)


class ClientWorkoutAssignment(BaseModel):
    """A workout scheduled for a client on one date."""

    id: str
    client_id: str
    workout_id: str
    scheduled_date: date
    status: AssignmentStatus = AssignmentStatus.SCHEDULED
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    workout: Optional[TemplateSummary] = None
    client: Optional[ClientSummary] = None


class ProgramAssignmentCreate(BaseModel):
    """Request model for POST /workout-programs/assign."""

    client_id: str
    program_id: str
    start_date: date
    notes: Optional[str] = Field(None, max_length=MAX_TEXT_LENGTH)


class ProgramDayOverride(BaseModel):
    """A program day pinned to an explicit date."""

    id: str
    client_program_id: str
    day_number: int = Field(ge=1)
    scheduled_date: date


class ProgramDayPinRequest(BaseModel):
    """Request model for PUT /workout-programs/assign/{id}/days/{day_number}."""

    scheduled_date: date


class ClientProgramAssignment(BaseModel):
    """A client's enrollment in a multi-day program."""

    id: str
    client_id: str
    program_id: str
    start_date: date
    status: EnrollmentStatus = EnrollmentStatus.ACTIVE
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    program: Optional[TemplateSummary] = None
    client: Optional[ClientSummary] = None
    day_overrides: List[ProgramDayOverride] = []


class WorkoutAssignmentListResponse(BaseModel):
    """Response model for workout assignment listing."""

    assignments: List[ClientWorkoutAssignment]
    count: int


class ProgramAssignmentListResponse(BaseModel):
    """Response model for program enrollment listing."""

    assignments: List[ClientProgramAssignment]
    count: int
