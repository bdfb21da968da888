"""
Assignments router: workouts and programs scheduled for clients.

This router contains endpoints for:
- /workouts/assign - List and create single-workout assignments
- /workouts/assign/{assignment_id} - Update (status, date, notes), delete
- /workout-programs/assign - List and create program enrollments
- /workout-programs/assign/{enrollment_id} - Delete an enrollment
- /workout-programs/assign/{enrollment_id}/days/{day_number} - Pin or unpin a day

Note: this router MUST be registered before the workouts and programs routers
so /workouts/assign is not matched as /workouts/{workout_id}.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from api.deps import get_assignment_manager, get_current_user
from models.assignment import (
    ClientProgramAssignment,
    ClientWorkoutAssignment,
    ProgramAssignmentCreate,
    ProgramAssignmentListResponse,
    ProgramDayOverride,
    ProgramDayPinRequest,
    WorkoutAssignmentCreate,
    WorkoutAssignmentListResponse,
    WorkoutAssignmentUpdate,
)
from models.user import CurrentUser
from services import AssignmentManager

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Assignments"],
)


# =============================================================================
# Single-workout assignments
# =============================================================================


@router.get("/workouts/assign", response_model=WorkoutAssignmentListResponse)
def list_workout_assignments(
    client_id: Optional[str] = Query(None, description="Only this client's assignments"),
    user: CurrentUser = Depends(get_current_user),
    manager: AssignmentManager = Depends(get_assignment_manager),
) -> WorkoutAssignmentListResponse:
    """
    Workout assignments visible to the caller, ordered by date.

    Admins see all, trainers their clients', clients their own.
    """
    assignments = manager.list_assignments(user, client_id=client_id)
    return WorkoutAssignmentListResponse(assignments=assignments, count=len(assignments))


@router.post("/workouts/assign", response_model=ClientWorkoutAssignment, status_code=201)
def assign_workout(
    request: WorkoutAssignmentCreate,
    user: CurrentUser = Depends(get_current_user),
    manager: AssignmentManager = Depends(get_assignment_manager),
) -> ClientWorkoutAssignment:
    """Schedule a workout for a client on a date."""
    return manager.assign_workout(user, request)


@router.patch("/workouts/assign/{assignment_id}", response_model=ClientWorkoutAssignment)
def update_workout_assignment(
    assignment_id: str,
    request: WorkoutAssignmentUpdate,
    user: CurrentUser = Depends(get_current_user),
    manager: AssignmentManager = Depends(get_assignment_manager),
) -> ClientWorkoutAssignment:
    """
    Update an assignment.

    Clients may only send ``status``. Completing stamps ``completed_at``;
    moving away from COMPLETED clears it.
    """
    return manager.update_assignment(user, assignment_id, request)


@router.delete("/workouts/assign/{assignment_id}")
def delete_workout_assignment(
    assignment_id: str,
    user: CurrentUser = Depends(get_current_user),
    manager: AssignmentManager = Depends(get_assignment_manager),
):
    manager.unassign(user, assignment_id)
    return {
        "success": True,
        "message": "Workout assignment deleted successfully",
    }


# =============================================================================
# Program enrollments
# =============================================================================


@router.get("/workout-programs/assign", response_model=ProgramAssignmentListResponse)
def list_program_assignments(
    client_id: Optional[str] = Query(None, description="Only this client's enrollments"),
    user: CurrentUser = Depends(get_current_user),
    manager: AssignmentManager = Depends(get_assignment_manager),
) -> ProgramAssignmentListResponse:
    assignments = manager.list_program_assignments(user, client_id=client_id)
    return ProgramAssignmentListResponse(assignments=assignments, count=len(assignments))


@router.post("/workout-programs/assign", response_model=ClientProgramAssignment, status_code=201)
def assign_program(
    request: ProgramAssignmentCreate,
    user: CurrentUser = Depends(get_current_user),
    manager: AssignmentManager = Depends(get_assignment_manager),
) -> ClientProgramAssignment:
    """Enroll a client in a program starting on ``start_date``."""
    return manager.assign_program(user, request)


@router.delete("/workout-programs/assign/{enrollment_id}")
def delete_program_assignment(
    enrollment_id: str,
    user: CurrentUser = Depends(get_current_user),
    manager: AssignmentManager = Depends(get_assignment_manager),
):
    manager.unassign_program(user, enrollment_id)
    return {
        "success": True,
        "message": "Workout program assignment deleted successfully",
    }


@router.put(
    "/workout-programs/assign/{enrollment_id}/days/{day_number}",
    response_model=ProgramDayOverride,
)
def pin_program_day(
    enrollment_id: str,
    request: ProgramDayPinRequest,
    day_number: int = Path(..., ge=1),
    user: CurrentUser = Depends(get_current_user),
    manager: AssignmentManager = Depends(get_assignment_manager),
) -> ProgramDayOverride:
    """Move one program day to an explicit date (replaces its sequential date)."""
    return manager.pin_program_day(user, enrollment_id, day_number, request.scheduled_date)


@router.delete("/workout-programs/assign/{enrollment_id}/days/{day_number}")
def unpin_program_day(
    enrollment_id: str,
    day_number: int = Path(..., ge=1),
    user: CurrentUser = Depends(get_current_user),
    manager: AssignmentManager = Depends(get_assignment_manager),
):
    manager.unpin_program_day(user, enrollment_id, day_number)
    return {
        "success": True,
        "message": f"Day {day_number} returned to its sequential date",
    }
