"""
Workouts router for single-day workout templates.

This router contains endpoints for:
- /workouts - List and create
- /workouts/available - ACTIVE workouts and programs to assign, tagged per client
- /workouts/{workout_id} - Get, edit (full line replacement), delete
- /workouts/{workout_id}/approve - Change template status

Note: Assignment endpoints (/workouts/assign) are in api/routers/assignments.py
and must be registered BEFORE this router so they are not captured by
/workouts/{workout_id}.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.deps import get_assignment_manager, get_catalog, get_current_user
from models.user import CurrentUser
from models.workout import (
    AvailableTemplateListResponse,
    TemplateKind,
    TemplateStatus,
    TemplateStatusUpdate,
    Workout,
    WorkoutCreate,
    WorkoutListResponse,
    WorkoutUpdate,
)
from services import AssignmentManager, Catalog

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/workouts",
    tags=["Workouts"],
)


@router.get("", response_model=WorkoutListResponse)
def list_workouts(
    search: Optional[str] = Query(None, description="Substring of name or description"),
    status: Optional[TemplateStatus] = Query(None, description="Filter by status"),
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
) -> WorkoutListResponse:
    """List workouts. Clients only ever see ACTIVE ones."""
    workouts = catalog.list_workouts(user, search=search, status=status)
    return WorkoutListResponse(workouts=workouts, count=len(workouts))


@router.post("", response_model=Workout, status_code=201)
def create_workout(
    request: WorkoutCreate,
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
) -> Workout:
    """Create a DRAFT workout owned by the caller."""
    return catalog.create_workout(user, request)


# Declared before /{workout_id} so "available" is not read as an ID
@router.get("/available", response_model=AvailableTemplateListResponse)
def list_available_workouts(
    client_id: Optional[str] = Query(None, description="Tag entries with this client's assignments"),
    kind: Optional[TemplateKind] = Query(None, description="single-day or multi-day"),
    user: CurrentUser = Depends(get_current_user),
    manager: AssignmentManager = Depends(get_assignment_manager),
) -> AvailableTemplateListResponse:
    """ACTIVE workouts and programs, combined, for the assignment picker."""
    templates = manager.list_available_templates(user, client_id=client_id, kind=kind)
    return AvailableTemplateListResponse(workouts=templates, count=len(templates))


@router.get("/{workout_id}", response_model=Workout)
def get_workout(
    workout_id: str,
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
) -> Workout:
    return catalog.get_workout(user, workout_id)


@router.patch("/{workout_id}", response_model=Workout)
def update_workout(
    workout_id: str,
    request: WorkoutUpdate,
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
) -> Workout:
    """Edit a workout. Sending ``exercises`` replaces every line."""
    return catalog.update_workout(user, workout_id, request)


@router.patch("/{workout_id}/approve", response_model=Workout)
def approve_workout(
    workout_id: str,
    request: TemplateStatusUpdate,
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
) -> Workout:
    return catalog.set_workout_status(user, workout_id, request.status)


@router.delete("/{workout_id}")
def delete_workout(
    workout_id: str,
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
):
    """Delete a workout that no client assignment references."""
    catalog.delete_workout(user, workout_id)
    return {
        "success": True,
        "message": "Workout deleted successfully",
    }
