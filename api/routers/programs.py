"""
Workout programs router for multi-day templates.

This router provides:
- /workout-programs - List (scope all/own/active) and create
- /workout-programs/{program_id} - Get, edit (full day replacement), delete
- /workout-programs/{program_id}/approve - Change template status

Enrollment endpoints (/workout-programs/assign) live in
api/routers/assignments.py and are registered before this router.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.deps import get_catalog, get_current_user
from models.program import (
    ProgramListResponse,
    ProgramScope,
    WorkoutProgram,
    WorkoutProgramCreate,
    WorkoutProgramUpdate,
)
from models.user import CurrentUser
from models.workout import TemplateStatusUpdate
from services import Catalog

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/workout-programs",
    tags=["Workout Programs"],
)


@router.get("", response_model=ProgramListResponse)
def list_programs(
    search: Optional[str] = Query(None, description="Substring of name or description"),
    scope: ProgramScope = Query(ProgramScope.ALL, description="all, own or active"),
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
) -> ProgramListResponse:
    programs = catalog.list_programs(user, search=search, scope=scope)
    return ProgramListResponse(programs=programs, count=len(programs))


@router.post("", response_model=WorkoutProgram, status_code=201)
def create_program(
    request: WorkoutProgramCreate,
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
) -> WorkoutProgram:
    """
    Create a DRAFT program.

    ``total_days`` is derived from the number of days submitted.
    """
    return catalog.create_program(user, request)


@router.get("/{program_id}", response_model=WorkoutProgram)
def get_program(
    program_id: str,
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
) -> WorkoutProgram:
    return catalog.get_program(user, program_id)


@router.patch("/{program_id}", response_model=WorkoutProgram)
def update_program(
    program_id: str,
    request: WorkoutProgramUpdate,
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
) -> WorkoutProgram:
    return catalog.update_program(user, program_id, request)


@router.patch("/{program_id}/approve", response_model=WorkoutProgram)
def approve_program(
    program_id: str,
    request: TemplateStatusUpdate,
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
) -> WorkoutProgram:
    return catalog.set_program_status(user, program_id, request.status)


@router.delete("/{program_id}")
def delete_program(
    program_id: str,
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
):
    catalog.delete_program(user, program_id)
    return {
        "success": True,
        "message": "Workout program deleted successfully",
    }
