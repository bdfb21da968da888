"""
Exercises router for the shared exercise catalog.

This router contains endpoints for:
- /exercises - List (search, category filter) and create
- /exercises/categories - Distinct categories
- /exercises/{exercise_id} - Get, edit, delete
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.deps import get_catalog, get_current_user
from models.exercise import Exercise, ExerciseCreate, ExerciseListResponse, ExerciseUpdate
from models.user import CurrentUser
from services import Catalog

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/exercises",
    tags=["Exercises"],
)


@router.get("", response_model=ExerciseListResponse)
def list_exercises(
    search: Optional[str] = Query(None, description="Substring of name, description or category"),
    category: Optional[str] = Query(None, description="Exact category"),
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
) -> ExerciseListResponse:
    """List catalog exercises ordered by category, then name."""
    exercises = catalog.list_exercises(search=search, category=category)
    return ExerciseListResponse(exercises=exercises, count=len(exercises))


@router.get("/categories")
def list_categories(
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
):
    """Distinct exercise categories, sorted."""
    categories = catalog.list_categories()
    return {"categories": categories, "count": len(categories)}


@router.post("", response_model=Exercise, status_code=201)
def create_exercise(
    request: ExerciseCreate,
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
) -> Exercise:
    """
    Create an exercise (trainers and admins).

    A name already used by another exercise, in any letter case, is 409.
    """
    return catalog.create_exercise(user, request)


@router.get("/{exercise_id}", response_model=Exercise)
def get_exercise(
    exercise_id: str,
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
) -> Exercise:
    return catalog.get_exercise(exercise_id)


@router.patch("/{exercise_id}", response_model=Exercise)
def update_exercise(
    exercise_id: str,
    request: ExerciseUpdate,
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
) -> Exercise:
    return catalog.update_exercise(user, exercise_id, request)


@router.delete("/{exercise_id}")
def delete_exercise(
    exercise_id: str,
    user: CurrentUser = Depends(get_current_user),
    catalog: Catalog = Depends(get_catalog),
):
    """Delete an exercise that no workout or program day uses."""
    catalog.delete_exercise(user, exercise_id)
    return {
        "success": True,
        "message": "Exercise deleted successfully",
    }
