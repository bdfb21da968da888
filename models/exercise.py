"""
Exercise catalog models.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from core.constants import MAX_NAME_LENGTH, MAX_TEXT_LENGTH


class Difficulty(str, Enum):
    """Exercise difficulty levels."""

    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class Exercise(BaseModel):
    """A catalog exercise."""

    id: str
    name: str
    description: Optional[str] = None
    category: str
    difficulty: Difficulty
    muscle_groups: List[str] = []
    equipment: List[str] = []
    instructions: Optional[str] = None
    video_url: Optional[str] = None


class ExerciseCreate(BaseModel):
    """Request model for creating an exercise."""

    name: str = Field(max_length=MAX_NAME_LENGTH)
    description: Optional[str] = Field(None, max_length=MAX_TEXT_LENGTH)
    category: str = Field(max_length=MAX_NAME_LENGTH)
    difficulty: Difficulty
    muscle_groups: List[str] = []
    equipment: List[str] = []
    instructions: Optional[str] = Field(None, max_length=MAX_TEXT_LENGTH)
    video_url: Optional[str] = None


class ExerciseUpdate(BaseModel):
    """Request model for editing an exercise (all fields optional)."""

    name: Optional[str] = Field(None, max_length=MAX_NAME_LENGTH)
    description: Optional[str] = Field(None, max_length=MAX_TEXT_LENGTH)
    category: Optional[str] = Field(None, max_length=MAX_NAME_LENGTH)
    difficulty: Optional[Difficulty] = None
    muscle_groups: Optional[List[str]] = None
    equipment: Optional[List[str]] = None
    instructions: Optional[str] = Field(None, max_length=MAX_TEXT_LENGTH)
    video_url: Optional[str] = None


class ExerciseListResponse(BaseModel):
    """Response model for exercise listing."""

    exercises: List[Exercise]
    count: int
