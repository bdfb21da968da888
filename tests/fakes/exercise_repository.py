"""
Fake Exercise Repository for testing.

In-memory implementation of ExerciseRepository. Reference checks consult the
workout and program fakes registered with ``track_references``.
"""
from typing import Optional, List, Dict, Any
import uuid
import copy

from application.exceptions import DuplicateExerciseError, NotFoundError


class FakeExerciseRepository:
    """
    In-memory fake implementation of ExerciseRepository for testing.

    Usage:
        repo = FakeExerciseRepository()
        repo.seed([{"id": "ex-pushup", "name": "Push-ups", "category": "Chest",
                    "difficulty": "BEGINNER"}])
    """

    def __init__(self):
        self._exercises: Dict[str, Dict[str, Any]] = {}
        self._reference_sources: List[Any] = []

    def reset(self) -> None:
        """Clear all stored exercises."""
        self._exercises.clear()

    def seed(self, exercises: List[Dict[str, Any]]) -> None:
        """Seed exercises. Each needs 'name', 'category' and 'difficulty'."""
        for exercise in exercises:
            exercise_id = exercise.get("id") or str(uuid.uuid4())
            self._exercises[exercise_id] = {
                "description": None,
                "muscle_groups": [],
                "equipment": [],
                "instructions": None,
                "video_url": None,
                **exercise,
                "id": exercise_id,
            }

    def track_references(self, *sources: Any) -> None:
        """Register fakes exposing ``exercise_ids_in_use()`` for delete checks."""
        self._reference_sources.extend(sources)

    # =========================================================================
    # ExerciseRepository Protocol Methods
    # =========================================================================

    def list_exercises(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        results = []
        needle = search.lower() if search else None
        for exercise in self._exercises.values():
            if category and exercise.get("category") != category:
                continue
            if needle:
                haystack = " ".join(
                    str(exercise.get(field) or "") for field in ("name", "description", "category")
                ).lower()
                if needle not in haystack:
                    continue
            results.append(copy.deepcopy(exercise))
        results.sort(key=lambda e: (e.get("category") or "", e.get("name") or ""))
        return results

    def get_by_id(self, exercise_id: str) -> Optional[Dict[str, Any]]:
        exercise = self._exercises.get(exercise_id)
        return copy.deepcopy(exercise) if exercise else None

    def get_by_ids(self, exercise_ids: List[str]) -> List[Dict[str, Any]]:
        return [copy.deepcopy(self._exercises[eid]) for eid in exercise_ids if eid in self._exercises]

    def find_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        for exercise in self._exercises.values():
            if exercise["name"].lower() == name.lower():
                return copy.deepcopy(exercise)
        return None

    def list_categories(self) -> List[str]:
        return sorted({e["category"] for e in self._exercises.values() if e.get("category")})

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        # Mirrors the unique index on lower(name)
        if self.find_by_name(data["name"]):
            raise DuplicateExerciseError("Exercise with this name already exists")
        exercise_id = str(uuid.uuid4())
        self.seed([{**data, "id": exercise_id}])
        return self.get_by_id(exercise_id)

    def update(self, exercise_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        if exercise_id not in self._exercises:
            raise NotFoundError("Exercise not found")
        self._exercises[exercise_id].update(data)
        return self.get_by_id(exercise_id)

    def delete(self, exercise_id: str) -> bool:
        return self._exercises.pop(exercise_id, None) is not None

    def is_referenced(self, exercise_id: str) -> bool:
        return any(exercise_id in source.exercise_ids_in_use() for source in self._reference_sources)

    # =========================================================================
    # Helpers for other fakes
    # =========================================================================

    def summary(self, exercise_id: str) -> Optional[Dict[str, Any]]:
        exercise = self._exercises.get(exercise_id)
        if exercise is None:
            return None
        return {
            "id": exercise["id"],
            "name": exercise["name"],
            "category": exercise.get("category"),
            "difficulty": exercise.get("difficulty"),
        }
