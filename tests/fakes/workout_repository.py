"""
Fake Workout Repository for testing.

This module provides an in-memory implementation of WorkoutRepository
for fast, isolated testing without database dependencies. Each multi-row
write swaps the whole stored record under a lock, so readers see either the
old or the new line list, never a partial one.
"""
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone
import threading
import uuid
import copy

from application.exceptions import NotFoundError


class FakeWorkoutRepository:
    """
    In-memory fake implementation of WorkoutRepository for testing.

    Stores workouts (with their ``exercises`` lines) in a dict keyed by ID.

    Usage:
        repo = FakeWorkoutRepository(exercise_repo)
        repo.seed([{"id": "w1", "name": "A", "creator_id": "trainer-1",
                    "exercises": [{"exercise_id": "ex-pushup", "order": 1, "sets": 3}]}])
    """

    def __init__(self, exercise_repo: Optional[Any] = None):
        self._workouts: Dict[str, Dict[str, Any]] = {}
        self._exercise_repo = exercise_repo
        self._lock = threading.Lock()

    def reset(self) -> None:
        """Clear all stored workouts."""
        self._workouts.clear()

    def seed(self, workouts: List[Dict[str, Any]]) -> None:
        """
        Seed the repository with test data.

        Args:
            workouts: List of workout dicts. Need 'name' and 'creator_id'.
        """
        now = datetime.now(timezone.utc).isoformat()
        for workout in workouts:
            workout_id = workout.get("id") or str(uuid.uuid4())
            self._workouts[workout_id] = {
                "description": "",
                "status": "DRAFT",
                "estimated_duration": None,
                "exercises": [],
                "created_at": now,
                "updated_at": now,
                **copy.deepcopy(workout),
                "id": workout_id,
            }

    def get_all(self) -> List[Dict[str, Any]]:
        """Get all stored workouts (test helper)."""
        return copy.deepcopy(list(self._workouts.values()))

    def exercise_ids_in_use(self) -> set:
        return {
            line["exercise_id"]
            for workout in self._workouts.values()
            for line in workout.get("exercises", [])
        }

    # =========================================================================
    # WorkoutRepository Protocol Methods
    # =========================================================================

    def list_workouts(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        results = []
        needle = search.lower() if search else None
        for workout in self._workouts.values():
            if status and workout.get("status") != status:
                continue
            if needle:
                haystack = f"{workout.get('name') or ''} {workout.get('description') or ''}".lower()
                if needle not in haystack:
                    continue
            results.append(self._with_exercises(workout))
        results.sort(key=lambda w: w.get("created_at") or "", reverse=True)
        return results

    def get_by_id(self, workout_id: str) -> Optional[Dict[str, Any]]:
        workout = self._workouts.get(workout_id)
        return self._with_exercises(workout) if workout else None

    def get_many(self, workout_ids: List[str]) -> List[Dict[str, Any]]:
        results = []
        for workout_id in workout_ids:
            workout = self._workouts.get(workout_id)
            if workout:
                results.append({k: copy.deepcopy(v) for k, v in workout.items() if k != "exercises"})
        return results

    def create_with_exercises(self, data: Dict[str, Any], exercises: List[Dict[str, Any]]) -> Dict[str, Any]:
        workout_id = str(uuid.uuid4())
        with self._lock:
            self.seed([{**data, "id": workout_id, "exercises": exercises}])
        return self.get_by_id(workout_id)

    def update(
        self,
        workout_id: str,
        data: Dict[str, Any],
        exercises: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        with self._lock:
            current = self._workouts.get(workout_id)
            if current is None:
                raise NotFoundError("Workout not found")
            replacement = {
                **copy.deepcopy(current),
                **copy.deepcopy(data),
                "updated_at": datetime.now(timezone.utc).isoformat(),
            }
            if exercises is not None:
                replacement["exercises"] = copy.deepcopy(exercises)
            self._workouts[workout_id] = replacement
        return self.get_by_id(workout_id)

    def delete_cascade(self, workout_id: str) -> bool:
        with self._lock:
            return self._workouts.pop(workout_id, None) is not None

    def _with_exercises(self, workout: Dict[str, Any]) -> Dict[str, Any]:
        result = copy.deepcopy(workout)
        if self._exercise_repo is not None:
            for line in result.get("exercises", []):
                line["exercise"] = self._exercise_repo.summary(line["exercise_id"])
        return result
