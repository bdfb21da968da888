"""
Supabase implementation of WorkoutRepository.

Single-row reads use the table API with embedded lines. Every write that
touches more than one row (create with lines, replace lines, cascade delete)
is a Postgres function from ``supabase/migrations`` called through ``rpc`` so
it runs in one transaction.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from supabase import Client

from application.exceptions import ConflictError, NotFoundError, StorageError
from infrastructure.db.queries import escape_ilike, execute, execute_delete, first, rows

logger = logging.getLogger(__name__)

WORKOUT_COLUMNS = (
    "*, exercises:workout_exercises(*, exercise:exercises(id, name, category, difficulty))"
)


class SupabaseWorkoutRepository:
    """
    Supabase implementation of WorkoutRepository protocol.

    Queries against:
    - workouts: template metadata
    - workout_exercises: ordered exercise lines
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def list_workouts(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Dict]:
        query = self._client.table("workouts").select(WORKOUT_COLUMNS)
        if search:
            pattern = f"%{escape_ilike(search)}%"
            query = query.or_(f"name.ilike.{pattern},description.ilike.{pattern}")
        if status:
            query = query.eq("status", status)

        response = execute(query.order("created_at", desc=True), "list workouts")
        return rows(response)

    def get_by_id(self, workout_id: str) -> Optional[Dict]:
        response = execute(
            self._client.table("workouts").select(WORKOUT_COLUMNS).eq("id", workout_id).limit(1),
            "load workout",
        )
        return first(response)

    def get_many(self, workout_ids: List[str]) -> List[Dict]:
        if not workout_ids:
            return []
        response = execute(
            self._client.table("workouts")
            .select("id, name, description, status")
            .in_("id", workout_ids),
            "load workouts",
        )
        return rows(response)

    def create_with_exercises(self, data: Dict, exercises: List[Dict]) -> Dict:
        """
        Create a workout with all of its lines atomically.

        Uses the ``create_workout_with_exercises`` function so a failing line
        insert rolls back the workout row too.

        Raises:
            StorageError: If the RPC call fails or returns no ID
        """
        response = execute(
            self._client.rpc(
                "create_workout_with_exercises",
                {"p_workout": data, "p_exercises": exercises},
            ),
            "create workout",
        )
        workout_id = response.data
        if not workout_id:
            raise StorageError("create_workout_with_exercises returned no data")
        logger.info(f"Workout {workout_id} created with {len(exercises)} lines")
        return self.get_by_id(workout_id)

    def update(
        self,
        workout_id: str,
        data: Dict,
        exercises: Optional[List[Dict]] = None,
    ) -> Dict:
        """
        Update fields and optionally replace every line in one transaction.

        ``p_exercises`` is null when lines are left alone.
        """
        data = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        response = execute(
            self._client.rpc(
                "update_workout_with_exercises",
                {
                    "p_workout_id": workout_id,
                    "p_workout": data,
                    "p_exercises": exercises,
                },
            ),
            "update workout",
        )
        if response.data is not True:
            raise NotFoundError("Workout not found")
        return self.get_by_id(workout_id)

    def delete_cascade(self, workout_id: str) -> bool:
        """Delete lines, then the workout, via ``delete_workout_cascade``."""
        response = execute_delete(
            self._client.rpc("delete_workout_cascade", {"p_workout_id": workout_id}),
            "delete workout",
            ConflictError(
                "Cannot delete workout that is assigned to clients. "
                "Please unassign all clients first."
            ),
        )
        deleted = response.data is True
        if not deleted:
            logger.warning(f"No workout found with id {workout_id} (0 rows deleted)")
        return deleted
