"""
Workout repository port (interface).

Multi-row writes (workout plus its exercise lines) are single methods so an
implementation can run each in one transaction.
"""

from typing import Dict, List, Optional, Protocol


class WorkoutRepository(Protocol):
    """
    Repository interface for single-day workout templates.

    Workout dictionaries returned by ``get_by_id`` and ``list_workouts``
    include an ``exercises`` key: the lines ordered by ``order``, each with a
    nested ``exercise`` summary.
    """

    def list_workouts(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
    ) -> List[Dict]:
        """
        List workouts, newest first.

        Args:
            search: Case-insensitive substring matched against name and description
            status: Only workouts with this status

        Returns:
            List of workout dictionaries with lines
        """
        ...

    def get_by_id(self, workout_id: str) -> Optional[Dict]:
        """Get a workout with its lines, or None."""
        ...

    def get_many(self, workout_ids: List[str]) -> List[Dict]:
        """Get workouts (without lines) whose IDs are in ``workout_ids``."""
        ...

    def create_with_exercises(self, data: Dict, exercises: List[Dict]) -> Dict:
        """
        Create a workout and all of its lines atomically.

        Args:
            data: Workout fields
            exercises: Line dictionaries with ``order`` already assigned

        Returns:
            Created workout dictionary with lines
        """
        ...

    def update(
        self,
        workout_id: str,
        data: Dict,
        exercises: Optional[List[Dict]] = None,
    ) -> Dict:
        """
        Update workout fields and, when ``exercises`` is given, replace every
        line in the same transaction (delete-then-recreate).

        Returns:
            Updated workout dictionary with lines
        """
        ...

    def delete_cascade(self, workout_id: str) -> bool:
        """
        Delete the workout's lines, then the workout, in one transaction.

        Returns:
            True if deleted, False if not found
        """
        ...
