"""
Exercise repository port (interface).

This Protocol defines the contract for exercise catalog persistence.
Infrastructure implementations (e.g., Supabase) must satisfy this interface.
"""

from typing import Dict, List, Optional, Protocol


class ExerciseRepository(Protocol):
    """Repository interface for catalog exercises."""

    def list_exercises(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Dict]:
        """
        List exercises ordered by category, then name.

        Args:
            search: Case-insensitive substring matched against name,
                description and category
            category: Exact category filter

        Returns:
            List of exercise dictionaries
        """
        ...

    def get_by_id(self, exercise_id: str) -> Optional[Dict]:
        """Get an exercise by ID, or None."""
        ...

    def get_by_ids(self, exercise_ids: List[str]) -> List[Dict]:
        """
        Get every exercise whose ID is in ``exercise_ids``.

        Unknown IDs are simply absent from the result.
        """
        ...

    def find_by_name(self, name: str) -> Optional[Dict]:
        """Get an exercise by name, ignoring case, or None."""
        ...

    def list_categories(self) -> List[str]:
        """Distinct categories, sorted."""
        ...

    def create(self, data: Dict) -> Dict:
        """Create an exercise and return it with its generated ID."""
        ...

    def update(self, exercise_id: str, data: Dict) -> Dict:
        """Update an exercise and return the stored row."""
        ...

    def delete(self, exercise_id: str) -> bool:
        """Delete an exercise. Returns False if it did not exist."""
        ...

    def is_referenced(self, exercise_id: str) -> bool:
        """True while any workout or program-day line uses the exercise."""
        ...
