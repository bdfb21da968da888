"""
Supabase implementation of ExerciseRepository.

Queries the ``exercises`` catalog table. Name uniqueness is case-insensitive
and backed by a unique index on ``lower(name)``.
"""

import logging
from typing import Dict, List, Optional

from supabase import Client

from application.exceptions import ConflictError, DuplicateExerciseError, NotFoundError
from infrastructure.db.queries import escape_ilike, execute, execute_delete, execute_insert, first, rows

logger = logging.getLogger(__name__)


class SupabaseExerciseRepository:
    """
    Supabase implementation of ExerciseRepository protocol.

    Provides methods to query the exercise catalog for:
    - Substring search over name, description and category
    - Case-insensitive name lookup
    - Reference checks against workout and program-day lines
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client

    def list_exercises(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Dict]:
        """
        List exercises ordered by category, then name.

        Args:
            search: Case-insensitive substring over name, description, category
            category: Exact category filter

        Returns:
            List of exercise dictionaries
        """
        query = self._client.table("exercises").select("*")
        if search:
            pattern = f"%{escape_ilike(search)}%"
            query = query.or_(
                f"name.ilike.{pattern},description.ilike.{pattern},category.ilike.{pattern}"
            )
        if category:
            query = query.eq("category", category)

        response = execute(query.order("category").order("name"), "list exercises")
        return rows(response)

    def get_by_id(self, exercise_id: str) -> Optional[Dict]:
        response = execute(
            self._client.table("exercises").select("*").eq("id", exercise_id).limit(1),
            "load exercise",
        )
        return first(response)

    def get_by_ids(self, exercise_ids: List[str]) -> List[Dict]:
        if not exercise_ids:
            return []
        response = execute(
            self._client.table("exercises").select("*").in_("id", exercise_ids),
            "load exercises",
        )
        return rows(response)

    def find_by_name(self, name: str) -> Optional[Dict]:
        """Exercise whose name equals ``name`` ignoring case, or None."""
        response = execute(
            self._client.table("exercises")
            .select("*")
            .ilike("name", escape_ilike(name))
            .limit(1),
            "look up exercise name",
        )
        return first(response)

    def list_categories(self) -> List[str]:
        response = execute(
            self._client.table("exercises").select("category"),
            "list exercise categories",
        )
        return sorted({row["category"] for row in rows(response) if row.get("category")})

    def create(self, data: Dict) -> Dict:
        response = execute_insert(
            self._client.table("exercises").insert(data),
            "create exercise",
            DuplicateExerciseError("Exercise with this name already exists"),
        )
        return rows(response)[0]

    def update(self, exercise_id: str, data: Dict) -> Dict:
        response = execute_insert(
            self._client.table("exercises").update(data).eq("id", exercise_id),
            "update exercise",
            DuplicateExerciseError("Exercise with this name already exists"),
        )
        updated = first(response)
        if updated is None:
            raise NotFoundError("Exercise not found")
        return updated

    def delete(self, exercise_id: str) -> bool:
        response = execute_delete(
            self._client.table("exercises").delete().eq("id", exercise_id),
            "delete exercise",
            ConflictError("Cannot delete exercise as it is used in workouts"),
        )
        return bool(rows(response))

    def is_referenced(self, exercise_id: str) -> bool:
        """True while any workout line or program-day line uses the exercise."""
        for table in ("workout_exercises", "workout_day_exercises"):
            response = execute(
                self._client.table(table)
                .select("id", count="exact")
                .eq("exercise_id", exercise_id)
                .limit(1),
                "check exercise references",
            )
            if response.count or rows(response):
                return True
        return False
