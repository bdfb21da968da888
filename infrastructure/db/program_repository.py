"""
Supabase implementation of ProgramRepository.

Queries against:
- workout_programs: program metadata and ``total_days``
- workout_days: one row per day number
- workout_day_exercises: ordered lines of the training days

Creates, day-list replacements and cascade deletes run as Postgres functions
so they are all-or-nothing.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from supabase import Client

from application.exceptions import ConflictError, NotFoundError, StorageError
from infrastructure.db.queries import escape_ilike, execute, execute_delete, first, rows

logger = logging.getLogger(__name__)

PROGRAM_COLUMNS = (
    "*, days:workout_days(*, "
    "exercises:workout_day_exercises(*, exercise:exercises(id, name, category, difficulty)))"
)


class SupabaseProgramRepository:
    """Supabase-backed program repository implementation."""

    def __init__(self, client: Client):
        """
        Initialize repository with Supabase client.

        Args:
            client: Authenticated Supabase client
        """
        self._client = client

    def list_programs(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        creator_id: Optional[str] = None,
    ) -> List[Dict]:
        query = self._client.table("workout_programs").select(PROGRAM_COLUMNS)
        if search:
            pattern = f"%{escape_ilike(search)}%"
            query = query.or_(f"name.ilike.{pattern},description.ilike.{pattern}")
        if status:
            query = query.eq("status", status)
        if creator_id:
            query = query.eq("creator_id", creator_id)

        response = execute(query.order("created_at", desc=True), "list programs")
        return rows(response)

    def get_by_id(self, program_id: str) -> Optional[Dict]:
        response = execute(
            self._client.table("workout_programs")
            .select(PROGRAM_COLUMNS)
            .eq("id", program_id)
            .limit(1),
            "load program",
        )
        return first(response)

    def get_many(self, program_ids: List[str]) -> List[Dict]:
        if not program_ids:
            return []
        response = execute(
            self._client.table("workout_programs")
            .select("id, name, description, status, total_days")
            .in_("id", program_ids),
            "load programs",
        )
        return rows(response)

    def create_with_days(self, data: Dict, days: List[Dict]) -> Dict:
        """
        Create a program with all days and lines atomically.

        Raises:
            StorageError: If the RPC call fails or returns no ID
        """
        response = execute(
            self._client.rpc(
                "create_program_with_days",
                {"p_program": data, "p_days": days},
            ),
            "create program",
        )
        program_id = response.data
        if not program_id:
            raise StorageError("create_program_with_days returned no data")
        logger.info(f"Program {program_id} created with {len(days)} days")
        return self.get_by_id(program_id)

    def update(
        self,
        program_id: str,
        data: Dict,
        days: Optional[List[Dict]] = None,
    ) -> Dict:
        data = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
        response = execute(
            self._client.rpc(
                "update_program_with_days",
                {"p_program_id": program_id, "p_program": data, "p_days": days},
            ),
            "update program",
        )
        if response.data is not True:
            raise NotFoundError("Workout program not found")
        return self.get_by_id(program_id)

    def delete_cascade(self, program_id: str) -> bool:
        """Delete day lines, days, then the program via ``delete_program_cascade``."""
        response = execute_delete(
            self._client.rpc("delete_program_cascade", {"p_program_id": program_id}),
            "delete program",
            ConflictError(
                "Cannot delete workout program that is assigned to clients. "
                "Please unassign all clients first."
            ),
        )
        return response.data is True
