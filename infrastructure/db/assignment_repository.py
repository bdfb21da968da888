"""
Supabase implementations of AssignmentRepository and EnrollmentRepository.

Queries against:
- client_workouts: single-workout assignments
- client_workout_programs: program enrollments
- program_day_assignments: pinned program days

Inserts go through ``insert_client_workout`` / ``insert_client_program``, and
reschedules under the uniqueness rule through ``update_client_workout``, so
the check and the write share one transaction (the functions take an
advisory lock on the client/template/date key first).
"""

import logging
from typing import Dict, List, Optional

from supabase import Client

from application.exceptions import NotFoundError, StorageError
from infrastructure.db.queries import execute, execute_insert, first, rows

logger = logging.getLogger(__name__)


class SupabaseAssignmentRepository:
    """Supabase implementation of AssignmentRepository protocol."""

    def __init__(self, client: Client):
        self._client = client

    def create(self, data: Dict, *, enforce_unique: bool = False) -> Dict:
        response = execute_insert(
            self._client.rpc(
                "insert_client_workout",
                {"p_assignment": data, "p_enforce_unique": enforce_unique},
            ),
            "assign workout",
        )
        created = first(response)
        if created is None:
            raise StorageError("insert_client_workout returned no data")
        return created

    def get_by_id(self, assignment_id: str) -> Optional[Dict]:
        response = execute(
            self._client.table("client_workouts").select("*").eq("id", assignment_id).limit(1),
            "load assignment",
        )
        return first(response)

    def list_for_clients(self, client_ids: Optional[List[str]] = None) -> List[Dict]:
        if client_ids is not None and not client_ids:
            return []
        query = self._client.table("client_workouts").select("*")
        if client_ids is not None:
            query = query.in_("client_id", client_ids)

        response = execute(query.order("scheduled_date"), "list assignments")
        return rows(response)

    def update(self, assignment_id: str, data: Dict, *, enforce_unique: bool = False) -> Dict:
        if enforce_unique and "scheduled_date" in data:
            response = execute_insert(
                self._client.rpc(
                    "update_client_workout",
                    {"p_id": assignment_id, "p_patch": data, "p_enforce_unique": True},
                ),
                "reschedule assignment",
            )
        else:
            response = execute(
                self._client.table("client_workouts").update(data).eq("id", assignment_id),
                "update assignment",
            )
        updated = first(response)
        if updated is None:
            raise NotFoundError("Assignment not found")
        return updated

    def delete(self, assignment_id: str) -> bool:
        response = execute(
            self._client.table("client_workouts").delete().eq("id", assignment_id),
            "delete assignment",
        )
        return bool(rows(response))

    def count_for_workout(self, workout_id: str) -> int:
        response = execute(
            self._client.table("client_workouts")
            .select("id", count="exact")
            .eq("workout_id", workout_id)
            .limit(1),
            "count workout assignments",
        )
        return response.count or len(rows(response))


class SupabaseEnrollmentRepository:
    """Supabase implementation of EnrollmentRepository protocol."""

    def __init__(self, client: Client):
        self._client = client

    def create(self, data: Dict, *, enforce_unique: bool = False) -> Dict:
        response = execute_insert(
            self._client.rpc(
                "insert_client_program",
                {"p_enrollment": data, "p_enforce_unique": enforce_unique},
            ),
            "assign program",
        )
        created = first(response)
        if created is None:
            raise StorageError("insert_client_program returned no data")
        return created

    def get_by_id(self, enrollment_id: str) -> Optional[Dict]:
        response = execute(
            self._client.table("client_workout_programs")
            .select("*")
            .eq("id", enrollment_id)
            .limit(1),
            "load program assignment",
        )
        return first(response)

    def list_for_clients(self, client_ids: Optional[List[str]] = None) -> List[Dict]:
        if client_ids is not None and not client_ids:
            return []
        query = self._client.table("client_workout_programs").select("*")
        if client_ids is not None:
            query = query.in_("client_id", client_ids)

        response = execute(query.order("start_date"), "list program assignments")
        return rows(response)

    def delete(self, enrollment_id: str) -> bool:
        """Delete pinned days, then the enrollment, via ``delete_client_program``."""
        response = execute(
            self._client.rpc("delete_client_program", {"p_enrollment_id": enrollment_id}),
            "delete program assignment",
        )
        return response.data is True

    def count_for_program(self, program_id: str) -> int:
        response = execute(
            self._client.table("client_workout_programs")
            .select("id", count="exact")
            .eq("program_id", program_id)
            .limit(1),
            "count program assignments",
        )
        return response.count or len(rows(response))

    def list_day_overrides(self, enrollment_ids: List[str]) -> List[Dict]:
        if not enrollment_ids:
            return []
        response = execute(
            self._client.table("program_day_assignments")
            .select("*")
            .in_("client_program_id", enrollment_ids)
            .order("day_number"),
            "list pinned program days",
        )
        return rows(response)

    def upsert_day_override(
        self,
        enrollment_id: str,
        day_number: int,
        scheduled_date: str,
    ) -> Dict:
        response = execute(
            self._client.table("program_day_assignments").upsert(
                {
                    "client_program_id": enrollment_id,
                    "day_number": day_number,
                    "scheduled_date": scheduled_date,
                },
                on_conflict="client_program_id,day_number",
            ),
            "pin program day",
        )
        return rows(response)[0]

    def delete_day_override(self, enrollment_id: str, day_number: int) -> bool:
        response = execute(
            self._client.table("program_day_assignments")
            .delete()
            .eq("client_program_id", enrollment_id)
            .eq("day_number", day_number),
            "unpin program day",
        )
        return bool(rows(response))
