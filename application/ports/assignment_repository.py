"""
Assignment repository ports (interfaces).

Covers single-workout assignments (``client_workouts``), program enrollments
(``client_workout_programs``) and pinned program days
(``program_day_assignments``).
"""

from typing import Dict, List, Optional, Protocol


class AssignmentRepository(Protocol):
    """Repository interface for single-workout assignments."""

    def create(self, data: Dict, *, enforce_unique: bool = False) -> Dict:
        """
        Insert an assignment.

        With ``enforce_unique`` the duplicate check and the insert happen
        atomically for the (client_id, workout_id, scheduled_date) triple.

        Args:
            data: Assignment fields
            enforce_unique: Reject a second assignment of the same workout to
                the same client on the same date

        Returns:
            Created assignment dictionary

        Raises:
            DuplicateAssignmentError: If ``enforce_unique`` and a matching row exists
        """
        ...

    def get_by_id(self, assignment_id: str) -> Optional[Dict]:
        """Get an assignment by ID, or None."""
        ...

    def list_for_clients(self, client_ids: Optional[List[str]] = None) -> List[Dict]:
        """
        List assignments ordered by scheduled date.

        Args:
            client_ids: Restrict to these clients; None means every client

        Returns:
            List of assignment dictionaries
        """
        ...

    def update(self, assignment_id: str, data: Dict, *, enforce_unique: bool = False) -> Dict:
        """
        Update an assignment and return the stored row.

        With ``enforce_unique`` and a new ``scheduled_date`` the duplicate
        check and the update happen atomically, under the same rule as
        ``create``.

        Raises:
            NotFoundError: Unknown assignment
            DuplicateAssignmentError: The move would duplicate another
                assignment of the same workout for the client
        """
        ...

    def delete(self, assignment_id: str) -> bool:
        """Hard-delete an assignment. Returns False if it did not exist."""
        ...

    def count_for_workout(self, workout_id: str) -> int:
        """Number of assignments referencing the workout."""
        ...


class EnrollmentRepository(Protocol):
    """Repository interface for program enrollments and pinned days."""

    def create(self, data: Dict, *, enforce_unique: bool = False) -> Dict:
        """
        Insert an enrollment.

        Raises:
            DuplicateAssignmentError: If ``enforce_unique`` and the client is
                already enrolled in the program from the same start date
        """
        ...

    def get_by_id(self, enrollment_id: str) -> Optional[Dict]:
        """Get an enrollment by ID, or None."""
        ...

    def list_for_clients(self, client_ids: Optional[List[str]] = None) -> List[Dict]:
        """List enrollments ordered by start date; None means every client."""
        ...

    def delete(self, enrollment_id: str) -> bool:
        """Delete an enrollment together with its pinned days."""
        ...

    def count_for_program(self, program_id: str) -> int:
        """Number of enrollments referencing the program."""
        ...

    def list_day_overrides(self, enrollment_ids: List[str]) -> List[Dict]:
        """Pinned days belonging to any of the given enrollments."""
        ...

    def upsert_day_override(
        self,
        enrollment_id: str,
        day_number: int,
        scheduled_date: str,
    ) -> Dict:
        """Pin (or re-pin) one program day to an explicit ISO date."""
        ...

    def delete_day_override(self, enrollment_id: str, day_number: int) -> bool:
        """Remove a pinned day. Returns False if none existed."""
        ...
