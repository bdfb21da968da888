"""
Program repository port (interface).

Programs own days which own exercise lines; every write that touches more than
one row is a single method so it can run in one transaction.
"""

from typing import Dict, List, Optional, Protocol


class ProgramRepository(Protocol):
    """
    Repository interface for multi-day workout programs.

    Program dictionaries include a ``days`` key ordered by ``day_number``;
    each day has an ``exercises`` list ordered by ``order``.
    """

    def list_programs(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        creator_id: Optional[str] = None,
    ) -> List[Dict]:
        """
        List programs, newest first.

        Args:
            search: Case-insensitive substring matched against name and description
            status: Only programs with this status
            creator_id: Only programs created by this trainer

        Returns:
            List of program dictionaries with days
        """
        ...

    def get_by_id(self, program_id: str) -> Optional[Dict]:
        """Get a program with its days and lines, or None."""
        ...

    def get_many(self, program_ids: List[str]) -> List[Dict]:
        """Get programs (without days) whose IDs are in ``program_ids``."""
        ...

    def create_with_days(self, data: Dict, days: List[Dict]) -> Dict:
        """
        Create a program with all days and lines atomically.

        Args:
            data: Program fields including ``total_days``
            days: Day dictionaries, each with an ``exercises`` list

        Returns:
            Created program dictionary with days
        """
        ...

    def update(
        self,
        program_id: str,
        data: Dict,
        days: Optional[List[Dict]] = None,
    ) -> Dict:
        """
        Update program fields and, when ``days`` is given, replace every day
        and line in the same transaction.

        Returns:
            Updated program dictionary with days
        """
        ...

    def delete_cascade(self, program_id: str) -> bool:
        """
        Delete day lines, then days, then the program, in one transaction.

        Returns:
            True if deleted, False if not found
        """
        ...
