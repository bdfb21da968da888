"""
Fake Program Repository for testing.

In-memory implementation of ProgramRepository. Programs are stored with their
``days`` (each carrying ``exercises``) and replaced wholesale under a lock.
"""
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone
import threading
import uuid
import copy

from application.exceptions import NotFoundError


class FakeProgramRepository:
    """
    In-memory fake implementation of ProgramRepository for testing.

    Usage:
        repo = FakeProgramRepository()
        repo.seed([{"id": "p1", "name": "P", "creator_id": "trainer-1", "total_days": 3}])
    """

    def __init__(self, exercise_repo: Optional[Any] = None):
        self._programs: Dict[str, Dict[str, Any]] = {}
        self._exercise_repo = exercise_repo
        self._lock = threading.Lock()

    def reset(self) -> None:
        """Clear all stored programs."""
        self._programs.clear()

    def seed(self, programs: List[Dict[str, Any]]) -> None:
        """
        Seed programs.

        ``total_days`` defaults to the number of seeded days. Seeding a
        program with ``total_days`` and no days is allowed for projection
        tests.
        """
        now = datetime.now(timezone.utc).isoformat()
        for program in programs:
            program_id = program.get("id") or str(uuid.uuid4())
            days = copy.deepcopy(program.get("days", []))
            self._programs[program_id] = {
                "description": "",
                "status": "DRAFT",
                "created_at": now,
                "updated_at": now,
                "total_days": len(days),
                **copy.deepcopy(program),
                "days": days,
                "id": program_id,
            }

    def get_all(self) -> List[Dict[str, Any]]:
        """Get all stored programs (test helper)."""
        return copy.deepcopy(list(self._programs.values()))

    def exercise_ids_in_use(self) -> set:
        return {
            line["exercise_id"]
            for program in self._programs.values()
            for day in program.get("days", [])
            for line in day.get("exercises", [])
        }

    # =========================================================================
    # ProgramRepository Protocol Methods
    # =========================================================================

    def list_programs(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        creator_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        results = []
        needle = search.lower() if search else None
        for program in self._programs.values():
            if status and program.get("status") != status:
                continue
            if creator_id and program.get("creator_id") != creator_id:
                continue
            if needle:
                haystack = f"{program.get('name') or ''} {program.get('description') or ''}".lower()
                if needle not in haystack:
                    continue
            results.append(self._with_exercises(program))
        results.sort(key=lambda p: p.get("created_at") or "", reverse=True)
        return results

    def get_by_id(self, program_id: str) -> Optional[Dict[str, Any]]:
        program = self._programs.get(program_id)
        return self._with_exercises(program) if program else None

    def get_many(self, program_ids: List[str]) -> List[Dict[str, Any]]:
        results = []
        for program_id in program_ids:
            program = self._programs.get(program_id)
            if program:
                results.append({k: copy.deepcopy(v) for k, v in program.items() if k != "days"})
        return results

    def create_with_days(self, data: Dict[str, Any], days: List[Dict[str, Any]]) -> Dict[str, Any]:
        program_id = str(uuid.uuid4())
        with self._lock:
            self.seed([{**data, "id": program_id, "days": days, "total_days": len(days)}])
        return self.get_by_id(program_id)

    def update(
        self,
        program_id: str,
        data: Dict[str, Any],
        days: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        with self._lock:
            current = self._programs.get(program_id)
            if current is None:
                raise NotFoundError("Workout program not found")
            replacement = {
                **copy.deepcopy(current),
                **copy.deepcopy(data),
                "updated_at": datetime.now(timezone.utc).isoformat(),
            }
            if days is not None:
                replacement["days"] = copy.deepcopy(days)
                replacement["total_days"] = len(days)
            self._programs[program_id] = replacement
        return self.get_by_id(program_id)

    def delete_cascade(self, program_id: str) -> bool:
        with self._lock:
            return self._programs.pop(program_id, None) is not None

    def _with_exercises(self, program: Dict[str, Any]) -> Dict[str, Any]:
        result = copy.deepcopy(program)
        if self._exercise_repo is not None:
            for day in result.get("days", []):
                for line in day.get("exercises", []):
                    line["exercise"] = self._exercise_repo.summary(line["exercise_id"])
        return result
