"""
Calendar projection for a client.

The calendar is never stored. Each call re-reads the client's assignments,
enrollments and pinned program days and derives ``date -> labels``:

- a workout assignment puts the workout name on its scheduled date
- an enrollment puts "{program} - Day {n}" on ``start_date + (n - 1)``,
  or on the pinned date when day ``n`` has one (the arithmetic date is then
  left empty for that day)

Identical labels on one date collapse to one; dates are ascending and labels
keep insertion order (workouts first, then program days).
"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from application.ports import (
    AssignmentRepository,
    ClientRepository,
    EnrollmentRepository,
    ProgramRepository,
    WorkoutRepository,
)
from core.constants import PROGRAM_DAY_LABEL
from core.dates import add_days, to_calendar_date
from models.calendar import CalendarDay, CalendarProjection
from models.user import CurrentUser
from services.access import load_visible_client

logger = logging.getLogger(__name__)


def project_client(
    assignments: Iterable[Dict],
    workouts: Dict[str, Dict],
    enrollments: Iterable[Dict],
    programs: Dict[str, Dict],
    overrides: Iterable[Dict],
) -> List[CalendarDay]:
    """
    Pure projection of source rows onto calendar days.

    Args:
        assignments: Workout assignment rows (``workout_id``, ``scheduled_date``)
        workouts: Workout rows keyed by ID (``name``)
        enrollments: Enrollment rows (``id``, ``program_id``, ``start_date``)
        programs: Program rows keyed by ID (``name``, ``total_days``)
        overrides: Pinned days (``client_program_id``, ``day_number``, ``scheduled_date``)

    Returns:
        Calendar days sorted ascending by date
    """
    calendar: Dict[date, List[str]] = {}

    def emit(day: date, label: str) -> None:
        labels = calendar.setdefault(day, [])
        if label not in labels:
            labels.append(label)

    for assignment in assignments:
        workout = workouts.get(assignment["workout_id"])
        if workout is None:
            logger.warning(
                f"Assignment {assignment.get('id')} references missing workout "
                f"{assignment['workout_id']}"
            )
            continue
        emit(to_calendar_date(assignment["scheduled_date"]), workout["name"])

    pinned: Dict[Tuple[str, int], date] = {
        (pin["client_program_id"], pin["day_number"]): to_calendar_date(pin["scheduled_date"])
        for pin in overrides
    }

    for enrollment in enrollments:
        program = programs.get(enrollment["program_id"])
        if program is None:
            logger.warning(
                f"Enrollment {enrollment.get('id')} references missing program "
                f"{enrollment['program_id']}"
            )
            continue
        start = to_calendar_date(enrollment["start_date"])
        for offset in range(program.get("total_days") or 0):
            day_number = offset + 1
            day = pinned.get((enrollment["id"], day_number), add_days(start, offset))
            emit(day, PROGRAM_DAY_LABEL.format(program_name=program["name"], day_number=day_number))

    return [CalendarDay(date=day, labels=calendar[day]) for day in sorted(calendar)]


class CalendarProjector:
    """
    Read-only calendar view over a client's schedule.

    Visibility: clients see themselves, trainers their own clients, admins
    anyone. Anything else is NotFoundError so existence never leaks.
    """

    def __init__(
        self,
        client_repo: ClientRepository,
        workout_repo: WorkoutRepository,
        program_repo: ProgramRepository,
        assignment_repo: AssignmentRepository,
        enrollment_repo: EnrollmentRepository,
    ) -> None:
        self._clients = client_repo
        self._workouts = workout_repo
        self._programs = program_repo
        self._assignments = assignment_repo
        self._enrollments = enrollment_repo

    def project(
        self,
        caller: CurrentUser,
        client_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> CalendarProjection:
        """
        Project the client's calendar, optionally bounded by inclusive dates.

        Raises:
            NotFoundError: Client missing or outside the caller's scope
        """
        client = load_visible_client(caller, self._clients, client_id)

        assignments = self._assignments.list_for_clients([client["id"]])
        enrollments = self._enrollments.list_for_clients([client["id"]])
        workouts = _by_id(self._workouts.get_many(
            sorted({row["workout_id"] for row in assignments})
        )) if assignments else {}
        programs = _by_id(self._programs.get_many(
            sorted({row["program_id"] for row in enrollments})
        )) if enrollments else {}
        overrides = (
            self._enrollments.list_day_overrides([row["id"] for row in enrollments])
            if enrollments
            else []
        )

        days = project_client(assignments, workouts, enrollments, programs, overrides)
        if start is not None:
            days = [day for day in days if day.date >= start]
        if end is not None:
            days = [day for day in days if day.date <= end]

        logger.debug(
            f"Projected {len(days)} days for client {client['id']} "
            f"from {len(assignments)} assignments and {len(enrollments)} enrollments"
        )
        return CalendarProjection(client_id=client["id"], start=start, end=end, days=days)

    def scheduled_dates(
        self,
        caller: CurrentUser,
        client_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[str]:
        """Sorted ISO dates that carry at least one label."""
        projection = self.project(caller, client_id, start, end)
        return [day.date.isoformat() for day in projection.days]


def _by_id(rows: List[Dict]) -> Dict[str, Dict]:
    return {row["id"]: row for row in rows}
