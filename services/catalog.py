"""
Catalog service: exercises, workouts and workout programs.

The catalog is the single source of truth for template definitions. Every
multi-row write (a workout with its lines, a program with its days) is handed
to the repository as one call so it lands in one transaction, and every
validation runs before anything is written: a bad day aborts the whole
program, not just that day.
"""

import logging
from typing import Dict, List, Optional, Sequence, Set

from application.exceptions import (
    AuthorizationError,
    ConflictError,
    DuplicateExerciseError,
    NotFoundError,
    ValidationError,
)
from application.ports import (
    AssignmentRepository,
    EnrollmentRepository,
    ExerciseRepository,
    ProgramRepository,
    WorkoutRepository,
)
from core.sanitization import name_key, sanitize_name
from models.exercise import Exercise, ExerciseCreate, ExerciseUpdate
from models.program import (
    ProgramScope,
    WorkoutDayInput,
    WorkoutProgram,
    WorkoutProgramCreate,
    WorkoutProgramUpdate,
)
from models.user import CurrentUser
from models.workout import (
    AvailableTemplate,
    ExerciseLineInput,
    TemplateKind,
    TemplateStatus,
    Workout,
    WorkoutCreate,
    WorkoutUpdate,
)
from services.access import require_staff

logger = logging.getLogger(__name__)


class Catalog:
    """
    Workout and program definitions and their exercise composition.

    Usage:
        >>> catalog = Catalog(exercise_repo, workout_repo, program_repo,
        ...                   assignment_repo, enrollment_repo)
        >>> workout = catalog.create_workout(trainer, WorkoutCreate(...))
    """

    def __init__(
        self,
        exercise_repo: ExerciseRepository,
        workout_repo: WorkoutRepository,
        program_repo: ProgramRepository,
        assignment_repo: AssignmentRepository,
        enrollment_repo: EnrollmentRepository,
    ) -> None:
        self._exercises = exercise_repo
        self._workouts = workout_repo
        self._programs = program_repo
        self._assignments = assignment_repo
        self._enrollments = enrollment_repo

    # -------------------------------------------------------------------------
    # Exercises
    # -------------------------------------------------------------------------

    def list_exercises(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Exercise]:
        rows = self._exercises.list_exercises(search=search, category=category)
        return [Exercise(**row) for row in rows]

    def list_categories(self) -> List[str]:
        return self._exercises.list_categories()

    def get_exercise(self, exercise_id: str) -> Exercise:
        row = self._exercises.get_by_id(exercise_id)
        if row is None:
            raise NotFoundError("Exercise not found")
        return Exercise(**row)

    def create_exercise(self, caller: CurrentUser, definition: ExerciseCreate) -> Exercise:
        """
        Add an exercise to the catalog.

        Raises:
            AuthorizationError: Caller is not a trainer or admin
            ValidationError: Name or category is blank
            DuplicateExerciseError: Another exercise has the same name (any case)
        """
        require_staff(caller, "create exercises")

        name = sanitize_name(definition.name)
        category = sanitize_name(definition.category)
        if not name or not category:
            raise ValidationError("Missing required fields: name, category, difficulty")
        self._ensure_exercise_name_free(name)

        data = definition.model_dump(mode="json")
        data.update({"name": name, "category": category})
        created = self._exercises.create(data)
        logger.info(f"Created exercise {created['id']} '{name}'")
        return Exercise(**created)

    def update_exercise(
        self,
        caller: CurrentUser,
        exercise_id: str,
        patch: ExerciseUpdate,
    ) -> Exercise:
        require_staff(caller, "edit exercises")
        if self._exercises.get_by_id(exercise_id) is None:
            raise NotFoundError("Exercise not found")

        data = patch.model_dump(mode="json", exclude_none=True)
        if "name" in data:
            data["name"] = sanitize_name(data["name"])
            if not data["name"]:
                raise ValidationError("Exercise name is required")
            self._ensure_exercise_name_free(data["name"], exclude_id=exercise_id)
        if "category" in data:
            data["category"] = sanitize_name(data["category"])
            if not data["category"]:
                raise ValidationError("Exercise category cannot be blank")
        if not data:
            return self.get_exercise(exercise_id)

        updated = self._exercises.update(exercise_id, data)
        logger.info(f"Updated exercise {exercise_id}")
        return Exercise(**updated)

    def delete_exercise(self, caller: CurrentUser, exercise_id: str) -> None:
        require_staff(caller, "delete exercises")
        if self._exercises.get_by_id(exercise_id) is None:
            raise NotFoundError("Exercise not found")
        if self._exercises.is_referenced(exercise_id):
            logger.warning(f"Refusing to delete exercise {exercise_id}: still referenced")
            raise ConflictError("Cannot delete exercise as it is used in workouts")
        self._exercises.delete(exercise_id)
        logger.info(f"Deleted exercise {exercise_id}")

    def _ensure_exercise_name_free(self, name: str, exclude_id: Optional[str] = None) -> None:
        existing = self._exercises.find_by_name(name)
        if existing and existing["id"] != exclude_id and name_key(existing["name"]) == name_key(name):
            raise DuplicateExerciseError("Exercise with this name already exists")

    # -------------------------------------------------------------------------
    # Workouts
    # -------------------------------------------------------------------------

    def list_workouts(
        self,
        caller: CurrentUser,
        search: Optional[str] = None,
        status: Optional[TemplateStatus] = None,
    ) -> List[Workout]:
        """
        List workouts visible to the caller.

        Trainers and admins see every workout; clients only ACTIVE ones.
        """
        if not caller.is_staff:
            status = TemplateStatus.ACTIVE
        rows = self._workouts.list_workouts(
            search=search,
            status=status.value if status else None,
        )
        return [_to_workout(row) for row in rows]

    def get_workout(self, caller: CurrentUser, workout_id: str) -> Workout:
        row = self.require_workout(workout_id)
        if not caller.is_staff and row.get("status") != TemplateStatus.ACTIVE.value:
            raise NotFoundError("Workout not found")
        return _to_workout(row)

    def require_workout(self, workout_id: str) -> Dict:
        """Raw workout row regardless of status. Raises NotFoundError."""
        row = self._workouts.get_by_id(workout_id)
        if row is None:
            raise NotFoundError("Workout not found")
        return row

    def workouts_by_id(self, workout_ids: Sequence[str]) -> Dict[str, Dict]:
        """Workout rows (without lines) keyed by ID, for display summaries."""
        wanted = sorted(set(workout_ids))
        if not wanted:
            return {}
        return {row["id"]: row for row in self._workouts.get_many(wanted)}

    def create_workout(self, caller: CurrentUser, definition: WorkoutCreate) -> Workout:
        """
        Create a DRAFT workout owned by the caller.

        Line order is the position in ``definition.exercises`` (1-based).

        Raises:
            AuthorizationError: Caller is not a trainer or admin
            ValidationError: Blank name, no lines, or an unknown exercise ID
        """
        require_staff(caller, "create workouts")

        name = sanitize_name(definition.name)
        if not name:
            raise ValidationError("Missing required fields: name")
        known = self._known_exercise_ids(line.exercise_id for line in definition.exercises)
        lines = _build_lines(definition.exercises, known, "Workout")

        data = {
            "name": name,
            "description": definition.description or "",
            "estimated_duration": definition.estimated_duration,
            "status": TemplateStatus.DRAFT.value,
            "creator_id": caller.user_id,
        }
        created = self._workouts.create_with_exercises(data, lines)
        logger.info(f"Created workout {created['id']} '{name}' with {len(lines)} exercises")
        return _to_workout(created)

    def update_workout(
        self,
        caller: CurrentUser,
        workout_id: str,
        patch: WorkoutUpdate,
    ) -> Workout:
        """
        Edit a workout. A provided ``exercises`` list replaces every line.

        Raises:
            NotFoundError: Unknown workout
            AuthorizationError: Caller is neither the creator nor an admin
            ValidationError: Blank name, empty line list, unknown exercise
        """
        workout = self.require_workout(workout_id)
        _require_owner(caller, workout, "workout")

        data: Dict = {}
        if patch.name is not None:
            data["name"] = sanitize_name(patch.name)
            if not data["name"]:
                raise ValidationError("Workout name cannot be blank")
        if patch.description is not None:
            data["description"] = patch.description
        if patch.estimated_duration is not None:
            data["estimated_duration"] = patch.estimated_duration

        lines = None
        if patch.exercises is not None:
            known = self._known_exercise_ids(line.exercise_id for line in patch.exercises)
            lines = _build_lines(patch.exercises, known, "Workout")

        if not data and lines is None:
            return _to_workout(workout)

        updated = self._workouts.update(workout_id, data, lines)
        logger.info(
            f"Updated workout {workout_id}"
            + (f", replaced lines with {len(lines)}" if lines is not None else "")
        )
        return _to_workout(updated)

    def set_workout_status(
        self,
        caller: CurrentUser,
        workout_id: str,
        status: TemplateStatus,
    ) -> Workout:
        """Approve (ACTIVE), archive or return a workout to DRAFT."""
        require_staff(caller, "approve workouts")
        self.require_workout(workout_id)
        updated = self._workouts.update(workout_id, {"status": status.value})
        logger.info(f"Workout {workout_id} status -> {status.value}")
        return _to_workout(updated)

    def delete_workout(self, caller: CurrentUser, workout_id: str) -> None:
        """
        Delete a workout and its lines.

        Raises:
            NotFoundError: Unknown workout
            AuthorizationError: Caller is neither the creator nor an admin
            ConflictError: A client assignment still references the workout
        """
        workout = self.require_workout(workout_id)
        _require_owner(caller, workout, "workout")

        in_use = self._assignments.count_for_workout(workout_id)
        if in_use:
            logger.warning(f"Refusing to delete workout {workout_id}: {in_use} assignments")
            raise ConflictError(
                "Cannot delete workout that is assigned to clients. "
                "Please unassign all clients first."
            )
        self._workouts.delete_cascade(workout_id)
        logger.info(f"Deleted workout {workout_id}")

    # -------------------------------------------------------------------------
    # Programs
    # -------------------------------------------------------------------------

    def list_programs(
        self,
        caller: CurrentUser,
        search: Optional[str] = None,
        scope: ProgramScope = ProgramScope.ALL,
    ) -> List[WorkoutProgram]:
        """
        List programs visible to the caller.

        Trainers and admins pick a scope (all, own, active); clients only
        see ACTIVE programs.
        """
        status = None
        creator_id = None
        if not caller.is_staff or scope == ProgramScope.ACTIVE:
            status = TemplateStatus.ACTIVE.value
        elif scope == ProgramScope.OWN:
            creator_id = caller.user_id

        rows = self._programs.list_programs(search=search, status=status, creator_id=creator_id)
        return [_to_program(row) for row in rows]

    def get_program(self, caller: CurrentUser, program_id: str) -> WorkoutProgram:
        row = self.require_program(program_id)
        if not caller.is_staff and row.get("status") != TemplateStatus.ACTIVE.value:
            raise NotFoundError("Workout program not found")
        return _to_program(row)

    def require_program(self, program_id: str) -> Dict:
        """Raw program row regardless of status. Raises NotFoundError."""
        row = self._programs.get_by_id(program_id)
        if row is None:
            raise NotFoundError("Workout program not found")
        return row

    def programs_by_id(self, program_ids: Sequence[str]) -> Dict[str, Dict]:
        """Program rows (without days) keyed by ID."""
        wanted = sorted(set(program_ids))
        if not wanted:
            return {}
        return {row["id"]: row for row in self._programs.get_many(wanted)}

    def create_program(
        self,
        caller: CurrentUser,
        definition: WorkoutProgramCreate,
    ) -> WorkoutProgram:
        """
        Create a DRAFT program owned by the caller.

        ``total_days`` is always ``len(days)``; day numbers must be exactly
        ``1..total_days``. Rest days never keep exercise lines.

        Raises:
            AuthorizationError: Caller is not a trainer or admin
            ValidationError: Blank name, no days, bad day numbering, or a
                training day without valid lines
        """
        require_staff(caller, "create workout programs")

        name = sanitize_name(definition.name)
        if not name:
            raise ValidationError("Missing required fields: name and days array")
        days = self._build_days(definition.days)

        data = {
            "name": name,
            "description": definition.description or "",
            "status": TemplateStatus.DRAFT.value,
            "creator_id": caller.user_id,
            "total_days": len(days),
        }
        created = self._programs.create_with_days(data, days)
        logger.info(f"Created program {created['id']} '{name}' with {len(days)} days")
        return _to_program(created)

    def update_program(
        self,
        caller: CurrentUser,
        program_id: str,
        patch: WorkoutProgramUpdate,
    ) -> WorkoutProgram:
        """Edit a program. A provided ``days`` list replaces every day and line."""
        program = self.require_program(program_id)
        _require_owner(caller, program, "workout program")

        data: Dict = {}
        if patch.name is not None:
            data["name"] = sanitize_name(patch.name)
            if not data["name"]:
                raise ValidationError("Program name cannot be blank")
        if patch.description is not None:
            data["description"] = patch.description

        days = None
        if patch.days is not None:
            days = self._build_days(patch.days)
            data["total_days"] = len(days)

        if not data:
            return _to_program(program)

        updated = self._programs.update(program_id, data, days)
        logger.info(
            f"Updated program {program_id}"
            + (f", replaced days with {len(days)}" if days is not None else "")
        )
        return _to_program(updated)

    def set_program_status(
        self,
        caller: CurrentUser,
        program_id: str,
        status: TemplateStatus,
    ) -> WorkoutProgram:
        require_staff(caller, "approve workout programs")
        self.require_program(program_id)
        updated = self._programs.update(program_id, {"status": status.value})
        logger.info(f"Program {program_id} status -> {status.value}")
        return _to_program(updated)

    def delete_program(self, caller: CurrentUser, program_id: str) -> None:
        """
        Delete a program with its days and lines.

        Raises:
            ConflictError: A client enrollment still references the program
        """
        program = self.require_program(program_id)
        _require_owner(caller, program, "workout program")

        in_use = self._enrollments.count_for_program(program_id)
        if in_use:
            logger.warning(f"Refusing to delete program {program_id}: {in_use} enrollments")
            raise ConflictError(
                "Cannot delete workout program that is assigned to clients. "
                "Please unassign all clients first."
            )
        self._programs.delete_cascade(program_id)
        logger.info(f"Deleted program {program_id}")

    # -------------------------------------------------------------------------
    # Available templates
    # -------------------------------------------------------------------------

    def list_available(
        self,
        caller: CurrentUser,
        client_id: Optional[str] = None,
        kind: Optional[TemplateKind] = None,
    ) -> List[AvailableTemplate]:
        """
        ACTIVE workouts and programs a trainer can hand out, workouts first.

        Args:
            caller: Trainer or admin
            client_id: Client profile ID, already resolved and scope-checked;
                every entry is tagged with that client's latest assignment
            kind: Only single-day workouts or only multi-day programs

        Raises:
            AuthorizationError: Caller is a client
        """
        require_staff(caller, "list available workouts")
        active = TemplateStatus.ACTIVE.value

        available: List[AvailableTemplate] = []
        if kind in (None, TemplateKind.SINGLE_DAY):
            available.extend(
                _to_available(row, TemplateKind.SINGLE_DAY)
                for row in self._workouts.list_workouts(status=active)
            )
        if kind in (None, TemplateKind.MULTI_DAY):
            available.extend(
                _to_available(row, TemplateKind.MULTI_DAY)
                for row in self._programs.list_programs(status=active)
            )

        if client_id is not None:
            # Both lists come back in date order, so the latest one wins
            statuses = {
                (TemplateKind.SINGLE_DAY, row["workout_id"]): row.get("status")
                for row in self._assignments.list_for_clients([client_id])
            }
            statuses.update(
                ((TemplateKind.MULTI_DAY, row["program_id"]), row.get("status"))
                for row in self._enrollments.list_for_clients([client_id])
            )
            for template in available:
                key = (template.kind, template.id)
                if key in statuses:
                    template.is_assigned = True
                    template.assignment_status = statuses[key]

        return available

    def _build_days(self, days: Sequence[WorkoutDayInput]) -> List[Dict]:
        if not days:
            raise ValidationError("Missing required fields: name and days array")

        numbers = [day.day_number for day in days]
        duplicates = sorted({n for n in numbers if numbers.count(n) > 1})
        if duplicates:
            raise ValidationError(f"Duplicate day numbers: {duplicates}")
        if set(numbers) != set(range(1, len(days) + 1)):
            raise ValidationError(
                f"Day numbers must run 1..{len(days)} without gaps, got {sorted(numbers)}"
            )

        known = self._known_exercise_ids(
            line.exercise_id
            for day in days
            if not day.is_rest_day
            for line in day.exercises
        )

        built = []
        for day in sorted(days, key=lambda d: d.day_number):
            name = sanitize_name(day.name)
            if not name:
                raise ValidationError(f"Day {day.day_number} is missing a name")
            lines: List[Dict] = []
            if not day.is_rest_day:
                lines = _build_lines(day.exercises, known, f"Day {day.day_number}")
            built.append({
                "day_number": day.day_number,
                "name": name,
                "is_rest_day": day.is_rest_day,
                "estimated_duration": day.estimated_duration,
                "notes": day.notes,
                "exercises": lines,
            })
        return built

    def _known_exercise_ids(self, exercise_ids) -> Set[str]:
        wanted = sorted(set(exercise_ids))
        if not wanted:
            return set()
        return {row["id"] for row in self._exercises.get_by_ids(wanted)}


# =============================================================================
# Helpers
# =============================================================================


def _build_lines(
    lines: Sequence[ExerciseLineInput],
    known_ids: Set[str],
    context: str,
) -> List[Dict]:
    """Validate exercise lines and assign 1-based contiguous order."""
    if not lines:
        raise ValidationError(f"{context} must contain at least one exercise")

    missing = [line.exercise_id for line in lines if line.exercise_id not in known_ids]
    if missing:
        raise ValidationError(f"{context} references unknown exercises: {missing}")

    return [
        {
            "exercise_id": line.exercise_id,
            "order": position,
            "sets": line.sets,
            "reps": line.reps,
            "rest": line.rest,
            "notes": line.notes,
        }
        for position, line in enumerate(lines, start=1)
    ]


def _require_owner(caller: CurrentUser, template: Dict, noun: str) -> None:
    if caller.is_admin:
        return
    if not caller.is_trainer or template.get("creator_id") != caller.user_id:
        logger.warning(f"User {caller.user_id} is not the creator of {noun} {template.get('id')}")
        raise AuthorizationError(f"Forbidden - you can only modify your own {noun}s")


def _sorted_lines(lines: Optional[List[Dict]]) -> List[Dict]:
    return sorted(lines or [], key=lambda line: line.get("order", 0))


def _to_workout(row: Dict) -> Workout:
    return Workout(**{**row, "exercises": _sorted_lines(row.get("exercises"))})


def _to_program(row: Dict) -> WorkoutProgram:
    days = [
        {**day, "exercises": _sorted_lines(day.get("exercises"))}
        for day in sorted(row.get("days") or [], key=lambda d: d.get("day_number", 0))
    ]
    return WorkoutProgram(**{**row, "days": days})


def _to_available(row: Dict, kind: TemplateKind) -> AvailableTemplate:
    if kind == TemplateKind.SINGLE_DAY:
        total_days = 1
        duration = row.get("estimated_duration")
    else:
        days = row.get("days") or []
        total_days = row.get("total_days") or len(days)
        durations = [day["estimated_duration"] for day in days if day.get("estimated_duration")]
        duration = sum(durations) if durations else None
    return AvailableTemplate(
        id=row["id"],
        kind=kind,
        name=row["name"],
        description=row.get("description"),
        creator_id=row["creator_id"],
        total_days=total_days,
        estimated_duration=duration,
        created_at=row.get("created_at"),
    )
