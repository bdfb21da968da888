"""
Assignment manager: binds workouts and programs to clients on dates.

Every assignment passes the same gate, in this order:
1. The client exists and its account has the CLIENT role (NotFoundError)
2. A trainer caller is the client's trainer; admins bypass (AuthorizationError)
3. The client's subscription is ACTIVE (EligibilityError)
4. The template exists (NotFoundError)
5. The uniqueness policy, enforced atomically by the repository

The trainer-client relationship (``Client.trainer_id``) is managed here too.
"""

import logging
from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from application.exceptions import (
    AuthorizationError,
    EligibilityError,
    NotFoundError,
    ValidationError,
)
from application.ports import (
    AssignmentRepository,
    ClientRepository,
    EnrollmentRepository,
    UserRepository,
)
from core.dates import iso, to_calendar_date
from models.assignment import (
    AssignmentStatus,
    ClientProgramAssignment,
    ClientWorkoutAssignment,
    EnrollmentStatus,
    ProgramAssignmentCreate,
    ProgramDayOverride,
    TemplateSummary,
    WorkoutAssignmentCreate,
    WorkoutAssignmentUpdate,
)
from models.client import Client, ClientSummary, SubscriptionStatus, SubscriptionUpdateRequest
from models.user import CurrentUser, Role
from models.workout import AvailableTemplate, TemplateKind
from services.access import (
    client_ids_in_scope,
    find_client,
    load_client_account,
    load_visible_client,
    manages_client,
    require_admin,
    require_staff,
)
from services.catalog import Catalog

logger = logging.getLogger(__name__)


def completion_fields(
    current_status: str,
    current_completed_at: Optional[str],
    new_status: AssignmentStatus,
    now: datetime,
) -> Dict:
    """
    ``completed_at`` change implied by a status transition.

    Entering COMPLETED stamps ``now``; repeating COMPLETED keeps the first
    stamp; leaving COMPLETED clears it. Any other transition changes nothing.
    """
    was_completed = current_status == AssignmentStatus.COMPLETED.value
    if new_status == AssignmentStatus.COMPLETED:
        if was_completed and current_completed_at:
            return {}
        return {"completed_at": now.isoformat()}
    if was_completed:
        return {"completed_at": None}
    return {}


class AssignmentManager:
    """
    Gate and record template-to-client bindings.

    Args:
        enforce_unique: Reject a second assignment of the same template to the
            same client on the same date (``enforce_unique_assignments``)
    """

    def __init__(
        self,
        user_repo: UserRepository,
        client_repo: ClientRepository,
        catalog: Catalog,
        assignment_repo: AssignmentRepository,
        enrollment_repo: EnrollmentRepository,
        *,
        enforce_unique: bool = False,
    ) -> None:
        self._users = user_repo
        self._clients = client_repo
        self._catalog = catalog
        self._assignments = assignment_repo
        self._enrollments = enrollment_repo
        self._enforce_unique = enforce_unique

    # -------------------------------------------------------------------------
    # Single-workout assignments
    # -------------------------------------------------------------------------

    def assign_workout(
        self,
        caller: CurrentUser,
        request: WorkoutAssignmentCreate,
    ) -> ClientWorkoutAssignment:
        """
        Schedule a workout for a client.

        Raises:
            AuthorizationError: Caller is a client, or a trainer who does not
                train this client
            NotFoundError: Unknown client (or not a CLIENT account), unknown workout
            EligibilityError: Client subscription is not ACTIVE
            DuplicateAssignmentError: Uniqueness enforced and already assigned
        """
        require_staff(caller, "assign workouts")
        client = self._eligible_client(caller, request.client_id)
        workout = self._catalog.require_workout(request.workout_id)

        data = {
            "client_id": client["id"],
            "workout_id": workout["id"],
            "scheduled_date": iso(request.scheduled_date),
            "status": AssignmentStatus.SCHEDULED.value,
            "completed_at": None,
            "notes": request.notes,
        }
        created = self._assignments.create(data, enforce_unique=self._enforce_unique)
        logger.info(
            f"Assigned workout {workout['id']} to client {client['id']} "
            f"on {data['scheduled_date']} (by {caller.user_id})"
        )
        return _to_workout_assignment(created, workout, client)

    def update_assignment(
        self,
        caller: CurrentUser,
        assignment_id: str,
        patch: WorkoutAssignmentUpdate,
        *,
        now: Optional[datetime] = None,
    ) -> ClientWorkoutAssignment:
        """
        Change an assignment's status, date or notes.

        Clients may only change the status of their own assignments; trainers
        may change any field on their clients' assignments; admins on any.

        Raises:
            NotFoundError: Unknown assignment
            AuthorizationError: Role or ownership mismatch
            DuplicateAssignmentError: Under the uniqueness policy, the new date
                already holds the same workout for the client
        """
        assignment = self._assignments.get_by_id(assignment_id)
        if assignment is None:
            raise NotFoundError("Assignment not found")
        client = self._clients.get_by_id(assignment["client_id"]) or {}

        if caller.is_client:
            if client.get("user_id") != caller.user_id:
                logger.warning(f"Client {caller.user_id} denied update of assignment {assignment_id}")
                raise AuthorizationError("Forbidden - you can only update your own workouts")
            if patch.scheduled_date is not None or patch.notes is not None:
                raise AuthorizationError("Forbidden - clients can only update the status")
        elif not manages_client(caller, client):
            logger.warning(f"User {caller.user_id} denied update of assignment {assignment_id}")
            raise AuthorizationError("Forbidden - client is not assigned to you")

        data: Dict = {}
        if patch.status is not None:
            data["status"] = patch.status.value
            data.update(
                completion_fields(
                    assignment.get("status"),
                    assignment.get("completed_at"),
                    patch.status,
                    now or datetime.now(timezone.utc),
                )
            )
        if patch.scheduled_date is not None:
            data["scheduled_date"] = iso(patch.scheduled_date)
        if patch.notes is not None:
            data["notes"] = patch.notes

        if data:
            assignment = self._assignments.update(
                assignment_id, data, enforce_unique=self._enforce_unique
            )
            logger.info(f"Updated assignment {assignment_id}: {sorted(data)}")

        workout = self._catalog.workouts_by_id([assignment["workout_id"]]).get(
            assignment["workout_id"]
        )
        return _to_workout_assignment(assignment, workout, client)

    def update_assignment_status(
        self,
        caller: CurrentUser,
        assignment_id: str,
        status: AssignmentStatus,
        *,
        now: Optional[datetime] = None,
    ) -> ClientWorkoutAssignment:
        return self.update_assignment(
            caller, assignment_id, WorkoutAssignmentUpdate(status=status), now=now
        )

    def reschedule_assignment(
        self,
        caller: CurrentUser,
        assignment_id: str,
        scheduled_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> ClientWorkoutAssignment:
        return self.update_assignment(
            caller,
            assignment_id,
            WorkoutAssignmentUpdate(scheduled_date=scheduled_date, notes=notes),
        )

    def unassign(self, caller: CurrentUser, assignment_id: str) -> None:
        """Hard-delete a workout assignment (trainer of the client, or admin)."""
        require_staff(caller, "delete workout assignments")
        assignment = self._assignments.get_by_id(assignment_id)
        if assignment is None:
            raise NotFoundError("Assignment not found")
        self._require_manages(caller, assignment["client_id"])

        self._assignments.delete(assignment_id)
        logger.info(f"Deleted assignment {assignment_id} (by {caller.user_id})")

    def list_assignments(
        self,
        caller: CurrentUser,
        client_id: Optional[str] = None,
    ) -> List[ClientWorkoutAssignment]:
        """
        Workout assignments visible to the caller, ordered by date.

        Admins see every client, trainers their own clients, clients
        themselves. Filtering on a client outside that scope is NotFoundError.
        """
        scope = client_ids_in_scope(caller, self._clients, client_id)
        if scope == []:
            return []
        rows = self._assignments.list_for_clients(scope)

        workouts = self._catalog.workouts_by_id([row["workout_id"] for row in rows])
        clients = self._clients_by_id([row["client_id"] for row in rows])
        return [
            _to_workout_assignment(row, workouts.get(row["workout_id"]), clients.get(row["client_id"]))
            for row in rows
        ]

    def list_available_templates(
        self,
        caller: CurrentUser,
        client_id: Optional[str] = None,
        kind: Optional[TemplateKind] = None,
    ) -> List[AvailableTemplate]:
        """
        ACTIVE templates to pick from when assigning, optionally tagged for one client.

        Raises:
            AuthorizationError: Caller is a client
            NotFoundError: ``client_id`` is unknown or outside the caller's scope
        """
        require_staff(caller, "list available workouts")
        profile_id = None
        if client_id is not None:
            profile_id = load_visible_client(caller, self._clients, client_id)["id"]
        return self._catalog.list_available(caller, client_id=profile_id, kind=kind)

    # -------------------------------------------------------------------------
    # Program enrollments
    # -------------------------------------------------------------------------

    def assign_program(
        self,
        caller: CurrentUser,
        request: ProgramAssignmentCreate,
    ) -> ClientProgramAssignment:
        """
        Enroll a client in a program from ``start_date``.

        Same checks as ``assign_workout``, against programs.
        """
        require_staff(caller, "assign workout programs")
        client = self._eligible_client(caller, request.client_id)
        program = self._catalog.require_program(request.program_id)

        data = {
            "client_id": client["id"],
            "program_id": program["id"],
            "start_date": iso(request.start_date),
            "status": EnrollmentStatus.ACTIVE.value,
            "notes": request.notes,
        }
        created = self._enrollments.create(data, enforce_unique=self._enforce_unique)
        logger.info(
            f"Enrolled client {client['id']} in program {program['id']} "
            f"from {data['start_date']} (by {caller.user_id})"
        )
        return _to_program_assignment(created, program, client, [])

    def unassign_program(self, caller: CurrentUser, enrollment_id: str) -> None:
        """Delete an enrollment and its pinned days."""
        require_staff(caller, "delete program assignments")
        enrollment = self._require_enrollment(enrollment_id)
        self._require_manages(caller, enrollment["client_id"])

        self._enrollments.delete(enrollment_id)
        logger.info(f"Deleted program assignment {enrollment_id} (by {caller.user_id})")

    def list_program_assignments(
        self,
        caller: CurrentUser,
        client_id: Optional[str] = None,
    ) -> List[ClientProgramAssignment]:
        scope = client_ids_in_scope(caller, self._clients, client_id)
        if scope == []:
            return []
        rows = self._enrollments.list_for_clients(scope)

        programs = self._catalog.programs_by_id([row["program_id"] for row in rows])
        clients = self._clients_by_id([row["client_id"] for row in rows])
        overrides: Dict[str, List[Dict]] = {}
        if rows:
            for pin in self._enrollments.list_day_overrides([row["id"] for row in rows]):
                overrides.setdefault(pin["client_program_id"], []).append(pin)

        return [
            _to_program_assignment(
                row,
                programs.get(row["program_id"]),
                clients.get(row["client_id"]),
                overrides.get(row["id"], []),
            )
            for row in rows
        ]

    def pin_program_day(
        self,
        caller: CurrentUser,
        enrollment_id: str,
        day_number: int,
        scheduled_date: date,
    ) -> ProgramDayOverride:
        """
        Move one program day to an explicit date.

        The override replaces the day's arithmetic date in the calendar.

        Raises:
            ValidationError: ``day_number`` outside ``1..total_days``
        """
        require_staff(caller, "reschedule program days")
        enrollment = self._require_enrollment(enrollment_id)
        self._require_manages(caller, enrollment["client_id"])
        self._require_day_in_program(enrollment, day_number)

        pinned = self._enrollments.upsert_day_override(
            enrollment_id, day_number, iso(scheduled_date)
        )
        logger.info(f"Pinned day {day_number} of enrollment {enrollment_id} to {iso(scheduled_date)}")
        return ProgramDayOverride(
            **{**pinned, "scheduled_date": to_calendar_date(pinned["scheduled_date"])}
        )

    def unpin_program_day(self, caller: CurrentUser, enrollment_id: str, day_number: int) -> None:
        require_staff(caller, "reschedule program days")
        enrollment = self._require_enrollment(enrollment_id)
        self._require_manages(caller, enrollment["client_id"])
        self._require_day_in_program(enrollment, day_number)

        if not self._enrollments.delete_day_override(enrollment_id, day_number):
            raise NotFoundError(f"Day {day_number} has no pinned date")
        logger.info(f"Unpinned day {day_number} of enrollment {enrollment_id}")

    # -------------------------------------------------------------------------
    # Trainer-client relationship
    # -------------------------------------------------------------------------

    def assign_trainer_to_client(
        self,
        caller: CurrentUser,
        client_id: str,
        trainer_id: Optional[str] = None,
    ) -> Client:
        """
        Give an unassigned, ACTIVE client a trainer.

        Trainers always assign themselves. Admins name the trainer.

        Raises:
            EligibilityError: Client already has a trainer, or is not ACTIVE
        """
        require_staff(caller, "assign clients")
        if caller.is_trainer:
            if trainer_id and trainer_id != caller.user_id:
                raise AuthorizationError("Forbidden - trainers can only assign clients to themselves")
            trainer_id = caller.user_id
        elif not trainer_id:
            raise ValidationError("Missing required fields: trainer_id")
        else:
            self._require_trainer_account(trainer_id)

        client = load_client_account(self._clients, self._users, client_id)
        if client.get("trainer_id"):
            logger.warning(f"Client {client['id']} already assigned to {client['trainer_id']}")
            raise EligibilityError("Client is already assigned to a trainer")
        if client.get("subscription_status") != SubscriptionStatus.ACTIVE.value:
            raise EligibilityError("Client must have an active subscription")

        updated = self._clients.update(client["id"], {"trainer_id": trainer_id})
        logger.info(f"Assigned client {client['id']} to trainer {trainer_id}")
        return Client(**updated)

    def unassign_trainer_from_client(self, caller: CurrentUser, client_id: str) -> Client:
        """
        Release a client from the calling trainer.

        Only the current trainer may do this; admins move clients with
        ``reassign_client``.

        Raises:
            NotFoundError: Client missing or not assigned to the caller
        """
        require_staff(caller, "unassign clients")
        client = find_client(self._clients, client_id)
        if client is None or client.get("trainer_id") != caller.user_id:
            raise NotFoundError("Client not found or not assigned to you")

        updated = self._clients.update(client["id"], {"trainer_id": None})
        logger.info(f"Unassigned client {client['id']} from trainer {caller.user_id}")
        return Client(**updated)

    def reassign_client(self, caller: CurrentUser, client_id: str, new_trainer_id: str) -> Client:
        """Move a client to any trainer (admin only, current trainer ignored)."""
        require_admin(caller, "reassign clients")
        client = load_client_account(self._clients, self._users, client_id)
        self._require_trainer_account(new_trainer_id)

        updated = self._clients.update(client["id"], {"trainer_id": new_trainer_id})
        logger.info(
            f"Reassigned client {client['id']} from {client.get('trainer_id')} to {new_trainer_id}"
        )
        return Client(**updated)

    def list_clients(self, caller: CurrentUser) -> List[Client]:
        require_staff(caller, "list clients")
        trainer_id = None if caller.is_admin else caller.user_id
        return [Client(**row) for row in self._clients.list_clients(trainer_id=trainer_id)]

    def list_available_clients(self, caller: CurrentUser) -> List[Client]:
        """Unassigned clients with an ACTIVE subscription."""
        require_staff(caller, "list clients")
        rows = self._clients.list_clients(
            unassigned_only=True,
            subscription_status=SubscriptionStatus.ACTIVE.value,
        )
        return [Client(**row) for row in rows]

    def update_subscription(self, caller: CurrentUser, request: SubscriptionUpdateRequest) -> Client:
        require_admin(caller, "update subscriptions")
        client = load_client_account(self._clients, self._users, request.client_id)

        data = {}
        if request.subscription_status is not None:
            data["subscription_status"] = request.subscription_status.value
        if request.subscription_plan is not None:
            data["subscription_plan"] = request.subscription_plan.value
        if not data:
            raise ValidationError("Missing required fields: subscription_status or subscription_plan")

        updated = self._clients.update(client["id"], data)
        logger.info(f"Updated subscription of client {client['id']}: {data}")
        return Client(**updated)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _eligible_client(self, caller: CurrentUser, client_id: str) -> Dict:
        client = load_client_account(self._clients, self._users, client_id)
        if not manages_client(caller, client):
            logger.warning(f"Trainer {caller.user_id} does not train client {client['id']}")
            raise AuthorizationError("Forbidden - client is not assigned to you")
        if client.get("subscription_status") != SubscriptionStatus.ACTIVE.value:
            logger.warning(
                f"Client {client['id']} has subscription {client.get('subscription_status')}"
            )
            raise EligibilityError("Client does not have an active subscription")
        return client

    def _require_manages(self, caller: CurrentUser, client_id: str) -> Dict:
        client = self._clients.get_by_id(client_id) or {"id": client_id}
        if not manages_client(caller, client):
            logger.warning(f"User {caller.user_id} does not manage client {client_id}")
            raise AuthorizationError("Forbidden - client is not assigned to you")
        return client

    def _require_enrollment(self, enrollment_id: str) -> Dict:
        enrollment = self._enrollments.get_by_id(enrollment_id)
        if enrollment is None:
            raise NotFoundError("Program assignment not found")
        return enrollment

    def _require_day_in_program(self, enrollment: Dict, day_number: int) -> None:
        program = self._catalog.require_program(enrollment["program_id"])
        total_days = program.get("total_days") or 0
        if not 1 <= day_number <= total_days:
            raise ValidationError(f"Day number must be between 1 and {total_days}")

    def _require_trainer_account(self, trainer_id: str) -> Dict:
        trainer = self._users.get_by_id(trainer_id)
        if trainer is None or trainer.get("role") != Role.TRAINER.value:
            raise NotFoundError("Trainer not found")
        return trainer

    def _clients_by_id(self, client_ids: List[str]) -> Dict[str, Dict]:
        wanted = sorted(set(client_ids))
        if not wanted:
            return {}
        return {row["id"]: row for row in self._clients.get_many(wanted)}


def _template_summary(row: Optional[Dict]) -> Optional[TemplateSummary]:
    if not row:
        return None
    return TemplateSummary(
        id=row["id"],
        name=row["name"],
        description=row.get("description"),
        total_days=row.get("total_days"),
    )


def _client_summary(row: Optional[Dict]) -> Optional[ClientSummary]:
    if not row or "user_id" not in row:
        return None
    user = row.get("user") or {}
    return ClientSummary(
        id=row["id"],
        user_id=row["user_id"],
        name=user.get("name"),
        email=user.get("email"),
    )


def _to_workout_assignment(
    row: Dict,
    workout: Optional[Dict],
    client: Optional[Dict],
) -> ClientWorkoutAssignment:
    return ClientWorkoutAssignment(
        **{
            **row,
            "scheduled_date": to_calendar_date(row["scheduled_date"]),
            "workout": _template_summary(workout),
            "client": _client_summary(client),
        }
    )


def _to_program_assignment(
    row: Dict,
    program: Optional[Dict],
    client: Optional[Dict],
    overrides: List[Dict],
) -> ClientProgramAssignment:
    pins = [
        ProgramDayOverride(**{**pin, "scheduled_date": to_calendar_date(pin["scheduled_date"])})
        for pin in sorted(overrides, key=lambda p: p["day_number"])
    ]
    return ClientProgramAssignment(
        **{
            **row,
            "start_date": to_calendar_date(row["start_date"]),
            "program": _template_summary(program),
            "client": _client_summary(client),
            "day_overrides": pins,
        }
    )
