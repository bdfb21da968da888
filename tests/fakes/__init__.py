"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import create_fake_repos, seed_coaching_data

    repos = create_fake_repos()
    seed_coaching_data(repos)
    catalog = repos.catalog()
"""
from dataclasses import dataclass

# Import all fake implementations
from tests.fakes.assignment_repository import FakeAssignmentRepository, FakeEnrollmentRepository
from tests.fakes.exercise_repository import FakeExerciseRepository
from tests.fakes.program_repository import FakeProgramRepository
from tests.fakes.user_repository import FakeClientRepository, FakeUserRepository
from tests.fakes.workout_repository import FakeWorkoutRepository

from services import AssignmentManager, CalendarProjector, Catalog


# =============================================================================
# Well-known IDs used by seed_coaching_data
# =============================================================================

ADMIN_ID = "admin-1"
TRAINER_ID = "trainer-1"
OTHER_TRAINER_ID = "trainer-2"

CLIENT_ID = "client-1"            # trainer-1, ACTIVE
OTHER_CLIENT_ID = "client-2"      # trainer-2, ACTIVE
UNASSIGNED_CLIENT_ID = "client-3"  # no trainer, ACTIVE
INACTIVE_CLIENT_ID = "client-4"   # trainer-1, INACTIVE

CLIENT_USER_ID = "user-client-1"
OTHER_CLIENT_USER_ID = "user-client-2"
UNASSIGNED_CLIENT_USER_ID = "user-client-3"
INACTIVE_CLIENT_USER_ID = "user-client-4"

PUSHUP_ID = "ex-pushup"
SQUAT_ID = "ex-squat"


@dataclass
class FakeRepos:
    """A wired set of fakes sharing one in-memory world."""

    users: FakeUserRepository
    clients: FakeClientRepository
    exercises: FakeExerciseRepository
    workouts: FakeWorkoutRepository
    programs: FakeProgramRepository
    assignments: FakeAssignmentRepository
    enrollments: FakeEnrollmentRepository

    def catalog(self) -> Catalog:
        return Catalog(
            self.exercises, self.workouts, self.programs, self.assignments, self.enrollments
        )

    def manager(self, *, enforce_unique: bool = False) -> AssignmentManager:
        return AssignmentManager(
            self.users,
            self.clients,
            self.catalog(),
            self.assignments,
            self.enrollments,
            enforce_unique=enforce_unique,
        )

    def projector(self) -> CalendarProjector:
        return CalendarProjector(
            self.clients, self.workouts, self.programs, self.assignments, self.enrollments
        )

    def reset(self) -> None:
        for repo in (
            self.users,
            self.clients,
            self.exercises,
            self.workouts,
            self.programs,
            self.assignments,
            self.enrollments,
        ):
            repo.reset()


# =============================================================================
# Factory Functions
# =============================================================================


def create_fake_repos() -> FakeRepos:
    """Create an empty, wired set of fakes."""
    users = FakeUserRepository()
    exercises = FakeExerciseRepository()
    workouts = FakeWorkoutRepository(exercises)
    programs = FakeProgramRepository(exercises)
    exercises.track_references(workouts, programs)
    return FakeRepos(
        users=users,
        clients=FakeClientRepository(users),
        exercises=exercises,
        workouts=workouts,
        programs=programs,
        assignments=FakeAssignmentRepository(),
        enrollments=FakeEnrollmentRepository(),
    )


def seed_coaching_data(repos: FakeRepos) -> FakeRepos:
    """
    Seed accounts, client profiles and two exercises.

    - admin-1 (ADMIN), trainer-1 and trainer-2 (TRAINER)
    - client-1: trainer-1, ACTIVE / PRO
    - client-2: trainer-2, ACTIVE / BASIC
    - client-3: unassigned, ACTIVE / BASIC
    - client-4: trainer-1, INACTIVE
    - Push-ups (Chest) and Squat (Legs)
    """
    repos.users.seed([
        {"id": ADMIN_ID, "name": "Ada Admin", "email": "admin@example.com", "role": "ADMIN"},
        {"id": TRAINER_ID, "name": "Tina Trainer", "email": "tina@example.com", "role": "TRAINER"},
        {"id": OTHER_TRAINER_ID, "name": "Tom Trainer", "email": "tom@example.com", "role": "TRAINER"},
        {"id": CLIENT_USER_ID, "name": "Casey Client", "email": "casey@example.com", "role": "CLIENT"},
        {"id": OTHER_CLIENT_USER_ID, "name": "Robin Client", "email": "robin@example.com", "role": "CLIENT"},
        {"id": UNASSIGNED_CLIENT_USER_ID, "name": "Sam Client", "email": "sam@example.com", "role": "CLIENT"},
        {"id": INACTIVE_CLIENT_USER_ID, "name": "Jo Client", "email": "jo@example.com", "role": "CLIENT"},
    ])
    repos.clients.seed([
        {
            "id": CLIENT_ID,
            "user_id": CLIENT_USER_ID,
            "trainer_id": TRAINER_ID,
            "subscription_status": "ACTIVE",
            "subscription_plan": "PRO",
        },
        {
            "id": OTHER_CLIENT_ID,
            "user_id": OTHER_CLIENT_USER_ID,
            "trainer_id": OTHER_TRAINER_ID,
            "subscription_status": "ACTIVE",
            "subscription_plan": "BASIC",
        },
        {
            "id": UNASSIGNED_CLIENT_ID,
            "user_id": UNASSIGNED_CLIENT_USER_ID,
            "subscription_status": "ACTIVE",
            "subscription_plan": "BASIC",
        },
        {
            "id": INACTIVE_CLIENT_ID,
            "user_id": INACTIVE_CLIENT_USER_ID,
            "trainer_id": TRAINER_ID,
            "subscription_status": "INACTIVE",
        },
    ])
    repos.exercises.seed([
        {"id": PUSHUP_ID, "name": "Push-ups", "category": "Chest", "difficulty": "BEGINNER"},
        {"id": SQUAT_ID, "name": "Squat", "category": "Legs", "difficulty": "INTERMEDIATE"},
    ])
    return repos


__all__ = [
    # Fakes
    "FakeAssignmentRepository",
    "FakeClientRepository",
    "FakeEnrollmentRepository",
    "FakeExerciseRepository",
    "FakeProgramRepository",
    "FakeUserRepository",
    "FakeWorkoutRepository",
    # Factories
    "FakeRepos",
    "create_fake_repos",
    "seed_coaching_data",
    # IDs
    "ADMIN_ID",
    "TRAINER_ID",
    "OTHER_TRAINER_ID",
    "CLIENT_ID",
    "OTHER_CLIENT_ID",
    "UNASSIGNED_CLIENT_ID",
    "INACTIVE_CLIENT_ID",
    "CLIENT_USER_ID",
    "OTHER_CLIENT_USER_ID",
    "UNASSIGNED_CLIENT_USER_ID",
    "INACTIVE_CLIENT_USER_ID",
    "PUSHUP_ID",
    "SQUAT_ID",
]
