"""
Shared pytest fixtures.

These fixtures provide:
- A wired set of in-memory fakes seeded with accounts, clients and exercises
- CurrentUser identities for each role
- A TestClient whose repositories are the fakes and whose bearer tokens are
  signed with a test secret
"""
import pytest
from fastapi.testclient import TestClient

from api import deps
from backend.main import create_app
from backend.settings import Settings
from models.user import CurrentUser, Role
from tests.fakes import (
    ADMIN_ID,
    CLIENT_USER_ID,
    OTHER_TRAINER_ID,
    TRAINER_ID,
    create_fake_repos,
    seed_coaching_data,
)
from tests.fakes.tokens import TEST_JWT_SECRET, auth_header


# =============================================================================
# Identities
# =============================================================================


@pytest.fixture
def admin() -> CurrentUser:
    return CurrentUser(user_id=ADMIN_ID, role=Role.ADMIN)


@pytest.fixture
def trainer() -> CurrentUser:
    return CurrentUser(user_id=TRAINER_ID, role=Role.TRAINER)


@pytest.fixture
def other_trainer() -> CurrentUser:
    return CurrentUser(user_id=OTHER_TRAINER_ID, role=Role.TRAINER)


@pytest.fixture
def client_user() -> CurrentUser:
    return CurrentUser(user_id=CLIENT_USER_ID, role=Role.CLIENT)


# =============================================================================
# Fakes and services
# =============================================================================


@pytest.fixture
def repos():
    """Seeded fakes (see tests.fakes.seed_coaching_data)."""
    return seed_coaching_data(create_fake_repos())


@pytest.fixture
def catalog(repos):
    return repos.catalog()


@pytest.fixture
def manager(repos):
    return repos.manager()


@pytest.fixture
def projector(repos):
    return repos.projector()


# =============================================================================
# API
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        environment="test",
        jwt_secret=TEST_JWT_SECRET,
        enforce_unique_assignments=False,
        _env_file=None,
    )


@pytest.fixture
def app(repos, test_settings):
    """App with every repository provider overridden by the seeded fakes."""
    application = create_app(settings=test_settings)
    overrides = {
        deps.get_settings: lambda: test_settings,
        deps.get_user_repo: lambda: repos.users,
        deps.get_client_repo: lambda: repos.clients,
        deps.get_exercise_repo: lambda: repos.exercises,
        deps.get_workout_repo: lambda: repos.workouts,
        deps.get_program_repo: lambda: repos.programs,
        deps.get_assignment_repo: lambda: repos.assignments,
        deps.get_enrollment_repo: lambda: repos.enrollments,
    }
    application.dependency_overrides.update(overrides)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def api_client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def admin_headers() -> dict:
    return auth_header(ADMIN_ID, "ADMIN")


@pytest.fixture
def trainer_headers() -> dict:
    return auth_header(TRAINER_ID, "TRAINER")


@pytest.fixture
def other_trainer_headers() -> dict:
    return auth_header(OTHER_TRAINER_ID, "TRAINER")


@pytest.fixture
def client_headers() -> dict:
    return auth_header(CLIENT_USER_ID, "CLIENT")
