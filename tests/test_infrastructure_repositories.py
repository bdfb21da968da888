"""
Tests for the Supabase repository implementations.

The Supabase client is a MagicMock, so these check the queries that are built
and how client failures are translated; no database is required.
"""
import pytest
from unittest.mock import MagicMock, Mock

from application.exceptions import (
    ConflictError,
    DuplicateAssignmentError,
    DuplicateExerciseError,
    NotFoundError,
    StorageError,
)
from infrastructure.db.assignment_repository import (
    SupabaseAssignmentRepository,
    SupabaseEnrollmentRepository,
)
from infrastructure.db.exercise_repository import SupabaseExerciseRepository
from infrastructure.db.program_repository import SupabaseProgramRepository
from infrastructure.db.queries import escape_ilike, execute, execute_delete, execute_insert, first
from infrastructure.db.workout_repository import SupabaseWorkoutRepository

# All tests in this module are pure logic tests with mocks - mark as unit
pytestmark = pytest.mark.unit


class PostgrestFailure(Exception):
    """Stand-in for the client's API error, which carries a Postgres code."""

    def __init__(self, message, code=None):
        super().__init__(message)
        self.code = code


def _response(data=None, count=None):
    return Mock(data=data, count=count)


def _failing(error):
    query = MagicMock()
    query.execute.side_effect = error
    return query


# ============================================================================
# Query helpers
# ============================================================================


class TestQueryHelpers:
    """execute, the insert and delete variants, first and escape_ilike."""

    def test_execute_wraps_unexpected_errors(self):
        with pytest.raises(StorageError) as exc_info:
            execute(_failing(RuntimeError("connection reset")), "load workout")
        assert exc_info.value.status_code == 500
        assert "load workout" in exc_info.value.message

    def test_execute_passes_service_errors_through(self):
        with pytest.raises(NotFoundError):
            execute(_failing(NotFoundError("Workout not found")), "load workout")

    def test_execute_insert_maps_unique_violation(self):
        error = PostgrestFailure("duplicate key value", code="23505")
        with pytest.raises(DuplicateAssignmentError):
            execute_insert(_failing(error), "assign workout")

    def test_execute_insert_uses_given_conflict(self):
        error = PostgrestFailure("duplicate key value", code="23505")
        with pytest.raises(DuplicateExerciseError):
            execute_insert(_failing(error), "create exercise", DuplicateExerciseError("taken"))

    def test_execute_insert_other_failures_are_storage_errors(self):
        with pytest.raises(StorageError):
            execute_insert(_failing(PostgrestFailure("timeout", code="57014")), "assign workout")

    def test_execute_delete_maps_foreign_key_violation(self):
        error = PostgrestFailure("violates foreign key constraint", code="23503")
        with pytest.raises(ConflictError) as exc_info:
            execute_delete(_failing(error), "delete workout", ConflictError("still assigned"))
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "still assigned"

    def test_execute_delete_other_failures_are_storage_errors(self):
        with pytest.raises(StorageError):
            execute_delete(
                _failing(PostgrestFailure("timeout", code="57014")),
                "delete workout",
                ConflictError("still assigned"),
            )

    def test_first_handles_lists_objects_and_empty(self):
        assert first(_response([{"id": "a"}, {"id": "b"}])) == {"id": "a"}
        assert first(_response({"id": "a"})) == {"id": "a"}
        assert first(_response([])) is None
        assert first(_response(None)) is None

    def test_escape_ilike(self):
        assert escape_ilike("100%_a\\b") == "100\\%\\_a\\\\b"
        assert escape_ilike("a,b.c") == "a b c"


# ============================================================================
# Repositories
# ============================================================================


class TestAssignmentRepository:
    """SupabaseAssignmentRepository against a mocked client."""

    def test_create_calls_insert_function(self):
        client = MagicMock()
        client.rpc.return_value.execute.return_value = _response([{"id": "a1"}])
        repo = SupabaseAssignmentRepository(client)

        data = {"client_id": "c1", "workout_id": "w1", "scheduled_date": "2024-01-10"}
        assert repo.create(data, enforce_unique=True) == {"id": "a1"}
        client.rpc.assert_called_once_with(
            "insert_client_workout", {"p_assignment": data, "p_enforce_unique": True}
        )

    def test_create_duplicate(self):
        client = MagicMock()
        client.rpc.return_value.execute.side_effect = PostgrestFailure(
            "duplicate_assignment", code="23505"
        )
        repo = SupabaseAssignmentRepository(client)
        with pytest.raises(DuplicateAssignmentError):
            repo.create({"client_id": "c1"}, enforce_unique=True)

    def test_list_for_no_clients_skips_query(self):
        client = MagicMock()
        assert SupabaseAssignmentRepository(client).list_for_clients([]) == []
        client.table.assert_not_called()

    def test_update_missing_row_is_not_found(self):
        client = MagicMock()
        client.table.return_value.update.return_value.eq.return_value.execute.return_value = (
            _response([])
        )
        with pytest.raises(NotFoundError):
            SupabaseAssignmentRepository(client).update("missing", {"status": "SKIPPED"})

    def test_reschedule_under_uniqueness_calls_update_function(self):
        client = MagicMock()
        client.rpc.return_value.execute.return_value = _response([{"id": "a1"}])
        repo = SupabaseAssignmentRepository(client)

        patch = {"scheduled_date": "2024-01-10", "notes": "Moved"}
        assert repo.update("a1", patch, enforce_unique=True) == {"id": "a1"}
        client.rpc.assert_called_once_with(
            "update_client_workout",
            {"p_id": "a1", "p_patch": patch, "p_enforce_unique": True},
        )
        client.table.assert_not_called()

    def test_reschedule_onto_taken_date(self):
        client = MagicMock()
        client.rpc.return_value.execute.side_effect = PostgrestFailure(
            "duplicate_assignment", code="23505"
        )
        with pytest.raises(DuplicateAssignmentError):
            SupabaseAssignmentRepository(client).update(
                "a1", {"scheduled_date": "2024-01-10"}, enforce_unique=True
            )

    def test_reschedule_of_missing_row_is_not_found(self):
        client = MagicMock()
        client.rpc.return_value.execute.return_value = _response([])
        with pytest.raises(NotFoundError):
            SupabaseAssignmentRepository(client).update(
                "missing", {"scheduled_date": "2024-01-10"}, enforce_unique=True
            )

    def test_status_change_skips_update_function(self):
        client = MagicMock()
        client.table.return_value.update.return_value.eq.return_value.execute.return_value = (
            _response([{"id": "a1", "status": "SKIPPED"}])
        )
        repo = SupabaseAssignmentRepository(client)

        repo.update("a1", {"status": "SKIPPED"}, enforce_unique=True)
        client.rpc.assert_not_called()
        client.table.return_value.update.assert_called_once_with({"status": "SKIPPED"})


class TestEnrollmentRepository:
    """SupabaseEnrollmentRepository against a mocked client."""

    def test_upsert_day_override_uses_conflict_target(self):
        client = MagicMock()
        pin = {"id": "p1", "client_program_id": "e1", "day_number": 2, "scheduled_date": "2024-02-10"}
        client.table.return_value.upsert.return_value.execute.return_value = _response([pin])

        assert SupabaseEnrollmentRepository(client).upsert_day_override("e1", 2, "2024-02-10") == pin
        client.table.assert_called_with("program_day_assignments")
        client.table.return_value.upsert.assert_called_once_with(
            {"client_program_id": "e1", "day_number": 2, "scheduled_date": "2024-02-10"},
            on_conflict="client_program_id,day_number",
        )

    def test_delete_reports_function_result(self):
        client = MagicMock()
        client.rpc.return_value.execute.return_value = _response(False)
        assert SupabaseEnrollmentRepository(client).delete("e1") is False


class TestWorkoutRepository:
    """SupabaseWorkoutRepository writes go through Postgres functions."""

    def test_update_of_missing_workout(self):
        client = MagicMock()
        client.rpc.return_value.execute.return_value = _response(False)
        with pytest.raises(NotFoundError):
            SupabaseWorkoutRepository(client).update("missing", {"name": "X"})

    def test_create_without_id_is_storage_error(self):
        client = MagicMock()
        client.rpc.return_value.execute.return_value = _response(None)
        with pytest.raises(StorageError):
            SupabaseWorkoutRepository(client).create_with_exercises({"name": "A"}, [])

    def test_delete_racing_a_new_assignment_is_conflict(self):
        client = MagicMock()
        client.rpc.return_value.execute.side_effect = PostgrestFailure(
            "update or delete on table \"workouts\" violates foreign key constraint", code="23503"
        )
        with pytest.raises(ConflictError) as exc_info:
            SupabaseWorkoutRepository(client).delete_cascade("w1")
        assert "assigned to clients" in exc_info.value.message


class TestProgramRepository:
    """SupabaseProgramRepository cascade delete."""

    def test_delete_racing_a_new_enrollment_is_conflict(self):
        client = MagicMock()
        client.rpc.return_value.execute.side_effect = PostgrestFailure(
            "violates foreign key constraint", code="23503"
        )
        with pytest.raises(ConflictError):
            SupabaseProgramRepository(client).delete_cascade("p1")


class TestExerciseRepository:
    """SupabaseExerciseRepository against a mocked client."""

    def test_create_race_on_unique_name(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.side_effect = PostgrestFailure(
            "duplicate key value violates unique constraint", code="23505"
        )
        with pytest.raises(DuplicateExerciseError):
            SupabaseExerciseRepository(client).create({"name": "Squat"})

    def test_delete_racing_a_new_workout_line_is_conflict(self):
        client = MagicMock()
        client.table.return_value.delete.return_value.eq.return_value.execute.side_effect = (
            PostgrestFailure("violates foreign key constraint", code="23503")
        )
        with pytest.raises(ConflictError):
            SupabaseExerciseRepository(client).delete("ex-squat")

    def test_is_referenced_checks_program_lines(self):
        client = MagicMock()
        limited = client.table.return_value.select.return_value.eq.return_value.limit.return_value
        limited.execute.side_effect = [_response([], count=0), _response([{"id": "l1"}], count=1)]

        assert SupabaseExerciseRepository(client).is_referenced("ex-squat") is True
        tables = [call.args[0] for call in client.table.call_args_list]
        assert tables == ["workout_exercises", "workout_day_exercises"]
