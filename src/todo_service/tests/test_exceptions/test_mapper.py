from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError, NoResultFound, OperationalError

from todo_service.exceptions import DuplicateError, NotFoundError, UnexpectedError
from todo_service.exceptions.integrity_classifier import is_unique_violation
from todo_service.exceptions.mapper import db_error_handler


class FakeSession:
    """Stands in for AsyncSession: only rollback() is used by the handler."""

    def __init__(self, fail_rollback: bool = False):
        self.rollbacks = 0
        self.fail_rollback = fail_rollback

    async def rollback(self):
        self.rollbacks += 1
        if self.fail_rollback:
            raise RuntimeError("rollback failed")


class SqliteLikeError(Exception):
    pass


def integrity_error(orig) -> IntegrityError:
    return IntegrityError("INSERT INTO labels ...", {}, orig)


class TestUniqueViolation:

    def test_postgres_unique_sqlstate(self):
        orig = SimpleNamespace(sqlstate="23505", diag=SimpleNamespace(constraint_name="uq_labels_name"))

        assert is_unique_violation(integrity_error(orig)) == (True, "uq_labels_name")

    def test_psycopg_pgcode(self):
        orig = SimpleNamespace(pgcode="23505", diag=None)

        assert is_unique_violation(integrity_error(orig)) == (True, None)

    def test_other_postgres_sqlstate_is_not_unique(self):
        orig = SimpleNamespace(sqlstate="23502", diag=SimpleNamespace(constraint_name=None))

        assert is_unique_violation(integrity_error(orig))[0] is False

    def test_sqlite_unique_message(self):
        exc = integrity_error(SqliteLikeError("UNIQUE constraint failed: labels.name"))

        assert is_unique_violation(exc) == (True, None)

    def test_sqlite_not_null_message_is_not_unique(self):
        exc = integrity_error(SqliteLikeError("NOT NULL constraint failed: todos.text"))

        assert is_unique_violation(exc) == (False, None)


class TestDbErrorHandler:

    async def test_no_result_becomes_not_found(self):
        db = FakeSession()

        with pytest.raises(NotFoundError) as exc_info:
            async with db_error_handler(db, "Todo", entity_id=8):
                raise NoResultFound("No row was found")

        assert exc_info.value.entity_id == 8
        assert db.rollbacks == 1

    async def test_unique_violation_with_resolved_id_becomes_duplicate(self):
        async def resolve():
            return 1

        with pytest.raises(DuplicateError) as exc_info:
            async with db_error_handler(FakeSession(), "Label", resolve_duplicate=resolve):
                raise integrity_error(SqliteLikeError("UNIQUE constraint failed: labels.name"))

        assert exc_info.value.entity_id == 1

    async def test_unique_violation_without_resolved_id_is_unexpected(self):
        async def resolve():
            return None

        with pytest.raises(UnexpectedError):
            async with db_error_handler(FakeSession(), "Label", resolve_duplicate=resolve):
                raise integrity_error(SqliteLikeError("UNIQUE constraint failed: labels.name"))

    async def test_failing_resolver_is_unexpected(self):
        async def resolve():
            raise OperationalError("SELECT", {}, SqliteLikeError("database is locked"))

        with pytest.raises(UnexpectedError):
            async with db_error_handler(FakeSession(), "Label", resolve_duplicate=resolve):
                raise integrity_error(SqliteLikeError("UNIQUE constraint failed: labels.name"))

    async def test_other_integrity_error_is_unexpected(self):
        with pytest.raises(UnexpectedError) as exc_info:
            async with db_error_handler(FakeSession(), "Todo"):
                raise integrity_error(SqliteLikeError("NOT NULL constraint failed: todos.text"))

        assert isinstance(exc_info.value.__cause__, IntegrityError)

    async def test_any_other_error_is_unexpected_with_message(self, caplog):
        with pytest.raises(UnexpectedError) as exc_info:
            async with db_error_handler(FakeSession(), "Todo"):
                raise ConnectionRefusedError("connection refused")

        assert exc_info.value.message == "connection refused"
        assert any(record.levelname == "ERROR" for record in caplog.records)

    async def test_empty_message_falls_back_to_class_name(self):
        with pytest.raises(UnexpectedError) as exc_info:
            async with db_error_handler(FakeSession(), "Todo"):
                raise TimeoutError()

        assert exc_info.value.message == "TimeoutError"

    async def test_repository_errors_pass_through(self):
        db = FakeSession()

        with pytest.raises(DuplicateError):
            async with db_error_handler(db, "Label"):
                raise DuplicateError(2, "Label")

        assert db.rollbacks == 1

    async def test_rollback_failure_does_not_mask_the_error(self):
        with pytest.raises(NotFoundError):
            async with db_error_handler(FakeSession(fail_rollback=True), "Todo", entity_id=1):
                raise NoResultFound()

    async def test_success_does_not_roll_back(self):
        db = FakeSession()

        async with db_error_handler(db, "Todo"):
            pass

        assert db.rollbacks == 0
