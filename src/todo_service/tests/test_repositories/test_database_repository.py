"""Behaviour specific to the durable (SQLAlchemy) backend."""
import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine

from todo_service.database.session import create_session_maker
from todo_service.exceptions import DuplicateError, UnexpectedError
from todo_service.models import LabelRecord, TodoRecord
from todo_service.repositories import base_repository, LabelRepositoryForDb, TodoRepositoryForDb
from todo_service.schemas.label import CreateLabel
from todo_service.schemas.todo import CreateTodo
from todo_service.validators.uniqueness import find_unique_conflict, get_unique_column_sets


@pytest.fixture
async def schemaless_session_maker(tmp_path):
    """A reachable database that has no tables at all."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    yield create_session_maker(engine)
    await engine.dispose()


class TestPersistence:

    async def test_created_row_is_committed(self, db_todo_repository, session_maker):
        created = await db_todo_repository.create(CreateTodo(text="durable"))

        async with session_maker() as session:
            record = (await session.execute(select(TodoRecord).where(TodoRecord.id == created.id))).scalar_one()

        assert (record.text, record.completed) == ("durable", False)

    async def test_owner_is_stored(self, db_label_repository, session_maker):
        label = await db_label_repository.create(CreateLabel(name="owned", user_id=4))

        async with session_maker() as session:
            record = await session.get(LabelRecord, label.id)

        assert record.user_id == 4

    async def test_repositories_share_one_pool(self, session_maker):
        todos = TodoRepositoryForDb(session_maker)
        labels = LabelRepositoryForDb(session_maker)

        await todos.create(CreateTodo(text="x"))
        await labels.create(CreateLabel(name="y"))

        assert len(await todos.all()) == 1
        assert len(await labels.all()) == 1


class TestStorageFailures:

    async def test_unreachable_database_is_unexpected(self, tmp_path):
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing-dir' / 'todos.db'}")
        repo = TodoRepositoryForDb(create_session_maker(engine))

        try:
            with pytest.raises(UnexpectedError) as exc_info:
                await repo.find(1)
        finally:
            await engine.dispose()

        assert exc_info.value.http_status() == 500

    async def test_missing_table_is_unexpected(self, schemaless_session_maker):
        repo = TodoRepositoryForDb(schemaless_session_maker)

        with pytest.raises(UnexpectedError) as exc_info:
            await repo.all()

        assert exc_info.value.__cause__ is not None
        assert exc_info.value.to_payload() == {"detail": "Unexpected storage error", "code": "unexpected"}

    async def test_find_by_user_failure_is_unexpected(self, schemaless_session_maker):
        repo = LabelRepositoryForDb(schemaless_session_maker)

        with pytest.raises(UnexpectedError):
            await repo.find_by_user(1)

    async def test_unique_constraint_backs_up_the_probe(self, db_label_repository, monkeypatch):
        """
        Two concurrent creates can both pass the probe. Simulate the loser by
        skipping its probe once: the UNIQUE constraint rejects the insert and the
        error still reports the existing label.
        """
        first = await db_label_repository.create(CreateLabel(name="race"))

        calls = {"count": 0}

        async def probe_misses_once(db, model, values, *, exclude_id=None):
            calls["count"] += 1
            if calls["count"] == 1:
                return None
            return await find_unique_conflict(db, model, values, exclude_id=exclude_id)

        monkeypatch.setattr(base_repository, "find_unique_conflict", probe_misses_once)

        with pytest.raises(DuplicateError) as exc_info:
            await db_label_repository.create(CreateLabel(name="race"))

        assert exc_info.value.entity_id == first.id
        assert [label.name for label in await db_label_repository.all()] == ["race"]


class TestUniqueColumnSets:

    def test_label_name_is_the_only_unique_set(self):
        assert get_unique_column_sets(LabelRecord) == [["name"]]

    def test_todo_has_no_unique_sets(self):
        assert get_unique_column_sets(TodoRecord) == []
