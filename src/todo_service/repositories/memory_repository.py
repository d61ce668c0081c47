"""
In-memory repository implementation.

Used for deterministic tests and for running the app without a database. It keeps
the same externally observable contract as `DatabaseRepository`: NotFoundError for
a missing id on find/update/delete, DuplicateError when a unique field collides.

Storage is a plain dict `id -> stored values`, guarded by one read/write lock scoped
to the whole map (not per row): reads share the lock, any mutation holds it
exclusively. Critical sections never await, so a call never blocks in practice.

Ids come from a monotonic counter and are never reused after a delete.
"""
import itertools
import logging
import threading
from contextlib import contextmanager
from typing import Any, Iterator

from todo_service.exceptions.base import DuplicateError, NotFoundError
from .base_repository import BaseRepository, EntityType, CreateType, UpdateType

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """
    Many concurrent readers or a single writer.

    Waiting writers take priority over new readers so a steady stream of reads
    cannot starve a mutation.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class MemoryRepository(BaseRepository[EntityType, CreateType, UpdateType]):
    """
    Volatile repository backed by a process-local map.

    Both the map and the lock may be injected so the owner controls their lifetime;
    by default each repository owns a fresh empty store.
    """

    def __init__(self, store: dict[int, dict[str, Any]] | None = None, lock: ReadWriteLock | None = None):
        self._store: dict[int, dict[str, Any]] = store if store is not None else {}
        self._lock = lock or ReadWriteLock()
        self._ids = itertools.count(max(self._store, default=0) + 1)

    async def create(self, payload: CreateType) -> EntityType:
        values = self._create_values(payload)
        with self._lock.write():
            existing_id = self._find_conflict_id(values)
            if existing_id is not None:
                logger.info(
                    "repo.create.duplicate_precheck",
                    extra={"model": self.model_name, "operation": "create", "existing_id": existing_id},
                )
                raise DuplicateError(existing_id, self.model_name)

            entity_id = next(self._ids)
            record = {**values, "id": entity_id}
            self._store[entity_id] = record
            logger.debug(f"Created {self.model_name} with ID: {entity_id}")
            return self._to_entity(record)

    async def find(self, entity_id: int) -> EntityType:
        with self._lock.read():
            return self._to_entity(self._get_record(entity_id))

    async def all(self) -> list[EntityType]:
        with self._lock.read():
            return [self._to_entity(record) for _, record in sorted(self._store.items())]

    async def update(self, entity_id: int, payload: UpdateType) -> EntityType:
        values = self._update_values(payload)
        with self._lock.write():
            record = self._get_record(entity_id)

            existing_id = self._find_conflict_id(values, exclude_id=entity_id)
            if existing_id is not None:
                raise DuplicateError(existing_id, self.model_name)

            # Replace rather than mutate: snapshots handed out earlier stay untouched.
            updated = {**record, **values}
            self._store[entity_id] = updated
            logger.debug(f"Updated {self.model_name} with ID: {entity_id}")
            return self._to_entity(updated)

    async def delete(self, entity_id: int) -> None:
        with self._lock.write():
            if self._store.pop(entity_id, None) is None:
                raise NotFoundError(entity_id, self.model_name)
        logger.debug(f"Deleted {self.model_name} with ID: {entity_id}")

    # Helpers below expect the caller to hold the lock.

    def _get_record(self, entity_id: int) -> dict[str, Any]:
        record = self._store.get(entity_id)
        if record is None:
            raise NotFoundError(entity_id, self.model_name)
        return record

    def _find_conflict_id(self, values: dict[str, Any], exclude_id: int | None = None) -> int | None:
        for field in self.unique_fields:
            if field not in values:
                continue
            for entity_id, record in self._store.items():
                if entity_id != exclude_id and record.get(field) == values[field]:
                    return entity_id
        return None

    def _select(self, **criteria: Any) -> list[EntityType]:
        return [
            self._to_entity(record)
            for _, record in sorted(self._store.items())
            if all(record.get(key) == value for key, value in criteria.items())
        ]
