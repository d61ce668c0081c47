"""
Repository capability and the shared durable (SQLAlchemy) implementation.

`BaseRepository` is the contract every storage backend satisfies: the same method set
and the same error semantics, whatever the storage technology.

    create(payload)      -> entity   | DuplicateError | UnexpectedError
    find(entity_id)      -> entity   | NotFoundError  | UnexpectedError
    all()                -> [entity] ascending by id  | UnexpectedError
    update(id, payload)  -> entity   | NotFoundError  | UnexpectedError
    delete(entity_id)    -> None     | NotFoundError  | UnexpectedError

Each call is atomic: a create/update/delete either fully applies or has no
observable effect.

`DatabaseRepository` implements the contract on top of an injected
`async_sessionmaker`. Every call opens its own session, borrows one pooled
connection for the duration of the call, and gives it back on success or failure.
"""
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from todo_service.database.base import Base, fits_integer_column
from todo_service.exceptions.base import DuplicateError, NotFoundError
from todo_service.exceptions.mapper import db_error_handler
from todo_service.validators.uniqueness import find_unique_conflict

EntityType = TypeVar("EntityType", bound=BaseModel)
CreateType = TypeVar("CreateType", bound=BaseModel)
UpdateType = TypeVar("UpdateType", bound=BaseModel)

logger = logging.getLogger(__name__)


class BaseRepository(ABC, Generic[EntityType, CreateType, UpdateType]):
    """
    Abstract repository capability.

    Class attributes set by each resource:
        model_name: name used in error messages and logs ("Todo", "Label")
        schema: the immutable entity snapshot type returned to callers
        unique_fields: fields that must be unique among stored entities
    """

    model_name: str = "Entity"
    schema: type[EntityType]
    unique_fields: tuple[str, ...] = ()

    @abstractmethod
    async def create(self, payload: CreateType) -> EntityType:
        """
        Store a new entity built from a validated create command.

        Raises:
            DuplicateError: a uniqueness rule would be violated.
            UnexpectedError: any other storage failure.
        """

    @abstractmethod
    async def find(self, entity_id: int) -> EntityType:
        """
        Raises:
            NotFoundError: no entity with `entity_id`.
            UnexpectedError: any other storage failure.
        """

    @abstractmethod
    async def all(self) -> list[EntityType]:
        """Every stored entity, ascending by id."""

    @abstractmethod
    async def update(self, entity_id: int, payload: UpdateType) -> EntityType:
        """
        Apply a partial update. Fields left unset in `payload` keep their stored value.

        Raises:
            NotFoundError: no entity with `entity_id`.
            UnexpectedError: any other storage failure.
        """

    @abstractmethod
    async def delete(self, entity_id: int) -> None:
        """
        Raises:
            NotFoundError: no entity with `entity_id`.
            UnexpectedError: any other storage failure.
        """

    # -----------------------------------------------------------------------------------------------------------------
    # Command -> stored values. Shared by both backends so they store the same thing.
    # -----------------------------------------------------------------------------------------------------------------

    def _create_values(self, payload: CreateType) -> dict[str, Any]:
        return payload.model_dump()

    def _update_values(self, payload: UpdateType) -> dict[str, Any]:
        # None means "not specified" in partial-update commands.
        return payload.model_dump(exclude_none=True)

    def _to_entity(self, source: Any) -> EntityType:
        # A fresh frozen snapshot every time; never a live reference to stored state.
        return self.schema.model_validate(source)


class DatabaseRepository(BaseRepository[EntityType, CreateType, UpdateType]):
    """
    Durable repository backed by a relational store through SQLAlchemy's asyncio API.

    Storage errors never leave this class raw: `db_error_handler` maps them to
    NotFoundError / DuplicateError / UnexpectedError. No retries are performed.
    """

    model: type[Base]

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        """
        Args:
            session_maker: session factory bound to the process-wide engine (connection pool).
                Owned by the application and injected once at startup.
        """
        self._session_maker = session_maker

    # =================================================================================================================
    # Create
    # =================================================================================================================

    async def create(self, payload: CreateType) -> EntityType:
        """
        Probe unique columns, then insert.

        The probe is not atomic with the insert. Two concurrent creates can both pass it;
        the schema's unique constraint then rejects the second insert, which is mapped to
        DuplicateError as well.
        """
        values = self._create_values(payload)
        logger.debug(
            "repo.create.start",
            extra={"model": self.model_name, "operation": "create", "provided_keys": sorted(values)},
        )
        start = time.perf_counter()

        async with self._session_maker() as session:
            async with db_error_handler(
                session, self.model_name, resolve_duplicate=lambda: self._find_conflict_id(values)
            ):
                async with session.begin():
                    existing = await find_unique_conflict(session, self.model, values)
                    if existing is not None:
                        # Expected client-level outcome -> INFO, no stack trace.
                        logger.info(
                            "repo.create.duplicate_precheck",
                            extra={"model": self.model_name, "operation": "create", "existing_id": existing.id},
                        )
                        raise DuplicateError(existing.id, self.model_name)

                    record = self.model(**values)
                    session.add(record)
                    await session.flush()
                    await session.refresh(record)
                    entity = self._to_entity(record)

        logger.info(
            "repo.create.success",
            extra={
                "model": self.model_name,
                "operation": "create",
                "id": entity.id,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity

    # =================================================================================================================
    # Read
    # =================================================================================================================

    async def find(self, entity_id: int) -> EntityType:
        self._ensure_storable_id(entity_id)
        async with self._session_maker() as session:
            async with db_error_handler(session, self.model_name, entity_id=entity_id):
                record = await self._get_record(session, entity_id)
                logger.debug(f"Retrieved {self.model_name} by ID: {entity_id}")
                return self._to_entity(record)

    async def all(self) -> list[EntityType]:
        async with self._session_maker() as session:
            async with db_error_handler(session, self.model_name):
                result = await session.execute(select(self.model).order_by(self.model.id.asc()))
                records = result.scalars().all()
                logger.debug(f"Retrieved {len(records)} {self.model_name} entities")
                return [self._to_entity(record) for record in records]

    # =================================================================================================================
    # Update
    # =================================================================================================================

    async def update(self, entity_id: int, payload: UpdateType) -> EntityType:
        """
        Read the current row, then write the coalesced values: two round trips.
        An empty command returns the stored entity unchanged.
        """
        values = self._update_values(payload)
        self._ensure_storable_id(entity_id)

        async with self._session_maker() as session:
            async with db_error_handler(
                session,
                self.model_name,
                entity_id=entity_id,
                resolve_duplicate=lambda: self._find_conflict_id(values, exclude_id=entity_id),
            ):
                async with session.begin():
                    record = await self._get_record(session, entity_id)

                    if not values:
                        logger.debug(f"No fields provided for updating {self.model_name} {entity_id}")
                        return self._to_entity(record)

                    existing = await find_unique_conflict(session, self.model, values, exclude_id=entity_id)
                    if existing is not None:
                        logger.info(
                            "repo.update.duplicate_precheck",
                            extra={"model": self.model_name, "operation": "update", "existing_id": existing.id},
                        )
                        raise DuplicateError(existing.id, self.model_name)

                    for field, value in values.items():
                        setattr(record, field, value)
                    await session.flush()
                    entity = self._to_entity(record)

        logger.debug(f"Updated {self.model_name} with ID: {entity_id}")
        return entity

    # =================================================================================================================
    # Delete
    # =================================================================================================================

    async def delete(self, entity_id: int) -> None:
        self._ensure_storable_id(entity_id)
        async with self._session_maker() as session:
            async with db_error_handler(session, self.model_name, entity_id=entity_id):
                async with session.begin():
                    result = await session.execute(delete(self.model).where(self.model.id == entity_id))
                    # rowcount 0 -> nothing matched the id.
                    if result.rowcount == 0:
                        logger.info(f"{self.model_name} with ID {entity_id} not found for deletion")
                        raise NotFoundError(entity_id, self.model_name)

        logger.debug(f"Deleted {self.model_name} with ID: {entity_id}")

    # =================================================================================================================
    # Helpers
    # =================================================================================================================

    def _ensure_storable_id(self, entity_id: int) -> None:
        # An id the column cannot hold matches no row; the driver would reject it with an overflow.
        if not fits_integer_column(entity_id):
            logger.info(f"{self.model_name} ID {entity_id} is outside the id column range")
            raise NotFoundError(entity_id, self.model_name)

    async def _get_record(self, session: AsyncSession, entity_id: int):
        result = await session.execute(select(self.model).where(self.model.id == entity_id))
        # scalar_one() raises NoResultFound when the row is missing; the error handler
        # turns that into NotFoundError(entity_id).
        return result.scalar_one()

    async def _find_conflict_id(self, values: dict[str, Any], exclude_id: int | None = None) -> int | None:
        """Id of the row that `values` collides with, looked up in a fresh session."""
        async with self._session_maker() as session:
            existing = await find_unique_conflict(session, self.model, values, exclude_id=exclude_id)
            return existing.id if existing is not None else None
