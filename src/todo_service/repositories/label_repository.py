"""
Label repositories.

Label names are unique. Both implementations check the name before inserting
and reject a collision with `DuplicateError(existing_id)` rather than merging.

In the durable backend the check-then-insert is not atomic on its own; the
UNIQUE constraint on `labels.name` closes the race, and a constraint violation is
reported as the same `DuplicateError`.
"""
import logging
from abc import abstractmethod

from sqlalchemy import select

from todo_service.database.base import fits_integer_column
from todo_service.exceptions.mapper import db_error_handler
from todo_service.models.label import LabelRecord
from todo_service.schemas.label import Label, CreateLabel, UpdateLabel
from .base_repository import BaseRepository, DatabaseRepository
from .memory_repository import MemoryRepository

logger = logging.getLogger(__name__)


class LabelRepository(BaseRepository[Label, CreateLabel, UpdateLabel]):
    """Repository capability for labels."""

    model_name = "Label"
    schema = Label
    unique_fields = ("name",)

    @abstractmethod
    async def find_by_user(self, user_id: int) -> list[Label]:
        """
        Labels owned by `user_id`, ascending by id.

        Returns an empty list when the user owns none; never raises NotFoundError.
        """


class LabelRepositoryForDb(DatabaseRepository[Label, CreateLabel, UpdateLabel], LabelRepository):
    model = LabelRecord

    async def find_by_user(self, user_id: int) -> list[Label]:
        if not fits_integer_column(user_id):
            return []
        async with self._session_maker() as session:
            async with db_error_handler(session, self.model_name):
                result = await session.execute(
                    select(LabelRecord).where(LabelRecord.user_id == user_id).order_by(LabelRecord.id.asc())
                )
                labels = [self._to_entity(record) for record in result.scalars().all()]
                logger.debug(f"Found {len(labels)} labels for user {user_id}")
                return labels


class LabelRepositoryForMemory(MemoryRepository[Label, CreateLabel, UpdateLabel], LabelRepository):
    """
    Ownership is modelled: each stored label keeps the `user_id` it was created with.
    """

    async def find_by_user(self, user_id: int) -> list[Label]:
        with self._lock.read():
            return self._select(user_id=user_id)
