"""
Todo repositories.

`TodoRepository` is the capability request handlers depend on; exactly two
implementations exist:

    TodoRepositoryForDb      - durable, SQLAlchemy-backed
    TodoRepositoryForMemory  - volatile, for tests and database-less runs
"""
from typing import Any

from todo_service.models.todo import TodoRecord
from todo_service.schemas.todo import Todo, CreateTodo, UpdateTodo
from .base_repository import BaseRepository, DatabaseRepository
from .memory_repository import MemoryRepository


class TodoRepository(BaseRepository[Todo, CreateTodo, UpdateTodo]):
    """Repository capability for todo items."""

    model_name = "Todo"
    schema = Todo

    def _create_values(self, payload: CreateTodo) -> dict[str, Any]:
        # `labels` is accepted on create but the association is not persisted.
        return {"text": payload.text, "completed": False}


class TodoRepositoryForDb(DatabaseRepository[Todo, CreateTodo, UpdateTodo], TodoRepository):
    model = TodoRecord


class TodoRepositoryForMemory(MemoryRepository[Todo, CreateTodo, UpdateTodo], TodoRepository):
    pass
