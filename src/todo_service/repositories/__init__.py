"""
Repository layer.

Request handlers depend on `TodoRepository` / `LabelRepository` only; which
implementation backs them (durable or in-memory) is decided once at startup.

Usage:
    from todo_service.repositories import LabelRepositoryForDb, LabelRepositoryForMemory
"""

from .base_repository import BaseRepository, DatabaseRepository
from .memory_repository import MemoryRepository, ReadWriteLock
from .todo_repository import TodoRepository, TodoRepositoryForDb, TodoRepositoryForMemory
from .label_repository import LabelRepository, LabelRepositoryForDb, LabelRepositoryForMemory

__all__ = [
    "BaseRepository",
    "DatabaseRepository",
    "MemoryRepository",
    "ReadWriteLock",
    "TodoRepository",
    "TodoRepositoryForDb",
    "TodoRepositoryForMemory",
    "LabelRepository",
    "LabelRepositoryForDb",
    "LabelRepositoryForMemory",
]
