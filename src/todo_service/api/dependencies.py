"""
FastAPI dependencies handing the startup-selected repositories to route handlers.

The repositories live on `app.state`; handlers only ever see the abstract
capability, never the concrete backend.
"""
from typing import Annotated

from fastapi import Path, Request

from todo_service.database.base import INTEGER_ID_MIN, INTEGER_ID_MAX
from todo_service.repositories import TodoRepository, LabelRepository

# Path ids are 32-bit signed integers; anything wider is rejected with 400 before reaching a repository.
EntityId = Annotated[int, Path(ge=INTEGER_ID_MIN, le=INTEGER_ID_MAX)]


def get_todo_repository(request: Request) -> TodoRepository:
    return request.app.state.todo_repository


def get_label_repository(request: Request) -> LabelRepository:
    return request.app.state.label_repository
