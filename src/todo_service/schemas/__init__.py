"""
Entity snapshots and command payloads.

    from todo_service.schemas import Todo, CreateTodo, UpdateTodo, Label, CreateLabel, UpdateLabel
"""

from .todo import Todo, CreateTodo, UpdateTodo
from .label import Label, CreateLabel, UpdateLabel

__all__ = [
    "Todo",
    "CreateTodo",
    "UpdateTodo",
    "Label",
    "CreateLabel",
    "UpdateLabel",
]
