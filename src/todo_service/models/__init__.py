"""
Centralized access to the ORM models.

Importing this package registers every table with `Base.metadata`:

    from todo_service.models import TodoRecord, LabelRecord
"""

from .todo import TodoRecord
from .label import LabelRecord

__all__ = [
    "TodoRecord",
    "LabelRecord",
]
