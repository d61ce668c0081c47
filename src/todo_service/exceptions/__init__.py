# todo_service/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # Repository-level errors (NotFoundError, DuplicateError, UnexpectedError)
# │   ├── integrity_classifier.py    # Unique-violation detection (SQLSTATE or driver message)
# │   └── mapper.py                  # Map SQL-level / DB-specific errors to repository errors

from .base import RepositoryError, NotFoundError, DuplicateError, UnexpectedError

__all__ = ["RepositoryError", "NotFoundError", "DuplicateError", "UnexpectedError"]
