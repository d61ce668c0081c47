"""
Repository-level exceptions shared by every storage backend.

Every repository operation either returns a value or raises exactly one of:

    NotFoundError    - no entity with the given id (find / update / delete)
    DuplicateError   - a create (or rename) violates a uniqueness rule
    UnexpectedError  - any other storage failure (connectivity, malformed row, ...)

These are the only errors that cross the repository boundary. Raw driver or
SQLAlchemy exceptions are converted before they leave a repository method
(see `todo_service.exceptions.mapper.db_error_handler`).
"""
from typing import Literal

ErrorCode = Literal["duplicate", "not_found", "unexpected"]


# canonical repository-level exception

class RepositoryError(Exception):
    """
    Base exception for repository errors.

    - message: human-friendly message (safe to show to clients)
    - error_code: canonical short code (e.g. 'duplicate', 'not_found') used by clients
    - entity_id: id of the entity the error refers to, when there is one
    """

    # Map canonical error_code -> HTTP status.
    ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
        "duplicate": 409,
        "not_found": 404,
        "unexpected": 500,
    }

    def __init__(self, message: str, *, error_code: ErrorCode, entity_id: int | None = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.entity_id = entity_id

    def __str__(self) -> str:
        return f"{self.message} (code: {self.error_code})"

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict suitable for HTTP responses.

        Standard shape:
            {
                "detail": "Label with ID 1 already exists",
                "code": "duplicate",
                "id": 1,
            }
        """
        payload: dict = {"detail": self.message, "code": self.error_code}
        if self.entity_id is not None:
            payload["id"] = self.entity_id
        return payload

    def http_status(self) -> int:
        """Return the HTTP status code that should accompany this error."""
        return self.ERROR_CODE_TO_STATUS[self.error_code]


class NotFoundError(RepositoryError):
    """No entity with `entity_id` exists."""

    def __init__(self, entity_id: int, model_name: str = "Entity"):
        super().__init__(
            f"{model_name} with ID {entity_id} not found",
            error_code="not_found",
            entity_id=entity_id,
        )


class DuplicateError(RepositoryError):
    """A uniqueness rule was violated; `entity_id` is the pre-existing entity."""

    def __init__(self, entity_id: int, model_name: str = "Entity"):
        super().__init__(
            f"{model_name} with ID {entity_id} already exists",
            error_code="duplicate",
            entity_id=entity_id,
        )


class UnexpectedError(RepositoryError):
    """
    Any other storage failure.

    Only the diagnostic string travels with the error; callers must not branch on it.
    The original exception is kept as `__cause__` for logging.
    """

    def __init__(self, message: str):
        super().__init__(message, error_code="unexpected")

    def to_payload(self) -> dict:
        # Diagnostics stay in the logs; clients get a generic message.
        return {"detail": "Unexpected storage error", "code": self.error_code}


__all__ = [
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "UnexpectedError",
]
