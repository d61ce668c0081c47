from pydantic import BaseModel, ConfigDict, Field, field_validator

from todo_service.validators.field_validators import check_length


class Todo(BaseModel):
    """Immutable snapshot of a stored todo item."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    text: str
    completed: bool = False


class CreateTodo(BaseModel):
    """
    Create command. `labels` is accepted for API compatibility; the association
    is not persisted.
    """

    text: str
    labels: list[int] = Field(default_factory=list)

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return check_length(v)


class UpdateTodo(BaseModel):
    """Partial-update command: fields left as None keep their stored value."""

    text: str | None = None
    completed: bool | None = None

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str | None) -> str | None:
        return check_length(v)
