from pydantic import BaseModel, ConfigDict, field_validator

from todo_service.validators.field_validators import check_length


class Label(BaseModel):
    """Immutable snapshot of a stored label."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    name: str


class CreateLabel(BaseModel):
    name: str
    # Owner of the label; stored alongside it but not part of the Label snapshot.
    user_id: int | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return check_length(v)


class UpdateLabel(BaseModel):
    name: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        return check_length(v)
