"""
Field-level validation shared by the command schemas.

Commands are validated once, at the transport boundary; repositories never re-validate.
"""

NAME_MIN_LENGTH = 1
NAME_MAX_LENGTH = 100


def check_length(value: str | None) -> str | None:
    """
    Enforce the 1..100 character rule used by label names and todo texts.
    `None` passes through so partial-update commands can omit the field.
    """
    if value is None:
        return None
    if len(value) < NAME_MIN_LENGTH:
        raise ValueError("Can not be empty")
    if len(value) > NAME_MAX_LENGTH:
        raise ValueError("Over name length")
    return value


def to_uppercase(value: str | None) -> str | None:
    """
    Converts a string to uppercase if it's not None.
    """
    if value is None:
        return None
    return value.upper()


def to_lowercase(value: str | None) -> str | None:
    """
    Converts a string to lowercase if it's not None.
    """
    if value is None:
        return None
    return value.lower()
