"""
Declarative base shared by the `todos` and `labels` tables.

Both tables use 32-bit `Integer` identity columns; ids outside that range can never
match a row, and drivers reject them outright (asyncpg past 2**31, sqlite past 2**63).
"""

from sqlalchemy.orm import DeclarativeBase

INTEGER_ID_MIN = -(2**31)
INTEGER_ID_MAX = 2**31 - 1


class Base(DeclarativeBase):
    pass


# Naming convention for constraints and indexes, e.g. `uq_labels_name`
Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}


def fits_integer_column(value: int) -> bool:
    """True when `value` can be bound to an `Integer` column without overflowing."""
    return INTEGER_ID_MIN <= value <= INTEGER_ID_MAX
