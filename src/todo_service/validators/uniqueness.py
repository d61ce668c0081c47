from typing import Any, Iterable

from sqlalchemy import UniqueConstraint, and_, select
from sqlalchemy.ext.asyncio import AsyncSession


def get_unique_column_sets(model) -> list[Iterable[str]]:
    """
    Return a list of unique column sets. Each item is an iterable of column names.
    Covers:
      - Column(unique=True)
      - UniqueConstraint in the table
      - Index(..., unique=True)
    """
    unique_sets = []

    for col in model.__table__.columns:
        if col.unique:
            unique_sets.append([col.name])

    for constraint in model.__table__.constraints:
        if isinstance(constraint, UniqueConstraint):
            unique_sets.append([c.name for c in constraint.columns])

    for idx in model.__table__.indexes:
        if idx.unique:
            unique_sets.append([c.name for c in idx.columns])

    # Column(unique=True) also shows up as a UniqueConstraint; keep each set once.
    deduped: list[Iterable[str]] = []
    for cols in unique_sets:
        if sorted(cols) not in [sorted(seen) for seen in deduped]:
            deduped.append(cols)
    return deduped


async def find_unique_conflict(db: AsyncSession, model, values: dict[str, Any], *, exclude_id: int | None = None):
    """
    Probe for an existing row that would violate one of the model's unique column sets.

    Returns the first conflicting row, or None. Only sets whose columns are all present in
    `values` are checked. `exclude_id` skips the row being updated.

    This is a best-effort pre-check: two concurrent callers can both see "no conflict".
    The schema constraint is what makes the rule exact.
    """
    for cols in get_unique_column_sets(model):
        if not all(c in values for c in cols):
            continue

        conditions = [getattr(model, c) == values[c] for c in cols]
        if exclude_id is not None:
            conditions.append(model.id != exclude_id)
        query = select(model).where(and_(*conditions)).limit(1)

        result = await db.execute(query)
        existing = result.scalars().first()
        if existing is not None:
            return existing

    return None
