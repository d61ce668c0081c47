"""
Translate storage-level failures into the repository error taxonomy.

| Raised inside the block            | Leaves the block as                          |
| ---------------------------------- | -------------------------------------------- |
| `RepositoryError` (already mapped) | unchanged                                    |
| `NoResultFound` ("row not found")  | `NotFoundError(entity_id)`                   |
| `IntegrityError` (unique)          | `DuplicateError(conflicting id)`             |
| `IntegrityError` (anything else)   | `UnexpectedError`                            |
| any other exception                | `UnexpectedError(str(exc))`                  |

Nothing is retried here; a single failed statement surfaces immediately.
"""
import logging
from contextlib import asynccontextmanager
from typing import Awaitable, Callable

from sqlalchemy.exc import IntegrityError, NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from .integrity_classifier import is_unique_violation
from .base import DuplicateError, NotFoundError, RepositoryError, UnexpectedError

logger = logging.getLogger(__name__)

# Looks up the id of the row a failed insert/update collided with.
DuplicateResolver = Callable[[], Awaitable[int | None]]


async def raise_mapped_integrity_error(
    exc: IntegrityError,
    model_name: str,
    resolve_duplicate: DuplicateResolver | None = None,
) -> None:
    """
    Map a SQLAlchemy IntegrityError to an app-level exception and raise it.

    A unique violation becomes `DuplicateError` only when the conflicting row can be
    identified through `resolve_duplicate`; otherwise there is no id to report and the
    failure is treated as unexpected.
    """
    unique, constraint_name = is_unique_violation(exc)

    if unique and resolve_duplicate is not None:
        try:
            existing_id = await resolve_duplicate()
        except Exception:
            logger.exception("mapper.duplicate_lookup_failed", extra={"model": model_name})
            existing_id = None
        if existing_id is not None:
            # Duplicates are expected client-level outcomes -> INFO, no stack trace.
            logger.info(
                "mapper.duplicate_detected",
                extra={"model": model_name, "constraint": constraint_name, "existing_id": existing_id},
            )
            raise DuplicateError(existing_id, model_name) from exc

    raw = str(exc.orig) if exc.orig is not None else str(exc)
    logger.error(
        "mapper.integrity_error",
        extra={"model": model_name, "unique_violation": unique, "constraint": constraint_name},
    )
    raise UnexpectedError(f"{model_name} integrity error: {raw}") from exc


@asynccontextmanager
async def db_error_handler(
    db: AsyncSession,
    model_name: str,
    *,
    entity_id: int | None = None,
    resolve_duplicate: DuplicateResolver | None = None,
):
    """
    Usage:
        async with self._session_maker() as session:
            async with db_error_handler(session, "Label", entity_id=label_id):
                async with session.begin():
                    ... DB ops ...

    Rolls the session back on any error and raises a mapped repository exception.
    """
    try:
        yield
    except RepositoryError:
        await _safe_rollback(db, model_name)
        raise
    except NoResultFound as exc:
        await _safe_rollback(db, model_name)
        logger.info("mapper.row_not_found", extra={"model": model_name, "id": entity_id})
        raise NotFoundError(entity_id, model_name) from exc
    except IntegrityError as exc:
        await _safe_rollback(db, model_name)
        await raise_mapped_integrity_error(exc, model_name, resolve_duplicate)
    except Exception as exc:
        await _safe_rollback(db, model_name)
        # The only kind that is an operational concern: log with stack trace.
        logger.exception("Unexpected DB error for %s", model_name, extra={"model": model_name})
        raise UnexpectedError(str(exc) or exc.__class__.__name__) from exc


async def _safe_rollback(db: AsyncSession, model_name: str) -> None:
    try:
        await db.rollback()
    except Exception:
        logger.exception("Failed to rollback session", extra={"model": model_name})
