"""
Tell unique violations apart from every other IntegrityError.

Only a unique violation has a repository-level meaning (DuplicateError); any other
constraint failure is an unexpected storage error, so a yes/no answer is enough.
"""
import logging

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)

# https://www.postgresql.org/docs/current/errcodes-appendix.html
UNIQUE_VIOLATION_SQLSTATE = "23505"

# SQLite and other drivers without SQLSTATE only describe the failure in the message.
_UNIQUE_MESSAGE_KEYWORDS = ("unique constraint", "unique failed", "unique violation", "duplicate key")


def _sqlstate_of(orig) -> str | None:
    # psycopg exposes `pgcode`, asyncpg exposes `sqlstate` (kept by SQLAlchemy's adapter).
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def is_unique_violation(exc: IntegrityError) -> tuple[bool, str | None]:
    """
    Returns:
        (True if `exc` is a unique violation, constraint name when the driver reports one)
    """
    orig = exc.orig
    sqlstate = _sqlstate_of(orig)

    if sqlstate:
        diag = getattr(orig, "diag", None)
        constraint_name = getattr(diag, "constraint_name", None) or getattr(orig, "constraint_name", None)
        logger.debug("Postgres integrity diagnostic", extra={"pgcode": sqlstate, "constraint_name": constraint_name})
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE, constraint_name

    message = (str(orig) if orig is not None else str(exc)).lower()
    return any(keyword in message for keyword in _UNIQUE_MESSAGE_KEYWORDS), None
