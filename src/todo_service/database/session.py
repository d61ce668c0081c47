"""
Engine and session factory construction.

Nothing here is created at import time: the engine (which owns the connection
pool) is built once at startup and handed to the durable repositories through
their constructor.
"""
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from todo_service.config.settings import Settings
from todo_service.database.base import Base


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Create the AsyncEngine for `settings.DATABASE_URL`.

    Pool sizing knobs are only passed to backends that use a sized queue pool;
    SQLite drivers pick their own pool class and reject them.
    """
    url = settings.DATABASE_URL
    options: dict = {
        "echo": settings.SQLALCHEMY_ECHO,
        "pool_pre_ping": True,  # Enables connection health checks
    }
    if make_url(url).get_backend_name() != "sqlite":
        options.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            # Fail fast instead of queueing forever when the pool is exhausted.
            pool_timeout=settings.DB_POOL_TIMEOUT,
        )
    return create_async_engine(url, **options)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    `async_sessionmaker` returns an async session factory bound to the engine's pool.
    expire_on_commit=False keeps loaded attributes readable after commit, which the
    repositories rely on when building snapshots.
    """
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create any missing tables from the ORM metadata."""
    # Import registers the tables with Base.metadata.
    from todo_service import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_schema(engine: AsyncEngine) -> None:
    from todo_service import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
