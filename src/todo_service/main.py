"""
Application factory.

`create_app` wires already-built repositories into a FastAPI app; `build_app`
reads Settings, picks the backend once and builds everything the app owns.

    uvicorn todo_service.main:get_app --factory
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from todo_service.api import todos_router, labels_router, register_exception_handlers
from todo_service.config.settings import Settings, get_settings
from todo_service.core.logging import RequestIDMiddleware, setup_logging
from todo_service.database.session import create_engine_from_settings, create_session_maker, create_schema
from todo_service.repositories import (
    TodoRepository,
    LabelRepository,
    TodoRepositoryForDb,
    LabelRepositoryForDb,
    TodoRepositoryForMemory,
    LabelRepositoryForMemory,
)
from todo_service.utils.version import get_project_version

logger = logging.getLogger(__name__)


def create_app(
    todo_repository: TodoRepository,
    label_repository: LabelRepository,
    settings: Settings | None = None,
    engine: AsyncEngine | None = None,
) -> FastAPI:
    """
    Build the HTTP app around the given repositories.

    When `engine` is passed the app owns it: the schema is created on startup if
    CREATE_SCHEMA_ON_STARTUP is set, and the pool is disposed on shutdown.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if engine is not None and settings.CREATE_SCHEMA_ON_STARTUP:
            await create_schema(engine)
            logger.info("Database schema ensured")
        logger.info(
            "Application started",
            extra={"backend": settings.REPOSITORY_BACKEND, "env": settings.ENV},
        )
        try:
            yield
        finally:
            if engine is not None:
                await engine.dispose()
            logger.info("Application stopped")

    app = FastAPI(title="todo-service", version=get_project_version("0.0.0"), lifespan=lifespan)
    app.state.todo_repository = todo_repository
    app.state.label_repository = label_repository

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.ALLOW_ORIGIN_URL],
        allow_methods=["*"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    async def hello() -> str:
        return "hello world"

    app.include_router(todos_router)
    app.include_router(labels_router)
    return app


def build_app(settings: Settings | None = None) -> FastAPI:
    """Build repositories for `settings.REPOSITORY_BACKEND` and the app around them."""
    settings = settings or get_settings()

    if settings.REPOSITORY_BACKEND == "memory":
        return create_app(TodoRepositoryForMemory(), LabelRepositoryForMemory(), settings)

    engine = create_engine_from_settings(settings)
    session_maker = create_session_maker(engine)
    return create_app(
        TodoRepositoryForDb(session_maker),
        LabelRepositoryForDb(session_maker),
        settings,
        engine=engine,
    )


def get_app() -> FastAPI:
    """Uvicorn factory entrypoint: `uvicorn todo_service.main:get_app --factory`."""
    settings = get_settings()
    setup_logging(settings)
    return build_app(settings)
