# src/todo_service/api/error_handlers.py
"""
FastAPI exception handlers that map repository-level exceptions to HTTP responses.

Repositories raise `todo_service.exceptions.*`; each exception already knows its
payload (`.to_payload()`) and status (`.http_status()`), so the handlers only log
and forward.

    DuplicateError   -> 409, logged at INFO
    NotFoundError    -> 404, logged at INFO
    UnexpectedError  -> 500, logged at ERROR
    request body/params failing validation -> 400
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from todo_service.exceptions.base import (
    DuplicateError,
    NotFoundError,
    UnexpectedError,
)

logger = logging.getLogger(__name__)


async def duplicate_error_handler(request: Request, exc: DuplicateError) -> JSONResponse:
    logger.info("DuplicateError for %s %s: id=%s", request.method, request.url.path, exc.entity_id)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.info("NotFoundError for %s %s: id=%s", request.method, request.url.path, exc.entity_id)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def unexpected_error_handler(request: Request, exc: UnexpectedError) -> JSONResponse:
    # The diagnostic goes to the logs only; the payload is generic.
    logger.error(
        "UnexpectedError for %s %s: %s", request.method, request.url.path, exc.message,
        exc_info=exc.__cause__ or exc,
    )
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Validation failed for %s %s", request.method, request.url.path)
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DuplicateError, duplicate_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(UnexpectedError, unexpected_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
