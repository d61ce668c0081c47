# src/todo_service/core/logging/middleware.py
"""
Request ID middleware for FastAPI / Starlette.

Every request gets an id, taken from an incoming `X-Request-ID` header when it is
a valid UUID and freshly generated otherwise. The id is stored in the request_id
contextvar for the lifetime of the request (so RequestIdFilter can stamp it on
log records) and echoed back in the `X-Request-ID` response header.
"""

import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .filters import set_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-ID"


def _resolve_request_id(incoming: str | None) -> str:
    if incoming:
        try:
            return str(uuid.UUID(incoming))
        except ValueError:
            pass
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        rid = _resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = set_request_id(rid)
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)
