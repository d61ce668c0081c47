# src/todo_service/core/logging/filters.py
"""
Logging filters.

- RequestIdFilter guarantees every LogRecord has a `request_id` attribute so a
  `%(request_id)s` format string never raises. The id lives in a ContextVar,
  which follows a request across `await` boundaries (threading.local would not).
- RedactFilter masks sensitive attributes passed through `extra={...}`.
"""

import logging
from logging import LogRecord
import contextvars

# Request id for the current execution context; None when no request is being handled.
_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None):
    """
    Set the request id in the current context and return the token to allow reset.
    """
    return _request_id_ctx.set(request_id)


def reset_request_id(token):
    """
    Reset the contextvar to the value saved by set_request_id().
    """
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Sets `record.request_id` to, in order of preference:
      * a request_id passed explicitly via `extra`
      * the contextvar value (set by RequestIDMiddleware)
      * the sentinel "-"
    Always returns True: it annotates, it never drops.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {"password", "secret", "token", "access_token", "refresh_token", "authorization", "database_url"}

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = "***REDACTED***"
        return True
