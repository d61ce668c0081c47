# src/todo_service/core/logging/builder.py
"""
Logging builder: assemble a dictConfig mapping from Settings and apply it.

    make_dict_config(settings)  -> the mapping (pure, easy to test)
    setup_logging(settings)     -> applies it; call once at process start

| Component      | What it does                                                  |
| -------------- | ------------------------------------------------------------- |
| **Formatters** | "standard" (colour in text mode) and "json"                   |
| **Filters**    | "request_id" stamps the id, "redact" masks secrets            |
| **Handlers**   | console, plus file/error_file or error_console (see handlers) |
| **Loggers**    | root, uvicorn.error, uvicorn.access, sqlalchemy.engine        |
"""

import logging
import logging.config
from pathlib import Path

from todo_service.config.settings import Settings
from todo_service.utils.version import PROJECT_NAME

from .formatters import JsonFormatter, ColorFormatter
from .filters import RequestIdFilter, RedactFilter
from .handlers import (
    get_console_handler,
    get_file_handler,
    get_error_file_handler,
    get_error_console_handler,
)


def make_dict_config(settings: Settings) -> dict:
    formatters = {
        "standard": {
            # ColorFormatter only for human-readable text output
            "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
            "format": "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s",
        },
        "json": {
            "()": JsonFormatter,
            "env": settings.ENV,
            "service": PROJECT_NAME,
        },
    }

    filters = {
        "request_id": {"()": RequestIdFilter},
        "redact": {"()": RedactFilter},
    }

    handlers: dict[str, dict] = {"console": get_console_handler(settings)}

    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": formatters,
        "filters": filters,
        "handlers": handlers,
        "loggers": {
            "": {
                "handlers": list(handlers.keys()),
                "level": settings.LOG_LEVEL,
                "propagate": True,
            },
            "uvicorn.error": {
                "level": settings.LOG_LEVEL,
                "handlers": list(handlers.keys()),
                "propagate": False,
            },
            "uvicorn.access": {
                "level": "INFO",
                "handlers": ["console"],
                "propagate": False,
            },
            # SQL statements may carry user data; only on explicit request.
            "sqlalchemy.engine": {
                "level": "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings) -> None:
    """
    Apply the logging configuration.

    Creates LOG_DIR when file handlers are in use, applies dictConfig and adds a
    RequestIdFilter on the root logger so `%(request_id)s` is always resolvable.
    """
    if (not settings.LOG_TO_STDOUT) and settings.LOG_DIR:
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))
    logging.getLogger().addFilter(RequestIdFilter())
