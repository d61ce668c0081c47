# src/todo_service/core/logging/handlers.py
"""
Handler factories for logging.dictConfig.

Each function returns a handler configuration dict; builder.py decides which
of them are wired in. Keeping them as pure functions makes them easy to test.

| Handler         | Triggers On             | Output                  |
| --------------- | ----------------------- | ----------------------- |
| `console`       | All logs `>= LOG_LEVEL` | stderr                  |
| `file`          | All logs `>= LOG_LEVEL` | `<LOG_DIR>/app.log`     |
| `error_file`    | Only logs `>= ERROR`    | `<LOG_DIR>/errors.log`  |
| `error_console` | Only logs `>= ERROR`    | stderr, always JSON     |
"""

from pathlib import Path

from todo_service.config.settings import Settings


def _formatter_name(settings: Settings) -> str:
    # The builder's "formatters" mapping must contain "json" and "standard".
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def get_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filters": ["request_id", "redact"],
    }


def get_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filename": str(Path(settings.LOG_DIR) / "app.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": ["request_id", "redact"],
    }


# Error-specific rotating file, kept structured for alerting/archival.
def get_error_file_handler(settings: Settings) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "json",
        "level": "ERROR",
        "filename": str(Path(settings.LOG_DIR) / "errors.log"),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": ["request_id", "redact"],
    }


def get_error_console_handler(settings: Settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": "json",
        "level": "ERROR",
        "filters": ["request_id", "redact"],
    }
