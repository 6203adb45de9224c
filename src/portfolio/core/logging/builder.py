"""
Logging builder: build a dictConfig mapping from Settings and apply it.

    setup_logging(settings)

Handlers:
    - console: always on (JSON or text depending on LOG_FORMAT)
    - file / error_file: rotating files under LOG_DIR when LOG_TO_STDOUT is off
    - error_console: ERROR+ as JSON on the console otherwise
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

from portfolio.config.settings import Settings
from portfolio.utils.logging import get_project_name

from .filters import RedactFilter, RequestIdFilter
from .formatters import ColorFormatter, JsonFormatter
from .handlers import (
    get_console_handler,
    get_error_console_handler,
    get_error_file_handler,
    get_file_handler,
)

DEFAULT_SERVICE_NAME = "portfolio-api"
TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s"

# third-party loggers kept on the console only, at a fixed level
_LIBRARY_LEVELS = {
    "uvicorn.access": "INFO",
    "aiosqlite": "WARNING",
    "asyncio": "WARNING",
}


def _writes_files(settings: Settings) -> bool:
    return (not settings.LOG_TO_STDOUT) and bool(settings.LOG_DIR)


def _build_handlers(settings: Settings) -> dict[str, dict]:
    handlers = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)
    return handlers


def _logger(level: str, handlers: list[str], propagate: bool = False) -> dict:
    return {"level": level, "handlers": handlers, "propagate": propagate}


def make_dict_config(settings: Settings) -> dict:
    """
    Build the dictConfig mapping for `settings`.

    The root logger and uvicorn's error logger share every handler; SQL echo
    goes to the console at DEBUG only when ENABLE_SQL_LOGGING is set.
    """
    text_formatter = ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter
    service = get_project_name(default=DEFAULT_SERVICE_NAME) or DEFAULT_SERVICE_NAME

    handlers = _build_handlers(settings)
    all_handlers = list(handlers)

    loggers = {
        "": _logger(settings.LOG_LEVEL, all_handlers, propagate=True),
        "uvicorn.error": _logger(settings.LOG_LEVEL, all_handlers),
        "sqlalchemy.engine": _logger("DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING", ["console"]),
    }
    for name, level in _LIBRARY_LEVELS.items():
        loggers[name] = _logger(level, ["console"])

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {"()": text_formatter, "format": TEXT_FORMAT},
            "json": {"()": JsonFormatter, "env": settings.ENV, "service": service},
        },
        "filters": {
            "request_id": {"()": RequestIdFilter},
            "redact": {"()": RedactFilter},
        },
        "handlers": handlers,
        "loggers": loggers,
    }


def setup_logging(settings: Settings) -> None:
    """
    Apply the logging configuration.

    Creates LOG_DIR when logging to files, and installs a RequestIdFilter on
    the root logger so records from third-party handlers also carry request_id.
    """
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))

    root = logging.getLogger()
    if not any(isinstance(f, RequestIdFilter) for f in root.filters):
        root.addFilter(RequestIdFilter())
